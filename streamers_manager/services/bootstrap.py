"""Environment bootstrap for the working directory and its default files."""

from pathlib import Path

import structlog

from ..models import BootstrapFailure, BootstrapReport
from .config import CONFIG_DIRECTORY, CONFIG_FILENAME, default_config, serialize_config
from .errors import FileSystemError
from .filesystem import FileSystemService

log = structlog.stdlib.get_logger()

LOG_FILENAME = "rb.log"
DOWNLOADER_CONFIG_FILENAME = "youtube-dl.config"

DEFAULT_DOWNLOADER_CONFIG = """
-o "videos/%(id)s/%(title)s.%(ext)s"
# To reduce output video filesize, use the following instead to limit to [height<1080][fps<?60]
#-f 'best[height<1080][fps<?60]' -o "videos/%(id)s/%(title)s.%(ext)s"
# --quiet
"""


class EnvironmentBootstrapper:
    """Creates the ``configs`` directory and its default files on first run.

    Only a fully absent directory is repaired. When the directory already
    exists nothing is touched, even if files inside it are missing.
    """

    def __init__(self, root: Path | None = None, filesystem: FileSystemService | None = None) -> None:
        self.root: Path = root or Path.cwd()
        self._filesystem = filesystem or FileSystemService(self.root)
        self.config_directory: Path = self.root / CONFIG_DIRECTORY

    @property
    def log_file(self) -> Path:
        return self.config_directory / LOG_FILENAME

    @property
    def downloader_config_file(self) -> Path:
        return self.config_directory / DOWNLOADER_CONFIG_FILENAME

    @property
    def config_file(self) -> Path:
        return self.config_directory / CONFIG_FILENAME

    def ensure_environment(self) -> BootstrapReport:
        """Create the working directory and default files if the directory is absent.

        Returns:
            Report of what was written and which files failed

        Raises:
            FileSystemError: If the directory itself cannot be created
        """
        report = BootstrapReport(working_directory=self.config_directory)

        if self._filesystem.directory_exists(self.config_directory):
            log.debug("Working directory present, skipping bootstrap", path=str(self.config_directory))
            return report

        try:
            self._filesystem.ensure_directory(self.config_directory)
        except OSError as e:
            raise FileSystemError(
                "Working directory could not be created",
                original_error=e,
                path=str(self.config_directory),
                operation="ensure_environment",
            ) from e
        report.created = True

        # Each file is attempted independently; failures are collected
        writers = [
            (self.log_file, lambda path: self._filesystem.create_empty_file(path)),
            (self.downloader_config_file, lambda path: self._filesystem.write_text(path, DEFAULT_DOWNLOADER_CONFIG)),
            (self.config_file, lambda path: self._filesystem.write_text(path, serialize_config(default_config()))),
        ]
        for path, write in writers:
            try:
                write(path)
                report.files_written.append(path)
            except OSError as e:
                log.warning("Failed to create default file", path=str(path), error=str(e))
                report.failures.append(BootstrapFailure(path=path, error=str(e)))

        log.info(
            "Working directory bootstrapped",
            path=str(self.config_directory),
            files_written=len(report.files_written),
            failures=len(report.failures),
        )
        return report
