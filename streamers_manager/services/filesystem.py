"""File system service for the working directory and its files."""

import os
from pathlib import Path

import structlog

log = structlog.stdlib.get_logger()


class FileSystemService:
    """Service for file system operations with logging.

    Failures are logged and re-raised as the original ``OSError`` so callers
    can decide whether a failure is fatal.
    """

    def __init__(self, base_path: Path | None = None) -> None:
        """Initialize the file system service.

        Args:
            base_path: Base directory for relative paths (defaults to current working directory)
        """
        self.base_path = base_path or Path.cwd()
        log.debug("File system service initialized", base_path=str(self.base_path))

    def resolve(self, path: Path | str) -> Path:
        """Resolve a path against the base directory."""
        path = Path(path)
        return path if path.is_absolute() else self.base_path / path

    def directory_exists(self, path: Path) -> bool:
        """Check whether a directory is present at the given path."""
        return self.resolve(path).is_dir()

    def ensure_directory(self, path: Path) -> None:
        """Ensure that a directory exists, creating it if necessary.

        Args:
            path: Directory path to ensure exists

        Raises:
            OSError: If directory cannot be created or the path is a file
        """
        path = self.resolve(path)
        try:
            if path.exists():
                if not path.is_dir():
                    log.error("Path exists but is not a directory", path=str(path))
                    raise NotADirectoryError(f"Path exists but is not a directory: {path}")
                return

            log.debug("Creating directory", path=str(path))
            path.mkdir(parents=True, exist_ok=True)
            log.info("Directory created successfully", path=str(path))

        except OSError as e:
            log.error("Failed to create directory", path=str(path), error=str(e))
            raise

    def create_empty_file(self, path: Path) -> Path:
        """Create (or truncate) a file with no content.

        Raises:
            OSError: If the file cannot be created
        """
        return self.write_bytes(path, b"")

    def write_text(self, path: Path, content: str, mode: int | None = None) -> Path:
        """Write text to a file, replacing its contents.

        Args:
            path: Destination file
            content: Text to write (UTF-8)
            mode: Optional permission bits to apply after writing

        Raises:
            OSError: If the file cannot be written
        """
        return self.write_bytes(path, content.encode("utf-8"), mode=mode)

    def write_bytes(self, path: Path, content: bytes, mode: int | None = None) -> Path:
        """Write bytes to a file, replacing its contents unconditionally.

        Args:
            path: Destination file
            content: Raw content to write
            mode: Optional permission bits to apply after writing

        Returns:
            The resolved path that was written

        Raises:
            OSError: If the file cannot be written or its mode cannot be set
        """
        path = self.resolve(path)
        try:
            log.debug("Writing file", path=str(path), size=len(content))
            with open(path, "wb") as f:
                f.write(content)
            if mode is not None:
                os.chmod(path, mode)
            log.debug("File written successfully", path=str(path))
            return path

        except OSError as e:
            log.error("Failed to write file", path=str(path), error=str(e))
            raise
