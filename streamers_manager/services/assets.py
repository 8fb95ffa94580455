"""Materialization of the bundled recorder scripts into the working directory."""

from collections.abc import Iterable, Mapping
from importlib import resources
from pathlib import Path

import structlog

from ..models import EmbeddedAsset
from .errors import FileSystemError
from .filesystem import FileSystemService

log = structlog.stdlib.get_logger()

ASSET_PACKAGE = "streamers_manager.assets"
BUNDLED_ASSET_NAMES: tuple[str, ...] = ("bot.py", "config.py", "daemon.py", "Recordurbate.py")
ENTRY_POINT_ASSET = "Recordurbate.py"
EXECUTABLE_MODE = 0o755


def load_bundled_assets() -> list[EmbeddedAsset]:
    """Read the recorder scripts shipped as package data."""
    package_files = resources.files(ASSET_PACKAGE)
    return [
        EmbeddedAsset(name=name, content=package_files.joinpath(name).read_bytes())
        for name in BUNDLED_ASSET_NAMES
    ]


class ResourceMaterializer:
    """Writes bundled assets to the working directory so they can be executed."""

    def __init__(self, target_dir: Path | None = None, filesystem: FileSystemService | None = None) -> None:
        self.target_dir: Path = target_dir or Path.cwd()
        self._filesystem = filesystem or FileSystemService(self.target_dir)

    def materialize(self, assets: Mapping[str, bytes] | Iterable[EmbeddedAsset]) -> list[Path]:
        """Write every asset under its own name, replacing existing files.

        Stops at the first failure; assets written before it are left in place.

        Returns:
            Paths written, in order

        Raises:
            FileSystemError: If any asset cannot be written
        """
        if isinstance(assets, Mapping):
            assets = [EmbeddedAsset(name=name, content=content) for name, content in assets.items()]

        written: list[Path] = []
        for asset in assets:
            target = self.target_dir / asset.name
            try:
                self._filesystem.write_bytes(target, asset.content, mode=EXECUTABLE_MODE)
            except OSError as e:
                log.error("Failed to write embedded asset", asset=asset.name, written=len(written))
                raise FileSystemError(
                    f"Failed to write {asset.name}",
                    original_error=e,
                    path=str(target),
                    operation="materialize",
                ) from e
            written.append(target)

        log.info("Embedded assets materialized", target_dir=str(self.target_dir), count=len(written))
        return written
