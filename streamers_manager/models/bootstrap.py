"""Environment bootstrap result models."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class BootstrapFailure:
    """A single file that could not be created during bootstrap."""
    path: Path
    error: str


@dataclass
class BootstrapReport:
    """Aggregated outcome of an environment bootstrap."""
    working_directory: Path
    created: bool = False  # True only when the directory was absent
    files_written: list[Path] = field(default_factory=list)
    failures: list[BootstrapFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Whether every attempted file was written."""
        return not self.failures
