"""Recording process state models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RecordingState(Enum):
    """Lifecycle of the supervised recorder process."""
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"

    @property
    def is_active(self) -> bool:
        """A launch is in flight or has succeeded."""
        return self is not RecordingState.IDLE


@dataclass(frozen=True)
class LaunchRecord:
    """Handle retained for the last successful launch."""
    command: list[str]
    return_code: int
    launched_at: datetime
