"""Custom widgets for the TUI application."""

from .status import RecordingStatusWidget

__all__ = [
    "RecordingStatusWidget",
]
