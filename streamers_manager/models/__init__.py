"""Data models for the streamers manager application."""

from .assets import EmbeddedAsset
from .bootstrap import BootstrapFailure, BootstrapReport
from .config import StreamersConfig
from .state import LaunchRecord, RecordingState

__all__ = [
    "BootstrapFailure",
    "BootstrapReport",
    "EmbeddedAsset",
    "LaunchRecord",
    "RecordingState",
    "StreamersConfig",
]
