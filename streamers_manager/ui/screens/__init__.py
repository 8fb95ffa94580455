"""Screen components for the TUI application."""

from .base import BaseScreen
from .prompt import PromptScreen
from .streamers import StreamersScreen

__all__ = [
    "BaseScreen",
    "PromptScreen",
    "StreamersScreen",
]
