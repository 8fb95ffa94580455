"""User interface components using the Textual framework."""

from .app import StreamersManagerApp
from .screens import BaseScreen, PromptScreen, StreamersScreen

__all__ = [
    "BaseScreen",
    "PromptScreen",
    "StreamersManagerApp",
    "StreamersScreen",
]
