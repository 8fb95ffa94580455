"""Base screen class with common functionality for all screens."""

from typing import TYPE_CHECKING, ClassVar

from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Static

import structlog

from streamers_manager.services.errors import (
    ErrorSeverity,
    UserFriendlyError,
    get_error_service,
    handle_error,
)

if TYPE_CHECKING:
    from streamers_manager.ui.app import StreamersManagerApp

log = structlog.stdlib.get_logger()


class BaseScreen(Screen[None]):
    """Base screen class providing common functionality for application screens.

    This class provides:
    - Access to the parent application and its services
    - Notification helpers that also log
    - Conversion of exceptions into user-friendly notifications
    """

    BINDINGS: ClassVar[list[Binding]] = []

    # Screen metadata - subclasses should override these
    SCREEN_TITLE: ClassVar[str] = "Screen"
    SCREEN_NAME: ClassVar[str] = "base"

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name=name or self.SCREEN_NAME)

    @property
    def manager_app(self) -> "StreamersManagerApp":
        """Get the parent StreamersManagerApp instance.

        Raises:
            RuntimeError: If the screen is not attached to a StreamersManagerApp
        """
        from streamers_manager.ui.app import StreamersManagerApp

        if isinstance(self.app, StreamersManagerApp):
            return self.app
        raise RuntimeError("Screen is not attached to a StreamersManagerApp")

    async def on_mount(self) -> None:
        """Handle screen mount event."""
        log.info("Screen mounted", screen=self.SCREEN_NAME, title=self.SCREEN_TITLE)

    def create_title_widget(self, title: str | None = None) -> Static:
        """Create a styled title widget for the screen."""
        return Static(title or self.SCREEN_TITLE, classes="title")

    def notify_error(self, message: str) -> None:
        """Display an error notification to the user."""
        self.notify(message, severity="error")
        log.error("User notification", message=message, screen=self.SCREEN_NAME)

    def notify_success(self, message: str) -> None:
        """Display a success notification to the user."""
        self.notify(message, severity="information")
        log.info("User notification", message=message, screen=self.SCREEN_NAME)

    def notify_warning(self, message: str) -> None:
        """Display a warning notification to the user."""
        self.notify(message, severity="warning")
        log.warning("User notification", message=message, screen=self.SCREEN_NAME)

    def handle_exception(
        self,
        error: Exception,
        operation: str,
        context: dict[str, str | int | float | bool] | None = None,
    ) -> UserFriendlyError:
        """Handle an exception and display a user-friendly error message.

        Args:
            error: The exception that occurred
            operation: Description of the operation that failed
            context: Additional context information

        Returns:
            UserFriendlyError with message and suggested actions
        """
        user_error = handle_error(
            error=error,
            operation=operation,
            component=self.SCREEN_NAME,
            context=context,
        )

        message = get_error_service().create_user_message(user_error, include_suggestions=False)

        if user_error.severity == ErrorSeverity.WARNING:
            self.notify_warning(message)
        else:
            self.notify_error(message)

        return user_error
