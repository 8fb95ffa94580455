"""Main Textual application for the streamers manager."""

from typing import ClassVar

from typing_extensions import override

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.widgets import Footer, Header

import structlog

from streamers_manager.services.config import ConfigurationService
from streamers_manager.services.supervisor import ProcessSupervisor


log = structlog.stdlib.get_logger()


class StreamersManagerApp(App[None]):
    """Root Textual application.

    The app only holds references to the services; the configuration and
    the recording state are owned by the services themselves.
    """

    CSS: ClassVar[str] = """
    Screen {
        background: $surface;
    }

    .title {
        text-align: center;
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        # Not a priority binding, so prompts can receive "q"
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "show_help", "Help", show=True),
    ]

    def __init__(
        self,
        config_service: ConfigurationService,
        supervisor: ProcessSupervisor,
    ) -> None:
        """Initialize the application with its services.

        Args:
            config_service: Loaded configuration service
            supervisor: Supervisor for the recorder process
        """
        super().__init__()
        self.title = "Streamers Manager"  # type: ignore[assignment]
        self.sub_title = "Recorder control"  # type: ignore[assignment]
        self._config_service = config_service
        self._supervisor = supervisor

        log.info("StreamersManagerApp initialized")

    @property
    def config_service(self) -> ConfigurationService:
        return self._config_service

    @property
    def supervisor(self) -> ProcessSupervisor:
        return self._supervisor

    @override
    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header()
        yield Footer()

    async def on_mount(self) -> None:
        """Show the streamers screen."""
        # Lazy import to avoid circular dependency
        from streamers_manager.ui.screens import StreamersScreen

        await self.push_screen(StreamersScreen())
        log.info("Streamers screen shown")

    async def action_show_help(self) -> None:
        """Show help information."""
        self.notify("a: add, d: remove selected, x: export list, r: restart recording, q: quit")
