"""Streamers screen: the streamer list and the recording controls."""

from typing import ClassVar

from typing_extensions import override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Label, ListItem, ListView, Static

import structlog

from streamers_manager.models import RecordingState
from streamers_manager.services.errors import AppError
from streamers_manager.ui.widgets import RecordingStatusWidget

from .base import BaseScreen
from .prompt import PromptScreen

log = structlog.stdlib.get_logger()


class StreamersScreen(BaseScreen):
    """Main screen listing monitored streamers.

    Every edit goes through the configuration service, which writes the
    change to disk before the list is redrawn. Removal acts on the
    highlighted entry of the list.
    """

    SCREEN_TITLE: ClassVar[str] = "Streamers Manager"
    SCREEN_NAME: ClassVar[str] = "streamers"

    CSS: ClassVar[str] = """
    #streamers-layout {
        height: 100%;
        padding: 1 2;
    }

    #streamers-list {
        width: 1fr;
        height: 100%;
        border: solid $primary;
    }

    #actions {
        width: 30;
        height: auto;
        padding-left: 2;
    }

    #actions Button {
        width: 100%;
        margin-bottom: 1;
    }

    #config-summary {
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("a", "add_streamer", "Add", show=True),
        Binding("d", "remove_streamer", "Remove", show=True),
        Binding("l", "change_export_location", "Export location", show=False),
        Binding("x", "export_streamers", "Export", show=True),
        Binding("r", "restart_recording", "Restart recording", show=True),
    ]

    # Button id -> action name
    ACTIONS: ClassVar[list[tuple[str, str, str]]] = [
        ("btn-add", "Add Streamer", "add_streamer"),
        ("btn-remove", "Remove Streamer", "remove_streamer"),
        ("btn-export-location", "Change Export Location", "change_export_location"),
        ("btn-export", "Export List", "export_streamers"),
        ("btn-restart", "Restart Recording", "restart_recording"),
    ]

    @override
    def compose(self) -> ComposeResult:
        """Compose the list and the action column."""
        with Horizontal(id="streamers-layout"):
            yield ListView(id="streamers-list")
            with Vertical(id="actions"):
                yield self.create_title_widget()
                for button_id, label, _ in self.ACTIONS:
                    yield Button(label, id=button_id)
                yield RecordingStatusWidget(id="recording-status")
                yield Static("", id="config-summary")

    @override
    async def on_mount(self) -> None:
        await super().on_mount()
        await self.refresh_streamers()
        self.update_recording_status()

    async def refresh_streamers(self) -> None:
        """Redraw the list and summary from the in-memory configuration."""
        config = self.manager_app.config_service.config
        list_view = self.query_one("#streamers-list", ListView)
        await list_view.clear()
        await list_view.extend(ListItem(Label(name)) for name in config.streamers)

        rate = f"every {config.rate_limit_seconds}s" if config.rate_limit_enabled else "off"
        self.query_one("#config-summary", Static).update(
            f"Export: {config.default_export_location}\n"
            f"Downloader: {config.downloader_command}\n"
            f"Rate limit: {rate}"
        )

    def update_recording_status(self, state: RecordingState | None = None) -> None:
        status = self.query_one("#recording-status", RecordingStatusWidget)
        status.state = state or self.manager_app.supervisor.state

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route button presses to the matching action."""
        for button_id, _, action in self.ACTIONS:
            if event.button.id == button_id:
                await self.app.run_action(action, self)
                return
        log.warning("Unknown button", button_id=event.button.id)

    def action_add_streamer(self) -> None:
        self.app.push_screen(
            PromptScreen("Add Streamer", "Streamer", confirm_label="Add", placeholder="Enter streamer name"),
            self._on_add_streamer,
        )

    async def _on_add_streamer(self, name: str | None) -> None:
        if not name:
            return
        try:
            self.manager_app.config_service.add_streamer(name)
        except AppError as e:
            self.handle_exception(e, "add_streamer", {"streamer": name})
        await self.refresh_streamers()

    async def action_remove_streamer(self) -> None:
        index = self.query_one("#streamers-list", ListView).index
        try:
            self.manager_app.config_service.remove_streamer(index)
        except AppError as e:
            self.handle_exception(e, "remove_streamer")
        await self.refresh_streamers()

    def action_change_export_location(self) -> None:
        current = self.manager_app.config_service.config.default_export_location
        self.app.push_screen(
            PromptScreen("Set Export Location", "Location", confirm_label="Save", value=current),
            self._on_export_location,
        )

    async def _on_export_location(self, location: str | None) -> None:
        if location is None:
            return
        try:
            self.manager_app.config_service.set_export_location(location)
        except AppError as e:
            self.handle_exception(e, "set_export_location", {"path": location})
        await self.refresh_streamers()

    def action_export_streamers(self) -> None:
        try:
            path = self.manager_app.config_service.export_streamers()
        except AppError as e:
            self.handle_exception(e, "export_streamers")
            return
        self.notify_success(f"Exported streamers to {path}")

    def action_restart_recording(self) -> None:
        supervisor = self.manager_app.supervisor
        if supervisor.is_active:
            log.debug("Restart ignored, recording already active", state=supervisor.state.value)
            return
        self.update_recording_status(RecordingState.STARTING)
        self.run_worker(self._restart_recording(), exclusive=True, group="recording")

    async def _restart_recording(self) -> None:
        try:
            launched = await self.manager_app.supervisor.restart_async()
        except AppError as e:
            self.handle_exception(e, "restart_recording")
        else:
            if launched:
                self.notify_success("Recording started")
        self.update_recording_status()
