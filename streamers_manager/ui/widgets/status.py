"""Recording status widget."""

from typing import ClassVar

from textual.reactive import reactive
from textual.widgets import Static

from streamers_manager.models import RecordingState


STATE_LABELS: dict[RecordingState, str] = {
    RecordingState.IDLE: "⏹ Recording idle",
    RecordingState.STARTING: "⏳ Starting recorder...",
    RecordingState.RUNNING: "⏺ Recording active",
}


class RecordingStatusWidget(Static):
    """Shows the supervisor's RecordingState."""

    DEFAULT_CSS: ClassVar[str] = """
    RecordingStatusWidget {
        height: auto;
        padding: 0 1;
        margin-top: 1;
        color: $text-muted;
    }

    RecordingStatusWidget.-running {
        color: $success;
        text-style: bold;
    }
    """

    state: reactive[RecordingState] = reactive(RecordingState.IDLE)

    def render(self) -> str:
        return STATE_LABELS[self.state]

    def watch_state(self, state: RecordingState) -> None:
        self.set_class(state is RecordingState.RUNNING, "-running")
