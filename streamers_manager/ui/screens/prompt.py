"""Modal text prompt used by the streamers screen."""

from typing import ClassVar

from typing_extensions import override

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class PromptScreen(ModalScreen[str | None]):
    """Asks for a single line of text.

    Dismisses with the entered text on confirm, or None on cancel.
    """

    CSS: ClassVar[str] = """
    PromptScreen {
        align: center middle;
    }

    #prompt-container {
        width: 60;
        height: auto;
        padding: 1 2;
        border: solid $primary;
        background: $surface;
    }

    #prompt-title {
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    #prompt-buttons {
        margin-top: 1;
        height: auto;
        align: right middle;
    }

    #prompt-buttons Button {
        margin-left: 1;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    def __init__(
        self,
        title: str,
        label: str,
        confirm_label: str = "OK",
        value: str = "",
        placeholder: str = "",
    ) -> None:
        super().__init__()
        self._title = title
        self._label = label
        self._confirm_label = confirm_label
        self._value = value
        self._placeholder = placeholder

    @override
    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-container"):
            yield Label(self._title, id="prompt-title")
            yield Label(self._label)
            yield Input(value=self._value, placeholder=self._placeholder, id="prompt-input")
            with Horizontal(id="prompt-buttons"):
                yield Button(self._confirm_label, id="btn-confirm", variant="primary")
                yield Button("Cancel", id="btn-cancel")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "btn-confirm":
            self.dismiss(self.query_one("#prompt-input", Input).value)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
