"""Modal screens for the TUI.

This module hides the design decisions about:
- Dialog appearance (CSS, layout)
- How free-text prompts (new customer, rename, image path) are asked
- How the emoji picker is laid out
- Keyboard shortcuts for dialogs

To change how dialogs look, modify only this file.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from .config import EMOJIS

DIALOG_CSS = """
    align: center middle;
    background: $background 70%;

    .dialog {
        width: 56;
        height: auto;
        border: tall $primary;
        background: $surface;
        padding: 1 2;
    }

    .dialog-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $primary;
        padding: 0 0 1 0;
    }

    .dialog-buttons {
        width: 100%;
        height: 3;
        align: center middle;
        margin-top: 1;
    }

    .dialog-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
"""


class TextPromptScreen(ModalScreen[str | None]):
    """Modal dialog asking for one line of text.

    Dismisses with the entered text, or None when cancelled.
    """

    DEFAULT_CSS = "TextPromptScreen {" + DIALOG_CSS + "}"

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, title: str, placeholder: str = "", value: str = "") -> None:
        super().__init__()
        self._title = title
        self._placeholder = placeholder
        self._value = value

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(self._title, classes="dialog-title", markup=False)
            yield Input(value=self._value, placeholder=self._placeholder, id="prompt-input")
            with Horizontal(classes="dialog-buttons"):
                yield Button("OK", id="btn-ok", variant="success")
                yield Button("Cancel", id="btn-cancel", variant="error")

    def on_mount(self) -> None:
        self.query_one("#prompt-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "btn-ok":
            self.dismiss(self.query_one("#prompt-input", Input).value)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class EmojiPickerScreen(ModalScreen[str | None]):
    """Grid of emoji buttons. Dismisses with the chosen emoji or None."""

    DEFAULT_CSS = "EmojiPickerScreen {" + DIALOG_CSS + """
    #emoji-grid {
        grid-size: 4;
        grid-gutter: 0 1;
        height: auto;
    }

    #emoji-grid Button {
        width: 100%;
        min-width: 6;
    }
}"""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static("Emoji", classes="dialog-title")
            with Grid(id="emoji-grid"):
                for index, emoji in enumerate(EMOJIS):
                    yield Button(emoji, id=f"emoji-{index}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id or ""
        if button_id.startswith("emoji-"):
            self.dismiss(EMOJIS[int(button_id[len("emoji-"):])])

    def action_cancel(self) -> None:
        self.dismiss(None)
