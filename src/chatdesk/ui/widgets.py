"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Customer row rendering and click selection
- Message bubble rendering (text and image placeholders)
- Typing indicator animation
- Draft-bound input bar
- Log rendering with level filtering
"""

from collections.abc import Iterable
from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, RichLog, Static, TextArea

from ..chat.constants import OPERATOR_AVATAR_SEED, OPERATOR_NAME
from ..chat.models import Customer, Message, MessageKind, Sender
from .config import (
    BUBBLE_TIME_FORMAT,
    LOG_TIMESTAMP_FORMAT,
    TYPING_FRAMES,
    TYPING_INTERVAL,
    LogLevel,
)
from .formatting import avatar_badge, customer_preview, format_time, image_label, truncate


class CustomerRow(Horizontal):
    """One customer in the sidebar. Clicking selects the customer."""

    class Chosen(TextualMessage):
        """Posted when the row is clicked."""

        def __init__(self, customer_id: str) -> None:
            super().__init__()
            self.customer_id = customer_id

    def __init__(self, customer: Customer, active: bool = False) -> None:
        super().__init__(classes="customer-row -active" if active else "customer-row")
        self.customer_id = customer.id
        self._customer = customer

    def compose(self):
        customer = self._customer
        yield Static(avatar_badge(customer.avatar_seed, customer.name), classes="customer-avatar")
        with Vertical(classes="customer-text"):
            title = Text.assemble(
                truncate(customer.name, 18),
                ("  " + format_time(customer.last_message_time), "dim"),
            )
            yield Static(title, classes="customer-title")
            yield Static(customer_preview(customer), classes="customer-preview", markup=False)

    def on_click(self, event: Click) -> None:
        event.stop()
        self.post_message(self.Chosen(self.customer_id))


class CustomerList(VerticalScroll):
    """Scrollable list of customer rows in store order."""

    async def show_customers(self, customers: Iterable[Customer], active_id: str | None) -> None:
        """Rebuild the rows from the given customers."""
        await self.remove_children()
        await self.mount_all(
            CustomerRow(customer, active=customer.id == active_id) for customer in customers
        )


class MessageBubble(Horizontal):
    """A chat bubble with the sender's avatar on the outer side.

    Clicking the bubble copies its text to the clipboard.
    """

    def __init__(self, message: Message, customer: Customer) -> None:
        outgoing = message.sender is Sender.OUTGOING
        super().__init__(classes=f"bubble-row {'-outgoing' if outgoing else '-incoming'}")
        self.message = message
        self._customer = customer

    def _avatar(self) -> Static:
        if self.message.sender is Sender.OUTGOING:
            badge = avatar_badge(OPERATOR_AVATAR_SEED, OPERATOR_NAME)
        else:
            badge = avatar_badge(self._customer.avatar_seed, self._customer.name)
        return Static(badge, classes="bubble-avatar")

    def _body(self) -> Vertical:
        body = Vertical(classes="bubble")
        if self.message.kind is MessageKind.IMAGE:
            body.compose_add_child(Static(image_label(self.message), markup=False))
        if self.message.text:
            body.compose_add_child(Static(self.message.text, markup=False))
        body.compose_add_child(
            Static(format_time(self.message.timestamp, BUBBLE_TIME_FORMAT), classes="bubble-meta")
        )
        return body

    def compose(self):
        if self.message.sender is Sender.OUTGOING:
            yield self._body()
            yield self._avatar()
        else:
            yield self._avatar()
            yield self._body()

    def on_click(self, event: Click) -> None:
        event.stop()
        if self.message.text:
            self.app.copy_to_clipboard(self.message.text)
            self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable conversation of the active customer."""

    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._customer: Customer | None = None
        self._message_ids: set[str] = set()

    @property
    def message_count(self) -> int:
        return len(self._message_ids)

    async def show_conversation(self, customer: Customer, messages: Iterable[Message]) -> None:
        """Replace the displayed conversation."""
        self._customer = customer
        self._message_ids = set()
        await self.remove_children()
        bubbles = []
        for message in messages:
            self._message_ids.add(message.id)
            bubbles.append(MessageBubble(message, customer))
        await self.mount_all(bubbles)
        self.scroll_end(animate=False)

    def add_message(self, message: Message) -> None:
        """Append one bubble if it is not shown yet."""
        if self._customer is None or message.id in self._message_ids:
            return
        self._message_ids.add(message.id)
        self.mount(MessageBubble(message, self._customer))
        self.call_after_refresh(self.scroll_end, animate=False)


class TypingIndicator(Static):
    """Animated 'typing' line shown while a reply is pending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("", *args, markup=False, **kwargs)
        self._frame = 0
        self._who = ""
        self.display = False

    def on_mount(self) -> None:
        self.set_interval(TYPING_INTERVAL, self._advance)

    def _advance(self) -> None:
        if not self.display:
            return
        self._frame = (self._frame + 1) % len(TYPING_FRAMES)
        self._render_frame()

    def _render_frame(self) -> None:
        self.update(f"{self._who} {TYPING_FRAMES[self._frame]}")

    def set_typing(self, typing: bool, name: str = "") -> None:
        self._who = name
        self._frame = 0
        self.display = typing
        if typing:
            self._render_frame()


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button.

    The text area mirrors the active customer's draft: edits are posted
    as DraftChanged and the app pushes drafts back with set_text.
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class DraftChanged(TextualMessage):
        """Message sent when the text area content changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("发送 (S)", id="send-btn").with_tooltip("Send message (Ctrl+J)")

    def on_mount(self) -> None:
        self.query_one("#chat-input", TextArea).highlight_cursor_line = False

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", TextArea).text

    def set_text(self, value: str) -> None:
        """Replace the text area content without echoing a change back."""
        text_area = self.query_one("#chat-input", TextArea)
        if text_area.text != value:
            text_area.text = value
            text_area.move_cursor(text_area.document.end)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.post_message(self.DraftChanged(event.text_area.text))

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()

    def _submit(self) -> None:
        value = self.text
        if value.strip():
            self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Request trace for the UI, the store and the completion service.

    Lines below the threshold are dropped, not hidden, so raising the
    level later does not bring them back. Starts hidden; --log-level
    shows it on launch and Ctrl+D toggles it.
    """

    BORDER_TITLE = "Log"

    COMPONENT_STYLES = {
        "UI": "cyan",
        "LLM": "magenta",
        "Store": "bright_green",
    }

    LEVEL_STYLES = {
        LogLevel.DEBUG: "dim",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "bold red",
    }

    def __init__(self, *args, threshold: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, highlight=False, wrap=True, **kwargs)
        self._threshold = threshold
        self.display = False

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    @threshold.setter
    def threshold(self, level: LogLevel) -> None:
        self._threshold = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        self.border_subtitle = f"≥ {self._threshold.name}" if self.display else ""

    def record(self, level: LogLevel, component: str, message: str) -> bool:
        """Write one line; returns False when it is below the threshold."""
        if level < self._threshold:
            return False
        self.write(
            Text.assemble(
                (datetime.now().strftime(LOG_TIMESTAMP_FORMAT) + " ", "dim"),
                (f"{level.name:<7}", self.LEVEL_STYLES[level]),
                (f"[{component}] ", self.COMPONENT_STYLES.get(component, "white")),
                message,
            )
        )
        return True

    def set_visible(self, visible: bool) -> None:
        self.display = visible
        self._update_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return the new state."""
        self.set_visible(not self.display)
        return self.display
