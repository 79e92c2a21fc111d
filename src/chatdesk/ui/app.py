"""Main Textual TUI application.

Orchestrates the UI components and maps user interaction onto the
conversation store and the send controller.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Button, Footer, Static

from ..chat.constants import OPERATOR_AVATAR_SEED, OPERATOR_NAME
from ..chat.controller import ChatController
from ..chat.images import encode_image_file
from ..chat.models import Message
from ..chat.store import ConversationStore, StoreEventKind
from .callbacks import StoreChanged, TUICallback
from .config import LogLevel
from .formatting import avatar_badge
from .screens import EmojiPickerScreen, TextPromptScreen
from .styles import APP_CSS
from .themes import MESSENGER_DARK
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    CustomerList,
    CustomerRow,
    DebugPanel,
    TypingIndicator,
)

EMPTY_STATE_TEXT = "💬\n\n选择一个客户开始聊天"

# Events that change what the sidebar shows
SIDEBAR_EVENTS = {
    StoreEventKind.CUSTOMER_ADDED,
    StoreEventKind.CUSTOMER_RENAMED,
    StoreEventKind.CUSTOMER_SELECTED,
    StoreEventKind.MESSAGE_APPENDED,
}


class ChatDeskApp(App):
    """Textual TUI for the mock messenger."""

    CSS = APP_CSS
    TITLE = "Chatdesk"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "add_customer", "Add Customer"),
        Binding("ctrl+r", "rename_customer", "Rename"),
        Binding("ctrl+o", "attach_image", "Image"),
        Binding("ctrl+e", "pick_emoji", "Emoji", priority=True),
        Binding("alt+up", "previous_customer", "Prev", show=False),
        Binding("alt+down", "next_customer", "Next", show=False),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        store: ConversationStore,
        controller: ChatController,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._store = store
        self._controller = controller
        self._log_level = log_level
        self._callback: TUICallback | None = None

    @property
    def store(self) -> ConversationStore:
        return self._store

    def compose(self) -> ComposeResult:
        with Vertical(id="sidebar"):
            yield Static(
                avatar_badge(OPERATOR_AVATAR_SEED, OPERATOR_NAME) + f"  {OPERATOR_NAME}",
                id="operator-profile",
            )
            yield Button("+ 添加客户", id="add-customer-btn")
            yield CustomerList(id="customer-list")

        with Vertical(id="chat-pane"):
            yield Static("", id="chat-header", markup=False)
            yield ChatHistoryWidget(id="chat-history")
            yield Static(EMPTY_STATE_TEXT, id="empty-state")
            yield TypingIndicator(id="typing-indicator")
            yield ChatInputBar(id="chat-input-bar")
            yield DebugPanel(id="debug-panel")

        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(MESSENGER_DARK)
        self.theme = "messenger-dark"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.threshold = LogLevel.parse(self._log_level)
            log_panel.set_visible(True)
            log_panel.record(LogLevel.INFO, "UI", f"Logging at {log_panel.threshold.name}")

        self._callback = TUICallback(self, log_panel)
        self._store.subscribe(self._callback.on_store_event)
        self._controller.service.set_debug_callback(self._callback.on_debug)

        self.sub_title = self._controller.service.llm.model
        await self._refresh_sidebar()
        await self._refresh_chat_pane()

    def on_unmount(self) -> None:
        """Detach from the store so events stop after exit."""
        if self._callback is not None:
            self._store.unsubscribe(self._callback.on_store_event)
            self._controller.service.set_debug_callback(None)

    def _log(self, level: str, message: str) -> None:
        if self._callback is not None:
            self._callback.on_debug(level, "UI", message)

    # Rendering

    async def _refresh_sidebar(self) -> None:
        customer_list = self.query_one("#customer-list", CustomerList)
        await customer_list.show_customers(self._store.customers, self._store.active_customer_id)

    async def _refresh_chat_pane(self) -> None:
        """Show the active customer's conversation, draft and typing state."""
        customer = self._store.active_customer
        header = self.query_one("#chat-header", Static)
        history = self.query_one("#chat-history", ChatHistoryWidget)
        empty_state = self.query_one("#empty-state", Static)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)

        has_customer = customer is not None
        header.display = has_customer
        history.display = has_customer
        input_bar.display = has_customer
        empty_state.display = not has_customer

        if customer is None:
            self._update_typing()
            return

        header.update(customer.name)
        await history.show_conversation(customer, self._store.messages(customer.id))
        input_bar.set_text(self._store.draft(customer.id))
        self._update_typing()
        input_bar.focus_input()

    def _sync_input(self, customer_id: str) -> None:
        """Push the store draft into the input bar when it belongs to the active customer."""
        if customer_id == self._store.active_customer_id:
            self.query_one("#chat-input-bar", ChatInputBar).set_text(self._store.draft(customer_id))

    def _update_typing(self) -> None:
        indicator = self.query_one("#typing-indicator", TypingIndicator)
        customer = self._store.active_customer
        if customer is None:
            indicator.set_typing(False)
            return
        indicator.set_typing(self._store.is_typing(customer.id), customer.name)

    async def on_store_changed(self, message: StoreChanged) -> None:
        """Apply a store event to the widgets that show it."""
        event = message.event
        active_id = self._store.active_customer_id
        self._log("debug", f"{event.kind.value} {event.customer_id or ''}")

        if event.kind in SIDEBAR_EVENTS:
            await self._refresh_sidebar()

        if event.kind is StoreEventKind.CUSTOMER_SELECTED:
            await self._refresh_chat_pane()
        elif event.customer_id != active_id:
            return
        elif event.kind is StoreEventKind.MESSAGE_APPENDED and event.message is not None:
            self.query_one("#chat-history", ChatHistoryWidget).add_message(event.message)
        elif event.kind is StoreEventKind.CUSTOMER_RENAMED:
            customer = self._store.get_customer(event.customer_id)
            self.query_one("#chat-header", Static).update(customer.name)
        elif event.kind is StoreEventKind.TYPING_CHANGED:
            self._update_typing()

    # User input

    def on_customer_row_chosen(self, event: CustomerRow.Chosen) -> None:
        self._store.select_customer(event.customer_id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-customer-btn":
            self.action_add_customer()

    def on_chat_input_bar_draft_changed(self, event: ChatInputBar.DraftChanged) -> None:
        customer_id = self._store.active_customer_id
        if customer_id is not None:
            self._store.set_draft(customer_id, event.value)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        customer_id = self._store.active_customer_id
        if customer_id is not None:
            self.submit_message(customer_id, event.value)

    def submit_message(self, customer_id: str, text: str, image_url: str | None = None) -> Message | None:
        """Post the outgoing message now and request the reply in a worker."""
        try:
            outgoing, history = self._controller.post_outgoing(customer_id, text, image_url)
        except (KeyError, ValueError) as e:
            self.notify(str(e), severity="error", timeout=3)
            return None

        self._sync_input(customer_id)
        self._log("info", f"Sent {outgoing.kind.value} message to {customer_id}")
        self._await_reply(customer_id, outgoing, history)
        return outgoing

    @work(group="replies", exit_on_error=False)
    async def _await_reply(
        self,
        customer_id: str,
        outgoing: Message,
        history: tuple[Message, ...],
    ) -> None:
        """Wait for the generated reply; several may run at once."""
        reply = await self._controller.complete_reply(customer_id, outgoing, history)
        self._log("info", f"Reply for {customer_id}: {len(reply.text)} chars")

    # Actions

    def action_add_customer(self) -> None:
        def _on_name(name: str | None) -> None:
            if name is None:
                return
            try:
                customer = self._store.add_customer(name)
            except ValueError as e:
                self.notify(str(e), severity="warning", timeout=3)
                return
            self._log("info", f"Added customer {customer.id}")

        self.push_screen(TextPromptScreen("添加客户", placeholder="输入客户称呼..."), _on_name)

    def action_rename_customer(self) -> None:
        customer = self._store.active_customer
        if customer is None:
            return
        customer_id = customer.id

        def _on_name(name: str | None) -> None:
            if name is not None:
                self._store.rename_customer(customer_id, name)

        self.push_screen(TextPromptScreen("修改备注名", value=customer.name), _on_name)

    def action_attach_image(self) -> None:
        customer_id = self._store.active_customer_id
        if customer_id is None:
            return

        def _on_path(path: str | None) -> None:
            if not path or not path.strip():
                return
            try:
                image_url = encode_image_file(path.strip())
            except (OSError, ValueError) as e:
                self.notify(str(e), severity="error", timeout=4)
                return
            self.submit_message(customer_id, "", image_url)

        self.push_screen(
            TextPromptScreen("发送图片", placeholder="Path to a png, jpeg or webp file"),
            _on_path,
        )

    def action_pick_emoji(self) -> None:
        customer_id = self._store.active_customer_id
        if customer_id is None:
            return

        def _on_emoji(emoji: str | None) -> None:
            if emoji:
                self._store.set_draft(customer_id, self._store.draft(customer_id) + emoji)
                self._sync_input(customer_id)

        self.push_screen(EmojiPickerScreen(), _on_emoji)

    def _select_relative(self, step: int) -> None:
        customers = self._store.customers
        if not customers:
            return
        ids = [customer.id for customer in customers]
        active_id = self._store.active_customer_id
        index = ids.index(active_id) + step if active_id in ids else 0
        self._store.select_customer(ids[index % len(ids)])

    def action_previous_customer(self) -> None:
        self._select_relative(-1)

    def action_next_customer(self) -> None:
        self._select_relative(1)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    store: ConversationStore,
    controller: ChatController,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        store: Conversation store to display and mutate
        controller: Send controller bound to the same store
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChatDeskApp(store=store, controller=controller, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
