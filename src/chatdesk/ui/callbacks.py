"""Bridges from the chat domain into the TUI.

Store listeners and the service debug callback are plain callables; this
module turns them into Textual messages and log panel lines. Both may be
invoked off the app thread, so widget updates are marshalled back first.
"""

import threading
from typing import TYPE_CHECKING

from textual.message import Message

from ..chat.store import StoreEvent
from .config import LogLevel

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import DebugPanel


class StoreChanged(Message):
    """Posted to the app for every store event."""

    def __init__(self, event: StoreEvent) -> None:
        super().__init__()
        self.event = event


class TUICallback:
    """Store listener and debug callback bound to one app.

    Usage:
        callback = TUICallback(app, debug_panel)
        store.subscribe(callback.on_store_event)
        service.set_debug_callback(callback.on_debug)
    """

    def __init__(self, app: "App", debug_panel: "DebugPanel | None" = None) -> None:
        self.app = app
        self.debug_panel = debug_panel

    def on_store_event(self, event: StoreEvent) -> None:
        # post_message is already thread-safe
        self.app.post_message(StoreChanged(event))

    def on_debug(self, level: str, component: str, message: str) -> None:
        """Write a (level, component, message) line to the log panel."""
        if self.debug_panel is None:
            return
        parsed = LogLevel.parse(level)
        if self.app._thread_id == threading.get_ident():
            self.debug_panel.record(parsed, component, message)
        else:
            self.app.call_from_thread(self.debug_panel.record, parsed, component, message)
