"""Terminal UI module for chatdesk.

Provides a Textual-based messenger front end over the conversation store.

Module structure (each module hides a design decision):
- widgets.py: Customer rows, message bubbles, typing indicator, input bar, log panel
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- screens.py: Modal dialogs (text prompts, emoji picker)
- callbacks.py: How store events and log lines reach the widgets
- formatting.py: Display text for times, previews, avatars and images
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatDeskApp, run_textual_tui
from .callbacks import StoreChanged, TUICallback
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, CustomerList, DebugPanel, TypingIndicator

__all__ = [
    "ChatDeskApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "CustomerList",
    "DebugPanel",
    "LogLevel",
    "StoreChanged",
    "TUICallback",
    "TypingIndicator",
    "run_textual_tui",
]
