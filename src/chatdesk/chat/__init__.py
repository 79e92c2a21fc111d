"""Conversation domain for chatdesk.

Module structure:
- models.py: Customer and Message records
- store.py: In-memory histories and per-customer UI state
- history.py: How history is presented to the completion service
- images.py: Data URL handling for image messages
- service.py: Reply generation with the static failure fallback
- controller.py: The send flow tying store and service together
- seed.py: Demo customers
"""

from .constants import FALLBACK_REPLY, HISTORY_WINDOW
from .controller import ChatController
from .history import build_turn, format_history
from .images import encode_image_file, split_data_url
from .models import Customer, Message, MessageKind, Sender
from .seed import create_demo_store
from .service import ReplyService
from .store import ConversationStore, StoreEvent, StoreEventKind

__all__ = [
    "FALLBACK_REPLY",
    "HISTORY_WINDOW",
    "ChatController",
    "ConversationStore",
    "Customer",
    "Message",
    "MessageKind",
    "ReplyService",
    "Sender",
    "StoreEvent",
    "StoreEventKind",
    "build_turn",
    "create_demo_store",
    "encode_image_file",
    "format_history",
    "split_data_url",
]
