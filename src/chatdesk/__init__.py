"""
Chatdesk: a mock instant-messaging client with model-generated replies.

Each package hides one design decision: the chat domain, the completion
provider, prompt loading, and the terminal UI.
"""

__version__ = "0.1.0"

from .chat import (
    ChatController,
    ConversationStore,
    Customer,
    Message,
    ReplyService,
    create_demo_store,
)

__all__ = [
    "ChatController",
    "ConversationStore",
    "Customer",
    "Message",
    "ReplyService",
    "create_demo_store",
]
