"""Data models for customers and their messages.

These models define the records held by the conversation store,
independent of how they are rendered.
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .constants import IMAGE_PREVIEW


class Sender(str, Enum):
    """Which side of the conversation a message belongs to."""

    OUTGOING = "outgoing"  # typed in the client, right-hand bubble
    INCOMING = "incoming"  # generated reply, left-hand bubble


class MessageKind(str, Enum):
    """Content kind of a message."""

    TEXT = "text"
    IMAGE = "image"


def new_message_id() -> str:
    return uuid4().hex


class Message(BaseModel):
    """A single message in a customer's conversation.

    Messages are append-only: once created they are never edited.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_message_id)
    sender: Sender
    kind: MessageKind = MessageKind.TEXT
    text: str = Field(default="", description="Text body, empty for image-only messages")
    image_url: str | None = Field(default=None, description="Image as a data URL")
    timestamp: datetime = Field(default_factory=datetime.now)

    @classmethod
    def outgoing(cls, text: str, image_url: str | None = None) -> "Message":
        """Create a message typed by the operator."""
        return cls(
            sender=Sender.OUTGOING,
            kind=MessageKind.IMAGE if image_url else MessageKind.TEXT,
            text=text,
            image_url=image_url,
        )

    @classmethod
    def incoming(cls, text: str) -> "Message":
        """Create a generated reply. Replies are always text."""
        return cls(sender=Sender.INCOMING, kind=MessageKind.TEXT, text=text)

    @property
    def preview(self) -> str:
        """Sidebar snippet for this message."""
        if self.kind is MessageKind.IMAGE:
            return IMAGE_PREVIEW
        return self.text


class Customer(BaseModel):
    """A simulated counterparty.

    last_message and last_message_time are a cache of the latest
    message in the customer's history.
    """

    id: str
    name: str
    avatar_seed: str
    last_message: str | None = None
    last_message_time: datetime | None = None

    def apply_preview(self, message: Message) -> None:
        self.last_message = message.preview
        self.last_message_time = message.timestamp
