"""Conversion of stored messages into model input.

Hides how the conversation is presented to the completion service:
role mapping, the context window, and how images are carried.
"""

from collections.abc import Sequence

from ..llm import ChatMessage, ImagePart
from .constants import HISTORY_IMAGE_PLACEHOLDER, HISTORY_WINDOW, IMAGE_ONLY_PROMPT
from .images import split_data_url
from .models import Message, MessageKind, Sender


def _role_for(message: Message) -> str:
    # The operator speaks as the customer; the model speaks as the agent.
    # Older demo builds sent history the other way round (outgoing as model).
    return "user" if message.sender is Sender.OUTGOING else "assistant"


def format_history(
    messages: Sequence[Message],
    window: int = HISTORY_WINDOW
) -> list[ChatMessage]:
    """Convert the most recent messages to model chat messages.

    Historical images are not re-sent; an image message contributes its
    text, or a placeholder when it has none.

    Args:
        messages: Conversation in arrival order
        window: Maximum number of messages to keep

    Returns:
        At most ``window`` chat messages, oldest first
    """
    if window <= 0:
        return []

    formatted = []
    for message in list(messages)[-window:]:
        if message.kind is MessageKind.IMAGE:
            content = message.text or HISTORY_IMAGE_PLACEHOLDER
        else:
            content = message.text
        formatted.append(ChatMessage(role=_role_for(message), content=content))
    return formatted


def build_turn(text: str, image_url: str | None = None) -> ChatMessage:
    """Build the chat message for the turn being sent."""
    images: tuple[ImagePart, ...] = ()
    if image_url:
        mime_type, payload = split_data_url(image_url)
        images = (ImagePart(mime_type=mime_type, data=payload),)

    content = text
    if not content and images:
        content = IMAGE_ONLY_PROMPT

    return ChatMessage(role="user", content=content, images=images)
