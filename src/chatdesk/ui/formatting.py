"""Text formatting utilities for the TUI.

Hides the details of how times, previews, avatars and image messages
are turned into display text.
"""

import zlib
from datetime import datetime

from rich.text import Text

from ..chat.constants import EMPTY_PREVIEW, IMAGE_PREVIEW
from ..chat.images import payload_size, split_data_url
from ..chat.models import Customer, Message, MessageKind
from .config import AVATAR_PALETTE, SIDEBAR_PREVIEW_MAX, SIDEBAR_TIME_FORMAT


def format_time(value: datetime | None, fmt: str = SIDEBAR_TIME_FORMAT) -> str:
    if value is None:
        return ""
    return value.strftime(fmt)


def truncate(text: str, limit: int = SIDEBAR_PREVIEW_MAX) -> str:
    """Collapse whitespace and cut to ``limit`` characters with an ellipsis."""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: max(limit - 1, 0)] + "…"


def customer_preview(customer: Customer) -> str:
    """Preview line shown under the customer's name."""
    return truncate(customer.last_message or EMPTY_PREVIEW)


def avatar_color(seed: str) -> str:
    """Stable palette color for an avatar seed."""
    return AVATAR_PALETTE[zlib.crc32(seed.encode("utf-8")) % len(AVATAR_PALETTE)]


def avatar_badge(seed: str, name: str) -> Text:
    """Two-cell colored badge with the first character of the name."""
    initial = name.strip()[:1] or "?"
    return Text(f" {initial} ", style=f"bold #ffffff on {avatar_color(seed)}")


def format_size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def image_label(message: Message) -> str:
    """Placeholder line for an image message, e.g. '[图片] image/png · 12.0 KB'."""
    if message.kind is not MessageKind.IMAGE or not message.image_url:
        return ""
    mime_type, _ = split_data_url(message.image_url)
    return f"{IMAGE_PREVIEW} {mime_type} · {format_size(payload_size(message.image_url))}"
