"""UI configuration constants.

Display formats, animation timing and palettes used by the widgets.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Log panel threshold. A higher value shows fewer lines."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Level from a CLI string; anything unknown means DEBUG."""
        return cls.__members__.get(value.strip().upper(), cls.DEBUG)


# Sidebar
SIDEBAR_TIME_FORMAT = "%H:%M"
SIDEBAR_PREVIEW_MAX = 28  # Characters before truncating the preview line

# Chat bubbles
BUBBLE_TIME_FORMAT = "%H:%M"

# Typing indicator animation
TYPING_FRAMES = ("●○○", "○●○", "○○●")
TYPING_INTERVAL = 0.3  # Seconds per frame

# Avatar badge background colors, picked by seed
AVATAR_PALETTE = (
    "#e57373", "#f06292", "#ba68c8", "#7986cb",
    "#4fc3f7", "#4db6ac", "#aed581", "#ffb74d",
)

# Emoji picker
EMOJIS = ("👍", "🤝", "👌", "🙏", "😂", "😊", "🤔", "📦", "🏭", "🔧", "🔩")

# Log panel
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
