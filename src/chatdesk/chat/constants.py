"""Conversation constants.

Centralizes the fixed strings and limits of the chat domain.
"""

# Number of most recent messages sent to the model as context
HISTORY_WINDOW = 15

# Reply shown when the completion call fails for any reason
FALLBACK_REPLY = "哎呀，网络有点卡，刚才没听清。再说一遍？(Network error)"

# Reply shown when the model returns no text
EMPTY_REPLY = "Receive empty response."

# Prompt used for an image sent without accompanying text
IMAGE_ONLY_PROMPT = "请帮我看看这个图片里的问题 (Please analyze this image)"

# Text stand-in for images already in the history (images are not re-sent)
HISTORY_IMAGE_PLACEHOLDER = "Shared an image"

# Sidebar previews
IMAGE_PREVIEW = "[图片]"
NEW_CUSTOMER_PREVIEW = "刚添加了好友"
EMPTY_PREVIEW = "暂无消息"

# Image uploads
DEFAULT_IMAGE_MIME = "image/jpeg"
ALLOWED_IMAGE_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
}

# Operator identity shown in the sidebar and on outgoing bubbles
OPERATOR_NAME = "老李 (技术支持)"
OPERATOR_AVATAR_SEED = "myself_agent_001"
