"""Provider-neutral request and response records.

A turn is text plus optional inline images. Every provider adapter
translates these records into its own SDK types and back.
"""

import base64
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ImagePart(BaseModel):
    """Inline image carried with a turn."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = "image/jpeg"
    data: str = Field(description="Base64 payload, no data URL prefix")

    @property
    def raw(self) -> bytes:
        return base64.b64decode(self.data)

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class ChatMessage(BaseModel):
    """One turn of the conversation sent to a provider."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str = ""
    images: tuple[ImagePart, ...] = ()


class TokenUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def __str__(self) -> str:
        return f"{self.prompt_tokens} in / {self.completion_tokens} out"


class LLMResponse(BaseModel):
    """The reply text and where it came from."""

    model_config = ConfigDict(frozen=True)

    content: str = ""
    model: str
    usage: TokenUsage | None = None
