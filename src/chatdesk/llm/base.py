"""Completion provider interface.

Hides which hosted model writes the replies. The chat layer builds
ChatMessage lists and reads LLMResponse.content back; nothing above
this package imports an SDK.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .models import ChatMessage, LLMResponse


def split_system(messages: Sequence[ChatMessage]) -> tuple[str | None, list[ChatMessage]]:
    """Separate system instructions from the conversation turns.

    Several system messages are joined with a blank line.
    """
    system = [message.content for message in messages if message.role == "system"]
    turns = [message for message in messages if message.role != "system"]
    return ("\n\n".join(system) if system else None), turns


class LLMProvider(ABC):
    """One hosted chat model.

    Subclasses own their SDK client and translate messages, inline images
    included, into the request shape the SDK expects.

        async with create_llm_provider("gemini", api_key=key) as llm:
            response = await llm.chat_completion(messages)
    """

    def __init__(self, model: str, temperature: float = 0.7, max_tokens: int | None = None):
        self._model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def model(self) -> str:
        return self._model

    @abstractmethod
    async def chat_completion(self, messages: Sequence[ChatMessage], **options: Any) -> LLMResponse:
        """Answer the conversation with a single reply.

        Args:
            messages: System instructions and turns, oldest first
            **options: SDK-specific generation parameters; ``temperature``
                and ``max_tokens`` override the provider defaults

        Raises:
            Exception: Whatever the SDK raises; callers decide how to recover
        """

    async def close(self) -> None:
        """Release the SDK client. Nothing to release by default."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
