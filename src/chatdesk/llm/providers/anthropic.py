"""Anthropic Messages API adapter.

Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from collections.abc import Sequence
from typing import Any

from anthropic import AsyncAnthropic

from ..base import LLMProvider, split_system
from ..models import ChatMessage, LLMResponse, TokenUsage

# The Messages API refuses requests without max_tokens
DEFAULT_MAX_TOKENS = 1024


def to_anthropic_content(message: ChatMessage) -> str | list[dict[str, Any]]:
    """Plain string content, or image blocks followed by a text block."""
    if not message.images:
        return message.content

    blocks: list[dict[str, Any]] = [
        {
            "type": "image",
            "source": {"type": "base64", "media_type": image.mime_type, "data": image.data},
        }
        for image in message.images
    ]
    if message.content:
        blocks.append({"type": "text", "text": message.content})
    return blocks


class AnthropicProvider(LLMProvider):
    """Claude models. The system prompt goes in the top-level ``system`` field."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **client_kwargs: Any
    ):
        super().__init__(model, temperature, max_tokens or DEFAULT_MAX_TOKENS)
        self._client = AsyncAnthropic(api_key=api_key, base_url=base_url, **client_kwargs)

    async def chat_completion(self, messages: Sequence[ChatMessage], **options: Any) -> LLMResponse:
        system, turns = split_system(messages)
        params: dict[str, Any] = {
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            **options,
        }
        if system:
            params["system"] = system

        response = await self._client.messages.create(
            model=self.model,
            messages=[
                {"role": message.role, "content": to_anthropic_content(message)}
                for message in turns
            ],
            **params
        )

        return LLMResponse(
            content="".join(block.text for block in response.content if block.type == "text"),
            model=response.model,
            usage=TokenUsage(
                prompt_tokens=response.usage.input_tokens,
                completion_tokens=response.usage.output_tokens,
            ),
        )

    async def close(self) -> None:
        await self._client.close()
