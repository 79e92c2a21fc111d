"""OpenAI Chat Completions adapter.

Any OpenAI-compatible endpoint (DeepSeek, a local server) works through
``base_url`` as long as the model accepts image parts for image turns.
"""

from collections.abc import Sequence
from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, TokenUsage


def to_openai_message(message: ChatMessage) -> dict[str, Any]:
    """Plain string content, or a part list when images are attached."""
    if not message.images:
        return {"role": message.role, "content": message.content}

    parts: list[dict[str, Any]] = [
        {"type": "image_url", "image_url": {"url": image.to_data_url()}}
        for image in message.images
    ]
    if message.content:
        parts.append({"type": "text", "text": message.content})
    return {"role": message.role, "content": parts}


class OpenAIProvider(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **client_kwargs: Any
    ):
        super().__init__(model, temperature, max_tokens)
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    async def chat_completion(self, messages: Sequence[ChatMessage], **options: Any) -> LLMResponse:
        params: dict[str, Any] = {"temperature": self.temperature, **options}
        if self.max_tokens is not None:
            params.setdefault("max_tokens", self.max_tokens)

        completion = await self._client.chat.completions.create(
            model=self.model,
            messages=[to_openai_message(message) for message in messages],
            **params
        )

        usage = None
        if completion.usage:
            usage = TokenUsage(
                prompt_tokens=completion.usage.prompt_tokens,
                completion_tokens=completion.usage.completion_tokens,
            )
        return LLMResponse(
            content=completion.choices[0].message.content or "",
            model=completion.model,
            usage=usage
        )

    async def close(self) -> None:
        await self._client.close()
