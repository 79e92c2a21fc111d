"""Gemini adapter built on the google-genai SDK.

Reference: https://github.com/googleapis/python-genai

Blocked or empty candidates come back as an empty reply; there is no
retry here.
"""

from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import types

from ..base import LLMProvider, split_system
from ..models import ChatMessage, LLMResponse, TokenUsage

# Shop-floor talk about cutting and breaking tools trips the default filters
RELAXED_SAFETY = [
    types.SafetySetting(category=category, threshold="BLOCK_ONLY_HIGH")
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


def to_gemini_content(message: ChatMessage) -> types.Content:
    """Images first, then the text; 'assistant' becomes 'model'."""
    parts = [
        types.Part.from_bytes(data=image.raw, mime_type=image.mime_type)
        for image in message.images
    ]
    if message.content:
        parts.append(types.Part.from_text(text=message.content))
    return types.Content(role="model" if message.role == "assistant" else "user", parts=parts)


def response_text(response: types.GenerateContentResponse) -> str:
    """Text of the first candidate that has any parts."""
    for candidate in response.candidates or []:
        if candidate.content and candidate.content.parts:
            return "".join(part.text for part in candidate.content.parts if part.text)
    return ""


class GeminiProvider(LLMProvider):
    """Gemini models through the async ``client.aio`` surface.

    The system prompt travels as ``system_instruction``. The client keeps
    no connection open, so close() has nothing to do.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **client_kwargs: Any
    ):
        super().__init__(model, temperature, max_tokens)
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    def _convert_messages(
        self, messages: Sequence[ChatMessage]
    ) -> tuple[str | None, list[types.Content]]:
        system, turns = split_system(messages)
        return system, [to_gemini_content(message) for message in turns]

    async def chat_completion(self, messages: Sequence[ChatMessage], **options: Any) -> LLMResponse:
        system, contents = self._convert_messages(messages)
        config = types.GenerateContentConfig(
            system_instruction=system,
            temperature=options.pop("temperature", self.temperature),
            max_output_tokens=options.pop("max_tokens", self.max_tokens),
            safety_settings=RELAXED_SAFETY,
            **options
        )

        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=config
        )

        meta = response.usage_metadata
        usage = None
        if meta is not None:
            usage = TokenUsage(
                prompt_tokens=meta.prompt_token_count or 0,
                completion_tokens=meta.candidates_token_count or 0,
            )
        return LLMResponse(content=response_text(response), model=self.model, usage=usage)
