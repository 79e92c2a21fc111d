"""Pytest configuration and shared fixtures."""
import asyncio
import base64
import os
from collections.abc import Sequence
from typing import Any

import pytest

from chatdesk.chat import ChatController, ConversationStore, ReplyService
from chatdesk.llm import ChatMessage, LLMProvider, LLMResponse, TokenUsage

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


class FakeLLM(LLMProvider):
    """In-process provider that records requests and returns canned replies."""

    def __init__(self, reply: str = "好的，马上安排。", delay: float = 0.0):
        super().__init__(model="fake-model")
        self.reply = reply
        self.delay = delay
        self.requests: list[list[ChatMessage]] = []
        self.closed = False

    async def chat_completion(self, messages: Sequence[ChatMessage], **options: Any) -> LLMResponse:
        self.requests.append(list(messages))
        if self.delay:
            await asyncio.sleep(self.delay)
        return LLMResponse(
            content=self.reply,
            model=self.model,
            usage=TokenUsage(prompt_tokens=len(messages), completion_tokens=1),
        )

    async def close(self) -> None:
        self.closed = True


class FailingLLM(FakeLLM):
    """Provider whose every call fails."""

    async def chat_completion(self, messages: Sequence[ChatMessage], **options: Any) -> LLMResponse:
        self.requests.append(list(messages))
        raise ConnectionError("network unreachable")


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
        "anthropic": os.getenv("ANTHROPIC_API_KEY"),
    }


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def failing_llm():
    return FailingLLM()


@pytest.fixture
def make_llm():
    """Factory for fake providers with a custom reply or delay."""
    return FakeLLM


@pytest.fixture
def store():
    """Empty conversation store."""
    return ConversationStore()


@pytest.fixture
def controller(store, fake_llm):
    """Controller bound to the empty store and the fake provider."""
    return ChatController(store, ReplyService(fake_llm, system_prompt="You are a sales engineer."))


@pytest.fixture
def png_file(tmp_path):
    """A tiny PNG on disk."""
    path = tmp_path / "drill.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def png_data_url():
    return "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")
