"""Completion providers.

Module structure:
- models.py: Provider-neutral messages, images and responses
- base.py: LLMProvider interface
- providers/: Gemini, OpenAI and Anthropic adapters
- factory.py: Provider lookup by name
"""

from .base import LLMProvider, split_system
from .factory import SUPPORTED_PROVIDERS, create_llm_provider
from .models import ChatMessage, ImagePart, LLMResponse, TokenUsage
from .providers import AnthropicProvider, GeminiProvider, OpenAIProvider

__all__ = [
    "SUPPORTED_PROVIDERS",
    "AnthropicProvider",
    "ChatMessage",
    "GeminiProvider",
    "ImagePart",
    "LLMProvider",
    "LLMResponse",
    "OpenAIProvider",
    "TokenUsage",
    "create_llm_provider",
    "split_system",
]
