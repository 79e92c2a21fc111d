from typing import Any

from .base import LLMProvider
from .providers import AnthropicProvider, GeminiProvider, OpenAIProvider

PROVIDERS: dict[str, type[LLMProvider]] = {
    "gemini": GeminiProvider,
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}

ALIASES = {"claude": "anthropic"}

SUPPORTED_PROVIDERS = tuple(PROVIDERS)


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Instantiate a provider by name.

    Args:
        provider: 'gemini', 'openai' or 'anthropic' ('claude' is accepted),
            case-insensitive
        **config: Constructor arguments; ``api_key`` is always required,
            ``model`` picks a non-default model

    Raises:
        ValueError: Unknown provider name
        TypeError: ``api_key`` missing from config

    Examples:
        >>> llm = create_llm_provider("openai", api_key="...", base_url="https://api.deepseek.com")
    """
    name = ALIASES.get(provider.lower(), provider.lower())
    if name not in PROVIDERS:
        raise ValueError(
            f"Unsupported provider: {provider}. Choose one of: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    if "api_key" not in config:
        raise TypeError(f"{name} provider requires 'api_key' in config")
    return PROVIDERS[name](**config)
