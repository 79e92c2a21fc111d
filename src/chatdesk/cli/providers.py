"""Provider factory functions for CLI.

Centralizes creation of the LLM provider and the chat services from
environment variables. Hides configuration details from command
implementations.
"""

import os
from pathlib import Path
from typing import Any

from rich.console import Console

from ..chat import ChatController, ConversationStore, ReplyService
from ..llm import LLMProvider, create_llm_provider
from ..prompts import get_system_prompt

# Default console for output
_console = Console()

# Provider name -> (api key variable, model variable, default model)
PROVIDER_ENV = {
    "gemini": ("GEMINI_API_KEY", "GEMINI_MODEL", "gemini-2.5-flash"),
    "openai": ("OPENAI_API_KEY", "OPENAI_CHAT_MODEL", "gpt-4o-mini"),
    "anthropic": ("ANTHROPIC_API_KEY", "ANTHROPIC_MODEL", "claude-sonnet-4-20250514"),
}


def provider_name() -> str:
    """Selected provider, with 'claude' accepted as an alias."""
    name = os.getenv("LLM_PROVIDER", "gemini").lower()
    return "anthropic" if name == "claude" else name


def get_llm(console: Console | None = None) -> LLMProvider | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (gemini, openai, anthropic; default: gemini)
        GEMINI_API_KEY / GEMINI_MODEL (default: gemini-2.5-flash)
        OPENAI_API_KEY / OPENAI_CHAT_MODEL (default: gpt-4o-mini) / OPENAI_BASE_URL
        ANTHROPIC_API_KEY / ANTHROPIC_MODEL (default: claude-sonnet-4-20250514)
    """
    con = console or _console
    name = provider_name()

    if name not in PROVIDER_ENV:
        con.print(f"[red]Error: Unknown LLM provider: {name}[/red]")
        return None

    key_var, model_var, default_model = PROVIDER_ENV[name]
    api_key = os.getenv(key_var)
    if not api_key:
        con.print(f"[yellow]Warning: {key_var} not set, replies disabled[/yellow]")
        return None

    config: dict[str, Any] = {
        "api_key": api_key,
        "model": os.getenv(model_var, default_model),
    }
    if name == "openai" and os.getenv("OPENAI_BASE_URL"):
        config["base_url"] = os.getenv("OPENAI_BASE_URL")
    return create_llm_provider(name, **config)


def require_llm(console: Console | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Raises:
        SystemExit: If LLM provider is not configured
    """
    import typer

    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm


def build_controller(
    llm: LLMProvider,
    store: ConversationStore,
    prompt_file: Path | None = None,
) -> ChatController:
    """Wire the reply service and send controller around a store."""
    service = ReplyService(llm, system_prompt=get_system_prompt(prompt_file))
    return ChatController(store, service)
