"""Main CLI application using Typer."""
import asyncio
import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from ..chat import ConversationStore, ReplyService, create_demo_store, encode_image_file
from ..prompts import get_system_prompt
from .providers import PROVIDER_ENV, build_controller, provider_name, require_llm

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="chatdesk",
    help="Mock instant-messaging client with model-generated replies",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command(name="tui")
def tui_command(
    demo: bool = typer.Option(
        True,
        "--demo/--empty",
        help="Start with the demo customers or an empty customer list"
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug, info, warning, error)"
    ),
    prompt_file: Path = typer.Option(
        None,
        "--prompt",
        "-p",
        exists=True,
        dir_okay=False,
        help="Custom system prompt file"
    ),
):
    """Launch the messenger TUI."""
    async def _tui():
        from ..ui import run_textual_tui

        llm = require_llm(console)
        store = create_demo_store() if demo else ConversationStore()
        controller = build_controller(llm, store, prompt_file)
        try:
            await run_textual_tui(store, controller, log_level=log_level)
        finally:
            await llm.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def reply(
    text: str = typer.Argument("", help="Message text (may be empty when --image is given)"),
    image: Path = typer.Option(
        None,
        "--image",
        "-i",
        help="Image file to send with the message"
    ),
    prompt_file: Path = typer.Option(
        None,
        "--prompt",
        "-p",
        exists=True,
        dir_okay=False,
        help="Custom system prompt file"
    ),
):
    """Send a single message without history and print the reply."""
    image_url = None
    if image is not None:
        try:
            image_url = encode_image_file(image)
        except (OSError, ValueError) as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)

    if not text.strip() and image_url is None:
        console.print("[red]Error: nothing to send[/red]")
        raise typer.Exit(code=1)

    def _show_errors(level: str, component: str, message: str) -> None:
        if level == "error":
            console.print(f"{component}: {message}", style="dim", markup=False)

    async def _reply():
        llm = require_llm(console)
        service = ReplyService(llm, system_prompt=get_system_prompt(prompt_file))
        service.set_debug_callback(_show_errors)
        try:
            answer = await service.generate_reply(text, [], image_url)
        finally:
            await llm.close()
        console.print(Panel(answer, title=llm.model, border_style="green"))

    asyncio.run(_reply())


@app.command()
def health():
    """Check which provider keys are configured."""
    selected = provider_name()
    console.print(f"Selected provider: [bold]{selected}[/bold]")

    for name, (key_var, model_var, default_model) in PROVIDER_ENV.items():
        model = os.getenv(model_var, default_model)
        if os.getenv(key_var):
            console.print(f"[green]+[/green] {key_var}: SET ({model})")
        else:
            console.print(f"[yellow]![/yellow] {key_var}: NOT SET")

    if selected not in PROVIDER_ENV:
        console.print(f"[red]x[/red] Unknown provider: {selected}")
        raise typer.Exit(code=1)
    if not os.getenv(PROVIDER_ENV[selected][0]):
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
