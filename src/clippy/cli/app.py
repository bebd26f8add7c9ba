"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..chat import AnnouncementMessage, AssistantMessage, ConversationStore, DispatchOutcome
from ..logging import configure_logging
from .providers import get_keys, get_service, get_settings
from .render import ConversationRenderer

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="clippy",
    help="Chat with a remote chat-completion model in Clippy's voice",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_LOG_LEVEL_OPTION = typer.Option(
    "WARNING",
    "--log-level",
    "-L",
    help="Logging level (DEBUG, INFO, WARNING, ERROR)"
)


@app.command()
def chat(log_level: str = _LOG_LEVEL_OPTION):
    """Interactive chat. Type '/reset' to start over."""
    configure_logging(log_level)

    async def _chat():
        store = ConversationStore()
        store.subscribe(ConversationRenderer(console))

        console.print("[bold cyan]Clippy Chat[/bold cyan]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave, '/reset' to start over[/dim]\n")

        async with get_service(console, store=store) as service:
            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                text = user_input.strip()
                if not text:
                    continue

                if text.lower() in ('exit', 'quit', 'q'):
                    console.print("[dim]Goodbye![/dim]")
                    break

                if text == "/reset":
                    service.reset()
                    continue

                await service.ask(text)
                console.print()

    asyncio.run(_chat())


@app.command()
def ask(
    text: str = typer.Argument(..., help="Message to send"),
    log_level: str = _LOG_LEVEL_OPTION,
):
    """Send a single message and print the reply."""
    configure_logging(log_level)

    async def _ask() -> DispatchOutcome:
        async with get_service(console) as service:
            outcome = await service.ask(text)
            last = service.messages[-1]

        if isinstance(last, AnnouncementMessage):
            console.print(f"[yellow]{last.text}[/yellow]")
        elif isinstance(last, AssistantMessage):
            style = "green" if outcome == DispatchOutcome.FULFILLED else "red"
            console.print(f"[bold {style}]Clippy:[/bold {style}] ", end="")
            console.print(last.text, markup=False)
        return outcome

    outcome = asyncio.run(_ask())
    if outcome != DispatchOutcome.FULFILLED:
        raise typer.Exit(code=1)


@app.command()
def config(log_level: str = _LOG_LEVEL_OPTION):
    """Show the current settings. The API key itself is never printed."""
    configure_logging(log_level)

    settings = get_settings()
    keys = get_keys()

    try:
        tokens = str(settings.tokens)
    except ValueError as e:
        console.print(f"[red]Error: invalid CLIPPY_MAX_TOKENS: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Clippy Settings", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="magenta")
    table.add_column("Value")

    table.add_row("API endpoint", settings.api_endpoint or "[red]not set[/red]")
    table.add_row("Max tokens", tokens)
    table.add_row("API key", "[green]set[/green]" if keys.get_key() else "[red]not set[/red]")

    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
