"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from ..logging_config import configure_logging
from ..session import Message, Role
from .providers import get_client, get_session

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="colloquy",
    help="Chat with a remote LLM backend, one request at a time",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()

LOG_LEVEL_HELP = "Log level: debug, info, warning or error"


def _print_message(message: Message) -> None:
    if message.role == Role.USER:
        return  # the user already sees what they typed
    console.print("[bold green]Assistant:[/bold green]")
    console.print(Markdown(message.text))
    console.print()


@app.command()
def chat(
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help=LOG_LEVEL_HELP
    )
):
    """Interactive chat in the terminal."""
    configure_logging(log_level, console=Console(stderr=True))

    async def _chat():
        _, client = get_client(console)
        session = get_session(client)
        shown: set[str] = set()

        def on_change(log: tuple[Message, ...], pending: bool) -> None:
            for message in log:
                if message.id not in shown:
                    shown.add(message.id)
                    _print_message(message)
            if pending:
                console.print("[dim]Thinking...[/dim]")

        session.subscribe(on_change)
        on_change(session.log, session.pending)

        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

        try:
            while True:
                try:
                    user_input = await asyncio.to_thread(
                        console.input, "[bold yellow]You:[/bold yellow] "
                    )
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if user_input.strip().lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                await session.submit(user_input)
        finally:
            await client.close()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        console.print("\n[dim]Goodbye![/dim]")


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive TUI chat interface."""
    # Records go to the TUI log panel; a console handler would corrupt the screen
    import logging
    logging.getLogger().setLevel((log_level or "info").upper())

    async def _tui():
        from ..ui import run_textual_tui

        _, client = get_client(console)
        session = get_session(client)

        try:
            await run_textual_tui(
                session,
                model_name=client.model,
                log_level=log_level,
            )
        finally:
            await client.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def check():
    """Show the backend configuration and whether the client initializes."""
    config, client = get_client(console)

    table = Table(title="Backend", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    if config is not None:
        table.add_row("Provider", config.provider)
        table.add_row("Model", client.model or config.model or "-")
        table.add_row("Timeout", f"{config.timeout:g}s")
    else:
        table.add_row("Configuration", "[red]invalid[/red]")
    table.add_row(
        "Status",
        "[green]available[/green]" if client.is_available() else "[red]unavailable[/red]",
    )
    console.print(table)

    asyncio.run(client.close())
    if not client.is_available():
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
