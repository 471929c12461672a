"""Main CLI application using Typer."""
import asyncio
import json
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import TypeAdapter
from rich.console import Console
from rich.live import Live

from ..chat import build_assistant_reply
from ..errors import SinkWriteFailure
from ..preferences import ThemeMode
from ..render import FormattedBlock, format_text, render_html
from ..streaming import LiveConsoleSink, StreamSimulator
from .providers import get_preferences, get_stream_config

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="echochat",
    help="Chat interface that streams simulated assistant replies",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_BLOCKS = TypeAdapter(list[FormattedBlock])


@app.command()
def render(
    file: Path | None = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="File with raw text (reads stdin when omitted)"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print formatted blocks as JSON instead of HTML"
    ),
):
    """Format raw text and print the resulting markup."""
    raw = file.read_text(encoding="utf-8") if file else sys.stdin.read()
    blocks = format_text(raw)
    if as_json:
        typer.echo(json.dumps(_BLOCKS.dump_python(blocks, mode="json"), indent=2))
    else:
        typer.echo(render_html(blocks))


@app.command()
def reply(
    text: str = typer.Argument(..., help="User message"),
):
    """Print the simulated assistant reply to a message."""
    answer = build_assistant_reply(text)
    if not answer:
        console.print("[yellow]Empty message, no reply.[/yellow]")
        raise typer.Exit(code=1)
    typer.echo(answer)


@app.command()
def stream(
    text: str = typer.Argument(..., help="User message to answer"),
    chunk_size: int | None = typer.Option(
        None,
        "--chunk-size",
        "-c",
        help="Characters revealed per tick"
    ),
    interval_ms: int | None = typer.Option(
        None,
        "--interval",
        "-i",
        help="Delay between ticks in milliseconds"
    ),
    echo: bool = typer.Option(
        False,
        "--echo",
        help="Stream the text itself instead of the simulated reply"
    ),
):
    """Stream a reply into the terminal, then show it formatted."""
    config = get_stream_config(chunk_size, interval_ms, console)
    content = text if echo else build_assistant_reply(text)
    if not content:
        console.print("[yellow]Nothing to stream.[/yellow]")
        raise typer.Exit(code=1)

    async def _stream():
        simulator = StreamSimulator(config)
        with Live(console=console, auto_refresh=False) as live:
            sink = LiveConsoleSink(live)
            try:
                await simulator.run(content, sink)
            except SinkWriteFailure as e:
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(code=1)

    try:
        asyncio.run(_stream())
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")


@app.command("tui")
def tui_command(
    chunk_size: int | None = typer.Option(
        None,
        "--chunk-size",
        "-c",
        help="Characters revealed per tick"
    ),
    interval_ms: int | None = typer.Option(
        None,
        "--interval",
        "-i",
        help="Delay between ticks in milliseconds"
    ),
    system_theme: ThemeMode = typer.Option(
        ThemeMode.DARK,
        "--system-theme",
        help="Theme to use when no choice has been saved"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive chat TUI."""
    from ..ui import run_textual_tui

    config = get_stream_config(chunk_size, interval_ms, console)
    preferences = get_preferences()

    try:
        asyncio.run(run_textual_tui(
            stream_config=config,
            preferences=preferences,
            log_level=log_level,
            system_theme=system_theme,
        ))
    except KeyboardInterrupt:
        pass
    console.print("[dim]Goodbye![/dim]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
