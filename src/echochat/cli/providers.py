"""Provider factory functions for CLI.

Centralizes creation of the stream config and preference store from
environment variables. Hides configuration details from command
implementations.
"""

import os

import typer
from pydantic import ValidationError
from rich.console import Console

from ..preferences import PreferenceStore, create_preference_store
from ..streaming import StreamConfig

# Default console for output
_console = Console()


def get_stream_config(
    chunk_size: int | None = None,
    interval_ms: int | None = None,
    console: Console | None = None,
) -> StreamConfig:
    """Create the stream config, letting explicit options override the environment.

    Args:
        chunk_size: Scalars per tick, or None for the environment/default
        interval_ms: Delay between ticks, or None for the environment/default
        console: Optional Rich console for output

    Raises:
        typer.Exit: If a value is invalid

    Environment variables:
        ECHOCHAT_CHUNK_SIZE: Scalars per tick (default: 2)
        ECHOCHAT_INTERVAL_MS: Delay between ticks in ms (default: 12)
    """
    con = console or _console
    try:
        config = StreamConfig.from_env()
        overrides = {}
        if chunk_size is not None:
            overrides["chunk_size"] = chunk_size
        if interval_ms is not None:
            overrides["interval_ms"] = interval_ms
        if overrides:
            config = StreamConfig(**{**config.model_dump(), **overrides})
    except (ValueError, ValidationError) as e:
        con.print(f"[red]Error: invalid stream configuration: {e}[/red]")
        raise typer.Exit(code=1)
    return config


def get_preferences() -> PreferenceStore:
    """Create the preference store from environment variables.

    Environment variables:
        ECHOCHAT_PREFS_BACKEND: "json" (default) or "memory"
        ECHOCHAT_PREFS_PATH: JSON file path (default: ~/.echochat/preferences.json)
    """
    backend = os.getenv("ECHOCHAT_PREFS_BACKEND", "json")
    if backend == "json":
        path = os.getenv("ECHOCHAT_PREFS_PATH")
        return create_preference_store("json", path=path)
    return create_preference_store(backend)
