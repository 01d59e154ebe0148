"""``zinc ask`` — send a message through the relay."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from zinc.cli_commands._output import configure_logging, console
from zinc.cli_commands.settings import settings_file_option


@click.command()
@click.argument("message")
@settings_file_option
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def ask(message: str, settings_file: str | None, verbose: bool) -> None:
    """Send MESSAGE to the configured model, letting it call the built-in tools."""
    from zinc.relay import MessageRelay, RelayError, SettingsError, SettingsStore
    from zinc.tools import build_default_registry

    configure_logging("INFO" if verbose else "WARNING")

    store = SettingsStore(Path(settings_file) if settings_file else None)
    try:
        current = store.load()
    except SettingsError as exc:
        console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(1)

    if verbose:
        console.print(f"Model: {current.model}")

    relay = MessageRelay(current, build_default_registry())
    try:
        reply = asyncio.run(relay.handle_message(message))
    except RelayError as exc:
        console.print(f"[red]Relay error:[/red] {exc}")
        sys.exit(1)

    console.print(reply, markup=False, highlight=False)
