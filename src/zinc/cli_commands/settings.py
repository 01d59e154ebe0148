"""``zinc settings`` — show and edit the relay settings record."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from zinc.cli_commands._output import console, print_settings

settings_file_option = click.option(
    "--settings-file",
    default=None,
    type=click.Path(dir_okay=False),
    envvar="ZINC_SETTINGS_FILE",
    help="Settings file (defaults to the per-user app directory).",
)


@click.group()
def settings() -> None:
    """Manage relay settings."""


@settings.command("show")
@settings_file_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def show(settings_file: str | None, as_json: bool) -> None:
    """Show the current settings (creating defaults if missing)."""
    from zinc.relay.settings import SettingsError, SettingsStore

    store = SettingsStore(Path(settings_file) if settings_file else None)
    try:
        current = store.load()
    except SettingsError as exc:
        console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(1)
    print_settings(current, as_json=as_json)


@settings.command("set")
@settings_file_option
@click.option("--api-key", default=None, help="API key for the completion provider.")
@click.option("--model", default=None, help="LiteLLM model string, e.g. openrouter/anthropic/claude-3-haiku.")
@click.option("--ai-enabled/--ai-disabled", default=None, help="Enable or disable the relay.")
def set_settings(
    settings_file: str | None,
    api_key: str | None,
    model: str | None,
    ai_enabled: bool | None,
) -> None:
    """Update one or more settings."""
    from zinc.relay.settings import SettingsError, SettingsStore

    updates = {
        key: val
        for key, val in {"api_key": api_key, "model": model, "ai_enabled": ai_enabled}.items()
        if val is not None
    }
    if not updates:
        console.print("[yellow]Nothing to update.[/yellow]")
        return

    store = SettingsStore(Path(settings_file) if settings_file else None)
    try:
        updated = store.load().model_copy(update=updates)
        store.save(updated)
    except SettingsError as exc:
        console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(1)

    console.print(f"[green]Saved settings to {store.path}[/green]")
