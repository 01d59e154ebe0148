"""``zinc tools`` — inspect the built-in tool catalog."""

from __future__ import annotations

import click

from zinc.cli_commands._output import print_tools_json, print_tools_table


@click.group()
def tools() -> None:
    """Inspect the tools the server exposes."""


@tools.command("list")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def list_tools(fmt: str) -> None:
    """List the tools reported by tools/list."""
    from zinc.tools import build_default_registry

    catalog = build_default_registry().list_tools()
    if fmt == "json":
        print_tools_json(catalog)
    else:
        print_tools_table(catalog)
