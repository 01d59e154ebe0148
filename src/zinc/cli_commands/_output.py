"""Shared CLI output formatters."""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from zinc.protocols.mcp.models import MCPToolDef
    from zinc.relay.settings import Settings

console = Console()
# stdout belongs to the protocol stream while serving.
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send diagnostic logging to stderr at *level*."""
    logging.basicConfig(stream=sys.stderr, level=level.upper(), format=LOG_FORMAT, force=True)


def print_tools_table(tools: list[MCPToolDef]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Parameters")

    for tool in tools:
        properties = tool.input_schema.get("properties", {})
        required = set(tool.input_schema.get("required", []))
        params = ", ".join(
            name if name in required else f"{name}?" for name in properties
        )
        table.add_row(tool.name, _truncate(tool.description), params or "-")

    console.print(table)


def print_tools_json(tools: list[MCPToolDef]) -> None:
    """Print tool descriptors in their ``tools/list`` wire shape."""
    data = [tool.model_dump(by_alias=True, mode="json") for tool in tools]
    console.print_json(json.dumps(data))


def print_settings(settings: Settings, *, as_json: bool = False) -> None:
    """Print the relay settings with the API key masked."""
    data = settings.model_dump()
    data["api_key"] = _mask(settings.api_key)
    if as_json:
        console.print_json(json.dumps(data))
        return
    console.print("\n[bold]Settings[/bold]")
    for key, val in data.items():
        console.print(f"  {key}: {val}")


def _mask(secret: str) -> str:
    if not secret:
        return "(not set)"
    if len(secret) <= 8:
        return "*" * len(secret)
    return secret[:4] + "..." + secret[-4:]


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
