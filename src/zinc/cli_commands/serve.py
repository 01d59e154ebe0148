"""``zinc serve`` — run the JSON-RPC tool server."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from zinc.cli_commands._output import configure_logging, err_console

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.command()
@click.option("--exec", "execute", is_flag=True, help="Start serving. Required.")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML server configuration file.",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override the diagnostic log level (logs go to stderr).",
)
@click.option("--tcp", "address", default=None, metavar="HOST:PORT", help="Serve over TCP instead of stdio.")
@click.option("--telemetry", is_flag=True, help="Export tracing spans to stderr.")
@click.pass_context
def serve(
    ctx: click.Context,
    execute: bool,
    config_path: str | None,
    log_level: str | None,
    address: str | None,
    telemetry: bool,
) -> None:
    """Serve the built-in tools over newline-delimited JSON-RPC.

    Frames are read from stdin and written to stdout unless --tcp is given.
    """
    if not execute:
        click.echo(f"Usage: {ctx.command_path} --exec [OPTIONS]", err=True)
        return

    from zinc.protocols.errors import TransportError
    from zinc.protocols.mcp.transport import StdioTransport
    from zinc.server import ConfigError, MCPServer, RequestDispatcher, ServerConfig, load_config
    from zinc.tools import build_default_registry

    try:
        config = load_config(Path(config_path)) if config_path else ServerConfig()
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    if log_level:
        config = config.model_copy(update={"log_level": log_level.upper()})
    configure_logging(config.log_level)

    if telemetry or config.otlp_endpoint:
        from zinc.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(config, console=telemetry)
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    server = MCPServer(RequestDispatcher(build_default_registry(), config))

    try:
        if address:
            host, port = _parse_address(address)
            asyncio.run(server.serve_tcp(host, port))
        else:
            asyncio.run(server.serve(StdioTransport()))
    except TransportError as exc:
        err_console.print(f"[red]Transport error:[/red] {exc}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Server error:[/red] {exc}")
        sys.exit(1)


def _parse_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        msg = f"expected HOST:PORT, got {address!r}"
        raise click.BadParameter(msg, param_hint="--tcp")
    return host or "127.0.0.1", int(port)
