"""zinc CLI entrypoint."""

from __future__ import annotations

import click

from zinc import __version__


@click.group()
@click.version_option(version=__version__, prog_name="zinc")
def main() -> None:
    """zinc — local tools over line-delimited JSON-RPC."""


# Register subcommands
from zinc.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
