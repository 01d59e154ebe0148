"""Tool handlers — narrow async wrappers over OS primitives.

Handlers hold no state.  Every OS-level failure, including a path or
argument the OS rejects outright (an embedded NUL byte), is re-raised as a
:class:`~zinc.protocols.errors.ToolExecutionError` naming the tool, so both
callers (the protocol dispatcher and the message relay) see one error type.

``run_command`` executes directly on the host with no isolation and logs a
warning each time it is used.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from zinc.protocols.errors import ToolExecutionError

logger = logging.getLogger(__name__)


async def read_file(path: str) -> str:
    """Return the UTF-8 contents of the file at *path*."""
    try:
        return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except (OSError, ValueError) as exc:
        raise ToolExecutionError("read_file", f"Failed to read file: {exc}") from exc


async def write_file(path: str, content: str) -> None:
    """Write *content* to *path*, replacing any existing file."""
    try:
        await asyncio.to_thread(Path(path).write_text, content, encoding="utf-8")
    except (OSError, ValueError) as exc:
        raise ToolExecutionError("write_file", f"Failed to write file: {exc}") from exc


async def list_files(path: str) -> list[str]:
    """Return the entry names directly inside *path* (unsorted, non-recursive)."""
    try:
        return await asyncio.to_thread(os.listdir, path)
    except (OSError, ValueError) as exc:
        raise ToolExecutionError("list_files", f"Failed to list files: {exc}") from exc


async def run_command(command: str, args: list[str] | None = None) -> str:
    """Run *command* with *args* and return its captured stdout.

    No shell is involved.  stderr is discarded and the exit status is not
    reported; only a failure to launch the process is an error.
    """
    argv = [command, *(args or [])]
    logger.warning("run_command: executing %s on host (UNSANDBOXED)", argv)
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
        stdout, _ = await proc.communicate()
    except (OSError, ValueError) as exc:
        raise ToolExecutionError("run_command", f"Failed to run command: {exc}") from exc

    logger.debug("run_command: %s exited with %s", command, proc.returncode)
    return stdout.decode(errors="replace") if stdout else ""
