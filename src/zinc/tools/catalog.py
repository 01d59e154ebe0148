"""The built-in tool catalog.

Four fixed tools, in the order ``tools/list`` reports them, plus
:func:`build_default_registry` to assemble them into a
:class:`~zinc.tools.registry.ToolRegistry`.
"""

from __future__ import annotations

import json

from zinc.tools import handlers
from zinc.tools.models import ListFilesParams, ReadFileParams, RunCommandParams, WriteFileParams
from zinc.tools.registry import ToolRegistry, ToolSpec

WRITE_OK = "File written successfully"


async def _read_file(params: ReadFileParams) -> str:
    return await handlers.read_file(params.path)


async def _write_file(params: WriteFileParams) -> str:
    await handlers.write_file(params.path, params.content)
    return WRITE_OK


async def _list_files(params: ListFilesParams) -> str:
    return json.dumps(await handlers.list_files(params.path))


async def _run_command(params: RunCommandParams) -> str:
    return await handlers.run_command(params.command, list(params.args))


BUILTIN_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="read_file",
        description="Read the contents of a file",
        params_model=ReadFileParams,
        handler=_read_file,
    ),
    ToolSpec(
        name="write_file",
        description="Write content to a file",
        params_model=WriteFileParams,
        handler=_write_file,
    ),
    ToolSpec(
        name="list_files",
        description="List files in a directory",
        params_model=ListFilesParams,
        handler=_list_files,
    ),
    ToolSpec(
        name="run_command",
        description="Run a shell command",
        params_model=RunCommandParams,
        handler=_run_command,
    ),
)


def build_default_registry() -> ToolRegistry:
    """Return a registry holding the four built-in tools."""
    return ToolRegistry(BUILTIN_TOOLS)
