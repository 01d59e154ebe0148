"""ToolRegistry — the immutable name-to-tool lookup table.

The registry is built once at start-up and handed to whoever needs it (the
protocol dispatcher, the message relay).  It supplies the discovery catalog,
validates arguments against each tool's parameter model, and invokes
handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from zinc.protocols.errors import InvalidParamsError, ToolNotFoundError
from zinc.protocols.mcp.models import MCPToolDef
from zinc.tools.models import ToolParams
from zinc.utils.telemetry import ATTR_TOOL_NAME, get_tracer

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

ToolHandler = Callable[[Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    """A registered tool: its descriptor fields plus the callable behind it.

    ``handler`` receives a validated instance of ``params_model`` and returns
    the text the caller sees.
    """

    name: str
    description: str
    params_model: type[ToolParams]
    handler: ToolHandler

    def descriptor(self) -> MCPToolDef:
        """Build the ``tools/list`` entry for this tool."""
        return MCPToolDef(
            name=self.name,
            description=self.description,
            input_schema=self.params_model.model_json_schema(),
        )


class ToolRegistry:
    """Read-only catalog of tools keyed by exact name.

    Usage::

        registry = ToolRegistry([read_file_spec, write_file_spec])
        registry.list_tools()                       # descriptors, in order
        params = registry.validate("read_file", {"path": "/tmp/x"})
        text = await registry.invoke("read_file", {"path": "/tmp/x"})
    """

    def __init__(self, specs: Iterable[ToolSpec]) -> None:
        tools: dict[str, ToolSpec] = {}
        for spec in specs:
            if spec.name in tools:
                msg = f"duplicate tool name: {spec.name}"
                raise ValueError(msg)
            tools[spec.name] = spec
        self._tools = MappingProxyType(tools)
        self._descriptors = tuple(spec.descriptor() for spec in tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[MCPToolDef]:
        """Return every tool descriptor in registration order."""
        return list(self._descriptors)

    def resolve(self, name: str) -> ToolSpec:
        """Look up a tool by exact, case-sensitive name."""
        spec = self._tools.get(name)
        if spec is None:
            raise ToolNotFoundError(name)
        return spec

    def validate(self, name: str, arguments: Any) -> ToolParams:
        """Check *arguments* against the tool's parameter model.

        Raises:
            ToolNotFoundError: No tool is registered under *name*.
            InvalidParamsError: A required field is missing or has the wrong
                type; the error names the field.
        """
        spec = self.resolve(name)
        if not isinstance(arguments, dict):
            raise InvalidParamsError("arguments must be an object", field="arguments")
        try:
            return spec.params_model.model_validate(arguments)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "arguments"
            raise InvalidParamsError(f"{field}: {first['msg']}", field=field) from exc

    async def invoke(self, name: str, arguments: Any) -> str:
        """Validate *arguments* and run the tool, returning its text output."""
        params = self.validate(name, arguments)
        spec = self._tools[name]
        with _tracer.start_as_current_span("tool.invoke") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            logger.info("Invoking tool %s", name)
            return await spec.handler(params)

    def function_schemas(self) -> list[dict[str, Any]]:
        """Return the catalog as OpenAI-compatible function schemas."""
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.input_schema or {"type": "object", "properties": {}},
                },
            }
            for tool in self._descriptors
        ]
