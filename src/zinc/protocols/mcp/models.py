"""MCP models — JSON-RPC 2.0 messages and tool payloads.

Implements the message format used by the Model Context Protocol for
capability negotiation (``initialize``), tool discovery (``tools/list``)
and execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2024-11-05"

RequestId = int | float | str | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    A request whose ``id`` member was absent from the frame is a
    notification; use :attr:`is_notification` rather than ``id is None``
    because an explicit ``"id": null`` still expects a response.
    """

    jsonrpc: str = JSONRPC_VERSION
    method: str
    id: RequestId = None
    params: dict[str, Any] | list[Any] | None = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: Any = None
    error: JsonRpcError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class CallToolResult(BaseModel):
    """The result payload of ``tools/call``."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = []
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str, *, is_error: bool = False) -> CallToolResult:
        """Create a result with a single text content block."""
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.content)


class ServerInfo(BaseModel):
    """Name and version the server reports during ``initialize``."""

    name: str
    version: str


class ToolsCapability(BaseModel):
    """Tool-related server capabilities."""

    model_config = ConfigDict(populate_by_name=True)

    list_changed: bool = Field(default=False, alias="listChanged")


class ServerCapabilities(BaseModel):
    """Features the server supports."""

    tools: ToolsCapability = Field(default_factory=ToolsCapability)


class InitializeResult(BaseModel):
    """The result payload of ``initialize``."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=MCP_PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: ServerCapabilities = Field(default_factory=ServerCapabilities)
    server_info: ServerInfo = Field(alias="serverInfo")
