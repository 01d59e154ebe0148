"""MCP protocol — JSON-RPC envelope, models and frame transports."""

from zinc.protocols.mcp.codec import decode, encode, make_error, make_result
from zinc.protocols.mcp.models import (
    CallToolResult,
    InitializeResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    TextContent,
)
from zinc.protocols.mcp.transport import FrameTransport, StdioTransport, StreamTransport

__all__ = [
    "CallToolResult",
    "FrameTransport",
    "InitializeResult",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPToolDef",
    "StdioTransport",
    "StreamTransport",
    "TextContent",
    "decode",
    "encode",
    "make_error",
    "make_result",
]
