"""Protocol layer — JSON-RPC error taxonomy and the MCP wire format."""

from zinc.protocols.errors import (
    FrameTooLargeError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    ToolExecutionError,
    ToolNotFoundError,
    TransportError,
)

__all__ = [
    "FrameTooLargeError",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "ParseError",
    "ProtocolError",
    "ToolExecutionError",
    "ToolNotFoundError",
    "TransportError",
]
