"""Error taxonomy for the protocol layer.

Every failure the server can report is a :class:`ProtocolError` subclass
carrying its JSON-RPC error code.  Errors are raised where they originate
and converted to a :class:`~zinc.protocols.mcp.models.JsonRpcError` by the
dispatcher.  The one exception raised below the codec is
:class:`FrameTooLargeError`, which a transport raises after discarding a
line it will not buffer; the serving loop answers it like any bad frame.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from zinc.protocols.mcp.models import JsonRpcError

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
# Implementation-defined server-error band (-32000 to -32099).
TOOL_NOT_FOUND = -32001


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_error(self) -> JsonRpcError:
        """Convert to the wire-level error object."""
        from zinc.protocols.mcp.models import JsonRpcError

        return JsonRpcError(code=self.code, message=self.message, data=self.data)


class ParseError(ProtocolError):
    """The frame is not well-formed JSON."""

    code = PARSE_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__("Parse error" + (f": {detail}" if detail else ""))


class InvalidRequestError(ProtocolError):
    """The frame is JSON but not a valid JSON-RPC 2.0 request."""

    code = INVALID_REQUEST

    def __init__(self, detail: str = "") -> None:
        super().__init__("Invalid request" + (f": {detail}" if detail else ""))


class FrameTooLargeError(InvalidRequestError):
    """A frame was longer than the transport will buffer; it was discarded."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"frame exceeds {limit} bytes")


class MethodNotFoundError(ProtocolError):
    """The request names a method the server does not implement."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InvalidParamsError(ProtocolError):
    """Request params (or tool arguments) are missing or malformed."""

    code = INVALID_PARAMS

    def __init__(self, detail: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(
            f"Invalid params: {detail}",
            data={"field": field} if field is not None else None,
        )


class InternalError(ProtocolError):
    """An unexpected failure inside the server."""

    code = INTERNAL_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__("Internal error" + (f": {detail}" if detail else ""))


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    code = TOOL_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}", data={"tool": name})


class ToolExecutionError(InternalError):
    """A tool handler failed while executing."""

    def __init__(self, name: str, detail: str = "") -> None:
        self.name = name
        self.detail = detail
        ProtocolError.__init__(self, detail or f"Tool execution failed: {name}")


class TransportError(Exception):
    """Reading from or writing to the frame stream failed.

    Not a :class:`ProtocolError`: a transport fault is fatal to the serving
    loop and is never reported to the peer.
    """

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Transport error" + (f": {detail}" if detail else ""))
