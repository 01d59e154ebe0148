"""RequestDispatcher — routes decoded requests to their handlers.

The method set is closed (:class:`Method`); anything else is rejected with
MethodNotFound.  Each request is handled independently and every failure is
converted to a JSON-RPC error here, so :meth:`RequestDispatcher.dispatch`
never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from zinc.protocols.errors import (
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    ProtocolError,
    ToolExecutionError,
)
from zinc.protocols.mcp.codec import make_error, make_result
from zinc.protocols.mcp.models import CallToolResult, InitializeResult, ServerInfo
from zinc.server.config import ServerConfig
from zinc.utils.telemetry import ATTR_RPC_METHOD, ATTR_TOOL_NAME, get_tracer, mark_error

if TYPE_CHECKING:
    from zinc.protocols.mcp.models import JsonRpcRequest, JsonRpcResponse
    from zinc.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)


class Method(str, Enum):
    """Methods the server understands."""

    INITIALIZE = "initialize"
    INITIALIZED = "notifications/initialized"
    PING = "ping"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"


class RequestDispatcher:
    """Stateless router from JSON-RPC requests to results.

    Usage::

        dispatcher = RequestDispatcher(build_default_registry())
        response = await dispatcher.dispatch(decode(frame))
        if response is not None:
            await transport.write_frame(encode(response))
    """

    def __init__(self, registry: ToolRegistry, config: ServerConfig | None = None) -> None:
        self._registry = registry
        self._config = config or ServerConfig()
        self._routes: dict[Method, Callable[[JsonRpcRequest], Awaitable[Any]]] = {
            Method.INITIALIZE: self._initialize,
            Method.INITIALIZED: self._initialized,
            Method.PING: self._ping,
            Method.TOOLS_LIST: self._tools_list,
            Method.TOOLS_CALL: self._tools_call,
        }

    @property
    def config(self) -> ServerConfig:
        return self._config

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        """Handle one request.

        Returns ``None`` when no frame should be written, which is the case
        for notifications unless ``answer_notifications`` is enabled.
        """
        with _tracer.start_as_current_span("rpc.dispatch") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            try:
                result = await self._route(request)
                response = make_result(request.id, result)
            except ProtocolError as exc:
                response = make_error(request.id, exc)
            except Exception as exc:
                logger.exception("Unhandled error while dispatching %s", request.method)
                response = make_error(request.id, InternalError(str(exc)))
            if response.error is not None:
                mark_error(span, response.error.code, response.error.message)

        if request.is_notification and not self._config.answer_notifications:
            if response.error is not None:
                logger.debug(
                    "Dropping error for notification %s: %s",
                    request.method,
                    response.error.message,
                )
            return None
        return response

    async def _route(self, request: JsonRpcRequest) -> Any:
        try:
            method = Method(request.method)
        except ValueError:
            raise MethodNotFoundError(request.method) from None
        return await self._routes[method](request)

    # -- method handlers ----------------------------------------------------

    async def _initialize(self, request: JsonRpcRequest) -> dict[str, Any]:
        logger.info("initialize called")
        result = InitializeResult(
            server_info=ServerInfo(
                name=self._config.server_name,
                version=self._config.server_version,
            ),
        )
        return result.model_dump(by_alias=True, mode="json")

    async def _initialized(self, request: JsonRpcRequest) -> dict[str, Any]:
        logger.debug("client reported initialized")
        return {}

    async def _ping(self, request: JsonRpcRequest) -> dict[str, Any]:
        return {}

    async def _tools_list(self, request: JsonRpcRequest) -> dict[str, Any]:
        tools = self._registry.list_tools()
        logger.info("tools/list called, returning %d tools", len(tools))
        return {"tools": [tool.model_dump(by_alias=True, mode="json") for tool in tools]}

    async def _tools_call(self, request: JsonRpcRequest) -> dict[str, Any]:
        params = request.params
        if not isinstance(params, dict):
            raise InvalidParamsError("tools/call requires params object", field="params")

        name = params.get("name")
        if not isinstance(name, str):
            raise InvalidParamsError("tool name must be a string", field="name")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}

        with _tracer.start_as_current_span("rpc.tools_call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                text = await self._registry.invoke(name, arguments)
            except ToolExecutionError as exc:
                logger.warning("Tool %s failed: %s", name, exc.message)
                if not self._config.tool_errors_as_results:
                    raise
                result = CallToolResult.from_text(exc.message, is_error=True)
            else:
                result = CallToolResult.from_text(text)

        return result.model_dump(by_alias=True, mode="json")
