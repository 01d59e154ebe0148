"""MCPServer — the sequential read, dispatch, write loop.

Requests are processed strictly one at a time in arrival order, so
responses leave in the same order the requests arrived.  A slow tool call
delays everything behind it; there is no cancellation and no timeout.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from zinc.protocols.errors import FrameTooLargeError, ProtocolError, TransportError
from zinc.protocols.mcp.codec import decode, encode, make_error
from zinc.protocols.mcp.transport import MAX_FRAME_BYTES, StreamTransport

if TYPE_CHECKING:
    from zinc.protocols.mcp.models import JsonRpcResponse
    from zinc.protocols.mcp.transport import FrameTransport
    from zinc.server.dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)


class MCPServer:
    """Serves a :class:`RequestDispatcher` over a frame transport.

    Usage::

        server = MCPServer(RequestDispatcher(build_default_registry()))
        await server.serve(StdioTransport())
    """

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self._dispatcher = dispatcher

    async def serve(self, transport: FrameTransport) -> None:
        """Run until end-of-stream.

        Raises:
            TransportError: Reading or writing the stream failed.  The loop
                is not retried.
        """
        logger.info("Serving on %s", type(transport).__name__)
        try:
            while True:
                try:
                    frame = await transport.read_frame()
                except FrameTooLargeError as exc:
                    logger.warning("Rejected frame: %s", exc.message)
                    await transport.write_frame(encode(make_error(None, exc)))
                    continue
                if frame is None:
                    logger.info("End of stream, shutting down")
                    return
                if not frame.strip():
                    continue
                logger.debug("<- %s", frame)
                response = await self.handle_frame(frame)
                if response is None:
                    continue
                out = encode(response)
                logger.debug("-> %s", out.rstrip("\n"))
                await transport.write_frame(out)
        except TransportError as exc:
            logger.error("Transport failure, stopping: %s", exc)
            raise

    async def handle_frame(self, frame: str | bytes) -> JsonRpcResponse | None:
        """Decode and dispatch one frame; never raises for bad input."""
        try:
            request = decode(frame)
        except ProtocolError as exc:
            logger.warning("Rejected frame: %s", exc.message)
            return make_error(None, exc)
        return await self._dispatcher.dispatch(request)

    async def serve_tcp(self, host: str, port: int, *, limit: int = MAX_FRAME_BYTES) -> None:
        """Accept TCP connections and serve each one until it closes.

        Connections are served one at a time so request handling stays
        sequential across the whole process.  Frames longer than *limit*
        bytes are answered with an error and skipped.
        """
        lock = asyncio.Lock()

        async def _on_connect(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
            peer = writer.get_extra_info("peername")
            transport = StreamTransport(reader, writer, limit=limit)
            async with lock:
                logger.info("Client connected: %s", peer)
                try:
                    await self.serve(transport)
                except TransportError:
                    logger.warning("Connection %s dropped", peer)
                finally:
                    await transport.close()

        server = await asyncio.start_server(_on_connect, host, port, limit=limit)
        addrs = ", ".join(str(sock.getsockname()) for sock in server.sockets)
        logger.info("Listening on %s", addrs)
        async with server:
            await server.serve_forever()
