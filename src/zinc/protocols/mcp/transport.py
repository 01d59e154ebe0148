"""Frame transports — the byte streams the server speaks over.

Each transport satisfies the :class:`FrameTransport` protocol, providing
``read_frame``, ``write_frame``, and ``close`` methods.  A frame is one
newline-terminated line of UTF-8 text; transports deal in frames and know
nothing about JSON-RPC.

Lines are read as bytes and decoded one at a time.  A line that is not
valid UTF-8 is handed on as raw ``bytes`` so the codec can reject that one
frame while the stream carries on.
"""

from __future__ import annotations

import asyncio
import sys
from typing import IO, Protocol, runtime_checkable

from zinc.protocols.errors import FrameTooLargeError, TransportError

# Longest line a StreamTransport will buffer, terminator included.
MAX_FRAME_BYTES = 16 * 1024 * 1024


@runtime_checkable
class FrameTransport(Protocol):
    """Abstract ordered stream of newline-delimited text frames."""

    async def read_frame(self) -> str | bytes | None: ...
    async def write_frame(self, frame: str) -> None: ...
    async def close(self) -> None: ...


def _decode_line(line: bytes) -> str | bytes:
    line = line.rstrip(b"\r\n")
    try:
        return line.decode("utf-8")
    except UnicodeDecodeError:
        return line


class StdioTransport:
    """Reads frames from a binary input stream and writes to a text output stream.

    Defaults to the process's stdin (its byte buffer) and stdout.  Blocking
    reads run in a worker thread so the event loop stays responsive while
    waiting for the peer.
    """

    def __init__(self, stdin: IO[bytes] | None = None, stdout: IO[str] | None = None) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin.buffer
        self._stdout = stdout if stdout is not None else sys.stdout

    async def read_frame(self) -> str | bytes | None:
        """Return the next line without its terminator, or ``None`` at EOF."""
        try:
            line = await asyncio.to_thread(self._stdin.readline)
        except (OSError, ValueError) as exc:
            raise TransportError(f"read failed: {exc}") from exc
        if not line:
            return None
        return _decode_line(line)

    async def write_frame(self, frame: str) -> None:
        """Write one complete frame and flush it."""
        if not frame.endswith("\n"):
            frame += "\n"
        try:
            self._stdout.write(frame)
            self._stdout.flush()
        except (OSError, ValueError) as exc:
            raise TransportError(f"write failed: {exc}") from exc

    async def close(self) -> None:
        """Flush the output stream; the process owns the std streams."""
        try:
            self._stdout.flush()
        except (OSError, ValueError):
            pass


class StreamTransport:
    """Speaks frames over a pair of asyncio streams (TCP sockets, pipes).

    *limit* must match the ``limit`` the reader was created with.  A longer
    line is read off the stream and dropped, and :class:`FrameTooLargeError`
    is raised so the caller can answer it; the next frame reads normally.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        limit: int = MAX_FRAME_BYTES,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._limit = limit

    async def read_frame(self) -> str | bytes | None:
        """Read one line, or ``None`` at EOF.

        Raises:
            FrameTooLargeError: The line exceeded the reader's limit.
            TransportError: The connection failed.
        """
        try:
            line = await self._reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as exc:
            line = exc.partial
        except asyncio.LimitOverrunError:
            await self._discard_line()
            raise FrameTooLargeError(self._limit) from None
        except OSError as exc:
            raise TransportError(f"read failed: {exc}") from exc
        if not line:
            return None
        return _decode_line(line)

    async def _discard_line(self) -> None:
        while True:
            try:
                await self._reader.readuntil(b"\n")
            except asyncio.LimitOverrunError as exc:
                pending = exc.consumed
            except asyncio.IncompleteReadError:
                return
            except OSError as exc:
                raise TransportError(f"read failed: {exc}") from exc
            else:
                return
            await self._reader.read(pending)

    async def write_frame(self, frame: str) -> None:
        """Write one complete frame in a single call and drain."""
        if not frame.endswith("\n"):
            frame += "\n"
        try:
            self._writer.write(frame.encode("utf-8"))
            await self._writer.drain()
        except OSError as exc:
            raise TransportError(f"write failed: {exc}") from exc

    async def close(self) -> None:
        """Close the underlying writer."""
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except OSError:
            pass
