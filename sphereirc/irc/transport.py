"""Socket transports used by ServerConnection.

The connection only talks to the ``Transport`` protocol so hosts and tests
can supply their own socket primitive.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from ..constants import READ_POLL_TIMEOUT
from ..errors import NetworkError
from ..logs.logger import logger


class Transport(Protocol):
    """Byte stream to one IRC server."""

    @property
    def connected(self) -> bool:
        """True while the stream is open and has not hit EOF."""
        ...

    async def open(self, host: str, port: int) -> None:
        """Open the stream; raise NetworkError on failure."""
        ...

    def write(self, data: bytes) -> None:
        """Queue bytes for sending; raise NetworkError when closed."""
        ...

    async def drain(self) -> None:
        """Flush queued bytes; raise NetworkError on failure."""
        ...

    async def read_available(self, max_bytes: int) -> bytes:
        """Return bytes buffered right now, ``b""`` when there are none."""
        ...

    async def close(self) -> None:
        """Close the stream. Safe to call more than once."""
        ...


class StreamTransport:
    """asyncio stream transport with bounded, non-blocking reads."""

    def __init__(self, read_timeout: float = READ_POLL_TIMEOUT) -> None:
        self.read_timeout = read_timeout
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self._eof = False

    @property
    def connected(self) -> bool:
        return (
            self.writer is not None
            and not self.writer.is_closing()
            and not self._eof
        )

    async def open(self, host: str, port: int) -> None:
        try:
            self.reader, self.writer = await asyncio.open_connection(host, port)
        except (OSError, OverflowError, ValueError) as e:
            # ValueError covers UnicodeError from IDNA encoding of the host
            raise NetworkError(
                f"Connection to {host}:{port} failed: {e}",
                data={"host": host, "port": port},
            ) from e
        self._eof = False

    def write(self, data: bytes) -> None:
        if self.writer is None or self.writer.is_closing():
            raise NetworkError("Transport is not open")
        self.writer.write(data)

    async def drain(self) -> None:
        if self.writer is None:
            return
        try:
            await self.writer.drain()
        except (ConnectionError, OSError) as e:
            self._eof = True
            raise NetworkError(f"Write failed: {e}") from e

    async def read_available(self, max_bytes: int) -> bytes:
        if self.reader is None or self._eof:
            return b""
        try:
            data = await asyncio.wait_for(
                self.reader.read(max_bytes), timeout=self.read_timeout
            )
        except TimeoutError:
            return b""
        except (ConnectionError, OSError) as e:
            self._eof = True
            raise NetworkError(f"Read failed: {e}") from e
        if not data:
            self._eof = True
        return data

    async def close(self) -> None:
        writer = self.writer
        self.writer = None
        self.reader = None
        self._eof = True
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.log_event(
                "irc",
                "close_error",
                level=logging.DEBUG,
                error=str(e),
                error_type=type(e).__name__,
            )
