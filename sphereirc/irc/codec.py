"""Inbound line framing."""

from __future__ import annotations

import codecs


class LineCodec:
    """Split a connection's byte stream into protocol lines.

    Bytes are decoded incrementally so a multi-byte character cut by a socket
    read is completed by the next chunk. Text after the last ``\\n`` stays
    pending and is prefixed to the next chunk.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""

    @property
    def pending(self) -> str:
        return self._pending

    def feed(self, data: bytes) -> list[str]:
        """Return every complete, non-empty, trimmed line available so far."""
        text = self._pending + self._decoder.decode(data)
        *complete, self._pending = text.split("\n")
        lines: list[str] = []
        for raw in complete:
            line = raw.strip()
            if line:
                lines.append(line)
        return lines

    def reset(self) -> None:
        self._decoder.reset()
        self._pending = ""
