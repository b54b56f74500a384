"""A byte buffer that is safe to write to from several threads."""

from __future__ import annotations

import threading


class SingleWriter:
    """Accumulates bytes; every write is serialised by a lock."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        """Append bytes and return how many were written."""
        with self._lock:
            self._buffer += data
        return len(data)

    def write_string(self, s: str) -> int:
        """Append a string as UTF-8 and return the number of bytes written."""
        return self.write(s.encode("utf-8"))

    def to_bytes(self) -> bytes:
        """Return everything written so far."""
        with self._lock:
            return bytes(self._buffer)

    def __str__(self) -> str:
        return self.to_bytes().decode("utf-8", errors="replace")