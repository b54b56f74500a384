"""Read and write single files on an FTP server."""

from __future__ import annotations

import ftplib
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO


@dataclass
class FTPClient:
    """Connection details for an FTP server; each call opens its own session."""

    ip: str
    port: str | int = 21
    username: str = ""
    password: str = ""
    timeout: float = 10.0

    @contextmanager
    def _session(self) -> Iterator[ftplib.FTP]:
        port = int(self.port)
        with ftplib.FTP(timeout=self.timeout) as ftp:
            ftp.connect(self.ip, port)
            ftp.login(self.username, self.password)
            yield ftp

    def read_file(self, path: str) -> bytes:
        """Download the file at path and return its contents."""
        chunks: list[bytes] = []
        with self._session() as ftp:
            ftp.retrbinary(f"RETR {path}", chunks.append)
        return b"".join(chunks)

    def write_file(self, path: str, reader: BinaryIO) -> None:
        """Upload everything read from a binary file object to path."""
        with self._session() as ftp:
            ftp.storbinary(f"STOR {path}", reader)