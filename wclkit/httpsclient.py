"""An HTTPS server with optional mutual TLS, and a matching client."""

from __future__ import annotations

import ssl
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import requests

from wclkit.httpclient import _perform, _read_body


@dataclass
class HttpsServer:
    """Serves HTTPS on port; setting ca_crt_file requires client certificates."""

    port: str | int
    server_crt_file: str = ""
    server_key_file: str = ""
    ca_crt_file: str = ""

    def serve(self, handler: type[BaseHTTPRequestHandler]) -> None:
        """Listen on all interfaces and serve requests with handler until stopped."""
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        if self.ca_crt_file:
            with open(self.ca_crt_file, "rb") as handle:
                ca_data = handle.read().decode("ascii", errors="ignore")
            context.load_verify_locations(cadata=ca_data)
            context.verify_mode = ssl.CERT_REQUIRED
        context.load_cert_chain(self.server_crt_file, self.server_key_file)
        with ThreadingHTTPServer(("", int(self.port)), handler) as server:
            server.socket = context.wrap_socket(server.socket, server_side=True)
            server.serve_forever()


@dataclass
class HttpsClient:
    """A GET or POST request over HTTPS, optionally with a client certificate.

    timeout is in seconds, 0 meaning 10.
    """

    server_address: str
    method: str = "GET"
    data: Any = None
    ca_crt_file: str = ""
    mutual_tls: bool = False
    client_crt_file: str = ""
    client_key_file: str = ""
    timeout: float = 0
    cookies: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    limit_response: bool = False
    limit_bytes: int = 0

    def _ca_file(self) -> str:
        if not self.ca_crt_file:
            raise ValueError("CACrt is empty")
        with open(self.ca_crt_file, "rb"):
            pass
        return self.ca_crt_file

    def _client_cert(self) -> tuple[str, str]:
        if not self.client_crt_file:
            raise ValueError("ClientCrt is empty")
        if not self.client_key_file:
            raise ValueError("ClientKey is empty")
        ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT).load_cert_chain(
            self.client_crt_file, self.client_key_file
        )
        return self.client_crt_file, self.client_key_file

    def _tls_settings(self, skip_verify: bool) -> tuple[bool | str, tuple[str, str] | None]:
        try:
            ca_file: str | None = self._ca_file()
        except (ValueError, OSError):
            if not skip_verify:
                raise
            ca_file = None
        if self.mutual_tls:
            return (ca_file or True), self._client_cert()
        if skip_verify:
            return False, None
        return ca_file, None

    def do_request_raw(self, skip_verify: bool = False) -> requests.Response:
        """Send the request and return the response with its body unread."""
        verify, cert = self._tls_settings(skip_verify)
        return _perform(
            self.method,
            self.server_address,
            data=self.data,
            cookies=self.cookies,
            headers=self.headers,
            timeout=self.timeout,
            verify=verify,
            cert=cert,
        )

    def do_request(self, skip_verify: bool = False) -> bytes:
        """Send the request and return the body, truncated if limit_response is set."""
        return _read_body(
            self.do_request_raw(skip_verify), self.limit_response, self.limit_bytes
        )