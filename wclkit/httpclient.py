"""A small HTTP client for one-shot GET and POST requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

_DEFAULT_TIMEOUT = 10.0
_CHUNK = 8192


def _perform(
    method: str,
    url: str,
    *,
    data: Any,
    cookies: dict[str, str] | None,
    headers: dict[str, str] | None,
    timeout: float,
    verify: bool | str = True,
    cert: tuple[str, str] | None = None,
    stream: bool = True,
) -> requests.Response:
    if method not in ("GET", "POST"):
        raise ValueError("unsupported method")
    request_headers = {"Connection": "close"}
    request_headers.update(headers or {})
    with requests.Session() as session:
        return session.request(
            method,
            url,
            data=data if method == "POST" else None,
            cookies=cookies,
            headers=request_headers,
            timeout=timeout or _DEFAULT_TIMEOUT,
            verify=verify,
            cert=cert,
            stream=stream,
        )


def _read_body(response: requests.Response, limit_response: bool, limit_bytes: int) -> bytes:
    with response:
        if not limit_response:
            return response.content
        if limit_bytes <= 0:
            return b""
        body = bytearray()
        for chunk in response.iter_content(_CHUNK):
            body += chunk[: limit_bytes - len(body)]
            if len(body) >= limit_bytes:
                break
        return bytes(body)


@dataclass
class HttpClient:
    """A GET or POST request to address; timeout is in seconds, 0 meaning 10."""

    address: str
    method: str = "GET"
    data: Any = None
    timeout: float = 0
    cookies: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    limit_response: bool = False
    limit_bytes: int = 0

    def do_request_raw(self) -> requests.Response:
        """Send the request and return the response with its body unread."""
        return _perform(
            self.method,
            self.address,
            data=self.data,
            cookies=self.cookies,
            headers=self.headers,
            timeout=self.timeout,
        )

    def do_request(self) -> bytes:
        """Send the request and return the body, truncated if limit_response is set."""
        return _read_body(self.do_request_raw(), self.limit_response, self.limit_bytes)