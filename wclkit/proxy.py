"""Helpers for forwarding and dumping HTTP requests."""

from __future__ import annotations

import string
from collections.abc import Mapping, MutableMapping, Sequence
from urllib.parse import quote_plus

from wclkit.netutil import _parse_query

_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")


def _canonical_key(key: str) -> str:
    if not key or any(char not in _TOKEN_CHARS for char in key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def copy_header(
    dst: MutableMapping[str, list[str]], src: Mapping[str, str | Sequence[str]]
) -> None:
    """Replace every header in dst with those of src, canonicalising the names."""
    dst.clear()
    for key, values in src.items():
        if isinstance(values, str):
            values = [values]
        dst.setdefault(_canonical_key(key), []).extend(values)


def _encode_query(query: str) -> str:
    values = _parse_query(query)
    return "&".join(
        f"{quote_plus(key, safe='')}={quote_plus(value, safe='')}"
        for key in sorted(values)
        for value in values[key]
    )


def get_request_string(
    method: str,
    path: str,
    query: str,
    headers: Mapping[str, str | Sequence[str]],
    body: bytes | str | None = None,
) -> str:
    """Render a request as HTTP/1.1 text: request line, headers, blank line, body."""
    encoded = _encode_query(query)
    target = f"{path}?{encoded}" if encoded else path
    lines = [f"{method} {target} HTTP/1.1\r\n"]
    for key, values in headers.items():
        if isinstance(values, str):
            values = [values]
        lines.extend(f"{key}: {value}\r\n" for value in values)
    lines.append("\r\n")
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    lines.append(body or "")
    return "".join(lines)