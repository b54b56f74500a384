"""Network helpers: local addresses, free ports and pieces of an HTTP request."""

from __future__ import annotations

import ipaddress
import re
import socket
from collections.abc import Mapping, Sequence
from urllib.parse import unquote_plus

from wclkit.ipnet import IPAddress, _parse_ip, _split_host_port, _unmap

_WORD = re.compile(r"\w+", re.ASCII)
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")

Headers = Mapping[str, "str | Sequence[str]"]


def _udp_local_ip(destination: str) -> IPAddress:
    host, port = _split_host_port(destination)
    family, kind, proto, _, sockaddr = socket.getaddrinfo(
        host or None, port, type=socket.SOCK_DGRAM
    )[0]
    with socket.socket(family, kind, proto) as sock:
        sock.connect(sockaddr)
        local = sock.getsockname()[0].split("%")[0]
    return _unmap(ipaddress.ip_address(local))


def get_host_ip() -> IPAddress:
    """Return the local address used to reach the public internet."""
    return _udp_local_ip("8.8.8.8:80")


def get_host_ip_v2(dest: str) -> IPAddress:
    """Return the local address used to reach dest ("ip:port")."""
    return _udp_local_ip(dest)


def get_tcp_source_ip(destination: str) -> IPAddress:
    """Return the local address used to reach destination ("ip:port")."""
    return _udp_local_ip(destination)


def get_available_port() -> int:
    """Return a TCP port that is free at the time of the call."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("", 0))
        sock.listen()
        return sock.getsockname()[1]


def _header_get(headers: Headers, name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            if isinstance(value, str):
                return value
            return value[0] if value else ""
    return ""


def get_ip_from_request(remote_addr: str, headers: Headers) -> IPAddress | None:
    """Return the client address, preferring X-Forwarded-For, then X-Real-IP.

    The last X-Forwarded-For entry is used. None is returned when no
    valid address can be found.
    """
    remote_ip = None
    parts = remote_addr.split(":")
    if len(parts) == 2:
        remote_ip = _parse_ip(parts[0])
    forwarded = _header_get(headers, "X-Forwarded-For").strip(",")
    if forwarded:
        last = _parse_ip(forwarded.split(",")[-1])
        if last is not None:
            remote_ip = last
    else:
        real_ip = _header_get(headers, "X-Real-Ip")
        if real_ip:
            parsed = _parse_ip(real_ip)
            if parsed is not None:
                remote_ip = parsed
    return remote_ip


def get_first_path(path: str) -> str:
    """Return the first word of a URL path, or an empty string."""
    match = _WORD.search(path)
    return match.group() if match else ""


def get_second_path(path: str) -> str:
    """Return the second word of a URL path, or an empty string."""
    words = _WORD.findall(path)[:2]
    return words[1] if len(words) > 1 else ""


def _parse_query(query: str) -> dict[str, list[str]]:
    values: dict[str, list[str]] = {}
    for segment in query.split("&"):
        if not segment or ";" in segment:
            continue
        key, _, value = segment.partition("=")
        if _BAD_PERCENT.search(key) or _BAD_PERCENT.search(value):
            continue
        values.setdefault(unquote_plus(key), []).append(unquote_plus(value))
    return values


def get_query_values(query: str, key: str) -> list[str]:
    """Return every value of key in a raw query string."""
    return _parse_query(query).get(key, [])


def get_one_query_value(query: str, key: str) -> str:
    """Return the first value of key; raise KeyError if it is absent."""
    values = _parse_query(query).get(key)
    if not values:
        raise KeyError(key)
    return values[0]


def get_one_query_map(query: str) -> dict[str, str]:
    """Return each key of a raw query string mapped to its first value."""
    return {key: values[0] for key, values in _parse_query(query).items()}


def get_schema_and_host(host: str, tls: bool) -> str:
    """Return "http://host" or "https://host"."""
    scheme = "https://" if tls else "http://"
    return scheme + host


def get_full_url(host: str, request_uri: str, tls: bool) -> str:
    """Return the absolute URL of a request."""
    return get_schema_and_host(host, tls) + request_uri