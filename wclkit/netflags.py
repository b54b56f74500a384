"""Validators for command-line options holding an IP, an IP:port or a port range."""

from __future__ import annotations

import json

from wclkit.ipnet import _parse_ip, _split_host_port, parse_port
from wclkit.portrange import parse_port_range


def validate_ip(value: str) -> str | None:
    """Return value if it is an IP address, None if it is empty; raise ValueError otherwise."""
    if not value:
        return None
    if _parse_ip(value) is None:
        raise ValueError(f"{json.dumps(value)} is not a valid IP address")
    return value


def validate_ip_port(value: str) -> str | None:
    """Return value if it is "ip" or "ip:port", None if it is empty; raise ValueError otherwise."""
    if not value:
        return None
    if _parse_ip(value) is not None:
        return value
    try:
        host, port = _split_host_port(value)
    except ValueError as exc:
        raise ValueError(
            f"{json.dumps(value)} is not in a valid format (ip or ip:port): {exc}"
        ) from exc
    if _parse_ip(host) is None:
        raise ValueError(f"{json.dumps(host)} is not a valid IP address")
    try:
        parse_port(port, True)
    except ValueError as exc:
        raise ValueError(f"{json.dumps(port)} is not a valid number") from exc
    return value


def validate_port_range(value: str) -> str:
    """Return value if it parses as a port range; raise ValueError otherwise."""
    try:
        parse_port_range(value)
    except ValueError as exc:
        raise ValueError(
            f"{json.dumps(value)} is not a valid port range: {exc}"
        ) from exc
    return value