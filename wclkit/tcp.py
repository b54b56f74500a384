"""Open TCP listeners and connections from "host:port" strings."""

from __future__ import annotations

import socket
from ipaddress import IPv6Address

from wclkit.ipnet import _parse_ip, _split_host_port, parse_port


def _resolve(addr: str) -> tuple[str, int]:
    host, port_text = _split_host_port(addr)
    try:
        port = parse_port(port_text, True)
    except ValueError:
        port = socket.getservbyname(port_text, "tcp")
    return host, port


def listen(addr: str) -> socket.socket:
    """Return a listening TCP socket bound to addr ("host:port", host may be empty)."""
    host, port = _resolve(addr)
    if not host:
        if socket.has_dualstack_ipv6():
            return socket.create_server(
                ("", port), family=socket.AF_INET6, dualstack_ipv6=True
            )
        return socket.create_server(("", port))
    family = socket.AF_INET6 if isinstance(_parse_ip(host), IPv6Address) else socket.AF_INET
    return socket.create_server((host, port), family=family)


def dial(addr: str) -> socket.socket:
    """Return a TCP socket connected to addr ("host:port")."""
    host, port = _resolve(addr)
    return socket.create_connection((host or None, port))