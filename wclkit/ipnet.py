"""IP address, CIDR and port helpers built on the ipaddress module."""

from __future__ import annotations

import ipaddress
import json
import re
from ipaddress import IPv4Address, IPv4Network, IPv6Address, IPv6Network
from typing import Union

IPAddress = Union[IPv4Address, IPv6Address]
IPNetwork = Union[IPv4Network, IPv6Network]

_MAX_INT64 = (1 << 63) - 1
_IPV6_SPACE = 1 << 128
_DIGITS = re.compile(r"[0-9]+", re.ASCII)


def _unmap(ip: IPAddress) -> IPAddress:
    """Show an IPv4-mapped IPv6 address as plain IPv4."""
    if isinstance(ip, IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def _parse_ip(text: str) -> IPAddress | None:
    """Parse a textual IP address (no zone); return None if it is not one."""
    if not isinstance(text, str) or "%" in text:
        return None
    try:
        return _unmap(ipaddress.ip_address(text))
    except ValueError:
        return None


def _split_host_port(hostport: str) -> tuple[str, str]:
    """Split "host:port" or "[host]:port"; raise ValueError on malformed input."""
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ValueError(f"address {hostport}: missing ']' in address")
        rest = hostport[end + 1:]
        if not rest:
            raise ValueError(f"address {hostport}: missing port in address")
        if rest[0] != ":":
            raise ValueError(f"address {hostport}: missing port in address")
        host, port = hostport[1:end], rest[1:]
        if ":" in port:
            raise ValueError(f"address {hostport}: too many colons in address")
        if "[" in host:
            raise ValueError(f"address {hostport}: unexpected '[' in address")
    else:
        colon = hostport.rfind(":")
        if colon < 0:
            raise ValueError(f"address {hostport}: missing port in address")
        host, port = hostport[:colon], hostport[colon + 1:]
        if ":" in host:
            raise ValueError(f"address {hostport}: too many colons in address")
        if "[" in host or "]" in host:
            raise ValueError(f"address {hostport}: unexpected bracket in address")
    if "[" in port or "]" in port:
        raise ValueError(f"address {hostport}: unexpected bracket in address")
    return host, port


def _parse_cidr(text: str) -> IPNetwork:
    address, slash, mask = text.partition("/")
    if not slash or "%" in address or not _DIGITS.fullmatch(mask):
        raise ValueError(f"invalid CIDR address: {text}")
    try:
        return ipaddress.ip_network(text, strict=False)
    except ValueError:
        raise ValueError(f"invalid CIDR address: {text}") from None


def _as_network(subnet: str | IPNetwork) -> IPNetwork:
    return _parse_cidr(subnet) if isinstance(subnet, str) else subnet


def parse_cidrs(cidrs: list[str]) -> list[IPNetwork]:
    """Parse CIDR strings in order; raise ValueError naming the first invalid one."""
    result = []
    for position, text in enumerate(cidrs):
        try:
            result.append(_parse_cidr(text))
        except ValueError as exc:
            raise ValueError(f"invalid CIDR[{position}]: <nil> ({exc})") from exc
    return result


def parse_port(port: str, allow_zero: bool = False) -> int:
    """Parse a decimal port number in 0..65535; zero only if allow_zero."""
    if not _DIGITS.fullmatch(port):
        raise ValueError(f"parsing {json.dumps(port)}: invalid syntax")
    value = int(port)
    if value > 0xFFFF:
        raise ValueError(f"parsing {json.dumps(port)}: value out of range")
    if value == 0 and not allow_zero:
        raise ValueError("0 is not a valid port number")
    return value


def big_for_ip(ip: str | IPAddress) -> int:
    """Return the address as an integer of its 16-byte (IPv6) form."""
    address = _parse_ip(ip) if isinstance(ip, str) else ip
    if address is None:
        raise ValueError(f"{json.dumps(ip)} is not a valid IP address")
    if isinstance(address, IPv4Address):
        return int(IPv6Address(f"::ffff:{address}"))
    return int(address)


def add_ip_offset(base: int, offset: int) -> IPAddress:
    """Return the address base + offset; an IPv4 value that overflows becomes IPv6."""
    value = abs(base + offset) % _IPV6_SPACE
    return _unmap(IPv6Address(value))


def range_size(subnet: str | IPNetwork) -> int:
    """Return the number of addresses in the subnet, capped at the int64 maximum.

    Subnets of one or two addresses give zero.
    """
    network = _as_network(subnet)
    bits = network.max_prefixlen
    host_bits = bits - network.prefixlen
    if (bits == 32 and host_bits >= 31) or (bits == 128 and host_bits >= 127):
        return 0
    if host_bits >= 63:
        return _MAX_INT64
    return 1 << host_bits


def get_indexed_ip(subnet: str | IPNetwork, index: int) -> IPAddress:
    """Return the address at index within the subnet; raise ValueError if outside it."""
    network = _as_network(subnet)
    ip = add_ip_offset(big_for_ip(network.network_address), index)
    if ip not in network:
        raise ValueError(
            f"can't generate IP with index {index} from subnet. "
            f"subnet too small. subnet: {json.dumps(str(network))}"
        )
    return ip