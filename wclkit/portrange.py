"""A contiguous range of TCP/UDP ports."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

_MAX_PORT = 65535
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer {json.dumps(text)}")
    return int(text)


@dataclass(frozen=True)
class PortRange:
    """Ports base .. base+size-1; a single port has size 1, an empty range size 0."""

    base: int = 0
    size: int = 0

    def contains(self, port: int) -> bool:
        """Return True if port falls within the range."""
        return port >= self.base and port - self.base < self.size

    def __str__(self) -> str:
        if self.size == 0:
            return ""
        return f"{self.base}-{self.base + self.size - 1}"

    @classmethod
    def parse(cls, value: str) -> PortRange:
        """Parse "port", "min-max" or "min+offset" (inclusive); empty gives an empty range."""
        value = value.strip()
        if not value:
            return cls(0, 0)
        hyphen = value.find("-")
        plus = value.find("+")
        if hyphen < 0 and plus < 0:
            low = high = _atoi(value)
        elif plus < 0:
            low = _atoi(value[:hyphen])
            high = _atoi(value[hyphen + 1:])
        elif hyphen < 0:
            low = _atoi(value[:plus])
            high = low + _atoi(value[plus + 1:])
        else:
            raise ValueError(f"unable to parse port range: {value}")
        if low > _MAX_PORT or high > _MAX_PORT:
            raise ValueError(f"the port range cannot be greater than 65535: {value}")
        if high < low:
            raise ValueError(f"end port cannot be less than start port: {value}")
        return cls(low, 1 + high - low)


def parse_port_range(value: str) -> PortRange:
    """Parse a port range string; see PortRange.parse."""
    return PortRange.parse(value)