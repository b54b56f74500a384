"""Lenient number parsing: malformed or out-of-range input yields zero."""

from __future__ import annotations

import math
import re

_DECIMAL_FLOAT = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII
)
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+",
    re.ASCII,
)
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)
_DECIMAL_INT = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_float64(s: str) -> float:
    """Parse a float; return 0.0 if s is malformed or overflows."""
    if _SPECIAL_FLOAT.fullmatch(s):
        return float(s)
    try:
        if _DECIMAL_FLOAT.fullmatch(s):
            value = float(s)
        elif _HEX_FLOAT.fullmatch(s):
            value = float.fromhex(s)
        else:
            return 0.0
    except (ValueError, OverflowError):
        return 0.0
    return 0.0 if math.isinf(value) else value


def _parse_bounded_int(s: str, bits: int) -> int:
    if not _DECIMAL_INT.fullmatch(s):
        return 0
    value = int(s)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        return 0
    return value


def parse_int64(s: str) -> int:
    """Parse a base-10 signed 64-bit integer; return 0 on any error."""
    return _parse_bounded_int(s, 64)


def parse_int(s: str) -> int:
    """Parse a base-10 signed 32-bit integer; return 0 on any error."""
    return _parse_bounded_int(s, 32)