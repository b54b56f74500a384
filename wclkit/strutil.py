"""String helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

_TEMPLATE_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
        "'": "&#39;",
    }
)


def get_substring(s: str, start: int, end: int) -> str:
    """Return the characters of s from start up to end.

    Raises ValueError if either bound is outside the string.
    """
    length = len(s)
    if start < 0 or start > length:
        raise ValueError("start is wrong")
    if end < start or end > length:
        raise ValueError("end is wrong")
    return s[start:end]


def compare_string_map(m1: Mapping[str, str], m2: Mapping[str, str]) -> bool:
    """Return True if both mappings hold the same keys with the same values."""
    return dict(m1) == dict(m2)


def string_list_has(items: Iterable[str], item: str) -> bool:
    """Return True if item is one of items."""
    return item in items


def template_escape(s: str) -> str:
    """Escape the characters that are special in HTML text and attributes."""
    return s.translate(_TEMPLATE_ESCAPES)