"""Helpers for lists of strings."""

from __future__ import annotations

from collections.abc import Callable

Modifier = Callable[[str], str]


def copy_strings(items: list[str] | None) -> list[str] | None:
    """Return a shallow copy of the list, keeping None as None."""
    if items is None:
        return None
    return list(items)


def sort_strings(items: list[str]) -> list[str]:
    """Sort the list in place and return it."""
    items.sort()
    return items


def contains_string(
    items: list[str] | None, s: str, modifier: Modifier | None = None
) -> bool:
    """Return True if s is in items, directly or after applying modifier."""
    return any(
        item == s or (modifier is not None and modifier(item) == s)
        for item in items or ()
    )


def remove_string(
    items: list[str] | None, s: str, modifier: Modifier | None = None
) -> list[str] | None:
    """Return a new list without s (or items that modifier maps to s).

    An empty result is returned as None.
    """
    result = [
        item
        for item in items or ()
        if item != s and not (modifier is not None and modifier(item) == s)
    ]
    return result or None