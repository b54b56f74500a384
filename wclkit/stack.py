"""A simple last-in, first-out stack."""

from __future__ import annotations

import sys
from typing import Any, TextIO


class Stack:
    """A LIFO stack of arbitrary values."""

    def __init__(self) -> None:
        self._elements: list[Any] = []

    def push(self, value: Any) -> None:
        """Put a value on top of the stack."""
        self._elements.append(value)

    def top(self) -> Any:
        """Return the top value, or None if the stack is empty."""
        return self._elements[-1] if self._elements else None

    def pop(self) -> None:
        """Remove the top value; raise IndexError if the stack is empty."""
        if not self._elements:
            raise IndexError("empty stack")
        self._elements.pop()

    def swap(self, other: Stack) -> None:
        """Exchange the contents of this stack with another."""
        self._elements, other._elements = other._elements, self._elements

    def set(self, idx: int, value: Any) -> None:
        """Replace the value at a position counted from the bottom."""
        if not 0 <= idx < len(self._elements):
            raise IndexError("Set failed")
        self._elements[idx] = value

    def get(self, idx: int) -> Any:
        """Return the value at a position, or None if out of range."""
        if 0 <= idx < len(self._elements):
            return self._elements[idx]
        return None

    def is_empty(self) -> bool:
        """Return True if the stack holds nothing."""
        return not self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def dump(self, file: TextIO | None = None) -> None:
        """Write every value from top to bottom as 'index => value' lines."""
        out = sys.stdout if file is None else file
        for idx in reversed(range(len(self._elements))):
            print(idx, "=>", self._elements[idx], file=out)