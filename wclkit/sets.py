"""A mutable set of hashable items with an explicit, chainable API."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Any


class Set:
    """A set of hashable items.

    Mutating methods return the set itself so calls can be chained.
    """

    __slots__ = ("_items",)

    def __init__(self, *items: Hashable) -> None:
        self._items: set[Any] = set(items)

    def insert(self, *items: Hashable) -> Set:
        """Add items to the set."""
        self._items.update(items)
        return self

    def delete(self, *items: Hashable) -> Set:
        """Remove the given items; items not present are ignored."""
        self._items.difference_update(items)
        return self

    def clear(self) -> Set:
        """Remove every item, in place."""
        self._items.clear()
        return self

    def has(self, item: Hashable) -> bool:
        """Return True if the item is in the set."""
        return item in self._items

    def has_all(self, *items: Hashable) -> bool:
        """Return True if every given item is in the set."""
        return all(item in self._items for item in items)

    def has_any(self, *items: Hashable) -> bool:
        """Return True if at least one given item is in the set."""
        return any(item in self._items for item in items)

    def clone(self) -> Set:
        """Return a new set holding the same items."""
        return Set(*self._items)

    def difference(self, other: Set) -> Set:
        """Return the items of this set that are not in other."""
        return Set(*(self._items - other._items))

    def symmetric_difference(self, other: Set) -> Set:
        """Return the items that are in exactly one of the two sets."""
        return Set(*(self._items ^ other._items))

    def union(self, other: Set) -> Set:
        """Return the items that are in either set."""
        return Set(*(self._items | other._items))

    def intersection(self, other: Set) -> Set:
        """Return the items that are in both sets."""
        return Set(*(self._items & other._items))

    def is_superset(self, other: Set) -> bool:
        """Return True if every item of other is in this set."""
        return self._items >= other._items

    def equal(self, other: Set) -> bool:
        """Return True if both sets hold exactly the same items."""
        return self._items == other._items

    def unsorted_list(self) -> list:
        """Return the items as a list in no particular order."""
        return list(self._items)

    def pop_any(self) -> Any:
        """Remove and return an arbitrary item; raise KeyError if empty."""
        try:
            return self._items.pop()
        except KeyError:
            raise KeyError("pop from an empty set") from None

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Set):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Set({', '.join(repr(item) for item in self._items)})"


def key_set(mapping: Mapping) -> Set:
    """Return a set of the keys of a mapping."""
    return Set(*mapping.keys())


def sorted_list(s: Iterable) -> list:
    """Return the items of a set as a sorted list."""
    return sorted(s)