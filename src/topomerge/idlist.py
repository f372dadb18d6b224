"""Sorted, duplicate-free list of node IDs used for adjacency."""

from bisect import bisect_left
from typing import Iterable, Iterator


class IDList:
    """An immutable ordered set of node IDs.

    IDs are kept sorted, so iteration order is deterministic regardless of
    insertion order. Every operation that changes membership returns a new
    IDList.

    Example:
        adjacency = IDList("b", "a").add("c", "a")
        list(adjacency)  # ["a", "b", "c"]
    """

    __slots__ = ("_ids",)

    def __init__(self, *ids: str):
        self._ids: tuple[str, ...] = tuple(sorted(set(ids)))

    @classmethod
    def from_iterable(cls, ids: Iterable[str]) -> "IDList":
        """Build an IDList from any iterable of IDs."""
        return cls(*ids)

    def add(self, *ids: str) -> "IDList":
        """Return a new IDList that also contains ``ids``.

        Adding an ID that is already present has no effect.
        """
        missing = [i for i in ids if not self.contains(i)]
        if not missing:
            return self.copy()
        return IDList(*self._ids, *missing)

    def contains(self, node_id: str) -> bool:
        """Check membership with a binary search."""
        i = bisect_left(self._ids, node_id)
        return i < len(self._ids) and self._ids[i] == node_id

    def copy(self) -> "IDList":
        result = IDList()
        result._ids = self._ids
        return result

    def merge(self, other: "IDList") -> "IDList":
        """Return the union of this list and ``other``."""
        return IDList(*self._ids, *other._ids)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, str) and self.contains(node_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IDList):
            return NotImplemented
        return self._ids == other._ids

    def __repr__(self) -> str:
        return f"IDList({', '.join(repr(i) for i in self._ids)})"
