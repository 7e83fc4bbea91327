"""Ordered, duplicate-free source-expression lists."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class SourceList:
    """Immutable ordered set of CSP source expressions.

    Membership has set semantics, output order has sequence semantics: the
    first insertion of an item fixes its position. Every operation returns a
    new SourceList and none of them raise.

    Example:
        >>> SourceList(["'self'"]).add_list(["https:", "'self'"]).to_sequence()
        ("'self'", 'https:')
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[str] = ()) -> None:
        # dict keys keep insertion order and drop repeats
        self._items: tuple[str, ...] = tuple(dict.fromkeys(items))

    def add(self, item: str) -> SourceList:
        if item in self._items:
            return self
        return SourceList((*self._items, item))

    def add_list(self, items: Iterable[str]) -> SourceList:
        return SourceList((*self._items, *items))

    def remove(self, item: str) -> SourceList:
        if item not in self._items:
            return self
        return SourceList(i for i in self._items if i != item)

    def remove_list(self, items: Iterable[str]) -> SourceList:
        drop = frozenset(items)
        if not drop.intersection(self._items):
            return self
        return SourceList(i for i in self._items if i not in drop)

    def to_sequence(self) -> tuple[str, ...]:
        return self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourceList):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"SourceList({list(self._items)!r})"
