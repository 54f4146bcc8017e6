"""Immutable composite values produced by the reader and the list primitives.

Lists and vectors are tuple subclasses so they hash and compare element-wise
(a list equals a vector with the same elements). Maps and sets compare
without regard to order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Iterator

from clove import LispValue


class Char(str):
    """A single character read from `\\c` syntax; distinct from a one-char string."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Char({str.__repr__(self)})"


class List(tuple):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"List{tuple.__repr__(self)}"


class Vector(tuple):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"Vector{tuple.__repr__(self)}"


class Set(frozenset):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"Set({set(self)!r})"


class Map(Mapping):
    """Immutable hash map; later duplicate keys win, as with `assoc`."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[tuple[LispValue, LispValue]] = ()):
        self._items: dict[LispValue, LispValue] = dict(items)

    def __getitem__(self, key: LispValue) -> LispValue:
        return self._items[key]

    def __iter__(self) -> Iterator[LispValue]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(frozenset(self._items.items()))

    def __repr__(self) -> str:
        return f"Map({self._items!r})"

    def assoc(self, key: LispValue, value: LispValue) -> Map:
        items = dict(self._items)
        items[key] = value
        return Map(items.items())
