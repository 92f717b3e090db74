"""Helpers for building exhaustive iterators out of other exhaustive iterators."""

from __future__ import annotations

import operator
from typing import Any, Callable, Iterable, Iterator

from .core import _fork, strategy_for

_EMPTY = object()


class Peekable:
    """Iterator wrapper that can look at its next item without consuming it."""

    __slots__ = ("_it", "_buffer")

    def __init__(self, iterable: Iterable[Any]) -> None:
        self._it: Iterator[Any] = iter(iterable)
        self._buffer: Any = _EMPTY

    def _fill(self) -> bool:
        if self._buffer is _EMPTY:
            try:
                self._buffer = next(self._it)
            except StopIteration:
                return False
        return True

    def peek(self) -> Any:
        """Return the next item without consuming it; raise StopIteration if there is none."""
        if not self._fill():
            raise StopIteration
        return self._buffer

    def __bool__(self) -> bool:
        return self._fill()

    def __iter__(self) -> "Peekable":
        return self

    def __next__(self) -> Any:
        if self._buffer is not _EMPTY:
            item, self._buffer = self._buffer, _EMPTY
            return item
        return next(self._it)

    def __length_hint__(self) -> int:
        pending = 0 if self._buffer is _EMPTY else 1
        return operator.length_hint(self._it) + pending

    def copy(self) -> "Peekable":
        """Return an independent peekable that yields the same remaining items."""
        self._it, duplicate = _fork(self._it)
        other = Peekable.__new__(Peekable)
        other._it = duplicate
        other._buffer = self._buffer
        return other

    def _replace_with(self, other: "Peekable") -> None:
        self._it = other._it
        self._buffer = other._buffer

    def __repr__(self) -> str:
        if self._buffer is _EMPTY:
            return f"Peekable({self._it!r})"
        return f"Peekable({self._it!r}, peeked={self._buffer!r})"


def peekable_exhaust(strategy: Any) -> Peekable:
    """Return a peekable iterator over the factories of a type or strategy."""
    return Peekable(strategy_for(strategy).factories())


def carry(high: Peekable, low: Peekable, factory: Callable[[], Iterable[Any]]) -> bool:
    """If ``low`` is exhausted, refill it from ``factory`` and advance ``high``.

    Returns whether a carry occurred.
    """
    if low:
        return False
    fresh = factory()
    if not isinstance(fresh, Peekable):
        fresh = Peekable(fresh)
    low._replace_with(fresh)
    next(high, None)
    return True


class FlatZipMap:
    """Pair every item of an outer iterator with every item of an iterator derived from it."""

    def __init__(
        self,
        outer: Iterable[Any],
        iter_fn: Callable[[Any], Iterable[Any]],
        output_fn: Callable[[Any, Any], Any],
    ) -> None:
        self._outer = iter(outer)
        self._inner: tuple[Any, Iterator[Any]] | None = None
        self._iter_fn = iter_fn
        self._output_fn = output_fn

    def __iter__(self) -> "FlatZipMap":
        return self

    def __next__(self) -> Any:
        while True:
            if self._inner is None:
                outer_item = next(self._outer)
                self._inner = (outer_item, iter(self._iter_fn(outer_item)))
            outer_item, inner = self._inner
            inner_item = next(inner, _EMPTY)
            if inner_item is not _EMPTY:
                return self._output_fn(outer_item, inner_item)
            self._inner = None

    def __repr__(self) -> str:
        if self._inner is None:
            return f"FlatZipMap(outer_iterator={self._outer!r}, outer_item=None, ..)"
        item, inner = self._inner
        return (
            f"FlatZipMap(outer_iterator={self._outer!r}, outer_item={item!r}, "
            f"inner_iterator={inner!r}, ..)"
        )