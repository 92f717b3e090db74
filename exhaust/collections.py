"""Strategies for sets, maps and in-memory byte streams."""

from __future__ import annotations

import io
import itertools
from typing import Any, Iterable, Iterator

from .core import NotExhaustibleError, Strategy, register_generic, strategy_for
from .iteration import FlatZipMap, Peekable
from .products import ProductIter


def powerset(items: Iterable[Any]) -> Iterator[tuple[Any, ...]]:
    """Yield every subset of ``items`` as a tuple, by increasing size, keeping input order."""
    pool = tuple(items)
    return itertools.chain.from_iterable(
        itertools.combinations(pool, size) for size in range(len(pool) + 1)
    )


class ExhaustMap:
    """Iterator over every map with keys from a sequence of key sets.

    ``keys`` yields tuples of key factories; for each such key set, every
    assignment of value factories is produced as a tuple of ``(key, value)`` pairs.
    """

    __slots__ = ("_keys", "_value", "_vals")

    def __init__(self, keys: Iterable[Any], value_strategy: Any) -> None:
        self._keys = keys if isinstance(keys, Peekable) else Peekable(keys)
        self._value = strategy_for(value_strategy)
        self._vals = self._values_for_current_keys()

    def _values_for_current_keys(self) -> Peekable:
        try:
            count = len(self._keys.peek())
        except StopIteration:
            count = 0
        return Peekable(ProductIter([self._value] * count))

    def __iter__(self) -> "ExhaustMap":
        return self

    def __next__(self) -> tuple[tuple[Any, Any], ...]:
        keys = self._keys.peek()
        vals = next(self._vals)
        if not self._vals:
            next(self._keys, None)
            self._vals = self._values_for_current_keys()
        return tuple(zip(keys, vals, strict=True))

    def copy(self) -> "ExhaustMap":
        """Return an independent iterator that yields the same remaining maps."""
        other = ExhaustMap.__new__(ExhaustMap)
        other._keys = self._keys.copy()
        other._value = self._value
        other._vals = self._vals.copy()
        return other

    def __repr__(self) -> str:
        return f"ExhaustMap(keys={self._keys!r}, vals={self._vals!r})"


def _subset_strategy(element_type: Any, container: type) -> Strategy:
    element = strategy_for(element_type)
    return Strategy(
        factories=lambda: powerset(element.factories()),
        build=lambda factory: container(element.build(item) for item in factory),
    )


def set_strategy(element_type: Any) -> Strategy:
    """Return the strategy over every set of values of ``element_type``."""
    return _subset_strategy(element_type, set)


def frozenset_strategy(element_type: Any) -> Strategy:
    """Return the strategy over every frozenset of values of ``element_type``."""
    return _subset_strategy(element_type, frozenset)


def dict_strategy(key_type: Any, value_type: Any) -> Strategy:
    """Return the strategy over every dict from ``key_type`` to ``value_type``."""
    key = strategy_for(key_type)
    value = strategy_for(value_type)

    def factories() -> ExhaustMap:
        return ExhaustMap(powerset(key.factories()), value)

    def build(factory: tuple[tuple[Any, Any], ...]) -> dict[Any, Any]:
        return {key.build(k): value.build(v) for k, v in factory}

    return Strategy(factories=factories, build=build)


def cursor_strategy(buffer_type: Any) -> Strategy:
    """Return the strategy over byte streams positioned anywhere within a buffer.

    Every buffer value of ``buffer_type`` (anything ``bytes()`` accepts) is paired
    with every position from the start to the end of the buffer, both inclusive.
    """
    buffer = strategy_for(buffer_type)

    def factories() -> FlatZipMap:
        return FlatZipMap(
            (bytes(value) for value in buffer.values()),
            lambda data: range(len(data) + 1),
            lambda data, position: (data, position),
        )

    def build(factory: tuple[bytes, int]) -> io.BytesIO:
        data, position = factory
        cursor = io.BytesIO(data)
        cursor.seek(position)
        return cursor

    return Strategy(factories=factories, build=build)


def _expect_args(name: str, args: tuple[Any, ...], count: int) -> tuple[Any, ...]:
    if len(args) != count:
        raise NotExhaustibleError(
            f"{name} needs exactly {count} type argument(s) to be exhaustively enumerated"
        )
    return args


register_generic(set, lambda args: set_strategy(*_expect_args("set", args, 1)))
register_generic(frozenset, lambda args: frozenset_strategy(*_expect_args("frozenset", args, 1)))
register_generic(dict, lambda args: dict_strategy(*_expect_args("dict", args, 2)))