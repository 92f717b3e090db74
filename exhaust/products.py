"""Strategies for products of exhaustible types, and small strategy constructors."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator, Sequence

from .core import Strategy, strategy_for
from .iteration import Peekable, carry, peekable_exhaust


class ProductIter:
    """Iterator over every combination of factories of several strategies.

    Combinations come in lexicographic order: the last component changes fastest.
    Each item is a tuple with one factory per component. With no components,
    exactly one empty tuple is produced.
    """

    __slots__ = ("_strategies", "_state", "_done_zero")

    def __init__(self, strategies: Iterable[Any]) -> None:
        self._strategies: tuple[Strategy, ...] = tuple(strategy_for(s) for s in strategies)
        self._state: list[Peekable] = [peekable_exhaust(s) for s in self._strategies]
        self._done_zero = False

    def __iter__(self) -> "ProductIter":
        return self

    def __next__(self) -> tuple[Any, ...]:
        if not self._state:
            if self._done_zero:
                raise StopIteration
            self._done_zero = True
            return ()

        if not all(self._state):
            raise StopIteration

        *higher, last = self._state
        item = (*(digit.peek() for digit in higher), next(last))

        # Carry from the rightmost digit leftwards; the leftmost is never refilled,
        # so once it runs out the whole product is finished.
        for index in range(len(self._state) - 1, 0, -1):
            strategy = self._strategies[index]
            if not carry(
                self._state[index - 1],
                self._state[index],
                lambda strategy=strategy: peekable_exhaust(strategy),
            ):
                break

        return item

    def copy(self) -> "ProductIter":
        """Return an independent iterator that yields the same remaining combinations."""
        other = ProductIter.__new__(ProductIter)
        other._strategies = self._strategies
        other._state = [digit.copy() for digit in self._state]
        other._done_zero = self._done_zero
        return other

    def __repr__(self) -> str:
        return f"ProductIter(state={self._state!r}, done_zero={self._done_zero!r})"


def product_strategy(
    strategies: Sequence[Any],
    build: Callable[[tuple[Any, ...]], Any] | None = None,
) -> Strategy:
    """Return a strategy over every combination of values of the given types or strategies.

    ``build`` receives a tuple of the built component values, in order, and returns
    the combined value; by default the tuple itself is the value.
    """
    components = tuple(strategy_for(s) for s in strategies)
    make = tuple if build is None else build

    def factories() -> Iterator[tuple[Any, ...]]:
        return ProductIter(components)

    def build_value(factory: tuple[Any, ...]) -> Any:
        return make(tuple(s.build(f) for s, f in zip(components, factory, strict=True)))

    return Strategy(factories=factories, build=build_value)


def array_strategy(tp: Any, length: int) -> Strategy:
    """Return a strategy over every fixed-length tuple of ``length`` values of ``tp``."""
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f"array length must be an int, got {length!r}")
    if length < 0:
        raise ValueError(f"array length must not be negative, got {length}")
    element = strategy_for(tp)
    return product_strategy([element] * length, tuple)


def singleton(make: Callable[[], Any]) -> Strategy:
    """Return a strategy for a type with exactly one value, built by calling ``make``."""

    def once() -> Iterator[tuple[()]]:
        return iter(((),))

    return Strategy(factories=once, build=lambda _factory: make(), reversed_factories=once)


def via_sequence(values: Iterable[Any]) -> Strategy:
    """Return a strategy that yields the given values in order; each value is its own factory."""
    items = tuple(values)
    return Strategy(
        factories=lambda: iter(items),
        reversed_factories=lambda: reversed(items),
    )


def via_range(start: int, stop: int) -> Strategy:
    """Return a strategy over the integers from ``start`` to ``stop``, both inclusive."""
    span = range(start, stop + 1)
    return Strategy(
        factories=lambda: iter(span),
        reversed_factories=lambda: reversed(span),
    )


def newtype(tp: Any, wrap: Callable[[Any], Any]) -> Strategy:
    """Return a strategy that enumerates ``tp`` and wraps each value with ``wrap``."""
    inner = strategy_for(tp)
    return Strategy(
        factories=inner.factories,
        build=lambda factory: wrap(inner.build(factory)),
        reversed_factories=inner.reversed_factories,
    )