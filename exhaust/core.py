"""Strategies describing how to enumerate every value of a type, and the registry of them."""

from __future__ import annotations

import copy as _copy
import itertools
import operator
import typing
from dataclasses import dataclass
from typing import Any, Callable, Iterator


def _identity(value: Any) -> Any:
    return value


_SAFELY_COPYABLE = frozenset(
    {
        type(iter(())),
        type(iter([])),
        type(iter(range(0))),
        type(iter(range(1 << 70))),
        type(iter("")),
        type(iter(b"")),
        type(itertools.tee(iter(()))[0]),
    }
)


def _fork(iterator: Iterator[Any]) -> tuple[Iterator[Any], Iterator[Any]]:
    """Return ``(original, duplicate)``; both continue with the same remaining items.

    The original may have to be replaced, so callers must use the first element
    in place of the iterator they passed in.
    """
    own_copy = getattr(iterator, "copy", None)
    if callable(own_copy):
        return iterator, own_copy()
    if type(iterator) in _SAFELY_COPYABLE:
        return iterator, _copy.copy(iterator)
    first, second = itertools.tee(iterator)
    return first, second


class NotExhaustibleError(TypeError):
    """Raised when no strategy is known for enumerating a type."""


@dataclass(frozen=True)
class Strategy:
    """How to enumerate every value of a type.

    ``factories`` returns a fresh iterator of factory values on each call;
    ``build`` turns one factory value into a value of the type.
    ``reversed_factories``, when given, yields the same factories in reverse order.
    """

    factories: Callable[[], Iterator[Any]]
    build: Callable[[Any], Any] = _identity
    reversed_factories: Callable[[], Iterator[Any]] | None = None

    def values(self) -> "ExhaustIter":
        """Return an iterator over all values described by this strategy."""
        return ExhaustIter(self)


class ExhaustIter:
    """Iterator over all values of an exhaustible type."""

    __slots__ = ("_strategy", "_inner", "_reverse")

    def __init__(self, strategy: Any, reverse: bool = False) -> None:
        resolved = strategy_for(strategy)
        if reverse:
            if resolved.reversed_factories is None:
                raise TypeError("this strategy does not support reverse iteration")
            inner = resolved.reversed_factories()
        else:
            inner = resolved.factories()
        self._strategy = resolved
        self._inner = iter(inner)
        self._reverse = reverse

    def __iter__(self) -> "ExhaustIter":
        return self

    def __next__(self) -> Any:
        return self._strategy.build(next(self._inner))

    def __length_hint__(self) -> int:
        return operator.length_hint(self._inner)

    def copy(self) -> "ExhaustIter":
        """Return an independent iterator that yields the same remaining values."""
        self._inner, duplicate = _fork(self._inner)
        other = ExhaustIter.__new__(ExhaustIter)
        other._strategy = self._strategy
        other._inner = duplicate
        other._reverse = self._reverse
        return other

    def __repr__(self) -> str:
        return f"ExhaustIter({self._inner!r})"


_REGISTRY: dict[Any, Strategy] = {}
_GENERIC: dict[Any, Callable[[tuple[Any, ...]], Strategy]] = {}


def register(tp: Any, strategy: Strategy) -> Strategy:
    """Associate a type with the strategy that enumerates it."""
    if not isinstance(strategy, Strategy):
        raise TypeError(f"expected a Strategy, got {strategy!r}")
    _REGISTRY[tp] = strategy
    return strategy


def register_generic(
    origin: Any, builder: Callable[[tuple[Any, ...]], Strategy]
) -> Callable[[tuple[Any, ...]], Strategy]:
    """Associate a generic type with a function building strategies from its type arguments."""
    _GENERIC[origin] = builder
    return builder


def _lookup(table: dict[Any, Any], key: Any) -> Any:
    try:
        return table.get(key)
    except TypeError:
        return None


def strategy_for(tp: Any) -> Strategy:
    """Return the strategy enumerating ``tp``, which may itself already be a strategy."""
    if isinstance(tp, Strategy):
        return tp
    if tp is None:
        tp = type(None)
    found = _lookup(_REGISTRY, tp)
    if found is not None:
        return found
    origin = typing.get_origin(tp)
    if origin is not None:
        builder = _lookup(_GENERIC, origin)
        if builder is not None:
            return builder(typing.get_args(tp))
    else:
        builder = _lookup(_GENERIC, tp)
        if builder is not None:
            return builder(())
    raise NotExhaustibleError(f"{tp!r} cannot be exhaustively enumerated")