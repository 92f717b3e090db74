"""Strategies for optional values, unions, result-like and range-like wrappers, and cells."""

from __future__ import annotations

import functools
import types
import typing
from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar

from . import primitives as _primitives  # noqa: F401  (registers the built-in strategies)
from .core import NotExhaustibleError, Strategy, register, register_generic, strategy_for
from .products import newtype, singleton

T = TypeVar("T")

_NONE_TYPE = type(None)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome holding a value."""

    value: T


@dataclass(frozen=True)
class Err(Generic[T]):
    """Failed outcome holding an error value."""

    value: T


@dataclass(frozen=True)
class Pending:
    """A computation that has not produced its value yet."""


@dataclass(frozen=True)
class Ready(Generic[T]):
    """A computation that has produced its value."""

    value: T


@dataclass(frozen=True)
class Included(Generic[T]):
    """A range endpoint that belongs to the range."""

    value: T


@dataclass(frozen=True)
class Excluded(Generic[T]):
    """A range endpoint that does not belong to the range."""

    value: T


@dataclass(frozen=True)
class Unbounded:
    """A missing range endpoint."""


@dataclass(frozen=True)
class Continue(Generic[T]):
    """Signal to keep going, carrying a value."""

    value: T


@dataclass(frozen=True)
class Break(Generic[T]):
    """Signal to stop early, carrying a value."""

    value: T


@dataclass(frozen=True)
class RangeFrom(Generic[T]):
    """Range ``start..`` with only a lower bound."""

    start: T


@dataclass(frozen=True)
class RangeTo(Generic[T]):
    """Range ``..end`` with only an exclusive upper bound."""

    end: T


@dataclass(frozen=True)
class RangeToInclusive(Generic[T]):
    """Range ``..=end`` with only an inclusive upper bound."""

    end: T


@functools.total_ordering
@dataclass(frozen=True)
class Reverse(Generic[T]):
    """Wrapper whose ordering is the reverse of the wrapped value's."""

    value: T

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Reverse):
            return NotImplemented
        return other.value < self.value


_UNSET = object()


class OnceCell(Generic[T]):
    """A cell that can be written at most once."""

    __slots__ = ("_value",)

    def __init__(self, value: Any = _UNSET) -> None:
        self._value = value

    def get(self) -> Any:
        """Return the stored value, or ``None`` if the cell is empty."""
        return None if self._value is _UNSET else self._value

    def set(self, value: Any) -> None:
        """Store ``value``; raise ValueError if the cell already holds one."""
        if self._value is not _UNSET:
            raise ValueError("cell is already initialized")
        self._value = value

    def _state(self) -> tuple[bool, Any]:
        is_set = self._value is not _UNSET
        return is_set, (self._value if is_set else None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OnceCell):
            return NotImplemented
        return self._state() == other._state()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._value is _UNSET:
            return "OnceCell(<uninit>)"
        return f"OnceCell({self._value!r})"


def _tagged(members: tuple[Any, ...]) -> Strategy:
    """Strategy chaining the members in order; factories are ``(member index, factory)``."""
    strategies = tuple(strategy_for(member) for member in members)

    def factories() -> Iterator[tuple[int, Any]]:
        for index, strategy in enumerate(strategies):
            for factory in strategy.factories():
                yield index, factory

    def reversed_factories() -> Iterator[tuple[int, Any]]:
        for index in range(len(strategies) - 1, -1, -1):
            backwards = strategies[index].reversed_factories
            assert backwards is not None
            for factory in backwards():
                yield index, factory

    def build(factory: tuple[int, Any]) -> Any:
        index, inner = factory
        return strategies[index].build(inner)

    reversible = all(s.reversed_factories is not None for s in strategies)
    return Strategy(
        factories=factories,
        build=build,
        reversed_factories=reversed_factories if reversible else None,
    )


def union_strategy(args: Any) -> Strategy:
    """Return the strategy over a union of types.

    ``None`` comes first when it is a member; the other members follow in the
    order they were written, each contributing all of its values.
    """
    members = tuple(_NONE_TYPE if member is None else member for member in args)
    if not members:
        raise NotExhaustibleError("an empty union cannot be exhaustively enumerated")
    ordered = tuple(m for m in members if m is _NONE_TYPE) + tuple(
        m for m in members if m is not _NONE_TYPE
    )
    return _tagged(ordered)


def _single_arg(name: str, args: tuple[Any, ...]) -> Any:
    if len(args) != 1:
        raise NotExhaustibleError(
            f"{name} needs exactly 1 type argument to be exhaustively enumerated"
        )
    return args[0]


def _register_wrapper(cls: type) -> None:
    def builder(args: tuple[Any, ...]) -> Strategy:
        return newtype(_single_arg(cls.__name__, args), cls)

    register_generic(cls, builder)


def _once_cell_strategy(args: tuple[Any, ...]) -> Strategy:
    inner_type = _single_arg("OnceCell", args)
    option = _tagged((_NONE_TYPE, inner_type))
    inner = strategy_for(inner_type)

    def build(factory: tuple[int, Any]) -> OnceCell[Any]:
        index, value_factory = factory
        if index == 0:
            return OnceCell()
        return OnceCell(inner.build(value_factory))

    return Strategy(
        factories=option.factories,
        build=build,
        reversed_factories=option.reversed_factories,
    )


for _wrapper_type in (
    Ok,
    Err,
    Ready,
    Included,
    Excluded,
    Continue,
    Break,
    RangeFrom,
    RangeTo,
    RangeToInclusive,
    Reverse,
):
    _register_wrapper(_wrapper_type)

register(Pending, singleton(Pending))
register(Unbounded, singleton(Unbounded))
register_generic(OnceCell, _once_cell_strategy)
register_generic(typing.Union, union_strategy)
register_generic(types.UnionType, union_strategy)