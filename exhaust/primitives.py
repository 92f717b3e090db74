"""Strategies for booleans, bounded integers, characters, floats, tuples and small enums."""

from __future__ import annotations

import dataclasses
import enum
import itertools
import struct
import sys
import typing
from typing import Any, ClassVar, Generic, Iterator, TypeVar

from .core import NotExhaustibleError, Strategy, register, register_generic, strategy_for
from .products import newtype, product_strategy, singleton, via_range, via_sequence

T = TypeVar("T")


class _BoundedInt(int):
    """An integer restricted to the range ``MIN..=MAX``."""

    MIN: ClassVar[int]
    MAX: ClassVar[int]

    def __new__(cls, value: Any = 0) -> "_BoundedInt":
        number = super().__new__(cls, value)
        if not cls.MIN <= number <= cls.MAX:
            raise OverflowError(
                f"{int.__repr__(number)} is out of range for {cls.__name__} "
                f"({cls.MIN}..={cls.MAX})"
            )
        return number

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"


class Int8(_BoundedInt):
    """Signed 8-bit integer."""

    MIN = -(1 << 7)
    MAX = (1 << 7) - 1


class UInt8(_BoundedInt):
    """Unsigned 8-bit integer."""

    MIN = 0
    MAX = (1 << 8) - 1


class Int16(_BoundedInt):
    """Signed 16-bit integer."""

    MIN = -(1 << 15)
    MAX = (1 << 15) - 1


class UInt16(_BoundedInt):
    """Unsigned 16-bit integer."""

    MIN = 0
    MAX = (1 << 16) - 1


class Int32(_BoundedInt):
    """Signed 32-bit integer."""

    MIN = -(1 << 31)
    MAX = (1 << 31) - 1


class UInt32(_BoundedInt):
    """Unsigned 32-bit integer."""

    MIN = 0
    MAX = (1 << 32) - 1


_SURROGATES = range(0xD800, 0xE000)
_MAX_CODE_POINT = 0x10FFFF


class Char(str):
    """A single Unicode scalar value: one code point that is not a surrogate."""

    def __new__(cls, value: str) -> "Char":
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(f"a Char must be a string of length 1, got {value!r}")
        if ord(value) in _SURROGATES:
            raise ValueError(f"surrogate code point U+{ord(value):04X} is not a Char")
        return super().__new__(cls, value)


class Float32(float):
    """A float rounded to single precision.

    Exhausting it yields every 32-bit pattern in order of its bits, so
    many distinct NaNs are included.
    """

    def __new__(cls, value: Any = 0.0) -> "Float32":
        rounded = struct.unpack("<f", struct.pack("<f", float(value)))[0]
        return super().__new__(cls, rounded)


class NonZero(Generic[T]):
    """Type marker for the nonzero values of a bounded integer type, as in ``NonZero[UInt8]``."""


class Ordering(enum.Enum):
    """Result of a comparison."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class FpCategory(enum.Enum):
    """Classification of a floating-point number."""

    NAN = enum.auto()
    INFINITE = enum.auto()
    ZERO = enum.auto()
    SUBNORMAL = enum.auto()
    NORMAL = enum.auto()


class Alignment(enum.Enum):
    """Text alignment within a field."""

    LEFT = enum.auto()
    RIGHT = enum.auto()
    CENTER = enum.auto()


def bool_strategy() -> Strategy:
    """Return the strategy enumerating ``False`` then ``True``."""
    return via_sequence((False, True))


def tuple_strategy(args: Any) -> Strategy:
    """Return the strategy for a fixed-length tuple with the given element types."""
    elements = tuple(args)
    if elements == ((),):
        elements = ()
    if any(element is Ellipsis for element in elements):
        raise NotExhaustibleError("variable-length tuples cannot be exhaustively enumerated")
    if not elements:
        return singleton(tuple)
    if len(elements) == 1:
        return newtype(elements[0], lambda value: (value,))
    return product_strategy(elements)


def literal_strategy(args: Any) -> Strategy:
    """Return the strategy yielding each of the literal values, in order."""
    return via_sequence(args)


def _bounded_int_strategy(cls: type[_BoundedInt]) -> Strategy:
    return dataclasses.replace(via_range(cls.MIN, cls.MAX), build=cls)


def _char_from_code(code: int) -> Char:
    return str.__new__(Char, chr(code))


def _char_codes() -> Iterator[int]:
    return itertools.chain(
        range(0, _SURROGATES.start), range(_SURROGATES.stop, _MAX_CODE_POINT + 1)
    )


def _char_codes_reversed() -> Iterator[int]:
    return itertools.chain(
        reversed(range(_SURROGATES.stop, _MAX_CODE_POINT + 1)),
        reversed(range(0, _SURROGATES.start)),
    )


def _float32_from_bits(bits: int) -> Float32:
    return float.__new__(Float32, struct.unpack("<f", bits.to_bytes(4, "little"))[0])


def _nonzero_strategy(args: tuple[Any, ...]) -> Strategy:
    if len(args) != 1:
        raise NotExhaustibleError("NonZero takes exactly one integer type argument")
    (inner_type,) = args
    if not (isinstance(inner_type, type) and issubclass(inner_type, _BoundedInt)):
        raise NotExhaustibleError(f"NonZero[{inner_type!r}] cannot be exhaustively enumerated")
    inner = strategy_for(inner_type)
    reversed_inner = inner.reversed_factories
    return Strategy(
        factories=lambda: filter(None, inner.factories()),
        build=inner.build,
        reversed_factories=(
            None if reversed_inner is None else lambda: filter(None, reversed_inner())
        ),
    )


def _empty() -> Iterator[Any]:
    return iter(())


_UNINHABITED = Strategy(factories=_empty, reversed_factories=_empty)

register(bool, bool_strategy())
register(type(None), singleton(lambda: None))
register(typing.NoReturn, _UNINHABITED)
if sys.version_info >= (3, 11):
    register(typing.Never, _UNINHABITED)

for _int_type in (Int8, UInt8, Int16, UInt16, Int32, UInt32):
    register(_int_type, _bounded_int_strategy(_int_type))

register(
    Char,
    Strategy(
        factories=_char_codes,
        build=_char_from_code,
        reversed_factories=_char_codes_reversed,
    ),
)
register(Float32, dataclasses.replace(via_range(0, UInt32.MAX), build=_float32_from_bits))

for _enum_type in (Ordering, FpCategory, Alignment):
    register(_enum_type, via_sequence(_enum_type))

register_generic(NonZero, _nonzero_strategy)
register_generic(tuple, tuple_strategy)
register_generic(typing.Literal, literal_strategy)