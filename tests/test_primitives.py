import math
import operator
import typing

import pytest

from exhaust.core import ExhaustIter, NotExhaustibleError, strategy_for
from exhaust.primitives import (
    Alignment,
    Char,
    Float32,
    FpCategory,
    Int8,
    Int16,
    NonZero,
    Ordering,
    UInt8,
    UInt16,
    bool_strategy,
    literal_strategy,
    tuple_strategy,
)
from exhaust.products import array_strategy


def check(tp, expected):
    it = strategy_for(tp).values()
    hint = operator.length_hint(it)
    result = list(it)
    assert result == expected
    assert hint <= len(expected)


def check_double(tp, expected):
    check(tp, expected)
    assert list(ExhaustIter(tp, reverse=True)) == expected[::-1]


def test_unit_none():
    check_double(None, [None])


def test_unit_tuple():
    check_double(tuple[()], [()])


def test_single_element_tuple():
    check_double(tuple[bool], [(False,), (True,)])


def test_nontrivial_tuple():
    check(
        tuple[bool, bool, bool],
        [
            (False, False, False),
            (False, False, True),
            (False, True, False),
            (False, True, True),
            (True, False, False),
            (True, False, True),
            (True, True, False),
            (True, True, True),
        ],
    )


def test_tuple_strategy_direct():
    assert list(tuple_strategy((bool, bool)).values()) == [
        (False, False),
        (False, True),
        (True, False),
        (True, True),
    ]


def test_variable_length_tuple_rejected():
    with pytest.raises(NotExhaustibleError):
        strategy_for(tuple[bool, ...])


def test_infallible():
    check_double(typing.NoReturn, [])


def test_bool():
    check_double(bool, [False, True])
    assert list(bool_strategy().values()) == [False, True]


def test_bool_size_hint_and_copy():
    it = strategy_for(bool).values()
    assert operator.length_hint(it) == 2
    assert next(it) is False
    other = it.copy()
    assert operator.length_hint(other) == 1
    assert next(other) is True
    assert next(it) is True


def test_f32():
    first = next(strategy_for(Float32).values())
    assert first == 0.0
    assert isinstance(first, Float32)
    last = next(ExhaustIter(Float32, reverse=True))
    assert math.isnan(last)


def test_float32_rounds():
    assert Float32(0.1) != 0.1
    assert Float32(0.5) == 0.5


def test_char():
    expected = {"\u0000", "\ud7ff", "\ue000", "\U0010ffff"}
    count = 0
    for c in strategy_for(Char).values():
        expected.discard(c)
        count += 1
    assert expected == set()
    assert count == 0x110000 - 0x800


def test_char_rejects_surrogate_and_long_text():
    with pytest.raises(ValueError):
        Char("\ud800")
    with pytest.raises(ValueError):
        Char("ab")


def test_int8_range():
    values = list(strategy_for(Int8).values())
    assert len(values) == 256
    assert values[0] == -128
    assert values[-1] == 127
    assert isinstance(values[0], Int8)


def test_uint16_length_hint():
    assert operator.length_hint(strategy_for(UInt16).values()) == 65536
    assert next(ExhaustIter(Int16, reverse=True)) == 32767


def test_bounded_int_overflow():
    with pytest.raises(OverflowError):
        Int8(200)
    with pytest.raises(OverflowError):
        UInt8(-1)


def test_nonzero_unsigned():
    check(NonZero[UInt8], list(range(1, 256)))


def test_nonzero_signed():
    check(NonZero[Int8], [i for i in range(-128, 128) if i != 0])


def test_nonzero_of_unbounded_int_rejected():
    with pytest.raises(NotExhaustibleError):
        strategy_for(NonZero[int])


def test_plain_int_not_exhaustible():
    with pytest.raises(NotExhaustibleError):
        strategy_for(int)


def test_ordering():
    check_double(Ordering, [Ordering.LESS, Ordering.EQUAL, Ordering.GREATER])


def test_fp_category():
    check(
        FpCategory,
        [
            FpCategory.NAN,
            FpCategory.INFINITE,
            FpCategory.ZERO,
            FpCategory.SUBNORMAL,
            FpCategory.NORMAL,
        ],
    )


def test_alignment():
    check(Alignment, [Alignment.LEFT, Alignment.RIGHT, Alignment.CENTER])


def test_literal():
    check_double(typing.Literal["a", "b"], ["a", "b"])
    assert list(literal_strategy((1, 2, 3)).values()) == [1, 2, 3]


def test_array_of_unit_type():
    assert list(array_strategy(None, 4).values()) == [(None, None, None, None)]


def test_array_of_uninhabited_type():
    assert list(array_strategy(typing.NoReturn, 4).values()) == []