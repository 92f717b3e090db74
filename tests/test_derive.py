import enum
import itertools
import operator
import typing
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

import pytest

from exhaust.core import NotExhaustibleError, strategy_for
from exhaust.derive import derive, dataclass_strategy, enum_strategy, variants_strategy

T = TypeVar("T")
LIMIT = 10


def collect(tp):
    iterator = strategy_for(tp).values()
    hint = operator.length_hint(iterator)
    result = list(itertools.islice(iterator, LIMIT + 1))
    assert len(result) <= LIMIT, "exhaustive iterator didn't stop when expected"
    assert hint <= len(result)
    return result


@derive
@dataclass
class UnitStruct:
    pass


@derive
@dataclass
class SimpleStruct:
    a: bool
    b: bool
    c: bool


@derive
@dataclass
class GenericStruct(Generic[T]):
    a: T
    b: T


@derive
@dataclass
class UninhabitedStruct:
    x: NoReturn


@derive
class EmptyEnum(enum.Enum):
    pass


@derive
class OneValueEnum(enum.Enum):
    FOO = 1


@derive
class FieldlessEnum(enum.Enum):
    FOO = 1
    BAR = 2
    BAZ = 3


@derive
class EnumWithFields:
    pass


@dataclass
class FooFields(EnumWithFields):
    x: bool
    y: bool


@dataclass
class BarField(EnumWithFields):
    x: bool


@derive
class EnumWithGeneric(Generic[T]):
    pass


@dataclass
class Before(EnumWithGeneric):
    pass


@dataclass
class GenericValue(EnumWithGeneric[T]):
    value: T


@dataclass
class After(EnumWithGeneric):
    pass


@derive
class EnumWithUninhabited:
    pass


@dataclass
class UninhabitedBefore(EnumWithUninhabited):
    pass


@dataclass
class Uninhabited(EnumWithUninhabited):
    x: NoReturn


@dataclass
class UninhabitedAfter(EnumWithUninhabited):
    pass


@derive
class Bar:
    pass


@dataclass
class One(Bar):
    pass


@dataclass
class Two(Bar):
    value: bool


@derive
@dataclass
class Example:
    a: bool
    b: Bar


@derive
@dataclass
class Pair(Generic[T]):
    both: typing.Tuple[T, T]


def test_struct_unit():
    assert collect(UnitStruct) == [UnitStruct()]


def test_struct_simple():
    assert collect(SimpleStruct) == [
        SimpleStruct(False, False, False),
        SimpleStruct(False, False, True),
        SimpleStruct(False, True, False),
        SimpleStruct(False, True, True),
        SimpleStruct(True, False, False),
        SimpleStruct(True, False, True),
        SimpleStruct(True, True, False),
        SimpleStruct(True, True, True),
    ]


def test_struct_generic():
    assert collect(GenericStruct[bool]) == [
        GenericStruct(False, False),
        GenericStruct(False, True),
        GenericStruct(True, False),
        GenericStruct(True, True),
    ]


def test_struct_uninhabited_generic():
    assert collect(GenericStruct[NoReturn]) == []


def test_struct_uninhabited_nongeneric():
    assert collect(UninhabitedStruct) == []


def test_enum_empty():
    assert collect(EmptyEnum) == []


def test_enum_one_value():
    assert collect(OneValueEnum) == [OneValueEnum.FOO]


def test_enum_fieldless_multi():
    assert collect(FieldlessEnum) == [FieldlessEnum.FOO, FieldlessEnum.BAR, FieldlessEnum.BAZ]


def test_enum_fields():
    assert collect(EnumWithFields) == [
        FooFields(False, False),
        FooFields(False, True),
        FooFields(True, False),
        FooFields(True, True),
        BarField(False),
        BarField(True),
    ]


def test_enum_generic():
    assert collect(EnumWithGeneric[bool]) == [
        Before(),
        GenericValue(False),
        GenericValue(True),
        After(),
    ]


def test_enum_with_uninhabited_nongeneric():
    assert collect(EnumWithUninhabited) == [UninhabitedBefore(), UninhabitedAfter()]


def test_enum_with_uninhabited_generic():
    assert collect(EnumWithGeneric[NoReturn]) == [Before(), After()]


def test_example_nested_derive():
    assert collect(Example) == [
        Example(False, One()),
        Example(False, Two(False)),
        Example(False, Two(True)),
        Example(True, One()),
        Example(True, Two(False)),
        Example(True, Two(True)),
    ]


def test_generic_nested_in_tuple():
    assert collect(Pair[bool]) == [
        Pair((False, False)),
        Pair((False, True)),
        Pair((True, False)),
        Pair((True, True)),
    ]


def test_function_containing_derive():
    @derive
    @dataclass
    class StructInsideFn:
        value: bool

    assert collect(StructInsideFn) == [StructInsideFn(False), StructInsideFn(True)]


def test_field_names_do_not_conflict():
    @derive
    @dataclass
    class Hygiene:
        has_next: None
        item: None
        iter_f_0: None
        factory: None
        done: None

    assert collect(Hygiene) == [Hygiene(None, None, None, None, None)]


def test_not_a_name_conflict():
    @derive
    @dataclass
    class ExhaustFooIter:
        value: bool

    @derive
    @dataclass
    class Foo:
        value: bool

    assert ExhaustFooIter(True).value is True
    assert collect(Foo) == [Foo(False), Foo(True)]


def test_debug_impls():
    @derive
    class Foo(enum.Enum):
        X = 1
        Y = 2

    strategy = strategy_for(Foo)
    iterator = strategy.factories()
    assert repr(iterator) == "ExhaustFooIter { .. }"
    factory = next(iterator)
    assert repr(factory) == "ExhaustFooFactory { .. }"
    assert strategy.build(factory) is Foo.X


def test_direct_strategy_functions():
    assert list(dataclass_strategy(GenericStruct, (bool,)).values())[0] == GenericStruct(
        False, False
    )
    assert list(enum_strategy(FieldlessEnum).values()) == list(FieldlessEnum)
    assert list(variants_strategy(EnumWithGeneric, (NoReturn,)).values()) == [Before(), After()]


def test_derive_rejects_non_class():
    with pytest.raises(TypeError):
        derive(42)


def test_generic_without_arguments_is_rejected():
    with pytest.raises(NotExhaustibleError):
        strategy_for(GenericStruct)


def test_wrong_number_of_type_arguments():
    with pytest.raises(NotExhaustibleError):
        dataclass_strategy(GenericStruct, (bool, bool))


def test_unexhaustible_field_type():
    @derive
    @dataclass
    class Unbounded:
        value: int

    with pytest.raises(NotExhaustibleError):
        strategy_for(Unbounded)


def test_enum_strategy_rejects_dataclass():
    with pytest.raises(TypeError):
        enum_strategy(SimpleStruct)


def test_dataclass_strategy_rejects_plain_class():
    with pytest.raises(TypeError):
        dataclass_strategy(EnumWithFields)