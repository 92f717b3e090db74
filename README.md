# exhaust

Iterate over every possible value of a type.

`exhaust` produces, for a given type, a finite iterator that yields each of the
type's values exactly once, in a fixed and repeatable order. It is meant for
exhaustive testing of small state spaces: flags, small enums, records built out
of them, optional values, small fixed-length tuples, sets and maps over small
key types.

## Installation

```
pip install exhaust
```

## Usage

Import `exhaust.api` to get the entry points; importing it also registers every
built-in strategy.

```python
from exhaust.api import exhaust, exhaust_reversed

list(exhaust(bool))
# [False, True]

list(exhaust(tuple[bool, bool]))
# [(False, False), (False, True), (True, False), (True, True)]

list(exhaust(bool | None))
# [None, False, True]

list(exhaust_reversed(bool))
# [True, False]
```

Product types (tuples, dataclasses, variant fields) vary their last component
fastest, like the digits of a counter.

The iterator returned by `exhaust()` is an `exhaust.core.ExhaustIter`. It
supports `operator.length_hint()` where the underlying iterator knows its
length, and `copy()` returns an independent iterator over the remaining values.

`exhaust_reversed()` works only where the strategy can iterate backwards:
`bool`, `None`, the fixed-width integers, `Char`, `Float32`, `NonZero`, the
small enums in `exhaust.primitives`, `typing.Literal`, unions of such types,
and the wrapper types built on them. Tuples, sets, dicts and derived types do
not support it; asking raises `TypeError`.

### Deriving for your own types

Decorate an enum, a dataclass or a plain base class with
`exhaust.derive.derive` and its values become exhaustible. Every field must
itself have an exhaustible type, and field annotations must be real types,
not strings (so do not use `from __future__ import annotations` in that module).

```python
import enum
from dataclasses import dataclass

from exhaust.api import exhaust
from exhaust.derive import derive


@derive
class Colour(enum.Enum):
    RED = 1
    GREEN = 2


@derive
@dataclass(frozen=True)
class Pixel:
    lit: bool
    colour: Colour


for pixel in exhaust(Pixel):
    print(pixel)
# Pixel(lit=False, colour=<Colour.RED: 1>)
# Pixel(lit=False, colour=<Colour.GREEN: 2>)
# Pixel(lit=True, colour=<Colour.RED: 1>)
# Pixel(lit=True, colour=<Colour.GREEN: 2>)
```

A decorated class that is neither an enum nor a dataclass is a *variant type*:
its direct subclasses, defined after decoration, are its variants, taken in
definition order. A dataclass variant yields every combination of its fields;
any other variant is built with no arguments.

```python
@derive
class Bar:
    pass


@dataclass(frozen=True)
class One(Bar):
    pass


@dataclass(frozen=True)
class Two(Bar):
    flag: bool


list(exhaust(Bar))
# [One(), Two(flag=False), Two(flag=True)]
```

Generic dataclasses and variant types take their type arguments by
subscription, e.g. `exhaust(MyGeneric[bool])`.

### Factories

Each type is enumerated through *factories*: plain, copyable descriptions from
which a value is built. `exhaust_factories(tp)` yields the factories and
`from_factory(tp, factory)` turns one into a value, so

```python
from exhaust.api import exhaust_factories, from_factory

[from_factory(bool, f) for f in exhaust_factories(bool)]
```

gives the same sequence as `exhaust(bool)`. This matters for types whose
values hold mutable state, such as `exhaust.wrappers.OnceCell`: every value
produced is a fresh object.

### Supported types

- `bool`, `None`, `typing.NoReturn` (no values), tuples of any fixed length,
  `typing.Literal`, and unions (`None` comes first, then the other members in
  the order written).
- From `exhaust.primitives`: the fixed-width integers `Int8`, `UInt8`,
  `Int16`, `UInt16`, `Int32`, `UInt32`; `Char` (every code point except
  surrogates); `Float32` (every 32-bit pattern in bit order, so many NaNs);
  `NonZero[...]` over one of the integer types; and the enums `Ordering`,
  `FpCategory`, `Alignment`.
- `set[T]`, `frozenset[T]` and `dict[K, V]` over exhaustible types.
  Sets come by increasing size; maps come by key set, then by value assignment.
- From `exhaust.wrappers`: `Ok`, `Err`, `Ready`, `Included`, `Excluded`,
  `Continue`, `Break`, `RangeFrom`, `RangeTo`, `RangeToInclusive`, `Reverse`
  (each generic over one type), `Pending`, `Unbounded`, and `OnceCell[T]`
  (empty first, then one cell per value).

Some strategies are used directly rather than through a type:

```python
from exhaust.api import exhaust
from exhaust.collections import cursor_strategy
from exhaust.primitives import UInt8
from exhaust.products import array_strategy

list(exhaust(array_strategy(bool, 2)))
# [(False, False), (False, True), (True, False), (True, True)]

# io.BytesIO streams over every 2-byte buffer, at every position 0..=2
streams = exhaust(cursor_strategy(tuple[UInt8, UInt8]))
```

Types with too many values to enumerate in practice, such as unbounded `int`,
and containers that may hold any number of duplicates, such as `list`, are not
supported; asking for them raises `exhaust.core.NotExhaustibleError`.

### Registering a type by hand

A type that cannot be derived can be registered with an
`exhaust.core.Strategy`, built directly or with the helpers in
`exhaust.products` (`via_sequence`, `via_range`, `singleton`, `newtype`,
`product_strategy`):

```python
from exhaust.api import exhaust
from exhaust.core import register
from exhaust.products import via_sequence


class Suit:
    ...


register(Suit, via_sequence(["clubs", "diamonds", "hearts", "spades"]))
list(exhaust(Suit))
# ['clubs', 'diamonds', 'hearts', 'spades']
```

`exhaust.core.register_generic(origin, builder)` does the same for a generic
type: `builder` receives the tuple of type arguments and returns a strategy.

The building blocks used by the built-in strategies are public too:
`exhaust.iteration` has `Peekable`, `peekable_exhaust`, `carry` and
`FlatZipMap`; `exhaust.products` has `ProductIter`; `exhaust.collections` has
`powerset` and `ExhaustMap`.

## Running the tests

```
pip install -e .[test]
pytest
```