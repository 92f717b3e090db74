"""Iterator and factory types used by derived strategies for dataclasses and variant types."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .core import Strategy, strategy_for
from .products import ProductIter


def generated_type_name(input_type_name: str, role_name: str) -> str:
    """Return the name of a generated helper type.

    ``input_type_name`` is the name of the type being enumerated; ``role_name``
    describes the helper, such as ``"Iter"`` or ``"Factory"``.
    """
    return f"Exhaust{input_type_name}{role_name}"


class GeneratedFactory:
    """Data from which one value of a derived type is built.

    ``variant`` names the chosen variant, or is ``None`` for a plain record type;
    ``fields`` holds one factory per field, in declaration order.
    """

    __slots__ = ("type_name", "variant", "fields")

    def __init__(self, type_name: str, variant: Any, fields: Iterable[Any]) -> None:
        self.type_name = type_name
        self.variant = variant
        self.fields: tuple[Any, ...] = tuple(fields)

    def _key(self) -> tuple[Any, Any, tuple[Any, ...]]:
        return (self.type_name, self.variant, self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeneratedFactory):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"{generated_type_name(self.type_name, 'Factory')} {{ .. }}"


class GeneratedIter:
    """Iterator over the factories of every value of a derived type.

    ``variants`` is a sequence of ``(variant, field_types)`` pairs, taken in order.
    Each variant contributes every combination of its fields' factories, the last
    field changing fastest; a variant without fields contributes exactly one factory,
    and a variant with an uninhabited field contributes none.
    """

    __slots__ = ("_type_name", "_variants", "_index", "_current")

    def __init__(self, type_name: str, variants: Iterable[tuple[Any, Sequence[Any]]]) -> None:
        self._type_name = type_name
        self._variants: tuple[tuple[Any, tuple[Strategy, ...]], ...] = tuple(
            (variant, tuple(strategy_for(field) for field in fields))
            for variant, fields in variants
        )
        self._index = 0
        self._current: ProductIter | None = None

    def __iter__(self) -> "GeneratedIter":
        return self

    def __next__(self) -> GeneratedFactory:
        while self._index < len(self._variants):
            variant, fields = self._variants[self._index]
            if self._current is None:
                self._current = ProductIter(fields)
            try:
                field_factories = next(self._current)
            except StopIteration:
                self._index += 1
                self._current = None
                continue
            return GeneratedFactory(self._type_name, variant, field_factories)
        raise StopIteration

    def copy(self) -> "GeneratedIter":
        """Return an independent iterator that yields the same remaining factories."""
        other = GeneratedIter.__new__(GeneratedIter)
        other._type_name = self._type_name
        other._variants = self._variants
        other._index = self._index
        other._current = None if self._current is None else self._current.copy()
        return other

    def __repr__(self) -> str:
        return f"{generated_type_name(self._type_name, 'Iter')} {{ .. }}"