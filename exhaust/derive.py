"""Derived strategies for dataclasses, enumerations and variant types."""

from __future__ import annotations

import dataclasses
import enum
import typing
from typing import Any, Callable, Iterable, Sequence

from . import primitives as _primitives  # noqa: F401  (registers the built-in strategies)
from .core import NotExhaustibleError, Strategy, register_generic, strategy_for
from .generated import GeneratedFactory, GeneratedIter

_Layout = tuple[tuple[str, ...], tuple[Strategy, ...]]

# Direct subclasses of each variant type made with derive(), in definition order.
_VARIANTS: dict[type, list[type]] = {}


def _type_map(cls: type, type_args: Iterable[Any]) -> dict[Any, Any]:
    params = tuple(getattr(cls, "__parameters__", ()))
    args = tuple(type_args)
    if len(params) != len(args):
        raise NotExhaustibleError(
            f"{cls.__name__} takes {len(params)} type argument(s), got {len(args)}"
        )
    return dict(zip(params, args))


def _substitute(tp: Any, mapping: dict[Any, Any]) -> Any:
    if isinstance(tp, typing.TypeVar):
        try:
            return mapping[tp]
        except KeyError:
            raise NotExhaustibleError(f"type variable {tp!r} is not bound") from None
    if typing.get_origin(tp) is not None:
        params = tuple(getattr(tp, "__parameters__", ()))
        if params:
            return tp[tuple(_substitute(param, mapping) for param in params)]
    return tp


def _record_layout(cls: type, mapping: dict[Any, Any]) -> _Layout:
    """Return the names and strategies of the fields passed to ``cls``'s constructor."""
    if not dataclasses.is_dataclass(cls):
        return (), ()
    names: list[str] = []
    strategies: list[Strategy] = []
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        if isinstance(field.type, str):
            raise NotExhaustibleError(
                f"field {cls.__name__}.{field.name} has an unevaluated annotation "
                f"{field.type!r}"
            )
        names.append(field.name)
        strategies.append(strategy_for(_substitute(field.type, mapping)))
    return tuple(names), tuple(strategies)


def _construct(cls: type, layout: _Layout, field_factories: Sequence[Any]) -> Any:
    names, strategies = layout
    values = (
        strategy.build(factory)
        for strategy, factory in zip(strategies, field_factories, strict=True)
    )
    return cls(**dict(zip(names, values, strict=True)))


def dataclass_strategy(cls: type, type_args: Iterable[Any] = ()) -> Strategy:
    """Return the strategy over every instance of a dataclass.

    Every combination of field values is produced, the last field changing fastest.
    ``type_args`` binds the class's type parameters, if it is generic.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass")
    layout = _record_layout(cls, _type_map(cls, type_args))
    name = cls.__name__
    variants = ((None, layout[1]),)

    def factories() -> GeneratedIter:
        return GeneratedIter(name, variants)

    def build(factory: GeneratedFactory) -> Any:
        return _construct(cls, layout, factory.fields)

    return Strategy(factories=factories, build=build)


def enum_strategy(cls: type) -> Strategy:
    """Return the strategy over every member of an enumeration, in definition order."""
    if not (isinstance(cls, type) and issubclass(cls, enum.Enum)):
        raise TypeError(f"{cls!r} is not an enumeration")
    name = cls.__name__

    def factories() -> GeneratedIter:
        return GeneratedIter(name, tuple((member, ()) for member in cls))

    def build(factory: GeneratedFactory) -> Any:
        return factory.variant

    return Strategy(factories=factories, build=build)


def _record_variant(base: type, sub: type) -> None:
    entries = _VARIANTS[base]
    for index, existing in enumerate(entries):
        # A dataclass made with slots=True replaces the class it decorates.
        if (existing.__module__, existing.__qualname__) == (sub.__module__, sub.__qualname__):
            entries[index] = sub
            return
    entries.append(sub)


def _track_variants(cls: type) -> None:
    """Arrange for the direct subclasses of ``cls`` to be recorded as they are defined."""
    if cls in _VARIANTS:
        return
    _VARIANTS[cls] = []
    own_hook = vars(cls).get("__init_subclass__")

    def hook(sub: type, **kwargs: Any) -> None:
        if cls in sub.__bases__:
            _record_variant(cls, sub)
        if own_hook is not None:
            own_hook.__get__(None, sub)(**kwargs)
        else:
            super(cls, sub).__init_subclass__(**kwargs)

    cls.__init_subclass__ = classmethod(hook)


def variants_strategy(cls: type, type_args: Iterable[Any] = ()) -> Strategy:
    """Return the strategy over every value of a variant type.

    The variants are the direct subclasses of ``cls`` defined after it was passed
    to :func:`derive`, in definition order; each is a dataclass whose instances are
    enumerated like a record, or a class built without arguments. ``type_args``
    binds the type parameters of ``cls``.
    """
    if not isinstance(cls, type):
        raise TypeError(f"{cls!r} is not a class")
    try:
        variant_classes = tuple(_VARIANTS[cls])
    except KeyError:
        raise TypeError(f"{cls.__name__} is not a variant type made with derive()") from None
    mapping = _type_map(cls, type_args)
    layouts = {variant: _record_layout(variant, mapping) for variant in variant_classes}
    name = cls.__name__
    variants = tuple((variant, layouts[variant][1]) for variant in variant_classes)

    def factories() -> GeneratedIter:
        return GeneratedIter(name, variants)

    def build(factory: GeneratedFactory) -> Any:
        variant = factory.variant
        return _construct(variant, layouts[variant], factory.fields)

    return Strategy(factories=factories, build=build)


def _enum_builder(cls: type) -> Callable[[tuple[Any, ...]], Strategy]:
    def builder(args: tuple[Any, ...]) -> Strategy:
        if args:
            raise NotExhaustibleError(f"{cls.__name__} takes no type arguments")
        return enum_strategy(cls)

    return builder


def derive(cls: type) -> type:
    """Class decorator making ``cls`` exhaustively enumerable.

    Enumerations yield their members; dataclasses yield every combination of
    field values; any other class is a variant type whose variants are its
    direct subclasses. Strategies are built when first looked up, so variants
    may be defined after the decorated class.
    """
    if not isinstance(cls, type):
        raise TypeError(f"derive() applies to classes only, got {cls!r}")
    if issubclass(cls, enum.Enum):
        builder = _enum_builder(cls)
    elif dataclasses.is_dataclass(cls):

        def builder(args: tuple[Any, ...]) -> Strategy:
            return dataclass_strategy(cls, args)

    else:
        _track_variants(cls)

        def builder(args: tuple[Any, ...]) -> Strategy:
            return variants_strategy(cls, args)

    register_generic(cls, builder)
    return cls