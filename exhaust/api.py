"""Top-level functions for enumerating every value of a type."""

from __future__ import annotations

from typing import Any, Iterator

from . import collections as _collections  # noqa: F401  (registers strategies)
from . import derive as _derive  # noqa: F401  (registers strategies)
from . import primitives as _primitives  # noqa: F401  (registers strategies)
from . import wrappers as _wrappers  # noqa: F401  (registers strategies)
from .core import ExhaustIter, strategy_for


def exhaust(tp: Any) -> ExhaustIter:
    """Return an iterator over every value of ``tp``, which may be a type or a strategy."""
    return ExhaustIter(tp)


def exhaust_reversed(tp: Any) -> ExhaustIter:
    """Return an iterator over every value of ``tp`` in reverse order.

    Raises TypeError if the type's strategy cannot iterate backwards.
    """
    return ExhaustIter(tp, reverse=True)


def exhaust_factories(tp: Any) -> Iterator[Any]:
    """Return an iterator over the factories from which every value of ``tp`` is built."""
    return strategy_for(tp).factories()


def from_factory(tp: Any, factory: Any) -> Any:
    """Build the value of ``tp`` described by one of its factories."""
    return strategy_for(tp).build(factory)