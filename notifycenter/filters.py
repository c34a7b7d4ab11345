"""Filter matching for subscriptions and publishes.

A filter value is any value whose type has a matcher registered with
``matches``. The matcher is chosen by the type of the receiver (the first
argument) and returns False whenever the other value is not of the type it
expects, so filters of different kinds never match each other.

New filter types are added either by subclassing ``Filter`` or with
``matches.register``::

    @matches.register(OrderRef)
    def _(value: OrderRef, other: object) -> bool:
        return isinstance(other, OrderRef) and value.order_id == other.order_id
"""

import enum
import functools
import uuid
from abc import ABC, abstractmethod
from collections.abc import Mapping, Set
from typing import Any


class Filter(ABC):
    """Base class for custom filter values."""

    @abstractmethod
    def is_matching(self, other: "Filter") -> bool:
        """Return True if other is equal to self from a filtering perspective.

        Only called with an instance of this filter's own class (or a subclass).
        """


@functools.singledispatch
def matches(value: Any, other: Any) -> bool:
    """Return True if the filter value matches other."""
    raise TypeError(f"{type(value).__name__} is not a filter type")


_unsupported = matches.dispatch(object)


def is_filter(value: Any) -> bool:
    """Whether value's type has a registered matcher."""
    return matches.dispatch(type(value)) is not _unsupported


@matches.register(Filter)
def _match_filter(value: Filter, other: Any) -> bool:
    if not isinstance(other, type(value)):
        return False
    return value.is_matching(other)


@matches.register(str)
def _match_str(value: str, other: Any) -> bool:
    # str-valued enum members dispatch here through their str base.
    if isinstance(value, enum.Enum) or isinstance(other, enum.Enum):
        return value is other
    return isinstance(other, str) and value == other


@matches.register(bytes)
def _match_bytes(value: bytes, other: Any) -> bool:
    if isinstance(value, enum.Enum) or isinstance(other, enum.Enum):
        return value is other
    return isinstance(other, bytes) and value == other


@matches.register(list)
def _match_list(value: list, other: Any) -> bool:
    return isinstance(other, list) and value == other


@matches.register(tuple)
def _match_tuple(value: tuple, other: Any) -> bool:
    return isinstance(other, tuple) and value == other


@matches.register(Mapping)
def _match_mapping(value: Mapping, other: Any) -> bool:
    if not isinstance(other, Mapping):
        return False
    return dict(value) == dict(other)


@matches.register(Set)
def _match_set(value: Set, other: Any) -> bool:
    if not isinstance(other, Set):
        return False
    return frozenset(value) == frozenset(other)


@matches.register(uuid.UUID)
def _match_uuid(value: uuid.UUID, other: Any) -> bool:
    return isinstance(other, uuid.UUID) and value == other


@matches.register(enum.Enum)
def _match_enum(value: enum.Enum, other: Any) -> bool:
    # Members are singletons; a member of another enum class never matches.
    return value is other
