"""Subscription: one observer's registration (with optional filter) for a category."""

import weakref
from typing import Any, Iterable, Optional

from notifycenter.filters import matches


class Subscription:
    """Weak reference to an observer plus an optional filter.

    The observer is held weakly; once it is garbage collected the subscription
    is expired and ``observer`` returns None. A filter of None is a wildcard.
    """

    def __init__(self, observer: object, filter: Any = None) -> None:
        if observer is None:
            raise ValueError("observer must not be None")
        try:
            self._ref = weakref.ref(observer)
        except TypeError:
            raise TypeError(
                f"observer of type {type(observer).__name__} does not support weak references"
            ) from None
        self._observer_id = id(observer)
        self.filter = filter
        # Cleared by the registry when the entry is removed from its list.
        self.active = True

    @property
    def observer(self) -> Optional[object]:
        return self._ref()

    @property
    def expired(self) -> bool:
        return self._ref() is None

    def is_observer(self, observer: object) -> bool:
        """Whether this subscription belongs to observer (identity)."""
        current = self._ref()
        return current is not None and current is observer

    def is_redundant_with(self, other: "Subscription") -> bool:
        """Same observer, and either filter is a wildcard or the filters match."""
        if not self.is_observer(other.observer):
            return False
        return (
            self.filter is None
            or other.filter is None
            or matches(self.filter, other.filter)
        )

    def find_redundant_in(self, subscriptions: Iterable["Subscription"]) -> Optional["Subscription"]:
        """Return the first entry in subscriptions that is redundant with this one."""
        for subscription in subscriptions:
            if subscription.is_redundant_with(self):
                return subscription
        return None

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, Subscription):
            return NotImplemented
        if not self.is_observer(other.observer):
            return False
        if self.filter is None or other.filter is None:
            return self.filter is None and other.filter is None
        return matches(self.filter, other.filter)

    def __hash__(self) -> int:
        return hash(self._observer_id)

    def __repr__(self) -> str:
        state = "expired" if self.expired else "alive"
        return f"Subscription(observer={self.observer!r}, filter={self.filter!r}, {state})"
