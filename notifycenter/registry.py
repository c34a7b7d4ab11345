"""In-memory registry of observers per category, with filtered broadcast."""

import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from notifycenter.category import Category, category_key, conforms_to
from notifycenter.config import RegistrySettings
from notifycenter.errors import NonConformingObserverError
from notifycenter.filters import is_filter, matches
from notifycenter.observability import Metrics, get_logger
from notifycenter.subscription import Subscription

Action = Callable[[Any], None]

LOGGER_NAME = "notifycenter.registry"


def _check_filter(filter: Any) -> None:
    if filter is not None and not is_filter(filter):
        raise TypeError(f"{type(filter).__name__} is not a filter type")


class Registry:
    """Maps category keys to ordered subscription lists.

    All list access happens under one lock; actions passed to publish() run
    with the lock released so they may subscribe, unsubscribe or publish.
    """

    def __init__(self, settings: Optional[RegistrySettings] = None) -> None:
        self._settings = settings or RegistrySettings()
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._messages: Dict[str, int] = {}
        self._lock = threading.Lock()
        self._metrics = Metrics()
        self._logger = get_logger(LOGGER_NAME)

    @property
    def settings(self) -> RegistrySettings:
        return self._settings

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def _prune(self, key: str) -> List[Subscription]:
        """Drop expired entries from the category list. Caller holds the lock."""
        subscriptions = self._subscriptions[key]
        alive = [s for s in subscriptions if not s.expired]
        expired = len(subscriptions) - len(alive)
        if expired:
            for s in subscriptions:
                if s.expired:
                    s.active = False
            self._subscriptions[key] = alive
            self._metrics.increment("subscriptions.expired", expired)
            self._logger.debug("expired_pruned", extra={"category": key, "count": expired})
        return self._subscriptions[key]

    def subscribe(self, observer: object, category: Category, filter: Any = None) -> Subscription:
        """
        Register observer for category, optionally narrowed by filter.
        A registration redundant with an existing one adds nothing; the stored
        filter is only replaced when settings.replace_filter is set.
        Returns the stored subscription.
        """
        key = category_key(category)
        if not conforms_to(observer, category):
            raise NonConformingObserverError(observer, key)
        _check_filter(filter)
        candidate = Subscription(observer, filter)
        with self._lock:
            if key not in self._subscriptions:
                self._subscriptions[key] = []
                self._messages[key] = 0
                self._metrics.set_gauge("categories", len(self._subscriptions))
            subscriptions = self._prune(key)
            existing = candidate.find_redundant_in(subscriptions)
            if existing is None:
                subscriptions.append(candidate)
                stored = candidate
            else:
                if self._settings.replace_filter:
                    existing.filter = filter
                stored = existing
        if existing is None:
            self._metrics.increment("subscriptions.added")
            self._logger.info(
                "subscribed",
                extra={"category": key, "observer": repr(observer), "filter": repr(filter)},
            )
        else:
            self._metrics.increment("subscriptions.redundant")
            self._logger.debug(
                "redundant_subscription",
                extra={"category": key, "observer": repr(observer), "filter": repr(filter)},
            )
        return stored

    def unsubscribe(self, observer: object, category: Category) -> int:
        """Remove every subscription of observer in category, whatever its filter. Returns the count removed."""
        key = category_key(category)
        with self._lock:
            if key not in self._subscriptions:
                return 0
            kept: List[Subscription] = []
            removed = 0
            for s in self._prune(key):
                if s.is_observer(observer):
                    s.active = False
                    removed += 1
                else:
                    kept.append(s)
            self._subscriptions[key] = kept
        if removed:
            self._metrics.increment("subscriptions.removed", removed)
            self._logger.info(
                "unsubscribed",
                extra={"category": key, "observer": repr(observer), "count": removed},
            )
        return removed

    def publish(self, category: Category, filter: Any = None, action: Optional[Action] = None) -> int:
        """
        Call action(observer) for every observer of category whose filter matches.
        A None action or an unknown category is a no-op. Copy the list under lock,
        then deliver without holding it. Returns the number of successful deliveries.
        """
        self._metrics.increment("publish.calls")
        if action is None:
            self._metrics.increment("publish.dropped")
            return 0
        key = category_key(category)
        _check_filter(filter)
        with self._lock:
            if key not in self._subscriptions:
                self._metrics.increment("publish.dropped")
                return 0
            snapshot = list(self._prune(key))
            self._messages[key] += 1
        self._logger.debug(
            "publishing",
            extra={"category": key, "filter": repr(filter), "subscriber_count": len(snapshot)},
        )
        delivered = 0
        for subscription in snapshot:
            if not subscription.active:
                continue
            if not (
                subscription.filter is None
                or filter is None
                or matches(subscription.filter, filter)
            ):
                continue
            observer = subscription.observer
            if observer is None:
                continue
            try:
                action(observer)
                delivered += 1
            except Exception as e:
                self._metrics.increment("deliveries.failed")
                self._logger.exception(
                    "delivery_failed",
                    extra={"category": key, "observer": repr(observer), "error": str(e)},
                )
        self._metrics.increment("deliveries", delivered)
        return delivered

    def categories(self) -> List[str]:
        """Keys of every category that has ever been subscribed to."""
        with self._lock:
            return list(self._subscriptions)

    def subscriptions(self, category: Category) -> Tuple[Subscription, ...]:
        """Live subscriptions of category, in registration order."""
        key = category_key(category)
        with self._lock:
            if key not in self._subscriptions:
                return ()
            return tuple(self._prune(key))

    def subscriber_count(self, category: Category) -> int:
        return len(self.subscriptions(category))

    def is_subscribed(self, observer: object, category: Category) -> bool:
        return any(s.is_observer(observer) for s in self.subscriptions(category))

    def stats(self) -> Dict[str, Dict[str, int]]:
        """Return { category: { subscriptions, messages } }."""
        with self._lock:
            return {
                key: {
                    "subscriptions": len(self._prune(key)),
                    "messages": self._messages[key],
                }
                for key in list(self._subscriptions)
            }

    def __repr__(self) -> str:
        return f"Registry(categories={len(self._subscriptions)})"


_default: Optional[Registry] = None
_default_lock = threading.Lock()


def default_registry() -> Registry:
    """Return the process-wide registry, creating it on first use.

    Creating it applies settings.log_level to the shared registry logger.
    """
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                settings = RegistrySettings.from_env()
                get_logger(LOGGER_NAME, settings.log_level)
                _default = Registry(settings)
    return _default


def subscribe(observer: object, category: Category, filter: Any = None) -> Subscription:
    """Subscribe observer on the default registry."""
    return default_registry().subscribe(observer, category, filter)


def unsubscribe(observer: object, category: Category) -> int:
    """Unsubscribe observer on the default registry."""
    return default_registry().unsubscribe(observer, category)


def publish(category: Category, filter: Any = None, action: Optional[Action] = None) -> int:
    """Publish on the default registry."""
    return default_registry().publish(category, filter, action)
