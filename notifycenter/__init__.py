"""In-process notification registry: filtered many-to-many broadcast to observers by category."""

from notifycenter.category import capabilities, category_key, conforms_to
from notifycenter.config import RegistrySettings
from notifycenter.errors import NonConformingObserverError, NotifyCenterError
from notifycenter.filters import Filter, is_filter, matches
from notifycenter.registry import (
    Registry,
    default_registry,
    publish,
    subscribe,
    unsubscribe,
)
from notifycenter.subscription import Subscription

__all__ = [
    "Registry",
    "RegistrySettings",
    "Subscription",
    "Filter",
    "matches",
    "is_filter",
    "capabilities",
    "category_key",
    "conforms_to",
    "default_registry",
    "subscribe",
    "unsubscribe",
    "publish",
    "NotifyCenterError",
    "NonConformingObserverError",
]
