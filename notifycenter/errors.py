"""Exceptions raised for registry usage errors."""


class NotifyCenterError(Exception):
    """Base class for notifycenter errors."""


class NonConformingObserverError(NotifyCenterError, TypeError):
    """Raised by subscribe() when the observer does not implement the category."""

    def __init__(self, observer: object, category_key: str) -> None:
        super().__init__(
            f"observer {observer!r} does not conform to category {category_key!r}"
        )
        self.observer = observer
        self.category_key = category_key
