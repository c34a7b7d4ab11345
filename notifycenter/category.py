"""Category keys and observer capability declarations.

A category is either a plain string or a class. Classes are keyed by their
dotted ``module.qualname``. Observers declare which categories they handle
with the ``capabilities`` decorator; class categories are also satisfied by
``isinstance`` (ABCs and ``runtime_checkable`` protocols).
"""

from typing import Callable, FrozenSet, TypeVar, Union

Category = Union[str, type]

T = TypeVar("T", bound=type)

_CAPABILITIES_ATTR = "__capabilities__"


def category_key(category: Category) -> str:
    """Return the registry key for a category."""
    if isinstance(category, str):
        if not category:
            raise ValueError("category must be a non-empty string")
        return category
    if isinstance(category, type):
        return f"{category.__module__}.{category.__qualname__}"
    raise TypeError(f"category must be a str or a class, got {type(category).__name__}")


def capabilities(*categories: Category) -> Callable[[T], T]:
    """Class decorator declaring the categories instances of the class handle.

    Declarations are inherited and merged with those of base classes.
    """
    keys = frozenset(category_key(c) for c in categories)

    def decorator(cls: T) -> T:
        inherited: FrozenSet[str] = frozenset()
        for base in cls.__mro__[1:]:
            inherited |= base.__dict__.get(_CAPABILITIES_ATTR, frozenset())
        setattr(cls, _CAPABILITIES_ATTR, inherited | keys)
        return cls

    return decorator


def declared_capabilities(observer: object) -> FrozenSet[str]:
    """Category keys declared by the observer's class."""
    return frozenset(getattr(type(observer), _CAPABILITIES_ATTR, frozenset()))


def conforms_to(observer: object, category: Category) -> bool:
    """Whether observer can receive messages published for category."""
    if category_key(category) in declared_capabilities(observer):
        return True
    return isinstance(category, type) and isinstance(observer, category)
