"""Type-keyed registry holding one instance of each session state fragment.

Focus, entry buffer, file list, and launch arguments live side by side here
instead of in one monolithic state object. Lookups are by exact class, and a
missing entry is a programming error that fails immediately.
"""

from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class MissingResourceError(LookupError):
    """Raised when a resource type was never inserted into the registry."""


class ReadOnlyResourceError(TypeError):
    """Raised when a mutating method is called through a read-only view."""


def mutator(func: Callable[..., Any]) -> Callable[..., Any]:
    """Mark a state method as mutating so read-only views refuse to call it."""
    func.__mutates_resource__ = True
    return func


class ReadOnly(Generic[T]):
    """Attribute-forwarding view that blocks writes and ``@mutator`` methods."""

    __slots__ = ("_target",)

    def __init__(self, target: T) -> None:
        object.__setattr__(self, "_target", target)

    def __getattr__(self, name: str) -> Any:
        value = getattr(self._target, name)
        if getattr(value, "__mutates_resource__", False):
            raise ReadOnlyResourceError(
                f"{type(self._target).__name__}.{name} mutates state; use get_mut()"
            )
        # Collections come back as copies that cannot reach the live state.
        if isinstance(value, list):
            return tuple(value)
        if isinstance(value, (set, frozenset)):
            return frozenset(value)
        if isinstance(value, dict):
            return MappingProxyType(dict(value))
        return value

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"read-only view of {type(self._target).__name__}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"read-only view of {type(self._target).__name__}")

    def __bool__(self) -> bool:
        return bool(self._target)

    def __len__(self) -> int:
        return len(self._target)

    def __iter__(self):
        return iter(self._target)

    def __repr__(self) -> str:
        return f"ReadOnly({self._target!r})"


class Resources:
    def __init__(self) -> None:
        self._entries: dict[type, object] = {}

    def insert(self, value: object) -> None:
        """Store ``value`` under its exact type, replacing any previous instance."""
        self._entries[type(value)] = value

    def _lookup(self, cls: type[T]) -> T:
        try:
            return self._entries[cls]  # type: ignore[return-value]
        except KeyError:
            raise MissingResourceError(f"resource {cls.__qualname__} was never inserted") from None

    def get(self, cls: type[T]) -> ReadOnly[T]:
        return ReadOnly(self._lookup(cls))

    def get_mut(self, cls: type[T]) -> T:
        return self._lookup(cls)

    def __contains__(self, cls: object) -> bool:
        return cls in self._entries

    def view(self) -> ResourcesView:
        """Return a handle that only exposes read-only lookups."""
        return ResourcesView(self)


class ResourcesView:
    """Read-only registry handle passed to renderers."""

    __slots__ = ("_resources",)

    def __init__(self, resources: Resources) -> None:
        self._resources = resources

    def get(self, cls: type[T]) -> ReadOnly[T]:
        return self._resources.get(cls)

    def __contains__(self, cls: object) -> bool:
        return cls in self._resources
