"""A generic registry of builders keyed by identifier."""

from __future__ import annotations

from typing import Any, Callable, Generic, Hashable, TypeVar

T = TypeVar("T")


class Factory(Generic[T]):
    """Maps identifiers to builders that produce objects."""

    def __init__(self) -> None:
        self._storage: dict[Hashable, Callable[..., T]] = {}

    def create(self, name: Hashable, *args: Any, **kwargs: Any) -> T:
        """Build the object registered under ``name``."""
        return self.get(name)(*args, **kwargs)

    def get(self, name: Hashable) -> Callable[..., T]:
        """Return the builder registered under ``name``."""
        try:
            return self._storage[name]
        except KeyError:
            raise ValueError(f"Identifier {name} is not stored in the factory") from None

    def add(self, name: Hashable, builder: Callable[..., T]) -> None:
        """Register ``builder`` under ``name``; registering twice is an error."""
        if name in self._storage:
            raise ValueError(
                f"Double registration in Factory of id: {name} is not allowed"
            )
        self._storage[name] = builder

    def registered(self) -> list[Hashable]:
        """Identifiers currently registered, in sorted order."""
        return sorted(self._storage)

    def unregister(self, name: Hashable) -> None:
        """Remove ``name`` if present."""
        self._storage.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._storage

    def __len__(self) -> int:
        return len(self._storage)