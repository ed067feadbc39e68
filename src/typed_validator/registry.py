"""Thread-safe registry of named items.

The scalar library is a ``Registry[ScalarType]`` that is frozen once the
built-ins are registered, which makes the process-wide library read-only.

Example:
    ```python
    from typed_validator.registry import Registry

    registry = Registry[str]("colors")
    registry.register("red", "#f00")
    registry.freeze()
    registry.get("red")
    # '#f00'
    ```
"""

import threading
from typing import Dict, Generic, Iterator, List, TypeVar

from typed_validator.exceptions import NotFoundError, OperationError

T = TypeVar("T")


class Registry(Generic[T]):
    """Registry for managing named items.

    Items are registered by unique key. Once ``freeze()`` is called the
    registry rejects any further registration or removal.

    Args:
        name: Name for this registry instance (used in error context)
    """

    def __init__(self, name: str):
        self._name = name
        self._items: Dict[str, T] = {}
        self._lock = threading.RLock()
        self._frozen = False

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    @property
    def frozen(self) -> bool:
        """Whether the registry has been frozen."""
        return self._frozen

    def freeze(self) -> None:
        """Make the registry read-only."""
        with self._lock:
            self._frozen = True

    def register(self, key: str, item: T, allow_overwrite: bool = False) -> None:
        """Register an item by key.

        Args:
            key: Unique identifier for the item
            item: Item to register
            allow_overwrite: Whether to allow overwriting existing items

        Raises:
            OperationError: If the registry is frozen, or the key exists and
                allow_overwrite is False
        """
        with self._lock:
            if self._frozen:
                raise OperationError(
                    f"Registry {self._name} is frozen",
                    context={"key": key, "registry": self._name},
                )
            if not allow_overwrite and key in self._items:
                raise OperationError(
                    f"Item '{key}' already registered in {self._name}",
                    context={"key": key, "registry": self._name},
                )
            self._items[key] = item

    def unregister(self, key: str) -> T:
        """Unregister and return an item by key.

        Raises:
            OperationError: If the registry is frozen
            NotFoundError: If item not found
        """
        with self._lock:
            if self._frozen:
                raise OperationError(
                    f"Registry {self._name} is frozen",
                    context={"key": key, "registry": self._name},
                )
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={"key": key, "registry": self._name},
                )
            return self._items.pop(key)

    def get(self, key: str) -> T:
        """Get an item by key.

        Raises:
            NotFoundError: If item not found
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={
                        "key": key,
                        "registry": self._name,
                        "available_keys": list(self._items.keys()),
                    },
                )
            return self._items[key]

    def get_optional(self, key: str) -> T | None:
        """Get an item by key, returning None if not found."""
        with self._lock:
            return self._items.get(key)

    def has(self, key: str) -> bool:
        """Check if item exists."""
        with self._lock:
            return key in self._items

    def list_keys(self) -> List[str]:
        """List all registered keys in registration order."""
        with self._lock:
            return list(self._items.keys())

    def list_items(self) -> List[T]:
        """List all registered items in registration order."""
        with self._lock:
            return list(self._items.values())

    def items(self) -> List[tuple[str, T]]:
        """Get all key-item pairs."""
        with self._lock:
            return list(self._items.items())

    def count(self) -> int:
        """Get count of registered items."""
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_keys())

    def __repr__(self) -> str:
        return f"Registry(name={self._name!r}, items={self.count()}, frozen={self._frozen})"
