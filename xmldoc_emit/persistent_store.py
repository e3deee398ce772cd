"""Shared, write-once extension store visible to a whole traversal."""

import threading
from collections.abc import Callable, Hashable
from typing import Any

from xmldoc_emit.errors import WriteOnceConflict

_MISSING = object()


class PersistentStore:
    """Thread-safe key/value store shared by every context of one root.

    ``set_once`` implements first-writer-wins: re-setting a key to an equal
    value is accepted, a different value raises :class:`WriteOnceConflict`.
    """

    def __init__(self, values: dict | None = None) -> None:
        self._lock = threading.RLock()
        self._values: dict[Hashable, Any] = dict(values or {})

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._values

    def get_or_add(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Return the value for ``key``, creating it with ``factory`` if absent."""
        with self._lock:
            value = self._values.get(key, _MISSING)
            if value is _MISSING:
                value = factory()
                self._values[key] = value
            return value

    def set_once(self, key: Hashable, value: Any) -> Any:
        with self._lock:
            existing = self._values.get(key, _MISSING)
            if existing is _MISSING:
                self._values[key] = value
                return value
            if existing == value:
                return existing
            raise WriteOnceConflict(key, existing, value)

    def submap(self, name: str) -> "PersistentStore":
        """Return the named nested store, creating it on first use."""
        return self.get_or_add(("submap", name), PersistentStore)

    def items(self) -> list[tuple[Hashable, Any]]:
        with self._lock:
            return list(self._values.items())

    def snapshot(self) -> "PersistentStore":
        """Return an independent copy; nested stores are copied too."""
        with self._lock:
            copied = {
                k: v.snapshot() if isinstance(v, PersistentStore) else v
                for k, v in self._values.items()
            }
        return PersistentStore(copied)

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
