"""Branch-private configuration map with structural sharing."""

from collections.abc import Hashable, Iterator, Mapping
from types import MappingProxyType
from typing import Any


class LocalScope(Mapping):
    """Immutable mapping; ``set`` and ``remove`` return new scopes.

    Each new scope copies the key table shallowly, so values are shared with
    the scope it came from and the original is never modified.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping | None = None) -> None:
        self._values = MappingProxyType(dict(values or {}))

    def __getitem__(self, key: Hashable) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def set(self, key: Hashable, value: Any) -> "LocalScope":
        values = dict(self._values)
        values[key] = value
        return LocalScope(values)

    def remove(self, key: Hashable) -> "LocalScope":
        if key not in self._values:
            return self
        values = dict(self._values)
        del values[key]
        return LocalScope(values)

    def __repr__(self) -> str:
        return f"LocalScope({dict(self._values)!r})"
