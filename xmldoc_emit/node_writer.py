"""Per-node-type writer overrides installed through ``using``."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xmldoc_emit.emission_context import EmissionContext


def writer_key(node_type: type) -> tuple[str, type]:
    return ("writer", node_type)


@dataclass(frozen=True)
class NodeWriter:
    """Replaces the default writer for ``node_type`` and its subclasses."""

    node_type: type
    fn: Callable[[EmissionContext], Any]

    @property
    def extension_key(self) -> tuple[str, type]:
        return writer_key(self.node_type)
