"""A named bundle of context configuration applied in one ``using`` call."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xmldoc_emit.emission_context import EmissionContext


@dataclass(frozen=True)
class EmitPreset:
    name: str
    configure: Callable[[EmissionContext], EmissionContext]

    def apply(self, ctx: EmissionContext) -> EmissionContext:
        return self.configure(ctx)
