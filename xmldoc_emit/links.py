"""Named link targets shared across a whole emission run."""

from __future__ import annotations

from typing import TYPE_CHECKING

from xmldoc_emit.errors import DuplicateLinkTarget, WriteOnceConflict
from xmldoc_emit.output_sink import LazySource

if TYPE_CHECKING:
    from xmldoc_emit.emission_context import EmissionContext

LINK_TARGETS = "link_targets"


def set_link_target(ctx: EmissionContext, key: str, ref: str) -> EmissionContext:
    """Register ``ref`` as the target of ``key``; each key may be set once."""
    targets = ctx.persistent.submap(LINK_TARGETS)
    try:
        targets.set_once(key, ref)
    except WriteOnceConflict as exc:
        raise DuplicateLinkTarget(key, exc.existing, exc.attempted) from exc
    return ctx


def get_link_target(ctx: EmissionContext, key: str) -> str | None:
    return ctx.persistent.submap(LINK_TARGETS).get(key)


def link(
    ctx: EmissionContext, key: str, contents: str | None = None
) -> EmissionContext:
    """Write ``contents`` as a link to ``key``'s target.

    The target is looked up when the output is read, so links may refer to
    targets registered later in the run. Unknown keys render as plain text.
    """
    targets = ctx.persistent.submap(LINK_TARGETS)
    text = contents if contents is not None else key

    def render() -> str:
        ref = targets.get(key)
        return f"[{text}]({ref})" if ref is not None else text

    return ctx.append_source(LazySource(render))
