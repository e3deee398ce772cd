"""The bundled recipe: a single-page Markdown API reference.

Layout::

    # <title>
    ## <assembly>
    ### <struct or class>     (anchored, registered as a link target)
    <summary and remarks>
    #### Properties / Methods / Fields
    Name | Summary           (one row per member, summary on one line)
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from xmldoc_emit.default_writers import INCLUDE_NON_PUBLIC
from xmldoc_emit.doc_markup_writer import cref_key
from xmldoc_emit.document_nodes import (
    AssemblyNode,
    EventNode,
    FieldNode,
    MethodNode,
    PropertyNode,
    TypeNode,
)
from xmldoc_emit.errors import ConversionError
from xmldoc_emit.formatter import HeaderFormatter, indent_header, write_header
from xmldoc_emit.links import set_link_target
from xmldoc_emit.node_writer import NodeWriter
from xmldoc_emit.render_filter import COLLAPSE_NEWLINES, TRIM, regex_replace, replace
from xmldoc_emit.selectors import (
    ASSEMBLIES,
    CLASSES,
    CONSTRUCTORS,
    DOC,
    ELEMENT,
    EVENTS,
    FIELDS,
    METHODS,
    PROPERTIES,
    STRUCTS,
)

if TYPE_CHECKING:
    from xmldoc_emit.emission_context import EmissionContext

logger = logging.getLogger(__name__)

ANCHOR_UNSAFE_RE = re.compile(r"[^\w.\-]")

# section name -> (heading, column label, selector)
SECTIONS = {
    "constructors": ("Constructors", "Constructor", CONSTRUCTORS),
    "properties": ("Properties", "Property", PROPERTIES),
    "methods": ("Methods", "Method", METHODS),
    "fields": ("Fields", "Field", FIELDS),
    "events": ("Events", "Event", EVENTS),
}

SUMMARY_CELL = (
    COLLAPSE_NEWLINES.then(TRIM)
    .then(replace("|", "\\|"))
    .then(regex_replace("\n", "<br>"))
)


def write_api_reference(ctx: EmissionContext, config: dict[str, Any]) -> None:
    """Write the reference for every loaded assembly into ``ctx``."""
    reference = config.get("reference", {})
    sections = reference.get("sections") or list(SECTIONS)
    unknown = [s for s in sections if s not in SECTIONS]
    if unknown:
        raise ConversionError(f"Unknown reference sections: {', '.join(unknown)}")

    ctx = (
        ctx.using(HeaderFormatter(reference.get("header_level", 1)))
        .with_local(INCLUDE_NON_PUBLIC, reference.get("include_non_public", False))
        .using(NodeWriter(AssemblyNode, _write_assembly))
        .using(NodeWriter(TypeNode, lambda c: _write_type(c, sections)))
    )
    for member_type in (FieldNode, PropertyNode, MethodNode, EventNode):
        ctx = ctx.using(NodeWriter(member_type, _write_member_row))

    write_header(ctx, reference.get("title", "API Reference"))
    ctx.line()
    ctx.select(ASSEMBLIES).for_each(lambda assembly: assembly.write())


def _write_assembly(ctx: EmissionContext) -> None:
    ctx = indent_header(ctx)
    write_header(ctx, ctx.node.name)
    ctx.line()
    types = indent_header(ctx)
    types.select(STRUCTS).for_each(lambda t: t.write())
    types.select(CLASSES).for_each(lambda t: t.write())


def type_anchor(key: str) -> str:
    """Anchor name for a type key: ``NS.Box`1`` -> ``NS.Box-1``."""
    return ANCHOR_UNSAFE_RE.sub("-", key)


def _write_type(ctx: EmissionContext, sections: list[str]) -> None:
    node: TypeNode = ctx.node
    key = cref_key(node.identity)
    anchor = type_anchor(key)
    logger.debug("Writing reference for %s", key)
    set_link_target(ctx, key, "#" + anchor)
    write_header(ctx, f'<a name="{anchor}"></a>{node.name}')
    ctx.line()

    doc = ctx.select(DOC)
    doc.write()
    if doc.node.entry.find_element("remarks") is not None:
        ctx.line().line()
        doc.select(ELEMENT, "remarks").write()
    ctx.line().line()

    members = indent_header(ctx)
    include = ctx.get_local(INCLUDE_NON_PUBLIC, False)
    for section in sections:
        heading, label, selector = SECTIONS[section]
        members.select(selector, include_non_public=include).if_any(
            lambda c, heading=heading, label=label: _write_member_table(
                c, heading, label
            )
        )


def _write_member_table(ctx: EmissionContext, heading: str, label: str) -> None:
    write_header(ctx, heading)
    ctx.line()
    ctx.line(f"{label} | Summary")
    ctx.line(f"{'-' * len(label)} | -------")
    ctx.write()
    ctx.line()


def _write_member_row(ctx: EmissionContext) -> None:
    info = ctx.node.info
    is_constructor = getattr(info, "is_constructor", False)
    name = info.declaring_type.name if is_constructor else info.name
    ctx.append(f"{name} | ")
    ctx.with_filter(
        SUMMARY_CELL, lambda c: c.select(DOC).select(ELEMENT, "summary").write()
    )
    ctx.line()
