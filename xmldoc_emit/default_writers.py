"""Default writer table and writer resolution by node type."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from xmldoc_emit.doc_markup_writer import write_doc_element
from xmldoc_emit.document_nodes import (
    AssemblyNode,
    DocElementNode,
    DocEntryNode,
    EventNode,
    FieldNode,
    MethodNode,
    PropertyNode,
    RootNode,
    TypeNode,
)
from xmldoc_emit.node_collection import NodeCollection
from xmldoc_emit.node_writer import writer_key
from xmldoc_emit.selectors import (
    ASSEMBLIES,
    DOC,
    ELEMENT,
    FIELDS,
    METHODS,
    PROPERTIES,
    TYPES,
)

if TYPE_CHECKING:
    from xmldoc_emit.emission_context import EmissionContext

WriterFn = Callable[["EmissionContext"], Any]

# Local key read by the default writers when enumerating members.
INCLUDE_NON_PUBLIC = "include_non_public"


def _write_each(ctx: EmissionContext) -> None:
    ctx.for_each(lambda element: element.write())


def write_root(ctx: EmissionContext) -> None:
    _write_each(ctx.select(ASSEMBLIES))


def write_assembly(ctx: EmissionContext) -> None:
    _write_each(ctx.select(TYPES))


def write_type(ctx: EmissionContext) -> None:
    include = ctx.get_local(INCLUDE_NON_PUBLIC, False)
    for selector in (PROPERTIES, METHODS, FIELDS):
        _write_each(ctx.select(selector, include_non_public=include))


def write_member(ctx: EmissionContext) -> None:
    ctx.select(DOC).write()


def write_doc_entry(ctx: EmissionContext) -> None:
    ctx.select(ELEMENT, "summary").write()


DEFAULT_WRITERS: dict[type, WriterFn] = {
    RootNode: write_root,
    AssemblyNode: write_assembly,
    TypeNode: write_type,
    FieldNode: write_member,
    PropertyNode: write_member,
    MethodNode: write_member,
    EventNode: write_member,
    DocEntryNode: write_doc_entry,
    DocElementNode: write_doc_element,
    NodeCollection: _write_each,
}


def resolve_writer(local: Mapping, node_type: type) -> WriterFn:
    """Find the writer for ``node_type``.

    A writer installed in ``local`` for the type or any base class wins over
    the default table; both are searched in method resolution order.
    """
    for cls in node_type.__mro__:
        override = local.get(writer_key(cls))
        if override is not None:
            return override.fn
    for cls in node_type.__mro__:
        if cls in DEFAULT_WRITERS:
            return DEFAULT_WRITERS[cls]
    raise TypeError(f"No writer for {node_type.__name__}")
