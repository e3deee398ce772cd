"""Selectors: capability-constrained steps from a node to its children."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from xmldoc_emit.capabilities import (
    AssemblyProvider,
    DocElementProvider,
    DocEntryProvider,
    MemberProvider,
    TypeProvider,
)
from xmldoc_emit.document_nodes import (
    AssemblyNode,
    ClassNode,
    DocElementNode,
    DocEntryNode,
    DocumentNode,
    EventNode,
    FieldNode,
    MethodNode,
    PropertyNode,
    StructNode,
    TypeNode,
)
from xmldoc_emit.errors import CapabilityMismatch
from xmldoc_emit.node_collection import NodeCollection

logger = logging.getLogger(__name__)

Cap = TypeVar("Cap")
Item = TypeVar("Item", bound=DocumentNode)
Res = TypeVar("Res", bound=DocumentNode)


@dataclass(frozen=True)
class Selector(Generic[Cap, Item, Res]):
    """A named step requiring ``capability`` and producing ``result_type`` nodes.

    ``fn`` returns either a single node or a sequence of them; sequences are
    wrapped in a :class:`NodeCollection`. The type parameters are the
    capability, the element type (``result_type``) and the node produced
    from a single input node.
    """

    name: str
    capability: type
    result_type: type
    fn: Callable[..., Any]

    def check(self, node: DocumentNode) -> None:
        """Raise if ``node`` cannot be traversed by this selector."""
        if isinstance(node, NodeCollection):
            supported = node.supports(self.capability)
            node_desc = f"collection of {node.element_type.__name__}"
        else:
            supported = isinstance(node, self.capability)
            node_desc = type(node).__name__
        if not supported:
            raise CapabilityMismatch(
                f"Cannot select {self.name}: {node_desc} does not provide "
                f"{self.capability.__name__}"
            )

    def apply(self, node: DocumentNode, *args: Any, **kwargs: Any) -> DocumentNode:
        """Select from ``node``, fanning out over collections."""
        self.check(node)
        if not isinstance(node, NodeCollection):
            return self._wrap(self.fn(node, *args, **kwargs))

        selected: list[DocumentNode] = []
        for element in node:
            result = self._wrap(self.fn(element, *args, **kwargs))
            if isinstance(result, NodeCollection):
                selected.extend(result)
            else:
                selected.append(result)
        logger.debug(
            "Selected %s %s from %s elements", len(selected), self.name, len(node)
        )
        return NodeCollection(tuple(selected), self.result_type)

    def _wrap(self, result: DocumentNode | Sequence[DocumentNode]) -> DocumentNode:
        if isinstance(result, DocumentNode):
            return result
        return NodeCollection(tuple(result), self.result_type)


ASSEMBLIES: Selector[AssemblyProvider, AssemblyNode, NodeCollection[AssemblyNode]] = (
    Selector("assemblies", AssemblyProvider, AssemblyNode, lambda n: n.get_assemblies())
)
CLASSES: Selector[TypeProvider, ClassNode, NodeCollection[ClassNode]] = Selector(
    "classes", TypeProvider, ClassNode, lambda n: n.get_classes()
)
STRUCTS: Selector[TypeProvider, StructNode, NodeCollection[StructNode]] = Selector(
    "structs", TypeProvider, StructNode, lambda n: n.get_structs()
)
TYPES: Selector[TypeProvider, TypeNode, NodeCollection[TypeNode]] = Selector(
    "types", TypeProvider, TypeNode, lambda n: n.get_types()
)
FIELDS: Selector[MemberProvider, FieldNode, NodeCollection[FieldNode]] = Selector(
    "fields",
    MemberProvider,
    FieldNode,
    lambda n, include_non_public=False: n.get_fields(include_non_public),
)
PROPERTIES: Selector[MemberProvider, PropertyNode, NodeCollection[PropertyNode]] = (
    Selector(
        "properties",
        MemberProvider,
        PropertyNode,
        lambda n, include_non_public=False: n.get_properties(include_non_public),
    )
)
METHODS: Selector[MemberProvider, MethodNode, NodeCollection[MethodNode]] = Selector(
    "methods",
    MemberProvider,
    MethodNode,
    lambda n, include_non_public=False: n.get_methods(include_non_public),
)
CONSTRUCTORS: Selector[MemberProvider, MethodNode, NodeCollection[MethodNode]] = (
    Selector(
        "constructors",
        MemberProvider,
        MethodNode,
        lambda n, include_non_public=False: n.get_constructors(include_non_public),
    )
)
EVENTS: Selector[MemberProvider, EventNode, NodeCollection[EventNode]] = Selector(
    "events",
    MemberProvider,
    EventNode,
    lambda n, include_non_public=False: n.get_events(include_non_public),
)
DOC: Selector[DocEntryProvider, DocEntryNode, DocEntryNode] = Selector(
    "doc", DocEntryProvider, DocEntryNode, lambda n: n.get_doc_entry()
)
ELEMENT: Selector[DocElementProvider, DocElementNode, DocElementNode] = Selector(
    "element",
    DocElementProvider,
    DocElementNode,
    lambda n, name: n.get_doc_element(name),
)
