"""Typed nodes of the logical document tree.

Nodes are thin, frozen views over the metadata graph and the document index.
They can be rebuilt at any time and hold no mutable state.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from xmldoc_emit.capabilities import (
    AssemblyProvider,
    DocElementProvider,
    DocEntryProvider,
    MemberProvider,
    TypeProvider,
)
from xmldoc_emit.document_index import DocumentIndex
from xmldoc_emit.documentation_entry import DocumentationEntry
from xmldoc_emit.member_identity import member_identity
from xmldoc_emit.metadata_model import (
    AssemblyInfo,
    EventInfo,
    FieldInfo,
    MemberInfo,
    MethodInfo,
    PropertyInfo,
    TypeInfo,
)

TYPE_NODE_KINDS = ("class", "struct")


class DocumentNode:
    """Base class of every node in the document tree."""


@dataclass(frozen=True)
class RootNode(DocumentNode, AssemblyProvider):
    """The root of the tree; owns the document index."""

    index: DocumentIndex = field(repr=False)

    def get_assemblies(self) -> tuple[AssemblyNode, ...]:
        return tuple(AssemblyNode(self.index, a) for a in self.index.assemblies)


@dataclass(frozen=True)
class AssemblyNode(DocumentNode, TypeProvider):
    index: DocumentIndex = field(repr=False)
    assembly: AssemblyInfo

    @property
    def name(self) -> str:
        return self.assembly.name

    def _type_nodes(self, kinds: tuple[str, ...]) -> tuple[TypeNode, ...]:
        nodes: list[TypeNode] = []
        for info in self.assembly.iter_types():
            if info.compiler_generated or info.kind not in kinds:
                continue
            node_cls = StructNode if info.kind == "struct" else ClassNode
            nodes.append(node_cls(self.index, self.assembly.name, info))
        return tuple(nodes)

    def get_classes(self) -> tuple[ClassNode, ...]:
        return self._type_nodes(("class",))  # type: ignore[return-value]

    def get_structs(self) -> tuple[StructNode, ...]:
        return self._type_nodes(("struct",))  # type: ignore[return-value]

    def get_types(self) -> tuple[TypeNode, ...]:
        return self._type_nodes(TYPE_NODE_KINDS)


@dataclass(frozen=True)
class _MetadataNode(DocumentNode, DocEntryProvider):
    """A node backed by a type or member with its own doc entry."""

    index: DocumentIndex = field(repr=False)
    assembly_name: str
    info: TypeInfo | MemberInfo

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def identity(self) -> str:
        return member_identity(self.info)

    def get_doc_entry(self) -> DocEntryNode:
        return DocEntryNode(self.index.lookup(self.assembly_name, self.identity))


@dataclass(frozen=True)
class TypeNode(_MetadataNode, MemberProvider):
    info: TypeInfo

    @property
    def full_name(self) -> str:
        return self.info.full_name

    def _members(self, node_cls, members, include_non_public):
        return tuple(
            node_cls(self.index, self.assembly_name, m)
            for m in members
            if include_non_public or m.is_public
        )

    def get_fields(self, include_non_public: bool = False) -> tuple[FieldNode, ...]:
        return self._members(FieldNode, self.info.fields, include_non_public)

    def get_properties(
        self, include_non_public: bool = False
    ) -> tuple[PropertyNode, ...]:
        return self._members(PropertyNode, self.info.properties, include_non_public)

    def get_methods(self, include_non_public: bool = False) -> tuple[MethodNode, ...]:
        return self._members(MethodNode, self.info.methods, include_non_public)

    def get_constructors(
        self, include_non_public: bool = False
    ) -> tuple[MethodNode, ...]:
        return self._members(MethodNode, self.info.constructors, include_non_public)

    def get_events(self, include_non_public: bool = False) -> tuple[EventNode, ...]:
        return self._members(EventNode, self.info.events, include_non_public)


class ClassNode(TypeNode):
    pass


class StructNode(TypeNode):
    pass


@dataclass(frozen=True)
class FieldNode(_MetadataNode):
    info: FieldInfo


@dataclass(frozen=True)
class PropertyNode(_MetadataNode):
    info: PropertyInfo


@dataclass(frozen=True)
class MethodNode(_MetadataNode):
    info: MethodInfo


@dataclass(frozen=True)
class EventNode(_MetadataNode):
    info: EventInfo


@dataclass(frozen=True)
class DocEntryNode(DocumentNode, DocElementProvider):
    entry: DocumentationEntry

    def get_doc_element(self, name: str) -> DocElementNode:
        """Return the named child element, or an empty one if it is absent."""
        element = self.entry.find_element(name)
        if element is None:
            element = ET.Element(name)
        return DocElementNode(self.entry, name, element)


@dataclass(frozen=True)
class DocElementNode(DocumentNode):
    """One named child of a doc entry; nodes compare by entry and tag."""

    entry: DocumentationEntry = field(repr=False)
    tag: str
    element: ET.Element = field(compare=False, repr=False)
