"""Capability interfaces implemented by document nodes.

Each node class implements only the capabilities it supports; selectors are
declared against a capability, never against a concrete node class.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xmldoc_emit.document_nodes import (
        AssemblyNode,
        ClassNode,
        DocElementNode,
        DocEntryNode,
        EventNode,
        FieldNode,
        MethodNode,
        PropertyNode,
        StructNode,
        TypeNode,
    )


class AssemblyProvider(ABC):
    """Yields assembly nodes."""

    @abstractmethod
    def get_assemblies(self) -> Sequence[AssemblyNode]: ...


class TypeProvider(ABC):
    """Yields type nodes, split into class and struct variants."""

    @abstractmethod
    def get_classes(self) -> Sequence[ClassNode]: ...

    @abstractmethod
    def get_structs(self) -> Sequence[StructNode]: ...

    @abstractmethod
    def get_types(self) -> Sequence[TypeNode]:
        """Classes and structs together, in declaration order."""


class MemberProvider(ABC):
    """Yields field, property, method, constructor and event nodes."""

    @abstractmethod
    def get_fields(self, include_non_public: bool = False) -> Sequence[FieldNode]: ...

    @abstractmethod
    def get_properties(
        self, include_non_public: bool = False
    ) -> Sequence[PropertyNode]: ...

    @abstractmethod
    def get_methods(self, include_non_public: bool = False) -> Sequence[MethodNode]: ...

    @abstractmethod
    def get_constructors(
        self, include_non_public: bool = False
    ) -> Sequence[MethodNode]: ...

    @abstractmethod
    def get_events(self, include_non_public: bool = False) -> Sequence[EventNode]: ...


class DocEntryProvider(ABC):
    """Yields the node's own documentation entry."""

    @abstractmethod
    def get_doc_entry(self) -> DocEntryNode: ...


class DocElementProvider(ABC):
    """Yields a named sub-element (``summary``, ``remarks``...) of an entry."""

    @abstractmethod
    def get_doc_element(self, name: str) -> DocElementNode: ...
