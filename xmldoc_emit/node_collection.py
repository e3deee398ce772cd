"""Homogeneous, immutable collection of document nodes."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from xmldoc_emit.document_nodes import DocumentNode

E = TypeVar("E", covariant=True)


@dataclass(frozen=True)
class NodeCollection(DocumentNode, Generic[E]):
    """An ordered group of nodes sharing one element type.

    A collection supports a capability exactly when its element type does.
    """

    elements: tuple[E, ...]
    element_type: type

    @classmethod
    def of(cls, elements: Iterable[DocumentNode], element_type: type):
        elements = tuple(elements)
        for element in elements:
            if not isinstance(element, element_type):
                raise TypeError(
                    f"{type(element).__name__} in a collection of "
                    f"{element_type.__name__}"
                )
        return cls(elements, element_type)

    def supports(self, capability: type) -> bool:
        return issubclass(self.element_type, capability)

    @property
    def is_empty(self) -> bool:
        return not self.elements

    def __iter__(self) -> Iterator[E]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, position: int) -> E:
        return self.elements[position]
