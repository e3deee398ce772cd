"""Data model for a single documentation entry."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from xmldoc_emit.normalize_doc_comment import inner_markup


@dataclass(frozen=True)
class DocumentationEntry:
    """A normalized ``<member>`` comment tree plus its raw source form."""

    assembly: str
    identity: str
    element: ET.Element = field(compare=False, repr=False)
    raw: str = field(default="", repr=False)
    source: str = ""

    @classmethod
    def empty(cls, assembly: str, identity: str) -> "DocumentationEntry":
        """Entry for a member that has no documentation."""
        return cls(assembly, identity, ET.Element("member", name=identity))

    @property
    def kind(self) -> str:
        """One-letter kind tag (``T``, ``M``, ...), or ``""`` if untagged."""
        tag, sep, _ = self.identity.partition(":")
        return tag if sep else ""

    @property
    def is_empty(self) -> bool:
        return len(self.element) == 0 and not (self.element.text or "").strip()

    @property
    def body(self) -> str:
        """The normalized inner markup text."""
        return inner_markup(self.element)

    def find_element(self, name: str) -> ET.Element | None:
        """Return the first direct child element named ``name``."""
        return self.element.find(name)
