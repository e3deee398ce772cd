"""Logic for loading compiler-generated XML documentation files."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from xmldoc_emit.errors import LoadFailure


@dataclass
class DocSource:
    """The ``<member>`` elements of one XML documentation file, in file order."""

    assembly_name: str
    members: list[ET.Element] = field(default_factory=list)
    path: str = "<memory>"


def parse_doc_source(text: str, path: str = "<memory>") -> DocSource:
    """Parse the text of an XML documentation file."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise LoadFailure(path, f"malformed XML: {exc}") from exc

    name_el = root.find("assembly/name")
    assembly_name = (name_el.text or "").strip() if name_el is not None else ""

    members = []
    for member in root.iter("member"):
        if not member.get("name"):
            raise LoadFailure(path, "<member> element without a name attribute")
        members.append(member)
    return DocSource(assembly_name=assembly_name, members=members, path=path)


def load_doc_source(path: Path) -> DocSource:
    """Load and parse an XML documentation file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadFailure(path, str(exc)) from exc
    return parse_doc_source(text, str(path))
