"""Whitespace normalization for documentation comment bodies."""

import re
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape

from xmldoc_emit.errors import LoadFailure

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def normalize_comment_text(text: str) -> str:
    """Strip blank edge lines and the common leading-space indentation.

    Only whole whitespace lines at the start and end and the shared run of
    leading spaces are removed; everything else is kept verbatim.
    """
    lines = LINE_BREAK_RE.split(text)
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()

    indents = [len(line) - len(line.lstrip(" ")) for line in lines if line.strip()]
    common = min(indents, default=0)
    return "\n".join(line[common:] for line in lines)


def inner_markup(element: ET.Element) -> str:
    """Serialize the content of an element without its own start/end tags."""
    parts = [escape(element.text or "")]
    parts.extend(ET.tostring(child, encoding="unicode") for child in element)
    return "".join(parts)


def normalize_member_element(
    element: ET.Element, source: str = "<memory>"
) -> ET.Element:
    """Return a new ``<member>`` element whose body has been normalized."""
    text = normalize_comment_text(inner_markup(element))
    try:
        normalized = ET.fromstring(f"<member>{text}</member>")
    except ET.ParseError as exc:
        reason = f"cannot re-parse {element.get('name')}: {exc}"
        raise LoadFailure(source, reason) from exc
    normalized.attrib.update(element.attrib)
    return normalized
