"""Renders documentation-comment markup (``<summary>`` bodies and the like).

Text is written as-is. Known tags are mapped onto the active formatters and
links; unknown tags contribute their trimmed content. A branch can replace
the rendering of any tag with ``ctx.using(DocTagWriter(tag, fn))``.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from xmldoc_emit.formatter import write_code, write_inline_code
from xmldoc_emit.links import link
from xmldoc_emit.normalize_doc_comment import normalize_comment_text
from xmldoc_emit.render_filter import STRIP_BLANK_LINES, TRIM

if TYPE_CHECKING:
    from xmldoc_emit.emission_context import EmissionContext

TagFn = Callable[["EmissionContext", ET.Element], Any]

KIND_PREFIX_RE = re.compile(r"^[A-Z]:")
ARITY_RE = re.compile(r"`+\d+")


@dataclass(frozen=True)
class DocTagWriter:
    tag: str
    fn: TagFn

    @property
    def extension_key(self) -> tuple[str, str]:
        return ("doc_tag", self.tag)


def cref_key(cref: str) -> str:
    """Strip the kind tag from a cref: ``T:NS.Foo`` -> ``NS.Foo``."""
    return KIND_PREFIX_RE.sub("", cref)


def cref_display_name(cref: str) -> str:
    """Short display name for a cref: ``M:NS.Foo.Bar(System.Int32)`` -> ``Bar``."""
    name = cref_key(cref).split("(", 1)[0]
    name = ARITY_RE.sub("", name)
    return name.rsplit(".", 1)[-1].replace("#", ".")


def element_text(element: ET.Element) -> str:
    return "".join(element.itertext())


def write_doc_element(ctx: EmissionContext) -> None:
    """Default writer for doc element nodes."""
    element = ctx.node.element
    ctx.with_filter(STRIP_BLANK_LINES, lambda c: write_content(c, element))


def write_content(ctx: EmissionContext, element: ET.Element) -> EmissionContext:
    """Write the text and child markup of ``element``."""
    if element.text:
        ctx.append(element.text)
    for child in element:
        write_tag(ctx, child)
        if child.tail:
            ctx.append(child.tail)
    return ctx


def write_tag(ctx: EmissionContext, element: ET.Element) -> EmissionContext:
    override = ctx.get_local(("doc_tag", element.tag))
    fn = override.fn if override is not None else TAG_WRITERS.get(element.tag)
    if fn is None:
        fn = _write_unknown
    fn(ctx, element)
    return ctx


def _write_inline_code(ctx: EmissionContext, element: ET.Element) -> None:
    write_inline_code(ctx, element_text(element))


def _write_code_block(ctx: EmissionContext, element: ET.Element) -> None:
    write_code(ctx, normalize_comment_text(element_text(element)))


def _write_para(ctx: EmissionContext, element: ET.Element) -> None:
    ctx.append("\n\n")
    ctx.with_filter(TRIM, lambda c: write_content(c, element))
    ctx.append("\n\n")


def _write_see(ctx: EmissionContext, element: ET.Element) -> None:
    contents = element_text(element).strip()
    cref = element.get("cref")
    if cref:
        link(ctx, cref_key(cref), contents or cref_display_name(cref))
    elif element.get("href"):
        href = element.get("href")
        ctx.append(f"[{contents or href}]({href})")
    elif element.get("langword"):
        write_inline_code(ctx, element.get("langword"))
    else:
        ctx.append(contents)


def _write_name_ref(ctx: EmissionContext, element: ET.Element) -> None:
    write_inline_code(ctx, element.get("name", ""))


def _write_unknown(ctx: EmissionContext, element: ET.Element) -> None:
    ctx.with_filter(TRIM, lambda c: write_content(c, element))


TAG_WRITERS: dict[str, TagFn] = {
    "c": _write_inline_code,
    "code": _write_code_block,
    "para": _write_para,
    "see": _write_see,
    "seealso": _write_see,
    "paramref": _write_name_ref,
    "typeparamref": _write_name_ref,
}
