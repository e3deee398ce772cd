"""Tests for the bundled API reference recipe."""

from pathlib import Path

from xmldoc_emit.api_reference import type_anchor, write_api_reference
from xmldoc_emit.document_index import DocumentIndex
from xmldoc_emit.emission_context import EmissionContext
from xmldoc_emit.load_config import load_config
from xmldoc_emit.markdown_presets import MARKDOWN_GITHUB
from xmldoc_emit.source_pair import SourcePair

GENERIC_MANIFEST = """\
assembly: Boxes
types:
  - {name: Box, namespace: NS, generic_parameters: [T]}
  - {name: Box, namespace: NS}
  - {name: User, namespace: NS}
"""

GENERIC_DOCS = """\
<?xml version="1.0"?>
<doc>
    <assembly><name>Boxes</name></assembly>
    <members>
        <member name="T:NS.User">
            <summary>
            Holds a <see cref="T:NS.Box`1"/>
            and a <see cref="T:NS.Box"/>.
            </summary>
        </member>
    </members>
</doc>
"""


def render(tmp_path: Path) -> str:
    (tmp_path / "Boxes.yml").write_text(GENERIC_MANIFEST, encoding="utf-8")
    (tmp_path / "Boxes.xml").write_text(GENERIC_DOCS, encoding="utf-8")
    index = DocumentIndex.build([SourcePair(tmp_path / "Boxes.yml")])
    ctx = EmissionContext.create(index).using(MARKDOWN_GITHUB)
    write_api_reference(ctx, load_config(None))
    return ctx.text()


def test_type_anchor() -> None:
    assert type_anchor("NS.Point") == "NS.Point"
    assert type_anchor("NS.Box`1") == "NS.Box-1"
    assert type_anchor("NS.Map`2") == "NS.Map-2"


def test_generic_types_are_linked(tmp_path: Path) -> None:
    """A cref to a generic type resolves to that type's anchor."""
    text = render(tmp_path)
    assert "Holds a [Box](#NS.Box-1)\nand a [Box](#NS.Box)." in text


def test_generic_and_plain_types_get_distinct_anchors(tmp_path: Path) -> None:
    """Box and Box<T> each get exactly one anchor of their own."""
    text = render(tmp_path)
    assert text.count('<a name="NS.Box-1"></a>Box') == 1
    assert text.count('<a name="NS.Box"></a>Box') == 1
