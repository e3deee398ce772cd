"""Shared fixtures: a small assembly manifest and its XML documentation."""

from pathlib import Path

import pytest

from xmldoc_emit.document_index import DocumentIndex
from xmldoc_emit.source_pair import SourcePair

SAMPLE_MANIFEST = """\
assembly: Sample
types:
  - name: Foo
    namespace: NS
    fields:
      - {name: Count, type: System.Int32}
      - {name: secret, type: System.Int32, visibility: private}
    properties:
      - {name: Name, type: System.String, setter: true}
      - name: Item
        type: System.String
        parameters: [System.Int32]
    methods:
      - name: M
        parameters:
          - {name: x, type: System.Int32}
          - {name: y, type: System.String}
    constructors:
      - parameters: []
  - name: Point
    namespace: NS
    kind: struct
    fields:
      - {name: X, type: System.Double}
  - name: "<>c"
    namespace: NS
    compiler_generated: true
"""

SAMPLE_DOCS = """\
<?xml version="1.0"?>
<doc>
    <assembly>
        <name>Sample</name>
    </assembly>
    <members>
        <member name="T:NS.Foo">
            <summary>
            A foo with a <see cref="T:NS.Point"/>.
            </summary>
            <remarks>Remarks here.</remarks>
        </member>
        <member name="F:NS.Foo.Count">
            <summary>The count.</summary>
        </member>
        <member name="P:NS.Foo.Name">
            <summary>
            The name
            on two lines.
            </summary>
        </member>
        <member name="M:NS.Foo.M(System.Int32,System.String)">
            <summary>Does <c>M</c> with <paramref name="x"/>.</summary>
        </member>
        <member name="T:NS.Point">
            <summary>A point.</summary>
        </member>
    </members>
</doc>
"""


@pytest.fixture
def sample_dir(tmp_path: Path) -> Path:
    """Write the sample manifest and doc file side by side."""
    (tmp_path / "Sample.yml").write_text(SAMPLE_MANIFEST, encoding="utf-8")
    (tmp_path / "Sample.xml").write_text(SAMPLE_DOCS, encoding="utf-8")
    return tmp_path


@pytest.fixture
def sample_index(sample_dir: Path) -> DocumentIndex:
    return DocumentIndex.build([SourcePair(sample_dir / "Sample.yml")])
