"""Tests for documentation comment normalization."""

import xml.etree.ElementTree as ET

import pytest

from xmldoc_emit.normalize_doc_comment import (
    inner_markup,
    normalize_comment_text,
    normalize_member_element,
)


def test_strips_blank_edges_and_common_indent() -> None:
    """Leading/trailing blank lines and the shared indentation go away."""
    assert normalize_comment_text("  \n    Hello\n    World\n  ") == "Hello\nWorld"


def test_keeps_relative_indentation() -> None:
    """Only the common indentation is removed."""
    text = "\n    if (x)\n        y();\n"
    assert normalize_comment_text(text) == "if (x)\n    y();"


def test_handles_all_line_break_styles() -> None:
    """CRLF, CR and LF all split lines."""
    assert normalize_comment_text("  a\r\n  b\r  c\n") == "a\nb\nc"


def test_blank_inner_lines_do_not_limit_indent() -> None:
    """Whitespace-only lines inside the body are ignored for the minimum."""
    assert normalize_comment_text("    a\n\n    b") == "a\n\nb"


@pytest.mark.parametrize(
    "text",
    [
        "  \n    Hello\n    World\n  ",
        "\n    <summary>\n    Text\n    </summary>\n",
        "plain",
        "",
    ],
)
def test_normalization_is_idempotent(text: str) -> None:
    """Normalizing twice changes nothing further."""
    once = normalize_comment_text(text)
    assert normalize_comment_text(once) == once


def test_inner_markup_excludes_own_tags() -> None:
    """Only the element's content is serialized, child tails included."""
    element = ET.fromstring("<member>a <c>b</c> c &amp; d</member>")
    assert inner_markup(element) == "a <c>b</c> c &amp; d"


def test_normalize_member_element() -> None:
    """The member body is dedented and re-parsed; attributes survive."""
    element = ET.fromstring(
        '<member name="T:NS.Foo">\n'
        "        <summary>\n"
        "        Hello\n"
        "        </summary>\n"
        "    </member>"
    )
    normalized = normalize_member_element(element)
    assert normalized.get("name") == "T:NS.Foo"
    assert normalized.text is None
    summary = normalized.find("summary")
    assert summary.text == "\nHello\n"


def test_normalized_element_is_stable() -> None:
    """Normalizing an already normalized element yields the same markup."""
    element = ET.fromstring(
        '<member name="x">\n  <summary>\n  Hi\n  </summary>\n</member>'
    )
    once = normalize_member_element(element)
    twice = normalize_member_element(once)
    assert ET.tostring(once) == ET.tostring(twice)

