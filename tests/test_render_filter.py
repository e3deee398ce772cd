"""Tests for render filters."""

from xmldoc_emit.render_filter import (
    COLLAPSE_NEWLINES,
    IDENTITY,
    STRIP_BLANK_LINES,
    TRIM,
    indent,
    regex_replace,
    replace,
)


def test_identity_and_trim() -> None:
    assert IDENTITY("  x \n") == "  x \n"
    assert TRIM("  x \n") == "x"


def test_collapse_newlines() -> None:
    """Single line breaks join with a space; blank-line runs become one break."""
    assert COLLAPSE_NEWLINES("a\nb") == "a b"
    assert COLLAPSE_NEWLINES("a  \n   b") == "a b"
    assert COLLAPSE_NEWLINES("a\n\nb") == "a\nb"
    assert COLLAPSE_NEWLINES("a\n  \n\n b") == "a\nb"
    assert COLLAPSE_NEWLINES("one\ntwo\nthree") == "one two three"
    assert COLLAPSE_NEWLINES("one\ntwo\n\nthree\nfour") == "one two\nthree four"


def test_indent() -> None:
    assert indent("    ")("a\nb") == "    a\n    b"
    assert indent("> ", 2)("x") == "> > x"


def test_replace_and_regex_replace() -> None:
    assert replace("|", "\\|")("a|b") == "a\\|b"
    assert regex_replace(r"\s+", " ")("a \n\t b") == "a b"


def test_strip_blank_lines_keeps_indentation() -> None:
    """Only whole blank lines at the edges are removed."""
    assert STRIP_BLANK_LINES("\n  \n    code\n  \n") == "    code"
    assert STRIP_BLANK_LINES("text") == "text"


def test_then_composes_left_to_right() -> None:
    f = replace("a", "b").then(replace("b", "c"))
    assert f("a") == "c"
    cell = COLLAPSE_NEWLINES.then(regex_replace("\n", "<br>"))
    assert cell("x\ny\n\nz") == "x y<br>z"
    assert "then" in f.name
