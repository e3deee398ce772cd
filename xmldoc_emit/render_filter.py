"""Text filters applied to the materialized output of a block."""

import re
from collections.abc import Callable
from dataclasses import dataclass

SINGLE_NEWLINE_RE = re.compile(r"(?:(?<=\S)|^)[^\S\n]*\n[^\S\n]*(?=\S|$)")
NEWLINE_RUN_RE = re.compile(r"[^\S\n]*\n(?:[^\S\n]*\n)+[^\S\n]*")
BLANK_EDGE_LINES_RE = re.compile(r"\A(?:[^\S\n]*\n)+|(?:\n[^\S\n]*)+\Z")


@dataclass(frozen=True)
class RenderFilter:
    """A named ``str -> str`` transformation."""

    name: str
    fn: Callable[[str], str]

    def __call__(self, text: str) -> str:
        return self.fn(text)

    def then(self, other: "RenderFilter") -> "RenderFilter":
        """Compose: apply this filter, then ``other``."""
        return RenderFilter(
            f"{self.name}.then({other.name})", lambda text: other(self(text))
        )


def _collapse_newlines(text: str) -> str:
    # Runs of blank lines become one newline; a lone newline becomes a space.
    text = SINGLE_NEWLINE_RE.sub(" ", text)
    return NEWLINE_RUN_RE.sub("\n", text)


IDENTITY = RenderFilter("identity", lambda text: text)
TRIM = RenderFilter("trim", str.strip)
COLLAPSE_NEWLINES = RenderFilter("collapse_newlines", _collapse_newlines)
STRIP_BLANK_LINES = RenderFilter(
    "strip_blank_lines", lambda text: BLANK_EDGE_LINES_RE.sub("", text)
)


def indent(prefix: str, count: int = 1) -> RenderFilter:
    """Prefix the block and every line after a newline with ``prefix * count``."""
    full = prefix * count
    return RenderFilter(
        f"indent({full!r})", lambda text: full + text.replace("\n", "\n" + full)
    )


def replace(old: str, new: str) -> RenderFilter:
    return RenderFilter(f"replace({old!r}, {new!r})", lambda t: t.replace(old, new))


def regex_replace(pattern: str, replacement: str) -> RenderFilter:
    compiled = re.compile(pattern)
    return RenderFilter(
        f"regex_replace({pattern!r})", lambda t: compiled.sub(replacement, t)
    )
