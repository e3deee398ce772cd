"""Formatters: kinds of formatted content and the writers that render them.

A formatter value (``CodeFormatter("csharp")``) carries the data for a kind
of content. The active value and the writer for each kind are resolved
through the context's local scope, so a block can switch language or markup
without affecting its siblings. Kinds with no installed writer pass their
content through unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xmldoc_emit.emission_context import EmissionContext

MIN_HEADER_LEVEL = 1
MAX_HEADER_LEVEL = 6


class Formatter:
    """Base class for formatter values; one local slot per subclass."""

    @property
    def extension_key(self) -> tuple[str, type]:
        return ("formatter", type(self))


@dataclass(frozen=True)
class InlineCodeFormatter(Formatter):
    pass


@dataclass(frozen=True)
class CodeFormatter(Formatter):
    language: str = "csharp"


@dataclass(frozen=True)
class HeaderFormatter(Formatter):
    level: int = 1

    @property
    def clamped_level(self) -> int:
        return max(MIN_HEADER_LEVEL, min(MAX_HEADER_LEVEL, self.level))


WriterFn = Callable[["EmissionContext", Formatter, Any], Any]


@dataclass(frozen=True)
class FormatterWriter:
    """Renders content of one formatter kind.

    ``fn(ctx, formatter, source)`` receives the active formatter value and
    the content as a string or any output source.
    """

    formatter_type: type
    fn: WriterFn

    @property
    def extension_key(self) -> tuple[str, type]:
        return ("formatter_writer", self.formatter_type)


def _pass_through(ctx: EmissionContext, formatter: Formatter, source: Any) -> None:
    ctx.append_source(source)


def _plain_header(
    ctx: EmissionContext, formatter: HeaderFormatter, source: Any
) -> None:
    ctx.append("#" * formatter.clamped_level + " ").append_source(source).line()


DEFAULT_FORMATTER_WRITERS: dict[type, WriterFn] = {
    HeaderFormatter: _plain_header,
}


def active_formatter(ctx: EmissionContext, formatter_type: type) -> Formatter:
    """Return the formatter value in effect, or the kind's default value."""
    return ctx.get_local(("formatter", formatter_type)) or formatter_type()


def write_formatted(
    ctx: EmissionContext, formatter: Formatter, source: Any
) -> EmissionContext:
    """Render ``source`` as ``formatter`` content on the current branch."""
    writer = ctx.get_local(("formatter_writer", type(formatter)))
    if writer is not None:
        fn = writer.fn
    else:
        fn = DEFAULT_FORMATTER_WRITERS.get(type(formatter), _pass_through)
    fn(ctx, formatter, source)
    return ctx


def write_inline_code(ctx: EmissionContext, source: Any) -> EmissionContext:
    return write_formatted(ctx, active_formatter(ctx, InlineCodeFormatter), source)


def write_code(ctx: EmissionContext, source: Any) -> EmissionContext:
    return write_formatted(ctx, active_formatter(ctx, CodeFormatter), source)


def write_header(ctx: EmissionContext, source: Any) -> EmissionContext:
    return write_formatted(ctx, active_formatter(ctx, HeaderFormatter), source)


def _shift_header(ctx: EmissionContext, delta: int) -> EmissionContext:
    current = active_formatter(ctx, HeaderFormatter)
    level = max(MIN_HEADER_LEVEL, min(MAX_HEADER_LEVEL, current.level + delta))
    return ctx.using(HeaderFormatter(level))


def indent_header(ctx: EmissionContext) -> EmissionContext:
    """Return ``ctx`` with headers one level deeper for this branch."""
    return _shift_header(ctx, 1)


def dedent_header(ctx: EmissionContext) -> EmissionContext:
    return _shift_header(ctx, -1)
