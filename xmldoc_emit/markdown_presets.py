"""Markdown flavors for the inline-code and code-block formatters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from xmldoc_emit.emit_preset import EmitPreset
from xmldoc_emit.formatter import (
    CodeFormatter,
    FormatterWriter,
    InlineCodeFormatter,
)
from xmldoc_emit.render_filter import indent

if TYPE_CHECKING:
    from xmldoc_emit.emission_context import EmissionContext

CODE_INDENT = indent("    ")


def _inline_code(ctx: EmissionContext, formatter: Any, source: Any) -> None:
    fence = "``" if isinstance(source, str) and "`" in source else "`"
    pad = " " if len(fence) > 1 else ""
    ctx.append(fence + pad).append_source(source).append(pad + fence)


def _indented_code(ctx: EmissionContext, formatter: Any, source: Any) -> None:
    ctx.line().line()
    ctx.with_filter(CODE_INDENT, lambda c: c.append_source(source))
    ctx.line().line()


def _fenced_code(ctx: EmissionContext, formatter: CodeFormatter, source: Any) -> None:
    ctx.line().line(f"```{formatter.language}").append_source(source)
    ctx.line().line("```").line()


def _standard(ctx: EmissionContext) -> EmissionContext:
    return (
        ctx.using(FormatterWriter(InlineCodeFormatter, _inline_code))
        .using(FormatterWriter(CodeFormatter, _indented_code))
    )


def _github(ctx: EmissionContext) -> EmissionContext:
    return ctx.using(MARKDOWN_STANDARD).using(
        FormatterWriter(CodeFormatter, _fenced_code)
    )


MARKDOWN_STANDARD = EmitPreset("markdown-standard", _standard)
MARKDOWN_GITHUB = EmitPreset("markdown-github", _github)

PRESETS = {
    "standard": MARKDOWN_STANDARD,
    "github": MARKDOWN_GITHUB,
}
