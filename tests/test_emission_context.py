"""Tests for the emission context: traversal, scoping and output order."""

import sys
import typing
from pathlib import Path
from typing import Any

import pytest

from xmldoc_emit import selectors
from xmldoc_emit.document_index import DocumentIndex
from xmldoc_emit.document_nodes import ClassNode, FieldNode, RootNode, TypeNode
from xmldoc_emit.emission_context import EmissionContext
from xmldoc_emit.emit_preset import EmitPreset
from xmldoc_emit.errors import CapabilityMismatch
from xmldoc_emit.formatter import CodeFormatter, InlineCodeFormatter
from xmldoc_emit.node_collection import NodeCollection
from xmldoc_emit.node_writer import NodeWriter
from xmldoc_emit.render_filter import TRIM, replace
from xmldoc_emit.selectors import (
    ASSEMBLIES,
    CLASSES,
    FIELDS,
    TYPES,
    Cap,
    Item,
    Res,
    Selector,
)


@pytest.fixture
def ctx(sample_index: DocumentIndex) -> EmissionContext:
    return EmissionContext.create(sample_index)


def test_create_defaults() -> None:
    """A root context has no parent and an empty index by default."""
    root = EmissionContext.create()
    assert root.parent is None
    assert isinstance(root.node, RootNode)
    assert root.node.get_assemblies() == ()
    assert len(root.local) == 0


def test_load_builds_a_new_root(sample_dir: Path) -> None:
    """load() rebinds the context to an index over the given sources."""
    ctx = EmissionContext.create().load([sample_dir / "Sample.yml"])
    names = [a.node.name for a in _collect(ctx.select(ASSEMBLIES))]
    assert names == ["Sample"]


def _collect(collection_ctx: EmissionContext) -> list[EmissionContext]:
    seen: list[EmissionContext] = []
    collection_ctx.for_each(seen.append)
    return seen


def test_select_sets_parent(ctx: EmissionContext) -> None:
    """A selected context points back at the context it came from."""
    assemblies = ctx.select(ASSEMBLIES)
    assert assemblies.parent is ctx
    assert isinstance(assemblies.node, NodeCollection)
    assert assemblies.persistent is ctx.persistent


def test_select_capability_mismatch(ctx: EmissionContext) -> None:
    """Selecting an unsupported capability fails before anything runs."""
    with pytest.raises(CapabilityMismatch):
        ctx.select(FIELDS)


def test_for_each_elements_are_siblings(ctx: EmissionContext) -> None:
    """Every element's parent is the collection context, not its predecessor."""
    types = ctx.select(ASSEMBLIES).select(TYPES)
    elements = _collect(types)
    assert [e.node.name for e in elements] == ["Foo", "Point"]
    assert all(e.parent is types for e in elements)


def test_for_each_returns_collection_parent(ctx: EmissionContext) -> None:
    assemblies = ctx.select(ASSEMBLIES)
    assert assemblies.for_each(lambda e: None) is ctx


def test_for_each_needs_a_collection(ctx: EmissionContext) -> None:
    with pytest.raises(CapabilityMismatch):
        ctx.for_each(lambda e: None)


def test_sibling_overrides_are_isolated(ctx: EmissionContext) -> None:
    """using() in one for_each iteration is invisible to the next."""
    seen = []

    def visit(element: EmissionContext) -> None:
        seen.append(element.get_local(("formatter", CodeFormatter)))
        element.using(CodeFormatter(language=element.node.name))

    ctx.select(ASSEMBLIES).select(TYPES).for_each(visit)
    assert seen == [None, None]


def test_scope_is_transparent(ctx: EmissionContext) -> None:
    """scope() returns the caller's context with its local map untouched."""
    before = ctx.local
    result = ctx.scope(lambda c: c.using(InlineCodeFormatter()))
    assert result is ctx
    assert ctx.local is before
    assert ctx.get_local(("formatter", InlineCodeFormatter)) is None


def test_scope_is_transparent_when_action_raises(ctx: EmissionContext) -> None:
    """An exception inside scope propagates and leaves local state alone."""
    before = dict(ctx.local)

    def action(c: EmissionContext) -> None:
        c.using(InlineCodeFormatter()).with_local("x", 1)
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        ctx.scope(action)
    assert dict(ctx.local) == before


def test_persistent_writes_are_shared(ctx: EmissionContext) -> None:
    """Persistent values set on one branch are visible on every branch."""
    elements = _collect(ctx.select(ASSEMBLIES).select(TYPES))
    elements[0].persistent.set_once("seen", elements[0].node.name)
    assert elements[1].persistent.get("seen") == "Foo"
    assert ctx.persistent.get("seen") == "Foo"


def test_local_helpers(ctx: EmissionContext) -> None:
    child = ctx.with_local("key", 1)
    assert child.get_local("key") == 1
    assert ctx.get_local("key") is None
    assert child.without_local("key").get_local("key", "gone") == "gone"


def test_clone_persistent_is_independent(ctx: EmissionContext) -> None:
    ctx.persistent.set_once("a", 1)
    clone = ctx.clone_persistent()
    clone.persistent.set_once("b", 2)
    assert clone.persistent.get("a") == 1
    assert "b" not in ctx.persistent


def test_using_preset_applies_it(ctx: EmissionContext) -> None:
    """A preset configures the context instead of being stored."""
    preset = EmitPreset("test", lambda c: c.with_local("preset", True))
    assert ctx.using(preset).get_local("preset") is True


def test_write_appends_in_traversal_order(ctx: EmissionContext) -> None:
    """Nested writes merge into the parent output in order."""
    out = (
        ctx.using(NodeWriter(TypeNode, lambda c: c.append(f"<{c.node.name}>")))
        .using(NodeWriter(FieldNode, lambda c: c.append(c.node.name)))
    )
    out.append("start;")
    out.select(ASSEMBLIES).select(TYPES).for_each(lambda t: t.write())
    out.append(";end")
    assert out.text() == "start;<Foo><Point>;end"


def test_write_returns_parent(ctx: EmissionContext) -> None:
    elements = _collect(ctx.select(ASSEMBLIES))
    assert elements[0].write() is elements[0].parent
    assert ctx.write() is ctx


def test_writer_override_resolves_by_base_class(ctx: EmissionContext) -> None:
    """A writer for a base node type applies to its subclasses."""
    out = ctx.using(NodeWriter(TypeNode, lambda c: c.line(c.node.full_name)))
    out.select(ASSEMBLIES).select(CLASSES).write()
    assert out.text() == "NS.Foo\n"

    specific = out.using(NodeWriter(ClassNode, lambda c: c.line("class")))
    specific.select(ASSEMBLIES).select(CLASSES).write()
    assert specific.text() == "NS.Foo\nclass\n"


def test_writer_override_is_branch_local(ctx: EmissionContext) -> None:
    """Writers installed inside a scope do not leak out of it."""
    override = NodeWriter(TypeNode, lambda t: t.append("OVERRIDE"))
    ctx.scope(lambda c: c.using(override))
    ctx.select(ASSEMBLIES).select(CLASSES).write()
    assert "OVERRIDE" not in ctx.text()
    assert "The count." in ctx.text()


def test_default_writers_render_summaries(ctx: EmissionContext) -> None:
    """Without overrides the tree is written as member summaries."""
    ctx.write()
    text = ctx.text()
    assert "The name\non two lines." in text
    assert text.index("The name") < text.index("Does") < text.index("The count.")


def test_with_filter_sees_whole_block(ctx: EmissionContext) -> None:
    """The filter is applied to the block's materialized text."""
    ctx.append("[")
    ctx.with_filter(TRIM, lambda c: c.append("  a").append("b  "))
    ctx.append("]")
    assert ctx.text() == "[ab]"


def test_with_filter_is_lazy(ctx: EmissionContext) -> None:
    """Text appended to the block later still passes through the filter."""
    holder: list[EmissionContext] = []
    ctx.with_filter(replace("a", "A"), holder.append)
    holder[0].append("banana")
    assert ctx.text() == "bAnAnA"


def test_nested_filters_compose(ctx: EmissionContext) -> None:
    ctx.with_filter(
        replace("x", "y"),
        lambda c: c.with_filter(replace("y", "z"), lambda d: d.append("xy")),
    )
    assert ctx.text() == "yz"


def test_if_any_skips_empty_collections(ctx: EmissionContext) -> None:
    types = ctx.select(ASSEMBLIES).select(TYPES)
    calls = []
    empty = types.with_node(NodeCollection((), TypeNode))
    assert empty.if_any(calls.append) is types.parent
    assert calls == []
    types.if_any(calls.append)
    assert calls == [types]


def test_selector_annotations_match_runtime_checks() -> None:
    """Each selector's declared capability and element type are the ones checked."""
    hints = typing.get_type_hints(selectors)
    declared = {
        name: hint
        for name, hint in hints.items()
        if typing.get_origin(hint) is Selector
    }
    assert len(declared) == 11
    for name, hint in declared.items():
        capability, element_type, result = typing.get_args(hint)
        selector = getattr(selectors, name)
        assert capability is selector.capability
        assert element_type is selector.result_type
        assert result is element_type or result == NodeCollection[element_type]


@pytest.mark.skipif(sys.version_info < (3, 11), reason="needs typing.get_overloads")
def test_select_is_typed_by_node_capability() -> None:
    """select() only accepts selectors whose capability the node provides."""
    on_collection, on_node = typing.get_overloads(EmissionContext.select)

    hints = typing.get_type_hints(on_collection)
    assert hints["self"] == EmissionContext[NodeCollection[Cap]]
    assert hints["selector"] == Selector[Cap, Item, Any]
    assert hints["return"] == EmissionContext[NodeCollection[Item]]

    hints = typing.get_type_hints(on_node)
    assert hints["self"] == EmissionContext[Cap]
    assert hints["selector"] == Selector[Cap, Any, Res]
    assert hints["return"] == EmissionContext[Res]
