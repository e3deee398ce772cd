"""The immutable, chainable traversal context.

An :class:`EmissionContext` threads five things through a conversion: the
current document node, the context it was derived from, the persistent store
shared by the whole run, the branch-private local scope and the output sink.
Every operation returns a context, so conversions read as method chains::

    ctx.select(CLASSES).for_each(lambda c: c.line(c.node.name))

Local configuration set with :meth:`using` is visible only to the branch it
was set on; siblings produced by :meth:`for_each` never see each other's
settings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Generic, TypeVar, overload

from xmldoc_emit.default_writers import resolve_writer
from xmldoc_emit.document_index import DocumentIndex
from xmldoc_emit.document_nodes import RootNode
from xmldoc_emit.emit_preset import EmitPreset
from xmldoc_emit.errors import CapabilityMismatch
from xmldoc_emit.local_scope import LocalScope
from xmldoc_emit.node_collection import NodeCollection
from xmldoc_emit.output_sink import FilteredSource, OutputSink
from xmldoc_emit.persistent_store import PersistentStore
from xmldoc_emit.selectors import Cap, Item, Res, Selector
from xmldoc_emit.source_pair import SourcePair

logger = logging.getLogger(__name__)

Action = Callable[["EmissionContext"], Any]

N = TypeVar("N", covariant=True)
M = TypeVar("M")


@dataclass(frozen=True, eq=False)
class EmissionContext(Generic[N]):
    node: N
    parent: EmissionContext[Any] | None = None
    persistent: PersistentStore = field(default_factory=PersistentStore)
    local: LocalScope = field(default_factory=LocalScope)
    output: OutputSink = field(default_factory=OutputSink)

    @classmethod
    def create(
        cls, index: DocumentIndex | None = None
    ) -> EmissionContext[RootNode]:
        """Return a root context over ``index`` (an empty index by default)."""
        if index is None:
            index = DocumentIndex((), {})
        return cls(RootNode(index))

    def load(
        self, pairs: Iterable[SourcePair | tuple | str | Path]
    ) -> EmissionContext[RootNode]:
        """Rebind this context to a root node over freshly loaded sources."""
        index = DocumentIndex.build(_as_source_pair(p) for p in pairs)
        return self.with_node(RootNode(index))

    def with_node(self, node: M) -> EmissionContext[M]:
        return replace(self, node=node)

    # Traversal

    @overload
    def select(
        self: EmissionContext[NodeCollection[Cap]],
        selector: Selector[Cap, Item, Any],
        *args: Any,
        **kwargs: Any,
    ) -> EmissionContext[NodeCollection[Item]]: ...

    @overload
    def select(
        self: EmissionContext[Cap],
        selector: Selector[Cap, Any, Res],
        *args: Any,
        **kwargs: Any,
    ) -> EmissionContext[Res]: ...

    def select(
        self, selector: Selector[Any, Any, Any], *args: Any, **kwargs: Any
    ) -> EmissionContext[Any]:
        """Descend to the nodes produced by ``selector``.

        The overloads let a type checker reject a selector whose capability
        the current node lacks; ``CapabilityMismatch`` is raised at run time
        for the same case.
        """
        node = selector.apply(self.node, *args, **kwargs)
        return replace(self, node=node, parent=self)

    def for_each(self, action: Action) -> EmissionContext:
        """Run ``action`` once per element of the current collection.

        Each element context has this collection context as its parent.
        Returns the collection's parent.
        """
        collection = self._require_collection("for_each")
        for element in collection:
            action(replace(self, node=element, parent=self))
        return self._up()

    def if_any(self, action: Action) -> EmissionContext:
        """Run ``action`` on this context unless it is an empty collection."""
        if not (isinstance(self.node, NodeCollection) and self.node.is_empty):
            action(self)
        return self._up()

    def scope(self, action: Action) -> EmissionContext:
        """Run ``action`` and return this context unchanged."""
        action(self)
        return self

    def write(self) -> EmissionContext:
        """Render the current node with its writer and return the parent."""
        logger.debug("Writing %s", type(self.node).__name__)
        writer = resolve_writer(self.local, type(self.node))
        sink = OutputSink()
        writer(replace(self, output=sink))
        self.output.append(sink)
        return self._up()

    def with_filter(
        self, render_filter: Callable[[str], str], action: Action
    ) -> EmissionContext:
        """Route the output of ``action`` through ``render_filter``.

        The filter sees the whole materialized text of the block.
        """
        sink = OutputSink()
        action(replace(self, output=sink))
        self.output.append(FilteredSource(sink, render_filter))
        return self

    def _up(self) -> EmissionContext:
        return self.parent if self.parent is not None else self

    def _require_collection(self, operation: str) -> NodeCollection:
        if not isinstance(self.node, NodeCollection):
            raise CapabilityMismatch(
                f"{operation} needs a collection, not {type(self.node).__name__}"
            )
        return self.node

    # Configuration

    def using(self, extension: Any) -> EmissionContext:
        """Install ``extension`` for the rest of this branch."""
        if isinstance(extension, EmitPreset):
            return extension.apply(self)
        return self.with_local(extension.extension_key, extension)

    def with_local(self, key: Hashable, value: Any) -> EmissionContext:
        return replace(self, local=self.local.set(key, value))

    def without_local(self, key: Hashable) -> EmissionContext:
        return replace(self, local=self.local.remove(key))

    def get_local(self, key: Hashable, default: Any = None) -> Any:
        return self.local.get(key, default)

    def clone_persistent(self) -> EmissionContext:
        """Return this context with an independent copy of the persistent store."""
        return replace(self, persistent=self.persistent.snapshot())

    # Output

    def append(self, text: str) -> EmissionContext:
        self.output.append(text)
        return self

    def line(self, text: str = "") -> EmissionContext:
        self.output.append(text + "\n")
        return self

    def append_source(self, source: Any) -> EmissionContext:
        """Append a string, a sink or any object with a ``data()`` method."""
        self.output.append(source)
        return self

    def text(self) -> str:
        """Materialize everything written to the current sink so far."""
        return self.output.text()


def _as_source_pair(value: SourcePair | tuple | str | Path) -> SourcePair:
    if isinstance(value, SourcePair):
        return value
    if isinstance(value, tuple):
        metadata, docs = value
        return SourcePair(Path(metadata), Path(docs) if docs else None)
    return SourcePair(Path(value))
