"""Output targets: where the text of a run ends up.

Targets are registered in the persistent store, so every branch that
directs output to the same file shares one sink. Nothing is written until
the surrounding :func:`emission_run` completes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from xmldoc_emit.emission_context import EmissionContext
from xmldoc_emit.output_sink import OutputSink

if TYPE_CHECKING:
    from xmldoc_emit.document_index import DocumentIndex

logger = logging.getLogger(__name__)

TARGETS = "targets"
OUTPUT_DIRECTORY = "output_directory"


@dataclass
class Target(ABC):
    """A destination plus the sink collecting its text."""

    key: Any
    sink: OutputSink = field(default_factory=OutputSink)

    @abstractmethod
    def flush(self) -> None:
        """Write the collected text to the destination."""


@dataclass
class FileTarget(Target):
    path: Path = Path()

    def flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8", newline="\n") as f:
            for fragment in self.sink.data():
                f.write(fragment)
        logger.info("Wrote %s", self.path)


@dataclass
class StreamTarget(Target):
    stream: IO[str] | None = None

    def flush(self) -> None:
        for fragment in self.sink.data():
            self.stream.write(fragment)
        self.stream.flush()


@dataclass
class BufferTarget(Target):
    buffer: list[str] = field(default_factory=list)

    def flush(self) -> None:
        self.buffer.extend(self.sink.data())


def in_directory(ctx: EmissionContext, directory: str | Path) -> EmissionContext:
    """Resolve relative ``to_file`` paths against ``directory`` on this branch."""
    return ctx.with_local(OUTPUT_DIRECTORY, Path(directory))


def _register(ctx: EmissionContext, target: Target) -> EmissionContext:
    registered = ctx.persistent.submap(TARGETS).get_or_add(target.key, lambda: target)
    return replace(ctx, output=registered.sink)


def to_file(ctx: EmissionContext, path: str | Path) -> EmissionContext:
    """Send the output of this branch to ``path``."""
    resolved = Path(path)
    base = ctx.get_local(OUTPUT_DIRECTORY)
    if base is not None and not resolved.is_absolute():
        resolved = base / resolved
    resolved = resolved.resolve()
    return _register(ctx, FileTarget(("file", str(resolved)), path=resolved))


def to_stream(ctx: EmissionContext, stream: IO[str]) -> EmissionContext:
    return _register(ctx, StreamTarget(("stream", id(stream)), stream=stream))


def to_buffer(ctx: EmissionContext, buffer: list[str]) -> EmissionContext:
    """Collect the output of this branch into ``buffer`` as text fragments."""
    return _register(ctx, BufferTarget(("buffer", id(buffer)), buffer=buffer))


def registered_targets(ctx: EmissionContext) -> list[Target]:
    return [target for _, target in ctx.persistent.submap(TARGETS).items()]


def flush_targets(ctx: EmissionContext) -> int:
    """Write every registered target in registration order."""
    targets = registered_targets(ctx)
    for target in targets:
        target.flush()
    return len(targets)


@contextmanager
def emission_run(index: DocumentIndex | None = None) -> Iterator[EmissionContext]:
    """Yield a root context; flush its targets if the block succeeds.

    If the block raises, no target is written.
    """
    ctx = EmissionContext.create(index)
    yield ctx
    written = flush_targets(ctx)
    logger.info("Flushed %s output targets", written)
