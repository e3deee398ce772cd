"""Ordered output accumulators and the lazy sources they can hold."""

from collections.abc import Callable, Iterator


class OutputSink:
    """Ordered list of output sources.

    A source is a string, another sink, or any object with a ``data()``
    method yielding strings. Nothing is materialized until ``data()`` or
    ``text()`` is called.
    """

    def __init__(self) -> None:
        self._sources: list = []

    def append(self, source) -> "OutputSink":
        self._sources.append(source)
        return self

    def data(self) -> Iterator[str]:
        for source in self._sources:
            if isinstance(source, str):
                yield source
            else:
                yield from source.data()

    def text(self) -> str:
        return "".join(self.data())

    def __len__(self) -> int:
        return len(self._sources)


class FilteredSource:
    """A sink whose materialized text is passed through a filter."""

    def __init__(self, sink: OutputSink, render_filter: Callable[[str], str]) -> None:
        self.sink = sink
        self.render_filter = render_filter

    def data(self) -> Iterator[str]:
        yield self.render_filter(self.sink.text())


class LazySource:
    """Text produced by a callable when the output is read."""

    def __init__(self, produce: Callable[[], str]) -> None:
        self.produce = produce

    def data(self) -> Iterator[str]:
        yield self.produce()
