"""Pairing of an assembly manifest with its XML documentation file."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourcePair:
    """A metadata source and the doc source that documents it.

    When no doc path is given, the doc file sits next to the manifest with the
    same base name and an ``.xml`` extension.
    """

    metadata_path: Path
    doc_path: Path | None = None

    @property
    def resolved_doc_path(self) -> Path:
        if self.doc_path is not None:
            return Path(self.doc_path)
        return Path(self.metadata_path).with_suffix(".xml")

    @property
    def doc_path_is_explicit(self) -> bool:
        return self.doc_path is not None
