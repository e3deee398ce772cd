"""Immutable index of documentation entries keyed by assembly and identity."""

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import MappingProxyType

from xmldoc_emit.documentation_entry import DocumentationEntry
from xmldoc_emit.errors import DuplicateEntry
from xmldoc_emit.load_assembly_metadata import load_assembly_metadata
from xmldoc_emit.load_doc_source import DocSource, load_doc_source
from xmldoc_emit.member_identity import member_identity
from xmldoc_emit.metadata_model import AssemblyInfo
from xmldoc_emit.normalize_doc_comment import normalize_member_element
from xmldoc_emit.source_pair import SourcePair

logger = logging.getLogger(__name__)

EntryKey = tuple[str, str]


class DocumentIndex:
    """Owns the loaded assemblies and every documentation entry.

    Built once; lookups never fail.
    """

    def __init__(
        self,
        assemblies: Iterable[AssemblyInfo],
        entries: dict[EntryKey, DocumentationEntry],
    ) -> None:
        self._assemblies = tuple(assemblies)
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def build(cls, sources: Iterable[SourcePair]) -> "DocumentIndex":
        """Load every (manifest, doc file) pair and index their entries."""
        loaded: list[tuple[AssemblyInfo, DocSource | None]] = []
        for pair in sources:
            assembly = load_assembly_metadata(Path(pair.metadata_path))
            doc_path = pair.resolved_doc_path
            if not pair.doc_path_is_explicit and not doc_path.exists():
                logger.warning(
                    "No documentation file for %s (looked for %s)",
                    assembly.name,
                    doc_path,
                )
                loaded.append((assembly, None))
                continue
            loaded.append((assembly, load_doc_source(doc_path)))
        return cls.from_loaded(loaded)

    @classmethod
    def from_loaded(
        cls, loaded: Iterable[tuple[AssemblyInfo, DocSource | None]]
    ) -> "DocumentIndex":
        """Index already loaded assemblies and doc sources."""
        assemblies: list[AssemblyInfo] = []
        entries: dict[EntryKey, DocumentationEntry] = {}
        for assembly, doc in loaded:
            assemblies.append(assembly)
            known = _member_identities(assembly)
            if doc is None:
                continue
            if doc.assembly_name and doc.assembly_name != assembly.name:
                logger.warning(
                    "Doc file %s names assembly %s, indexing it under %s",
                    doc.path,
                    doc.assembly_name,
                    assembly.name,
                )
            for element in doc.members:
                identity = element.get("name", "")
                key = (assembly.name, identity)
                if key in entries:
                    raise DuplicateEntry(
                        assembly.name, identity, [entries[key].source, doc.path]
                    )
                entries[key] = DocumentationEntry(
                    assembly=assembly.name,
                    identity=identity,
                    element=normalize_member_element(element, doc.path),
                    raw=ET.tostring(element, encoding="unicode").strip(),
                    source=doc.path,
                )
                if identity not in known:
                    logger.debug("Orphaned doc entry %s in %s", identity, doc.path)
        logger.info(
            "Indexed %s documentation entries across %s assemblies",
            len(entries),
            len(assemblies),
        )
        return cls(assemblies, entries)

    @property
    def assemblies(self) -> tuple[AssemblyInfo, ...]:
        return self._assemblies

    def lookup(self, assembly: str, identity: str) -> DocumentationEntry:
        """Return the entry for a member, or an empty entry if undocumented."""
        entry = self._entries.get((assembly, identity))
        if entry is None:
            return DocumentationEntry.empty(assembly, identity)
        return entry

    def entries(self) -> Iterator[DocumentationEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


def _member_identities(assembly: AssemblyInfo) -> set[str]:
    """Compute identities for every type and member, rejecting collisions."""
    seen: set[str] = set()
    for t in assembly.iter_types():
        members = [t, *t.fields, *t.properties, *t.methods, *t.constructors, *t.events]
        for member in members:
            identity = member_identity(member)
            if identity in seen:
                raise DuplicateEntry(assembly.name, identity, [assembly.source])
            seen.add(identity)
    return seen
