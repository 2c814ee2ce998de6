"""Flat navigation index.

Derives the canonical reading order of a navigation tree: one entry per
navigable node, in depth-first left-to-right order, each carrying its
breadcrumb and position. The index answers lookups in O(1) and is never
modified after construction.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypedDict

from docnav.core.errors import InvariantViolation
from docnav.core.tree import NavTree
from docnav.core.types import DocumentId


class FlatEntryDict(TypedDict):
    """Dictionary representation of a flat entry."""

    document: str
    label: str
    breadcrumb: list[str]
    position: int


@dataclass(frozen=True, slots=True)
class FlatEntry:
    """Navigable document in reading order."""

    document: DocumentId
    label: str
    breadcrumb: tuple[str, ...]
    position: int

    def to_dict(self) -> FlatEntryDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "document": self.document,
            "label": self.label,
            "breadcrumb": list(self.breadcrumb),
            "position": self.position,
        }


class NavigationIndex:
    """Document lookup table plus the ordered entry sequence.

    Entries are stored in a tuple ordered by position, with a read-only
    mapping from document id to entry for O(1) lookups.
    """

    __slots__ = ("_by_document", "_entries")

    def __init__(self, entries: tuple[FlatEntry, ...] = ()) -> None:
        """Initialize index.

        Args:
            entries: Entries ordered by position, starting at 0

        Raises:
            InvariantViolation: If positions are not 0..N-1 or a document
                appears twice
        """
        by_document: dict[DocumentId, FlatEntry] = {}
        for expected, entry in enumerate(entries):
            if entry.position != expected:
                raise InvariantViolation(
                    f"entry {entry.document!r} has position {entry.position}, expected {expected}"
                )
            if entry.document in by_document:
                raise InvariantViolation(f"document {entry.document!r} indexed twice")
            by_document[entry.document] = entry

        self._entries = entries
        self._by_document: Mapping[DocumentId, FlatEntry] = MappingProxyType(by_document)

    @property
    def entries(self) -> tuple[FlatEntry, ...]:
        """All entries in reading order."""
        return self._entries

    def documents(self) -> tuple[DocumentId, ...]:
        """Document ids in reading order."""
        return tuple(entry.document for entry in self._entries)

    def get(self, document: str) -> FlatEntry | None:
        """Get entry by document id.

        Args:
            document: Document identifier

        Returns:
            FlatEntry if indexed, None otherwise
        """
        return self._by_document.get(DocumentId(document))

    def at(self, position: int) -> FlatEntry | None:
        """Get entry by position, None when out of range."""
        if 0 <= position < len(self._entries):
            return self._entries[position]
        return None

    def __contains__(self, document: object) -> bool:
        return document in self._by_document

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FlatEntry]:
        return iter(self._entries)


def flatten(tree: NavTree) -> NavigationIndex:
    """Build the navigation index for a validated tree.

    Args:
        tree: Tree produced by the loader

    Returns:
        NavigationIndex with one entry per navigable node

    Raises:
        InvariantViolation: If the tree references a document twice
    """
    entries: list[FlatEntry] = []
    for node, ancestors in tree.walk():
        if node.document is None:
            continue
        breadcrumb = (*(ancestor.label for ancestor in ancestors), node.label)
        entries.append(
            FlatEntry(
                document=node.document,
                label=node.label,
                breadcrumb=breadcrumb,
                position=len(entries),
            )
        )
    return NavigationIndex(tuple(entries))
