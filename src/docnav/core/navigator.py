"""Read-only navigation queries.

A Navigator pairs a validated tree with its flat index. It is the snapshot
published by NavigationStore: every query runs against the same tree and
index, so a reader holding a Navigator never observes a partial reload.
"""

from __future__ import annotations

from docnav.core.index import FlatEntry, NavigationIndex, flatten
from docnav.core.tree import NavTree


class Navigator:
    """Navigation queries over a tree and its index.

    Unknown documents are a normal outcome: every lookup returns None
    rather than raising.
    """

    __slots__ = ("_index", "_tree")

    def __init__(self, tree: NavTree, index: NavigationIndex) -> None:
        """Initialize navigator.

        Args:
            tree: Validated navigation tree
            index: Index flattened from the same tree
        """
        self._tree = tree
        self._index = index

    @classmethod
    def from_tree(cls, tree: NavTree) -> Navigator:
        """Create navigator by flattening a validated tree."""
        return cls(tree, flatten(tree))

    @classmethod
    def empty(cls) -> Navigator:
        """Create navigator with no entries."""
        return cls(NavTree(), NavigationIndex())

    @property
    def index(self) -> NavigationIndex:
        return self._index

    def sidebar_view(self) -> NavTree:
        """Return the validated tree for sidebar rendering."""
        return self._tree

    def resolve(self, document: str) -> FlatEntry | None:
        """Look up a document's entry."""
        return self._index.get(document)

    def exists(self, document: str) -> bool:
        return document in self._index

    def breadcrumb(self, document: str) -> tuple[str, ...] | None:
        """Get labels from the root down to the document, inclusive.

        Args:
            document: Document identifier

        Returns:
            Tuple of labels, or None if the document is not indexed
        """
        entry = self._index.get(document)
        if entry is None:
            return None
        return entry.breadcrumb

    def previous(self, document: str) -> FlatEntry | None:
        """Get the entry before a document in reading order.

        Returns:
            Previous FlatEntry, or None if the document is first or unknown
        """
        entry = self._index.get(document)
        if entry is None:
            return None
        return self._index.at(entry.position - 1)

    def next(self, document: str) -> FlatEntry | None:
        """Get the entry after a document in reading order.

        Returns:
            Next FlatEntry, or None if the document is last or unknown
        """
        entry = self._index.get(document)
        if entry is None:
            return None
        return self._index.at(entry.position + 1)

    def first(self) -> FlatEntry | None:
        """Get the first document in reading order."""
        return self._index.at(0)

    def __len__(self) -> int:
        return len(self._index)
