"""Navigation tree model.

The sidebar is an ordered tree of labelled entries. An entry that references
a document is navigable; an entry with children groups other entries. Trees
are immutable once built so a published tree can be shared by any number of
readers.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import NotRequired, TypedDict

from docnav.core.types import DocumentId


class NavNodeDict(TypedDict):
    """Dictionary representation of a navigation entry."""

    label: str
    document: NotRequired[str]
    children: NotRequired[list[NavNodeDict]]


class NavTreeDict(TypedDict):
    """Dictionary representation of the navigation configuration."""

    sidebar: list[NavNodeDict]


class NodeKind(StrEnum):
    """Shape of a navigation entry, derived from its optional fields."""

    GROUP = "group"
    DOCUMENT = "document"
    DOCUMENT_GROUP = "document_group"


@dataclass(frozen=True, slots=True)
class NavNode:
    """Navigation entry with ordered children."""

    label: str
    document: DocumentId | None = None
    children: tuple[NavNode, ...] = ()

    @property
    def kind(self) -> NodeKind:
        """Tag derived from which optional fields are set.

        Raises:
            ValueError: If the node has neither a document nor children
        """
        if self.document is not None and self.children:
            return NodeKind.DOCUMENT_GROUP
        if self.document is not None:
            return NodeKind.DOCUMENT
        if self.children:
            return NodeKind.GROUP
        raise ValueError(f"Navigation entry {self.label!r} has no document and no children")

    @property
    def is_navigable(self) -> bool:
        return self.document is not None

    @property
    def is_group(self) -> bool:
        return bool(self.children)

    def to_dict(self) -> NavNodeDict:
        """Convert to dictionary for JSON serialization."""
        result: NavNodeDict = {"label": self.label}
        if self.document is not None:
            result["document"] = self.document
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


def is_navigable(node: NavNode) -> bool:
    """Check whether a node references a document."""
    return node.is_navigable


def is_group(node: NavNode) -> bool:
    """Check whether a node has children."""
    return node.is_group


@dataclass(frozen=True, slots=True)
class NavTree:
    """Root ordered sequence of navigation entries."""

    items: tuple[NavNode, ...] = ()

    def walk(self) -> Iterator[tuple[NavNode, tuple[NavNode, ...]]]:
        """Traverse the tree depth-first, left to right.

        Yields:
            Pairs of (node, ancestors) where ancestors run from the root
            down to the node's parent
        """
        stack: list[tuple[NavNode, tuple[NavNode, ...]]] = [
            (node, ()) for node in reversed(self.items)
        ]
        while stack:
            node, ancestors = stack.pop()
            yield node, ancestors
            path = (*ancestors, node)
            stack.extend((child, path) for child in reversed(node.children))

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> NavTreeDict:
        """Convert to dictionary for JSON serialization."""
        return {"sidebar": [item.to_dict() for item in self.items]}
