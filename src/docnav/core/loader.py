"""Navigation configuration loader.

Builds an immutable NavTree from untrusted configuration data. Loading is
all-or-nothing: the first problem found in depth-first order aborts the
load with a ValidationError and no partial tree is returned.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from docnav.core.errors import ErrorKind, ValidationError
from docnav.core.tree import NavNode, NavTree
from docnav.core.types import DocumentId

logger = logging.getLogger(__name__)

SIDEBAR_KEY = "sidebar"
_NODE_KEYS = frozenset({"label", "document", "children"})


def load(raw: object) -> NavTree:
    """Build a navigation tree from raw configuration.

    Args:
        raw: Either the configuration mapping ({"sidebar": [...]}) or the
            bare list of entries

    Returns:
        Validated NavTree

    Raises:
        ValidationError: If the configuration is malformed, contains a cycle
            or references the same document twice
    """
    if isinstance(raw, Mapping):
        if SIDEBAR_KEY not in raw:
            raise ValidationError(
                ErrorKind.MALFORMED_CONFIG,
                f"configuration must contain a {SIDEBAR_KEY!r} list",
            )
        entries = raw[SIDEBAR_KEY]
    else:
        entries = raw

    if not isinstance(entries, list | tuple):
        raise ValidationError(
            ErrorKind.MALFORMED_CONFIG,
            f"{SIDEBAR_KEY} must be a list",
            SIDEBAR_KEY,
        )

    tree = NavTree(items=_TreeBuilder().build_children(entries, SIDEBAR_KEY))
    logger.debug(f"Loaded navigation tree with {len(tree)} root entries")
    return tree


def load_file(path: Path) -> NavTree:
    """Load a navigation tree from a JSON file.

    Args:
        path: Path to JSON file with a top-level "sidebar" list

    Returns:
        Validated NavTree

    Raises:
        ValidationError: If the file cannot be read or parsed, or its
            content is rejected by load()
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValidationError(
            ErrorKind.MALFORMED_CONFIG,
            f"cannot read navigation file: {e.strerror or e}",
            str(path),
        ) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(
            ErrorKind.MALFORMED_CONFIG,
            f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}",
            str(path),
        ) from e
    except RecursionError as e:
        raise ValidationError(
            ErrorKind.MALFORMED_CONFIG,
            "navigation file is nested too deeply to parse",
            str(path),
        ) from e

    if not isinstance(data, dict):
        raise ValidationError(
            ErrorKind.MALFORMED_CONFIG,
            "navigation file must contain a JSON object",
            str(path),
        )

    return load(data)


@dataclass(slots=True)
class _Frame:
    """Entry whose children are being built.

    Locations are derived from parent links on demand so deep trees don't
    carry a location string per level.
    """

    entries: list[object] | tuple[object, ...]
    parent: _Frame | None = None
    index: int = 0
    prefix: str = ""
    key: int | None = None
    label: str = ""
    document: str | None = None
    built: list[NavNode] = field(default_factory=list)
    next_child: int = 0

    def location(self) -> str:
        """Render the entry's position, e.g. "sidebar[1].children[0]"."""
        parts: list[str] = []
        frame = self
        while frame.parent is not None:
            parts.append(f"[{frame.index}]")
            frame = frame.parent
            if frame.parent is not None:
                parts.append(".children")
        parts.append(frame.prefix)
        return "".join(reversed(parts))


class _TreeBuilder:
    """Single-use depth-first walker over raw entries.

    Tracks the identities of entries on the current root-to-node path to
    reject cycles, and every document seen so far to reject duplicates.
    The walk keeps its own stack so nesting depth is bounded by memory,
    not by the interpreter's recursion limit.
    """

    def __init__(self) -> None:
        self._on_path: set[int] = set()
        self._documents: dict[str, _Frame] = {}

    def build_children(
        self,
        entries: list[object] | tuple[object, ...],
        location: str,
    ) -> tuple[NavNode, ...]:
        root = _Frame(entries=entries, prefix=location)
        stack = [root]
        while True:
            frame = stack[-1]
            if frame.next_child < len(frame.entries):
                i = frame.next_child
                frame.next_child += 1
                stack.append(self._enter(frame, i))
                continue

            stack.pop()
            if frame is root:
                return tuple(frame.built)
            stack[-1].built.append(self._leave(frame))

    def _enter(self, parent: _Frame, index: int) -> _Frame:
        """Validate an entry's own fields and open a frame for its children."""
        raw = parent.entries[index]
        frame = _Frame(entries=(), parent=parent, index=index)

        if not isinstance(raw, Mapping):
            raise ValidationError(
                ErrorKind.MALFORMED_NODE,
                "navigation entry must be an object",
                frame.location(),
            )

        key = id(raw)
        if key in self._on_path:
            raise ValidationError(
                ErrorKind.CYCLE,
                "navigation entry contains itself",
                frame.location(),
            )
        self._on_path.add(key)
        frame.key = key

        label = raw.get("label")
        if not isinstance(label, str):
            raise ValidationError(
                ErrorKind.MALFORMED_NODE,
                "label must be a string",
                frame.location(),
            )
        if not label.strip():
            raise ValidationError(
                ErrorKind.MALFORMED_NODE,
                "label must not be empty",
                frame.location(),
            )
        frame.label = label

        document = raw.get("document")
        if document is not None:
            if not isinstance(document, str):
                raise ValidationError(
                    ErrorKind.MALFORMED_NODE,
                    "document must be a string",
                    frame.location(),
                )
            if not document:
                raise ValidationError(
                    ErrorKind.MALFORMED_NODE,
                    "document must not be empty",
                    frame.location(),
                )
            self._claim_document(document, frame)
            frame.document = document

        children_raw = raw.get("children")
        if children_raw is None:
            children_raw = []
        if not isinstance(children_raw, list | tuple):
            raise ValidationError(
                ErrorKind.MALFORMED_NODE,
                "children must be a list",
                frame.location(),
            )
        frame.entries = children_raw

        if logger.isEnabledFor(logging.DEBUG):
            unknown = [k for k in raw if k not in _NODE_KEYS]
            if unknown:
                logger.debug(f"Ignoring unknown keys at {frame.location()}: {unknown}")

        return frame

    def _leave(self, frame: _Frame) -> NavNode:
        """Close a frame once all its children are built."""
        if frame.key is not None:
            self._on_path.discard(frame.key)

        if frame.document is None and not frame.built:
            raise ValidationError(
                ErrorKind.MALFORMED_NODE,
                f"entry {frame.label!r} has neither a document nor children",
                frame.location(),
            )

        return NavNode(
            label=frame.label,
            document=DocumentId(frame.document) if frame.document is not None else None,
            children=tuple(frame.built),
        )

    def _claim_document(self, document: str, frame: _Frame) -> None:
        first = self._documents.get(document)
        if first is not None:
            raise ValidationError(
                ErrorKind.DUPLICATE_DOCUMENT,
                f"document {document!r} is already referenced at {first.location()}",
                frame.location(),
            )
        self._documents[document] = frame
