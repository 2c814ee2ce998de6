"""Published navigation snapshot with atomic reload.

The store owns the Navigator that consumers query. A reload builds a
complete new tree, index and navigator before replacing the published
reference in a single assignment; a failed reload leaves the previous
snapshot in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from docnav.core.errors import DocnavError
from docnav.core.loader import load, load_file
from docnav.core.navigator import Navigator
from docnav.core.tree import NavTree

logger = logging.getLogger(__name__)


class NavigationStore:
    """Holder of the current navigation snapshot.

    Single writer, many readers. Readers should take `current` once per
    request and run all queries against that snapshot.
    """

    def __init__(self, navigator: Navigator | None = None, *, source: Path | None = None) -> None:
        """Initialize store.

        Args:
            navigator: Initial snapshot (default: empty navigator)
            source: Navigation file used by reload_file() when no path is given
        """
        self._current = navigator if navigator is not None else Navigator.empty()
        self._source = source
        self._generation = 0

    @classmethod
    def from_file(cls, path: Path) -> NavigationStore:
        """Create store from a navigation file.

        Raises:
            ValidationError: If the file is rejected
        """
        store = cls(source=path)
        store.reload_file()
        return store

    @property
    def current(self) -> Navigator:
        """Currently published snapshot."""
        return self._current

    @property
    def source(self) -> Path | None:
        return self._source

    @property
    def generation(self) -> int:
        """Number of successful reloads."""
        return self._generation

    def reload(self, raw: object) -> Navigator:
        """Replace the snapshot from raw configuration.

        Args:
            raw: Configuration mapping or list of entries

        Returns:
            Newly published Navigator

        Raises:
            ValidationError: If the configuration is rejected; the previous
                snapshot stays published
        """
        return self._publish(lambda: load(raw), "configuration")

    def reload_file(self, path: Path | None = None) -> Navigator:
        """Replace the snapshot from a navigation file.

        Args:
            path: Navigation file (default: the store's source)

        Returns:
            Newly published Navigator

        Raises:
            ValueError: If no path is given and the store has no source
            ValidationError: If the file is rejected; the previous snapshot
                stays published
        """
        target = path if path is not None else self._source
        if target is None:
            raise ValueError("No navigation file to reload from")
        return self._publish(lambda: load_file(target), str(target))

    def _publish(self, build_tree: Callable[[], NavTree], origin: str) -> Navigator:
        try:
            navigator = Navigator.from_tree(build_tree())
        except DocnavError as e:
            logger.error(f"Rejected navigation reload from {origin}: {e}")
            raise

        self._current = navigator
        self._generation += 1
        logger.info(
            f"Loaded navigation from {origin}: {len(navigator)} documents "
            f"(generation {self._generation})"
        )
        return navigator
