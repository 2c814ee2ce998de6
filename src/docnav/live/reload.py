"""WebSocket-based live reload for the navigation configuration.

Watches the navigation file for changes, reloads the navigation store and
notifies connected clients via WebSocket so they can refresh the sidebar.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

from docnav.core.errors import ValidationError
from docnav.core.store import NavigationStore

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between the file system watcher, the navigation store and
    connected WebSocket clients. A rejected reload keeps the previous
    navigation published and is reported to clients as an error event.
    """

    def __init__(
        self,
        store: NavigationStore,
        config_file: Path,
        *,
        debounce_ms: int = 50,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            store: Navigation store to reload on change
            config_file: Navigation JSON file to watch
            debounce_ms: Milliseconds to group file events before reloading
        """
        self._store = store
        self._config_file = config_file
        self._debounce_ms = debounce_ms
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch the navigation file's directory and reload on change."""
        # Editors often replace files by rename, so watch the parent directory
        async for changes in awatch(self._config_file.parent, debounce=self._debounce_ms):
            if self.affects_config(changes):
                await self.reload()

    def affects_config(self, changes: set[tuple[Change, str]]) -> bool:
        """Check if a batch of file events touches the navigation file.

        Args:
            changes: Events reported by the watcher

        Returns:
            True if the navigation file was added or modified
        """
        target = self._config_file.resolve()
        for change_type, path_str in changes:
            if change_type == Change.deleted:
                continue
            if Path(path_str).resolve() == target:
                return True
        return False

    async def reload(self) -> None:
        """Reload the store and broadcast the outcome.

        Never raises: the watcher keeps running and the previous navigation
        stays published whatever goes wrong.
        """
        try:
            self._store.reload_file(self._config_file)
        except ValidationError as e:
            logger.warning(f"Keeping previous navigation: {e}")
            await self._broadcast({"type": "error", "error": e.to_dict()})
            return
        except Exception:
            logger.exception(
                f"Unexpected error reloading {self._config_file}, keeping previous navigation"
            )
            return

        await self._broadcast({"type": "reload", "generation": self._store.generation})

    async def _broadcast(self, event: dict[str, object]) -> None:
        """Broadcast event to all connected clients.

        Args:
            event: JSON-serializable event payload
        """
        if not self._connections:
            return

        message = json.dumps(event)

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
