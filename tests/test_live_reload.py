"""Tests for live reload of the navigation file."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import pytest
from aiohttp import web
from docnav.core.store import NavigationStore
from docnav.live.reload import LiveReloadManager, create_live_reload_routes
from watchfiles import Change


async def _wait_for_connection(manager: LiveReloadManager) -> None:
    """Wait until the server side has registered the websocket."""
    for _ in range(100):
        if len(manager._connections) > 0:
            return
        await asyncio.sleep(0.01)
    raise AssertionError("websocket was not registered")


@pytest.fixture
def store(nav_file: Path) -> NavigationStore:
    return NavigationStore.from_file(nav_file)


@pytest.fixture
def manager(store: NavigationStore, nav_file: Path) -> LiveReloadManager:
    return LiveReloadManager(store, nav_file)


@pytest.fixture
def app(manager: LiveReloadManager) -> web.Application:
    """App with only the websocket route; the file watcher is not started."""
    app = web.Application()
    app.router.add_routes(create_live_reload_routes(manager))
    return app


class TestAffectsConfig:
    """Tests for LiveReloadManager.affects_config()."""

    def test__modified_config__true(self, manager: LiveReloadManager, nav_file: Path) -> None:
        """Modification of the navigation file triggers reload."""
        assert manager.affects_config({(Change.modified, str(nav_file))})

    def test__added_config__true(self, manager: LiveReloadManager, nav_file: Path) -> None:
        """File replaced by rename shows up as added."""
        assert manager.affects_config({(Change.added, str(nav_file))})

    def test__deleted_config__false(self, manager: LiveReloadManager, nav_file: Path) -> None:
        """Deletion keeps the current navigation."""
        assert not manager.affects_config({(Change.deleted, str(nav_file))})

    def test__other_file__false(self, manager: LiveReloadManager, nav_file: Path) -> None:
        """Unrelated files in the same directory are ignored."""
        other = nav_file.parent / "intro.md"

        assert not manager.affects_config({(Change.modified, str(other))})


class TestReload:
    """Tests for LiveReloadManager.reload()."""

    @pytest.mark.asyncio
    async def test__valid_edit__broadcasts_reload(
        self,
        aiohttp_client: Any,
        app: web.Application,
        manager: LiveReloadManager,
        store: NavigationStore,
        nav_file: Path,
    ) -> None:
        """Connected clients get the new generation."""
        client = await aiohttp_client(app)
        ws = await client.ws_connect("/ws/live-reload")
        await _wait_for_connection(manager)

        nav_file.write_text(json.dumps({"sidebar": [{"label": "API", "document": "api"}]}))
        await manager.reload()

        message = await ws.receive_json(timeout=5)
        assert message == {"type": "reload", "generation": 2}
        assert store.current.index.documents() == ("api",)
        await ws.close()

    @pytest.mark.asyncio
    async def test__invalid_edit__broadcasts_error_and_keeps_navigation(
        self,
        aiohttp_client: Any,
        app: web.Application,
        manager: LiveReloadManager,
        store: NavigationStore,
        nav_file: Path,
    ) -> None:
        """Rejected edit is reported and the previous navigation stays."""
        client = await aiohttp_client(app)
        ws = await client.ws_connect("/ws/live-reload")
        await _wait_for_connection(manager)

        nav_file.write_text(json.dumps({"sidebar": [{"label": "X"}]}))
        await manager.reload()

        message = await ws.receive_json(timeout=5)
        assert message["type"] == "error"
        assert message["error"]["kind"] == "malformed_node"
        assert message["error"]["location"] == "sidebar[0]"
        assert store.generation == 1
        assert store.current.index.documents() == ("intro", "setup", "api")
        await ws.close()

    @pytest.mark.asyncio
    async def test__no_clients__reloads_store(
        self,
        manager: LiveReloadManager,
        store: NavigationStore,
        nav_file: Path,
    ) -> None:
        """Reload works without connected clients."""
        nav_file.write_text(json.dumps({"sidebar": [{"label": "API", "document": "api"}]}))

        await manager.reload()

        assert store.generation == 2

    @pytest.mark.asyncio
    async def test__unexpected_error__keeps_navigation_and_logs(
        self,
        manager: LiveReloadManager,
        store: NavigationStore,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Errors other than validation failures don't escape the manager."""

        def broken_reload(path: Path | None = None) -> None:
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(store, "reload_file", broken_reload)

        with caplog.at_level(logging.ERROR, logger="docnav.live.reload"):
            await manager.reload()

        assert "Unexpected error reloading" in caplog.text
        assert store.generation == 1
        assert store.current.index.documents() == ("intro", "setup", "api")

    @pytest.mark.asyncio
    async def test__unexpected_error__next_reload_succeeds(
        self,
        manager: LiveReloadManager,
        store: NavigationStore,
        nav_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Manager keeps working after an unexpected failure."""
        original = store.reload_file

        def broken_reload(path: Path | None = None) -> None:
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr(store, "reload_file", broken_reload)
        await manager.reload()
        monkeypatch.setattr(store, "reload_file", original)
        nav_file.write_text(json.dumps({"sidebar": [{"label": "API", "document": "api"}]}))

        await manager.reload()

        assert store.generation == 2
        assert store.current.index.documents() == ("api",)


class TestStartStop:
    """Tests for watcher lifecycle."""

    @pytest.mark.asyncio
    async def test__start_twice__single_task(self, manager: LiveReloadManager) -> None:
        """Starting an already running watcher is a no-op."""
        await manager.start()
        task = manager._watch_task

        await manager.start()

        assert manager._watch_task is task
        await manager.stop()
        assert manager._watch_task is None

    @pytest.mark.asyncio
    async def test__stop_without_start(self, manager: LiveReloadManager) -> None:
        """Stopping an idle manager does nothing."""
        await manager.stop()

        assert manager._watch_task is None
