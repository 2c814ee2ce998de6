"""aiohttp application for Docnav.

Application factory and route registration. The host process runs the
returned application or mounts it as a sub-application.
"""

from aiohttp import web

from docnav.api.documents import create_documents_routes
from docnav.api.navigation import create_navigation_routes
from docnav.app_keys import live_reload_key, store_key
from docnav.config import Config
from docnav.core.store import NavigationStore
from docnav.live import LiveReloadManager
from docnav.live.reload import create_live_reload_routes


def create_app(config: Config, *, store: NavigationStore | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        store: Navigation store to serve (default: loaded from
            config.navigation.config_file)

    Returns:
        Configured aiohttp application

    Raises:
        ValidationError: If the initial navigation file is rejected
    """
    app = web.Application()

    if store is None:
        store = NavigationStore.from_file(config.navigation.config_file)
    app[store_key] = store

    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_documents_routes())

    # Injected stores may come from a different file than the config names
    if config.live_reload.enabled:
        manager = LiveReloadManager(
            store,
            store.source or config.navigation.config_file,
            debounce_ms=config.live_reload.debounce_ms,
        )
        app[live_reload_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    return app


async def _start_live_reload(app: web.Application) -> None:
    """Start live reload on application startup."""
    await app[live_reload_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    """Stop live reload on application cleanup."""
    await app[live_reload_key].stop()
