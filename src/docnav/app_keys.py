"""Application keys for type-safe app configuration access."""

from aiohttp import web

from docnav.core.store import NavigationStore
from docnav.live.reload import LiveReloadManager

store_key = web.AppKey("store", NavigationStore)
live_reload_key = web.AppKey("live_reload_manager", LiveReloadManager)
