"""Navigation API endpoints.

Provides the sidebar tree endpoint.
"""

from aiohttp import web

from docnav.app_keys import store_key


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    store = request.app[store_key]
    tree = store.current.sidebar_view()
    return web.json_response({**tree.to_dict(), "generation": store.generation})
