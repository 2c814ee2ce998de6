"""Documents API endpoints.

Resolves document ids to their position in the reading order, with
breadcrumb and previous/next links.
"""

from aiohttp import web

from docnav.app_keys import store_key


def create_documents_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/documents", list_documents),
        web.get("/api/documents/{document:.+}", get_document),
    ]


async def list_documents(request: web.Request) -> web.Response:
    navigator = request.app[store_key].current
    return web.json_response(
        {"documents": [entry.to_dict() for entry in navigator.index]},
    )


async def get_document(request: web.Request) -> web.Response:
    document = request.match_info["document"]
    # Single snapshot for all lookups so a concurrent reload can't mix results
    navigator = request.app[store_key].current

    entry = navigator.resolve(document)
    if entry is None:
        return web.json_response(
            {"error": "Document not found", "document": document},
            status=404,
        )

    previous = navigator.previous(document)
    following = navigator.next(document)

    return web.json_response(
        {
            "entry": entry.to_dict(),
            "breadcrumb": list(entry.breadcrumb),
            "previous": previous.to_dict() if previous else None,
            "next": following.to_dict() if following else None,
        },
    )
