"""Menus API endpoint.

Lists the pager block derived for each menu.
"""

from aiohttp import web

from menu_pager.app_keys import store_key
from menu_pager.core.blocks import derive_block_definitions


def create_menus_routes() -> list[web.RouteDef]:
    return [web.get("/api/menus", get_menus)]


async def get_menus(request: web.Request) -> web.Response:
    store = request.app[store_key]
    definitions = derive_block_definitions(store)
    return web.json_response(
        {"blocks": [definition.to_dict() for definition in definitions.values()]}
    )
