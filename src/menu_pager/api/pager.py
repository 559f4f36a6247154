"""Pager endpoints.

Returns previous/next links for the menu link matching the requested path,
as JSON or as the rendered pager fragment.
"""

import json
import logging
from hashlib import md5

from aiohttp import web

from menu_pager.app_keys import config_key, store_key
from menu_pager.core.blocks import BlockSettings, PagerBlock, derive_block_definitions
from menu_pager.core.menus import MenuNotFoundError, PathActiveLinkLocator
from menu_pager.core.service import MenuPager

logger = logging.getLogger(__name__)


def create_pager_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/pager/{menu}/{path:.*}", get_pager),
        web.get("/pager/{menu}/{path:.*}", get_pager_fragment),
    ]


async def get_pager(request: web.Request) -> web.Response:
    menu_name = request.match_info["menu"]
    try:
        block, locator = _create_block(request)
    except MenuNotFoundError:
        return web.json_response(
            {"error": "Menu not found", "menu": menu_name},
            status=404,
        )

    navigation = block.get_navigation()
    response_data = {"menu": menu_name, "path": locator.path, **navigation.to_dict()}

    etag = _compute_etag(json.dumps(response_data, sort_keys=True))
    if request.headers.get("If-None-Match") == etag:
        return web.Response(status=304)

    return web.json_response(
        response_data,
        headers={
            "ETag": etag,
            "Cache-Control": "private, max-age=60",
            "X-Cache-Contexts": ",".join(block.cache_contexts),
        },
    )


async def get_pager_fragment(request: web.Request) -> web.Response:
    menu_name = request.match_info["menu"]
    try:
        block, _ = _create_block(request)
    except MenuNotFoundError:
        raise web.HTTPNotFound(text=f"Menu not found: {menu_name}") from None

    fragment = block.build()
    headers = {"X-Cache-Contexts": ",".join(block.cache_contexts)}
    if fragment is None:
        return web.Response(status=204, headers=headers)
    return web.Response(text=fragment.to_html(), content_type="text/html", headers=headers)


def _create_block(request: web.Request) -> tuple[PagerBlock, PathActiveLinkLocator]:
    """Build a request-scoped pager block for the requested menu.

    Raises:
        MenuNotFoundError: If the menu doesn't exist
    """
    menu_name = request.match_info["menu"]
    store = request.app[store_key]
    config = request.app[config_key]

    definition = derive_block_definitions(store).get(menu_name)
    if definition is None:
        raise MenuNotFoundError(menu_name)

    if "restrict_to_parent" in request.query:
        settings = BlockSettings.from_form(request.query)
    else:
        settings = config.block_settings(menu_name)

    locator = PathActiveLinkLocator(store, request.match_info["path"])
    pager = MenuPager(
        store,
        locator,
        store,
        ignore_targets=config.menus.ignore_targets,
    )
    logger.debug(
        f"Pager request for {locator.path} in {menu_name} "
        f"(restrict_to_parent={settings.restrict_to_parent})"
    )
    return PagerBlock(definition, settings, pager), locator


def _compute_etag(content: str) -> str:
    content_hash = md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()[:16]
    return f'"{content_hash}"'
