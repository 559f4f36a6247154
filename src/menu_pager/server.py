"""aiohttp server for menu-pager.

Application factory and route registration.
"""

import logging

from aiohttp import web

from menu_pager.api.menus import create_menus_routes
from menu_pager.api.pager import create_pager_routes
from menu_pager.app_keys import config_key, store_key
from menu_pager.config import Config
from menu_pager.core.loader import load_menus
from menu_pager.core.menus import MenuStore

logger = logging.getLogger(__name__)


def create_app(config: Config, *, store: MenuStore | None = None) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        store: Menu store to serve, loaded from config.menus.source_file when omitted

    Returns:
        Configured aiohttp application

    Raises:
        FileNotFoundError: If the menus file doesn't exist
        ValueError: If the menus file is invalid
    """
    if store is None:
        store = load_menus(config.menus.source_file)

    app = web.Application()
    app[config_key] = config
    app[store_key] = store

    app.router.add_routes(create_menus_routes())
    app.router.add_routes(create_pager_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Serving menus from {config.menus.source_file}")
    web.run_app(app, host=config.server.host, port=config.server.port)
