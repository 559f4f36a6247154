"""Application keys for type-safe app configuration access."""

from aiohttp import web

from menu_pager.config import Config
from menu_pager.core.menus import MenuStore

config_key = web.AppKey("config", Config)
store_key = web.AppKey("store", MenuStore)
