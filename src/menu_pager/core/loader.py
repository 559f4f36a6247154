"""Menu definitions loaded from TOML.

Format:
    [menus.main]
    label = "Main navigation"

    [[menus.main.links]]
    title = "Guide"
    target = "/guide"

    [[menus.main.links.children]]
    title = "Install"
    target = "/guide/install"
"""

import logging
import tomllib
from pathlib import Path

from menu_pager.core.menus import MenuStore, MenuStoreBuilder

logger = logging.getLogger(__name__)


def load_menus(path: Path) -> MenuStore:
    """Load menus from a TOML file.

    Args:
        path: Path to menus file

    Returns:
        MenuStore with menus in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the menu definitions are invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Menus file not found: {path}")

    with path.open("rb") as f:
        data = tomllib.load(f)

    store = parse_menus(data.get("menus"))
    logger.info(f"Loaded {len(store.menus())} menus from {path}")
    return store


def parse_menus(data: object) -> MenuStore:
    """Build a MenuStore from the parsed "menus" table.

    Args:
        data: Raw menus table, None for no menus

    Returns:
        MenuStore instance

    Raises:
        ValueError: If the menu definitions are invalid
    """
    builder = MenuStoreBuilder()
    if data is None:
        return builder.build()

    if not isinstance(data, dict):
        raise ValueError("menus section must be a dictionary")

    for name, menu_data in data.items():
        location = f"menus.{name}"
        if not isinstance(menu_data, dict):
            raise ValueError(f"{location} must be a dictionary")

        label = menu_data.get("label", name)
        if not isinstance(label, str):
            raise ValueError(f"{location}.label must be a string")

        builder.add_menu(name, label)
        _parse_links(builder, name, menu_data.get("links", []), None, f"{location}.links")

    return builder.build()


def _parse_links(
    builder: MenuStoreBuilder,
    menu_name: str,
    data: object,
    parent_idx: int | None,
    location: str,
) -> None:
    if not isinstance(data, list):
        raise ValueError(f"{location} must be a list")

    for i, item in enumerate(data):
        item_location = f"{location}[{i}]"
        if not isinstance(item, dict):
            raise ValueError(f"{item_location} must be a dictionary")

        title = item.get("title")
        if not isinstance(title, str):
            raise ValueError(f"{item_location}.title must be a string")

        target = item.get("target")
        if not isinstance(target, str):
            raise ValueError(f"{item_location}.target must be a string")

        link_id = item.get("id")
        if link_id is not None and not isinstance(link_id, str):
            raise ValueError(f"{item_location}.id must be a string")

        enabled = item.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError(f"{item_location}.enabled must be a boolean")

        idx = builder.add_link(
            menu_name,
            title,
            target,
            parent_idx,
            link_id=link_id,
            enabled=enabled,
        )
        _parse_links(
            builder,
            menu_name,
            item.get("children", []),
            idx,
            f"{item_location}.children",
        )
