"""In-memory menu store.

Holds menu link trees and answers the lookups the pager needs: loading a
menu's tree, resolving a parent reference and finding the link for a path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from menu_pager.core.pager import MenuLinkNode
from menu_pager.core.protocols import ActiveLink

logger = logging.getLogger(__name__)


class MenuNotFoundError(LookupError):
    """Raised when a menu name is not known to the store."""

    def __init__(self, menu_name: str) -> None:
        super().__init__(f"Menu not found: {menu_name}")
        self.menu_name = menu_name


class MenuLinkNotFoundError(LookupError):
    """Raised when a link reference is not known to the store."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Menu link not found: {reference}")
        self.reference = reference


@dataclass
class Menu:
    """Named menu with its top-level links."""

    name: str
    label: str
    links: list[MenuLinkNode] = field(default_factory=list)


class MenuStore:
    """Menus in definition order with an index of links by id."""

    __slots__ = ("_links", "_menus")

    def __init__(self, menus: list[Menu]) -> None:
        self._menus = {menu.name: menu for menu in menus}
        self._links = {
            node.id: node for menu in menus for node in _walk(menu.links)
        }

    def menus(self) -> list[Menu]:
        """Get all menus in definition order."""
        return list(self._menus.values())

    def get_menu(self, menu_name: str) -> Menu:
        """Get menu by name.

        Raises:
            MenuNotFoundError: If the menu doesn't exist
        """
        menu = self._menus.get(menu_name)
        if menu is None:
            raise MenuNotFoundError(menu_name)
        return menu

    def load_menu_tree(self, menu_name: str) -> list[MenuLinkNode]:
        """Get the link tree of a menu.

        Raises:
            MenuNotFoundError: If the menu doesn't exist
        """
        return self.get_menu(menu_name).links

    def get_link(self, link_id: str) -> MenuLinkNode | None:
        return self._links.get(link_id)

    def resolve_parent_id(self, parent_reference: str) -> str:
        """Resolve a parent reference to the parent link's id.

        Raises:
            MenuLinkNotFoundError: If no link matches the reference
        """
        link = self._links.get(parent_reference)
        if link is None:
            raise MenuLinkNotFoundError(parent_reference)
        return link.id

    def find_link_by_target(
        self,
        target: str,
        menu_name: str | None = None,
    ) -> ActiveLink | None:
        """Find the first link pointing at a target.

        Menus are searched in definition order and links in pre-order.

        Args:
            target: Link target; path-like targets are compared normalized
            menu_name: Only search this menu when given

        Returns:
            ActiveLink for the first match, None if nothing matches
        """
        if menu_name is not None:
            menus = [self.get_menu(menu_name)]
        else:
            menus = self.menus()

        wanted = _target_key(target)
        for menu in menus:
            for node in _walk(menu.links):
                if _target_key(node.target) == wanted:
                    return ActiveLink(
                        id=node.id,
                        menu_name=menu.name,
                        parent=node.parent_id,
                    )
        return None


class PathActiveLinkLocator:
    """Locate the active link by matching the request path against link targets."""

    def __init__(
        self,
        store: MenuStore,
        path: str,
        menu_name: str | None = None,
    ) -> None:
        self._store = store
        self._path = normalize_path(path)
        self._menu_name = menu_name

    @property
    def path(self) -> str:
        return self._path

    def get_active_link(self) -> ActiveLink | None:
        link = self._store.find_link_by_target(self._path, self._menu_name)
        if link is None:
            logger.debug(f"No active link for path {self._path}")
        return link


def normalize_path(path: str) -> str:
    """Normalize path to have a leading slash and no trailing slash."""
    normalized = path if path.startswith("/") else f"/{path}"
    if len(normalized) > 1:
        normalized = normalized.rstrip("/") or "/"
    return normalized


def _target_key(target: str) -> str:
    """Normalize path-like targets, leave absolute URLs untouched."""
    parts = urlsplit(target)
    if parts.scheme or parts.netloc:
        return target
    return normalize_path(target)


class MenuStoreBuilder:
    """Builder for constructing MenuStore instances."""

    def __init__(self) -> None:
        self._menus: list[Menu] = []
        self._menu_index: dict[str, Menu] = {}
        self._nodes: list[MenuLinkNode] = []
        self._node_menus: list[str] = []
        self._ids: set[str] = set()

    def add_menu(self, name: str, label: str | None = None) -> Menu:
        """Add an empty menu.

        Args:
            name: Menu machine name
            label: Human-readable label, defaults to the name

        Returns:
            The added Menu

        Raises:
            ValueError: If a menu with this name already exists
        """
        if name in self._menu_index:
            raise ValueError(f"Duplicate menu: {name}")
        menu = Menu(name=name, label=label if label is not None else name)
        self._menus.append(menu)
        self._menu_index[name] = menu
        return menu

    def add_link(
        self,
        menu_name: str,
        title: str,
        target: str,
        parent_idx: int | None = None,
        *,
        link_id: str | None = None,
        enabled: bool = True,
    ) -> int:
        """Add a link to a menu.

        Args:
            menu_name: Name of a menu added with add_menu()
            title: Link title
            target: Link target (path or URL)
            parent_idx: Index of the parent link, None for top-level
            link_id: Explicit link id, defaults to "<menu>:<index>"
            enabled: Whether the link is shown

        Returns:
            Index of the added link

        Raises:
            MenuNotFoundError: If the menu was not added
            ValueError: If the link id is already used or the parent belongs to another menu
        """
        menu = self._menu_index.get(menu_name)
        if menu is None:
            raise MenuNotFoundError(menu_name)

        idx = len(self._nodes)
        node_id = link_id if link_id is not None else f"{menu_name}:{idx}"
        if node_id in self._ids:
            raise ValueError(f"Duplicate menu link id: {node_id}")

        parent = self._nodes[parent_idx] if parent_idx is not None else None
        node = MenuLinkNode(
            id=node_id,
            title=title,
            target=target,
            parent_id=parent.id if parent is not None else None,
            enabled=enabled,
        )

        if parent is None:
            menu.links.append(node)
        else:
            if self._node_menus[parent_idx] != menu_name:
                raise ValueError(
                    f"Parent link {parent.id} does not belong to menu {menu_name}"
                )
            parent.children.append(node)

        self._nodes.append(node)
        self._node_menus.append(menu_name)
        self._ids.add(node_id)
        return idx

    def build(self) -> MenuStore:
        """Build the MenuStore instance."""
        return MenuStore(self._menus)


def _walk(nodes: list[MenuLinkNode]) -> Iterator[MenuLinkNode]:
    """Yield links depth-first in pre-order."""
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
