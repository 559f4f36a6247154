"""Interfaces consumed by the menu pager.

Any object with matching methods can be passed to MenuPager; the in-memory
MenuStore implements the tree provider and parent resolver.
"""

from dataclasses import dataclass
from typing import Protocol

from menu_pager.core.pager import MenuLinkNode


@dataclass(frozen=True)
class ActiveLink:
    """The menu link matching the current request."""

    id: str
    menu_name: str
    parent: str | None = None


class MenuTreeProvider(Protocol):
    def load_menu_tree(self, menu_name: str) -> list[MenuLinkNode]:
        """Return the access-checked, ordered link tree of a menu."""
        ...


class ActiveLinkLocator(Protocol):
    def get_active_link(self) -> ActiveLink | None:
        """Return the active link for the current request, if any."""
        ...


class ParentResolver(Protocol):
    def resolve_parent_id(self, parent_reference: str) -> str:
        """Map a parent reference to the parent link's identifier."""
        ...
