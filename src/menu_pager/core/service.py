"""Menu pager service.

Wires the tree provider, active link locator and parent resolver to the
flattening and resolution functions. One MenuPager serves one request.
"""

import logging
from collections.abc import Iterable

from menu_pager.core.pager import (
    FlatLink,
    NavigationResult,
    ResolutionOptions,
    flatten,
    resolve_navigation,
)
from menu_pager.core.protocols import (
    ActiveLinkLocator,
    MenuTreeProvider,
    ParentResolver,
)

logger = logging.getLogger(__name__)


class MenuPager:
    """Previous/next navigation for the active link of a menu.

    Flattened trees are memoized per menu name and results per
    (menu name, active link id, restrict_to_parent). Instances are meant to
    live for a single request, so nothing is shared between requests.
    """

    def __init__(
        self,
        tree_provider: MenuTreeProvider,
        active_link_locator: ActiveLinkLocator,
        parent_resolver: ParentResolver,
        *,
        ignore_targets: Iterable[str] = (),
    ) -> None:
        """Initialize pager.

        Args:
            tree_provider: Source of menu link trees
            active_link_locator: Reports the active link of the current request
            parent_resolver: Maps parent references to link ids
            ignore_targets: Targets never offered as previous or next
        """
        self._tree_provider = tree_provider
        self._active_link_locator = active_link_locator
        self._parent_resolver = parent_resolver
        self._ignore_targets = frozenset(ignore_targets)
        self._flat_links: dict[str, list[FlatLink]] = {}
        self._results: dict[tuple[str, str, bool], NavigationResult] = {}

    def get_navigation(
        self,
        menu_name: str,
        restrict_to_parent: bool = False,
    ) -> NavigationResult:
        """Get previous and next links for the active link in a menu.

        Args:
            menu_name: Menu to page through
            restrict_to_parent: Only accept links sharing the active link's parent

        Returns:
            NavigationResult, empty when no link of this menu is active

        Raises:
            MenuNotFoundError: If the tree provider doesn't know the menu
            MenuTreeCycleError: If the menu tree is cyclic
        """
        active_link = self._active_link_locator.get_active_link()
        if active_link is None:
            return NavigationResult()

        if active_link.menu_name != menu_name:
            logger.debug(
                f"Active link {active_link.id} belongs to menu "
                f"{active_link.menu_name}, not {menu_name}"
            )
            return NavigationResult()

        key = (menu_name, active_link.id, restrict_to_parent)
        cached = self._results.get(key)
        if cached is not None:
            return cached

        parent_id = None
        if active_link.parent:
            parent_id = self._parent_resolver.resolve_parent_id(active_link.parent)

        result = resolve_navigation(
            self._get_flat_links(menu_name),
            active_link.id,
            ResolutionOptions(restrict_to_parent=restrict_to_parent),
            parent_id,
        )
        logger.debug(
            f"Navigation for {active_link.id} in {menu_name}: "
            f"previous={result.previous.id if result.previous else None}, "
            f"next={result.next.id if result.next else None}"
        )

        self._results[key] = result
        return result

    def _get_flat_links(self, menu_name: str) -> list[FlatLink]:
        flat = self._flat_links.get(menu_name)
        if flat is None:
            tree = self._tree_provider.load_menu_tree(menu_name)
            flat = flatten(tree, self._ignore_targets)
            logger.debug(f"Flattened menu {menu_name} into {len(flat)} links")
            self._flat_links[menu_name] = flat
        return flat
