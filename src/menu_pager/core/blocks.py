"""Menu pager blocks.

One block is derived for every menu. A block renders an item list with the
previous and next links of the active link, or nothing at all.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from html import escape
from typing import TypedDict

from menu_pager.core.menus import MenuStore
from menu_pager.core.pager import FlatLink, NavigationResult
from menu_pager.core.service import MenuPager

BLOCK_ID = "menu_pager_block"

# Rendered output depends on the active link, which depends on the path
CACHE_CONTEXTS = ("url.path",)

_TRUTHY_FORM_VALUES = frozenset({"1", "on", "true", "yes"})


class BlockDefinitionDict(TypedDict):
    """Dictionary representation of a block definition."""

    id: str
    menu: str
    admin_label: str
    config_dependencies: list[str]


class RenderItemDict(TypedDict):
    """Dictionary representation of one rendered pager item."""

    title: str
    target: str
    text: str
    wrapper_class: str


class RenderFragmentDict(TypedDict):
    """Dictionary representation of a rendered pager."""

    theme: str
    items: dict[str, RenderItemDict]
    attributes: dict[str, list[str]]


@dataclass(frozen=True)
class BlockDefinition:
    """Pager block variant for a single menu."""

    id: str
    menu_name: str
    admin_label: str
    config_dependencies: tuple[str, ...] = ()

    def to_dict(self) -> BlockDefinitionDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "menu": self.menu_name,
            "admin_label": self.admin_label,
            "config_dependencies": list(self.config_dependencies),
        }


@dataclass(frozen=True)
class BlockSettings:
    """Per-block configuration."""

    restrict_to_parent: bool = False

    @classmethod
    def from_form(cls, values: Mapping[str, object]) -> BlockSettings:
        """Build settings from submitted form values.

        An unchecked checkbox is absent from a submission, so a missing key
        means False.
        """
        raw = values.get("restrict_to_parent")
        if isinstance(raw, bool):
            return cls(restrict_to_parent=raw)
        if raw is None:
            return cls()
        return cls(restrict_to_parent=str(raw).strip().lower() in _TRUTHY_FORM_VALUES)


def derive_block_definitions(store: MenuStore) -> dict[str, BlockDefinition]:
    """Create one block definition per menu.

    Args:
        store: Menu store to enumerate

    Returns:
        Block definitions keyed by menu name, in menu order
    """
    definitions: dict[str, BlockDefinition] = {}
    for menu in store.menus():
        definitions[menu.name] = BlockDefinition(
            id=f"{BLOCK_ID}:{menu.name}",
            menu_name=menu.name,
            admin_label=f"Menu Pager - {menu.label}",
            config_dependencies=(f"system.menu.{menu.name}",),
        )
    return definitions


@dataclass(frozen=True)
class RenderItem:
    """Link in a rendered pager."""

    link: FlatLink
    text: str
    wrapper_class: str


@dataclass(frozen=True)
class RenderFragment:
    """Item list with the previous and/or next link."""

    items: dict[str, RenderItem] = field(default_factory=dict)
    classes: tuple[str, ...] = ("menu-pager", "clearfix")

    @classmethod
    def from_navigation(cls, navigation: NavigationResult) -> RenderFragment:
        items: dict[str, RenderItem] = {}
        if navigation.previous is not None:
            items["previous"] = RenderItem(
                link=navigation.previous,
                text=f"<< {navigation.previous.title}",
                wrapper_class="menu-pager-previous",
            )
        if navigation.next is not None:
            items["next"] = RenderItem(
                link=navigation.next,
                text=f"{navigation.next.title} >>",
                wrapper_class="menu-pager-next",
            )
        return cls(items=items)

    def to_dict(self) -> RenderFragmentDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "theme": "item_list",
            "items": {
                key: {
                    "title": item.link.title,
                    "target": item.link.target,
                    "text": item.text,
                    "wrapper_class": item.wrapper_class,
                }
                for key, item in self.items.items()
            },
            "attributes": {"class": list(self.classes)},
        }

    def to_html(self) -> str:
        """Render as an HTML list."""
        parts = [f'<ul class="{escape(" ".join(self.classes))}">']
        for item in self.items.values():
            parts.append(
                f'<li class="{escape(item.wrapper_class)}">'
                f'<a href="{escape(item.link.target)}">{escape(item.text)}</a>'
                "</li>"
            )
        parts.append("</ul>")
        return "".join(parts)


class PagerBlock:
    """Pager block bound to one menu."""

    cache_contexts = CACHE_CONTEXTS

    def __init__(
        self,
        definition: BlockDefinition,
        settings: BlockSettings,
        pager: MenuPager,
    ) -> None:
        self._definition = definition
        self._settings = settings
        self._pager = pager

    @property
    def definition(self) -> BlockDefinition:
        return self._definition

    @property
    def settings(self) -> BlockSettings:
        return self._settings

    def get_navigation(self) -> NavigationResult:
        return self._pager.get_navigation(
            self._definition.menu_name,
            restrict_to_parent=self._settings.restrict_to_parent,
        )

    def build(self) -> RenderFragment | None:
        """Render the block.

        Returns:
            RenderFragment, or None when there is neither a previous nor a next link
        """
        navigation = self.get_navigation()
        if navigation.is_empty:
            return None
        return RenderFragment.from_navigation(navigation)
