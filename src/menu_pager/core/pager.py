"""Previous/next resolution over a menu link tree.

The tree is flattened depth-first in pre-order across the whole menu, so
adjacency is global: the previous link of a top-level item can be the last
descendant of the item before it. Parent restriction is applied after the
adjacent candidates have been found.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TypedDict

from menu_pager.core.types import LinkId


class MenuTreeCycleError(ValueError):
    """Raised when a menu tree contains a link reachable from itself."""

    def __init__(self, link_id: str) -> None:
        super().__init__(f"Menu tree contains a cycle at link: {link_id}")
        self.link_id = link_id


class LinkDict(TypedDict):
    """Dictionary representation of a pager link."""

    title: str
    target: str


class NavigationDict(TypedDict, total=False):
    """Dictionary representation of a navigation result."""

    previous: LinkDict
    next: LinkDict


@dataclass
class MenuLinkNode:
    """Menu link with children, as supplied by a menu tree provider."""

    id: LinkId
    title: str
    target: str
    parent_id: LinkId | None = None
    enabled: bool = True
    children: list[MenuLinkNode] = field(default_factory=list)


@dataclass(frozen=True)
class FlatLink:
    """Menu link projected into the flattened sequence."""

    id: LinkId
    parent_id: LinkId | None
    title: str
    target: str

    def to_dict(self) -> LinkDict:
        """Convert to dictionary for JSON serialization."""
        return {"title": self.title, "target": self.target}


@dataclass(frozen=True)
class NavigationResult:
    """Previous and next links relative to the active link."""

    previous: FlatLink | None = None
    next: FlatLink | None = None

    @property
    def is_empty(self) -> bool:
        return self.previous is None and self.next is None

    def to_dict(self) -> NavigationDict:
        """Convert to dictionary, omitting absent directions."""
        result: NavigationDict = {}
        if self.previous is not None:
            result["previous"] = self.previous.to_dict()
        if self.next is not None:
            result["next"] = self.next.to_dict()
        return result


@dataclass(frozen=True)
class ResolutionOptions:
    """Options for previous/next resolution."""

    restrict_to_parent: bool = False


def flatten(
    tree: Iterable[MenuLinkNode],
    ignore_targets: Iterable[str] = (),
) -> list[FlatLink]:
    """Flatten a menu tree depth-first in pre-order.

    Disabled links and links whose target is ignored are left out, but
    their children are still visited.

    Args:
        tree: Top-level menu links in menu order
        ignore_targets: Targets that are never emitted

    Returns:
        Flat list of links, each carrying the id of the link it was nested under

    Raises:
        MenuTreeCycleError: If a link is reached again through its descendants
    """
    flat: list[FlatLink] = []
    _flatten_into(flat, tree, frozenset(ignore_targets), None, set())
    return flat


def _flatten_into(
    flat: list[FlatLink],
    nodes: Iterable[MenuLinkNode],
    ignore: frozenset[str],
    parent_id: LinkId | None,
    ancestors: set[int],
) -> None:
    for node in nodes:
        # Identity, not id: distinct nodes may legitimately share an id
        if id(node) in ancestors:
            raise MenuTreeCycleError(node.id)

        if node.enabled and node.target not in ignore:
            flat.append(
                FlatLink(
                    id=node.id,
                    parent_id=parent_id,
                    title=node.title,
                    target=node.target,
                )
            )

        if node.children:
            ancestors.add(id(node))
            _flatten_into(flat, node.children, ignore, node.id, ancestors)
            ancestors.discard(id(node))


def resolve_navigation(
    flat: Sequence[FlatLink],
    active_id: str,
    options: ResolutionOptions | None = None,
    parent_id: str | None = None,
) -> NavigationResult:
    """Find the previous and next links around the active link.

    Args:
        flat: Flattened menu links
        active_id: Id of the active link
        options: Resolution options (defaults to no parent restriction)
        parent_id: Resolved id of the active link's parent, None for top-level links

    Returns:
        NavigationResult, empty if the active link is not in the sequence
    """
    if options is None:
        options = ResolutionOptions()

    index = next((i for i, link in enumerate(flat) if link.id == active_id), None)
    if index is None:
        return NavigationResult()

    previous = flat[index - 1] if index > 0 else None
    following = flat[index + 1] if index + 1 < len(flat) else None

    if options.restrict_to_parent:
        if previous is not None and previous.parent_id != parent_id:
            previous = None
        if following is not None and following.parent_id != parent_id:
            following = None

    return NavigationResult(previous=previous, next=following)
