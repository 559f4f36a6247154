"""Tests for menu tree flattening and previous/next resolution."""

import pytest
from menu_pager.core.pager import (
    FlatLink,
    MenuLinkNode,
    MenuTreeCycleError,
    NavigationResult,
    ResolutionOptions,
    flatten,
    resolve_navigation,
)


def _node(link_id: str, *children: MenuLinkNode, enabled: bool = True) -> MenuLinkNode:
    return MenuLinkNode(
        id=link_id,
        title=link_id.upper(),
        target=f"/{link_id}",
        enabled=enabled,
        children=list(children),
    )


def _ids(links: list[FlatLink]) -> list[str]:
    return [link.id for link in links]


RESTRICTED = ResolutionOptions(restrict_to_parent=True)


class TestFlatten:
    """Tests for flatten()."""

    def test__empty_tree__returns_empty_list(self) -> None:
        assert flatten([]) == []

    def test__nested_tree__preorder(self) -> None:
        """Emit each link before its children, children before the next sibling."""
        tree = [_node("a", _node("b", _node("x")), _node("c", _node("y"))), _node("d")]

        flat = flatten(tree)

        assert _ids(flat) == ["a", "b", "x", "c", "y", "d"]

    def test__parent_id__from_traversal(self) -> None:
        """Use the enclosing link's id as parent, not the node's stored parent."""
        child = MenuLinkNode(id="b", title="B", target="/b", parent_id="stale")
        tree = [MenuLinkNode(id="a", title="A", target="/a", children=[child])]

        flat = flatten(tree)

        assert flat[0].parent_id is None
        assert flat[1].parent_id == "a"

    def test__copies_title_and_target(self) -> None:
        tree = [MenuLinkNode(id="a", title="Guide", target="/guide")]

        assert flatten(tree) == [
            FlatLink(id="a", parent_id=None, title="Guide", target="/guide")
        ]

    def test__disabled_node__skipped_but_children_kept(self) -> None:
        """Disabling a link doesn't hide its descendants."""
        tree = [_node("a", _node("b", enabled=False)), _node("c", enabled=False)]
        tree[0].children[0].children.append(_node("x"))

        flat = flatten(tree)

        assert _ids(flat) == ["a", "x"]
        assert flat[1].parent_id == "b"

    def test__ignored_target__skipped_but_children_kept(self) -> None:
        tree = [_node("a", _node("b")), _node("c")]

        flat = flatten(tree, ignore_targets={"/a"})

        assert _ids(flat) == ["b", "c"]
        assert flat[0].parent_id == "a"

    def test__empty_title__still_emitted(self) -> None:
        tree = [MenuLinkNode(id="a", title="", target="/a")]

        assert _ids(flatten(tree)) == ["a"]

    def test__cycle__raises_error(self) -> None:
        """Fail fast instead of recursing forever."""
        a = _node("a")
        b = _node("b")
        a.children.append(b)
        b.children.append(a)

        with pytest.raises(MenuTreeCycleError, match="cycle at link: a"):
            flatten([a])

    def test__shared_subtree__not_a_cycle(self) -> None:
        """The same node object under two parents is visited twice."""
        shared = _node("s")
        tree = [_node("a", shared), _node("b", shared)]

        flat = flatten(tree)

        assert _ids(flat) == ["a", "s", "b", "s"]


class TestResolveNavigation:
    """Tests for resolve_navigation()."""

    @pytest.fixture
    def flat(self) -> list[FlatLink]:
        # A[B[X], C[Y]] -> A, B, X, C, Y
        return flatten([_node("a", _node("b", _node("x")), _node("c", _node("y")))])

    def test__adjacency_is_global(self) -> None:
        """Previous and next come from the flat order, not the sibling list."""
        flat = flatten([_node("a", _node("b"), _node("c", _node("d")))])

        result = resolve_navigation(flat, "c", parent_id="a")

        assert result.previous is not None
        assert result.previous.id == "b"
        assert result.next is not None
        assert result.next.id == "d"

    def test__restrict_to_parent__rejects_other_parents(
        self, flat: list[FlatLink]
    ) -> None:
        """Raw previous X (parent B) and next Y (parent C) don't share parent A."""
        result = resolve_navigation(flat, "c", RESTRICTED, parent_id="a")

        assert result == NavigationResult(previous=None, next=None)

    def test__restrict_to_parent__accepts_siblings(self) -> None:
        flat = flatten([_node("a", _node("b"), _node("c"), _node("d"))])

        result = resolve_navigation(flat, "c", RESTRICTED, parent_id="a")

        assert result.previous is not None
        assert result.previous.id == "b"
        assert result.next is not None
        assert result.next.id == "d"

    def test__restrict_to_parent__top_level_links(self) -> None:
        """Top-level links share the absent parent."""
        flat = flatten([_node("a"), _node("b"), _node("c", _node("d"))])

        result = resolve_navigation(flat, "b", RESTRICTED)

        assert result.previous is not None
        assert result.previous.id == "a"
        assert result.next is not None
        assert result.next.id == "c"

    def test__restrict_to_parent__filters_each_side(self) -> None:
        """Keep the side that matches, drop the one that doesn't."""
        flat = flatten([_node("a", _node("b"), _node("c", _node("d")))])

        result = resolve_navigation(flat, "b", RESTRICTED, parent_id="a")

        assert result.previous is None
        assert result.next is not None
        assert result.next.id == "c"

    def test__absent_active_link__returns_empty(self, flat: list[FlatLink]) -> None:
        result = resolve_navigation(flat, "missing")

        assert result.is_empty
        assert result.to_dict() == {}

    def test__empty_sequence__returns_empty(self) -> None:
        assert resolve_navigation([], "a").is_empty

    @pytest.mark.parametrize("options", [None, RESTRICTED])
    def test__first_link__has_no_previous(
        self, flat: list[FlatLink], options: ResolutionOptions | None
    ) -> None:
        result = resolve_navigation(flat, "a", options)

        assert result.previous is None

    @pytest.mark.parametrize("options", [None, RESTRICTED])
    def test__last_link__has_no_next(
        self, flat: list[FlatLink], options: ResolutionOptions | None
    ) -> None:
        result = resolve_navigation(flat, "y", options, parent_id="c")

        assert result.next is None

    def test__disabled_neighbour__never_returned(self) -> None:
        """A disabled link is skipped even when it sits next to the active link."""
        flat = flatten([_node("a"), _node("b", enabled=False), _node("c")])

        result = resolve_navigation(flat, "a")

        assert result.next is not None
        assert result.next.id == "c"

    def test__disabled_active_link__returns_empty(self) -> None:
        flat = flatten([_node("a"), _node("b", enabled=False), _node("c")])

        assert resolve_navigation(flat, "b").is_empty

    def test__repeated_calls__same_result(self, flat: list[FlatLink]) -> None:
        first = resolve_navigation(flat, "x", RESTRICTED, parent_id="b")
        second = resolve_navigation(flat, "x", RESTRICTED, parent_id="b")

        assert first == second


class TestNavigationResult:
    """Tests for NavigationResult serialization."""

    def test__to_dict__omits_absent_sides(self) -> None:
        link = FlatLink(id="a", parent_id=None, title="A", target="/a")

        assert NavigationResult(next=link).to_dict() == {
            "next": {"title": "A", "target": "/a"}
        }
