"""Tests for the trie node types and recursive operations."""

from __future__ import annotations

from claimtrie import split_permission
from claimtrie.trie import (
    TERMINAL,
    Branch,
    Terminal,
    canonical_claims,
    check,
    collect_claims,
    insert,
)


def _build(*claims: str):
    root = Branch()
    for claim in claims:
        root = insert(root, split_permission(claim))
    return root


class TestNodes:
    """Tests for Terminal / Branch."""

    def test_terminal_equality(self) -> None:
        """Terminal nodes compare by type, not identity."""
        assert Terminal() == TERMINAL

    def test_empty_branch_is_falsy(self) -> None:
        assert not Branch()
        assert Branch({"a": TERMINAL})


class TestInsert:
    """Tests for insert()."""

    def test_empty_path_seals_terminal(self) -> None:
        assert insert(Branch(), ()) == TERMINAL

    def test_terminal_absorbs_deeper_claims(self) -> None:
        """A Terminal node is never re-specialized."""
        assert insert(TERMINAL, split_permission("a:b")) == TERMINAL

    def test_builds_branches(self) -> None:
        root = _build("a:b")
        assert root == Branch({"a": Branch({"b": TERMINAL})})

    def test_comma_fans_out(self) -> None:
        root = _build("a:b,c")
        assert root == Branch({"a": Branch({"b": TERMINAL, "c": TERMINAL})})

    def test_comma_children_are_independent(self) -> None:
        """Each alternative owns its own subtree."""
        root = _build("a:b,c:d")
        root = insert(root, split_permission("a:b:e"))
        a = root.children["a"]
        assert set(a.children["b"].children) == {"d", "e"}
        assert set(a.children["c"].children) == {"d"}

    def test_siblings_untouched(self) -> None:
        root = _build("a:b:c:d,e", "a:b:*:d")
        b = root.children["a"].children["b"]
        assert set(b.children) == {"c", "*"}
        assert set(b.children["c"].children) == {"d", "e"}

    def test_shallower_claim_replaces_subtree_with_terminal(self) -> None:
        root = _build("a:b", "a")
        assert root == Branch({"a": TERMINAL})

    def test_none_node_starts_new_branch(self) -> None:
        assert insert(None, split_permission("a")) == Branch({"a": TERMINAL})


class TestCheck:
    """Tests for check()."""

    def test_terminal_grants_everything(self) -> None:
        assert check(TERMINAL, ())
        assert check(TERMINAL, split_permission("x:y:z"))

    def test_empty_request_at_branch(self) -> None:
        assert not check(_build("a"), ())

    def test_empty_branch(self) -> None:
        assert not check(Branch(), split_permission("a"))
        assert not check(None, split_permission("a"))

    def test_wildcard_route(self) -> None:
        root = _build("*:b")
        assert check(root, split_permission("x:b"))
        assert not check(root, split_permission("x:c"))

    def test_and_semantics_on_request(self) -> None:
        root = _build("x:v1,v2")
        assert check(root, split_permission("x:v1,v2"))
        assert not check(root, split_permission("x:v1,v2,v3"))

    def test_check_does_not_mutate(self) -> None:
        root = _build("a:b")
        before = repr(root)
        check(root, split_permission("a:b:c"))
        check(root, split_permission("z"))
        assert repr(root) == before


class TestCollectClaims:
    """Tests for the raw claims walk and minimization."""

    def test_terminal_root(self) -> None:
        assert collect_claims(TERMINAL) == ["*"]

    def test_empty(self) -> None:
        assert collect_claims(Branch()) == []
        assert collect_claims(None) == []

    def test_collapses_trailing_wildcard(self) -> None:
        assert collect_claims(_build("a:b")) == ["a:b"]

    def test_wildcard_visited_first(self) -> None:
        assert collect_claims(_build("a:b", "*:c")) == ["*:c", "a:b"]

    def test_minimization_drops_implied(self) -> None:
        """A wildcard sibling absorbs the specific claim it covers."""
        root = _build("a:b", "*:b", "c:d")
        assert collect_claims(root) == ["*:b", "a:b", "c:d"]
        assert canonical_claims(root) == ["*:b", "c:d"]

    def test_interior_wildcard_kept(self) -> None:
        assert canonical_claims(_build("a:*:c")) == ["a:*:c"]
