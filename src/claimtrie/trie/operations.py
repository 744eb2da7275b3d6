"""Recursive operations over the Trie Store.

- :func:`insert`: merge one parsed claim, honoring absorption.
- :func:`check`: test a parsed request; pure read.
- :func:`collect_claims`: raw walk emitting claim strings.
- :func:`canonical_claims`: minimal claim list exactly representing a trie.

Comma semantics are asymmetric: a segment of a *granted* claim means any of
its tokens receives the grant, a segment of a *requested* permission means
every listed token must be granted.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .nodes import PART_SEPARATOR, TERMINAL, WILDCARD, Branch, Terminal, TrieNode
from .parser import ParsedPath, PermissionParser, get_default_parser


def insert(node: Optional[TrieNode], path: ParsedPath) -> TrieNode:
    """Merge ``path`` into ``node`` and return the resulting node.

    Reaching the end of the claim seals the subtree as ``Terminal``; reaching
    an existing ``Terminal`` is a no-op since everything deeper is already
    granted. Branches are updated in place, siblings not named by the
    current segment are left untouched.
    """
    if not path or isinstance(node, Terminal):
        return TERMINAL

    branch = node if node is not None else Branch()
    head, rest = path[0], path[1:]
    for token in head:
        branch.children[token] = insert(branch.children.get(token), rest)
    return branch


def _satisfies(child: Optional[TrieNode], rest: ParsedPath) -> bool:
    return child is not None and check(child, rest)


def check(node: Optional[TrieNode], path: ParsedPath) -> bool:
    """Return True when ``path`` is implied by the grants below ``node``."""
    if isinstance(node, Terminal):
        return True

    # A shallower request is not implied by deeper-only grants.
    if not path:
        return False

    if node is None or not node.children:
        return False

    head, rest = path[0], path[1:]
    wildcard = node.children.get(WILDCARD)
    return all(
        _satisfies(wildcard, rest) or _satisfies(node.children.get(token), rest)
        for token in head
    )


def _ordered_tokens(children: dict[str, TrieNode]) -> Iterable[str]:
    if WILDCARD in children:
        yield WILDCARD
    for token in children:
        if token != WILDCARD:
            yield token


def collect_claims(node: Optional[TrieNode], prefix: str = "") -> list[str]:
    """Walk ``node`` and emit one claim string per granted path.

    The wildcard child is visited first so that later minimization can drop
    specific siblings it already covers. A child granting everything below
    it is emitted without the redundant trailing ``:*``.
    """
    if isinstance(node, Terminal):
        return [prefix + WILDCARD]

    if node is None or not node.children:
        return []

    claims: list[str] = []
    for token in _ordered_tokens(node.children):
        child_prefix = prefix + token + PART_SEPARATOR
        sub_claims = collect_claims(node.children[token], child_prefix)
        if sub_claims == [child_prefix + WILDCARD]:
            claims.append(prefix + token)
        else:
            claims.extend(sub_claims)
    return claims


def canonical_claims(node: Optional[TrieNode], parser: Optional[PermissionParser] = None) -> list[str]:
    """Return the minimal claim list reproducing the grants of ``node``.

    Candidates from :func:`collect_claims` are kept in order unless an
    accumulator of already kept claims implies them.
    """
    parser = parser or get_default_parser()
    accepted: TrieNode = Branch()
    minimal: list[str] = []
    for claim in collect_claims(node):
        if check(accepted, parser.parse(claim)):
            continue
        accepted = insert(accepted, parser.parse_claim(claim))
        minimal.append(claim)
    return minimal


__all__ = [
    "canonical_claims",
    "check",
    "collect_claims",
    "insert",
]
