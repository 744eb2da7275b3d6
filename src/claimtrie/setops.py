"""Intersection Engine: permissions granted by all of several sets.

Two phases:

1. **Direct overlap**: every canonical claim of every input that all other
   inputs also grant is copied into the result.
2. **Cross-wildcard expansion**: claims left over from phase 1 have their
   ``*`` segments substituted with the concrete tokens other inputs name at
   the same depth. ``*:b`` from one set and ``a:*`` from another jointly grant
   ``a:b`` even though neither states it literally.

For every permission ``x``::

    intersect(s1, ..., sn).check(x) == s1.check(x) and ... and sn.check(x)
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator, Sequence
from typing import Any

from .permission_set import PermissionSet
from .trie.nodes import PART_SEPARATOR, WILDCARD

logger = logging.getLogger(__name__)


def _others(inputs: Sequence[PermissionSet], index: int) -> list[PermissionSet]:
    return [s for i, s in enumerate(inputs) if i != index]


def _granted_by_all(permission: str, sets: Sequence[PermissionSet]) -> bool:
    return all(s.check(permission) for s in sets)


def _substitutions(others: Sequence[PermissionSet]) -> list[list[str]]:
    """Tokens a wildcard may be narrowed to, indexed by depth.

    The wildcard itself comes first at every depth so that the broadest
    candidates are tried before concrete ones; concrete tokens follow in
    first-seen order.
    """
    by_depth: list[dict[str, None]] = []
    for other in others:
        for claim in other.claims:
            for depth, token in enumerate(claim.split(PART_SEPARATOR)):
                if depth == len(by_depth):
                    by_depth.append({WILDCARD: None})
                by_depth[depth].setdefault(token, None)
    return [list(tokens) for tokens in by_depth]


def _wildcard_expansions(claim: str, substitutions: Sequence[Sequence[str]]) -> Iterator[str]:
    parts = claim.split(PART_SEPARATOR)
    positions = [depth for depth, part in enumerate(parts) if part == WILDCARD]
    if not positions:
        return

    options = [substitutions[depth] if depth < len(substitutions) else [WILDCARD] for depth in positions]
    for combination in itertools.product(*options):
        candidate = list(parts)
        for depth, token in zip(positions, combination):
            candidate[depth] = token
        if candidate == parts:
            continue
        yield PART_SEPARATOR.join(candidate)


def intersect(*sets: Any) -> PermissionSet:
    """Return a new PermissionSet granting exactly what every input grants.

    Args:
        *sets: PermissionSet instances, or claim strings / iterables of claim
            strings convertible through :meth:`PermissionSet.coerce`.

    Returns:
        A new PermissionSet. No inputs yield an empty set; a single input
        yields an equivalent independent set.

    Example::

        intersect(PermissionSet.create("*:b"), PermissionSet.create("a:*")).claims
        # ("a:b",)
    """
    inputs = [PermissionSet.coerce(s) for s in sets]
    result = PermissionSet()
    if not inputs:
        return result

    # Phase 1: claims literally shared by all inputs.
    leftovers: list[tuple[int, str]] = []
    for index, source in enumerate(inputs):
        others = _others(inputs, index)
        for claim in source.claims:
            if result.check(claim):
                continue
            if _granted_by_all(claim, others):
                result.add(claim)
            elif WILDCARD in claim.split(PART_SEPARATOR):
                leftovers.append((index, claim))

    # Phase 2: narrow wildcards with tokens named by the other inputs.
    substitutions: dict[int, list[list[str]]] = {}
    for index, claim in leftovers:
        others = _others(inputs, index)
        if index not in substitutions:
            substitutions[index] = _substitutions(others)
        for candidate in _wildcard_expansions(claim, substitutions[index]):
            if result.check(candidate):
                continue
            if _granted_by_all(candidate, others):
                result.add(candidate)

    logger.debug(
        "Intersected %d permission sets into %d claims (%d wildcard claims expanded)",
        len(inputs),
        len(result.claims),
        len(leftovers),
    )
    return result


__all__ = ["intersect"]
