"""PermissionSet: a mutable set of granted claims backed by a permission trie.

Example::

    permissions = PermissionSet.create(["account:edit:*", "report:read,export"])
    permissions.check("account:edit:42")        # True
    permissions.check("report:read")            # True
    permissions.check("report:read,delete")     # False (every token must be granted)
    permissions.claims                          # ("account:edit", "report:read", "report:export")

All operations are fail-closed and exception-free: malformed claims are
ignored on ``add`` and malformed requests are simply not granted by
``check``. Only :meth:`PermissionSet.require` raises, on explicit request.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Iterator
from typing import Any, Optional, Union

from .exceptions import PermissionDeniedError
from .logging import safe_preview
from .trie import operations
from .trie.nodes import Branch, Terminal, TrieNode
from .trie.parser import PermissionParser, get_default_parser, is_well_formed

logger = logging.getLogger(__name__)

ClaimsLike = Union[str, Iterable[str], None]


def _iter_claims(claims: Any) -> Iterable[Any]:
    if claims is None:
        return ()
    if isinstance(claims, str):
        return (claims,)
    if isinstance(claims, (bytes, bytearray)) or not isinstance(claims, Iterable):
        logger.debug("Ignoring claims of unsupported type %s", type(claims).__name__)
        return ()
    return claims


class PermissionSet:
    """Granted permission claims with wildcard-aware implication checks.

    Args:
        claims: A claim string, an iterable of claim strings, or None.
        parser: Parser used for claims and requests. Defaults to the shared
            parser from :func:`claimtrie.trie.parser.get_default_parser`.

    Not safe for concurrent ``add`` calls; readers may share an instance as
    long as writers are serialized or work on a :meth:`copy`.
    """

    __slots__ = ("_root", "_parser", "_claims", "_claims_dirty")

    def __init__(self, claims: ClaimsLike = None, *, parser: Optional[PermissionParser] = None) -> None:
        self._parser = parser or get_default_parser()
        self._root: TrieNode = Branch()
        self._claims: tuple[str, ...] = ()
        self._claims_dirty = False
        self.add(claims)

    @classmethod
    def create(cls, claims: ClaimsLike = None, *, parser: Optional[PermissionParser] = None) -> PermissionSet:
        return cls(claims, parser=parser)

    @classmethod
    def coerce(cls, value: Any) -> PermissionSet:
        """Return ``value`` if it is already a PermissionSet, else build one from it.

        Values that are neither claim strings nor iterables of claims yield an
        empty set.
        """
        if isinstance(value, PermissionSet):
            return value
        return cls(value)

    @classmethod
    def intersection(cls, *sets: Any) -> PermissionSet:
        """Permissions granted by every one of ``sets``.

        See :func:`claimtrie.setops.intersect`.
        """
        from .setops import intersect

        return intersect(*sets)

    # ── Mutation ────────────────────────────────────────

    def add(self, claims: ClaimsLike) -> PermissionSet:
        """Grant one claim or an iterable of claims; returns ``self``.

        Non-string and empty entries, and claims with an empty token, are
        skipped.
        """
        for claim in _iter_claims(claims):
            if not claim or not isinstance(claim, str) or not is_well_formed(self._parser.parse(claim)):
                logger.debug("Ignoring invalid claim %s", safe_preview(claim, limit=80))
                continue
            self._root = operations.insert(self._root, self._parser.parse_claim(claim))
            self._claims_dirty = True
        return self

    # ── Queries ─────────────────────────────────────────

    def check(self, permission: Any) -> bool:
        """Return True when ``permission`` is implied by the granted claims.

        Every comma-separated token of a requested segment must be granted.
        Non-string or empty permissions, and permissions with an empty token,
        are never granted.
        """
        if not permission or not isinstance(permission, str):
            return False
        path = self._parser.parse(permission)
        return is_well_formed(path) and operations.check(self._root, path)

    def check_all(self, permissions: Iterable[Any]) -> bool:
        """True when every permission is granted (and there is at least one)."""
        requested = list(_iter_claims(permissions))
        return bool(requested) and all(self.check(permission) for permission in requested)

    def check_any(self, permissions: Iterable[Any]) -> bool:
        return any(self.check(permission) for permission in _iter_claims(permissions))

    def require(self, permission: Any) -> None:
        """Raise :class:`PermissionDeniedError` unless ``permission`` is granted."""
        if not self.check(permission):
            raise PermissionDeniedError(permission)

    @property
    def claims(self) -> tuple[str, ...]:
        """Minimal claim strings exactly representing the granted space.

        Computed lazily and cached until the next successful ``add``.
        """
        if self._claims_dirty:
            self._claims = tuple(operations.canonical_claims(self._root, self._parser))
            self._claims_dirty = False
        return self._claims

    @property
    def grants_all(self) -> bool:
        """True when an unconditional grant (``*``) has been added."""
        return isinstance(self._root, Terminal)

    @property
    def is_empty(self) -> bool:
        return not self.grants_all and not self._root

    @property
    def parser(self) -> PermissionParser:
        return self._parser

    # ── Set operations ──────────────────────────────────

    def intersect(self, *others: Any) -> PermissionSet:
        return PermissionSet.intersection(self, *others)

    def __and__(self, other: Any) -> PermissionSet:
        return PermissionSet.intersection(self, other)

    def copy(self) -> PermissionSet:
        """Independent clone; mutating either side does not affect the other."""
        clone = PermissionSet(parser=self._parser)
        clone._root = copy.deepcopy(self._root)
        clone._claims = self._claims
        clone._claims_dirty = self._claims_dirty
        return clone

    # ── Dunder protocol ─────────────────────────────────

    def __contains__(self, permission: object) -> bool:
        return self.check(permission)

    def __iter__(self) -> Iterator[str]:
        return iter(self.claims)

    def __len__(self) -> int:
        return len(self.claims)

    def __bool__(self) -> bool:
        return not self.is_empty

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionSet):
            return NotImplemented
        return frozenset(self.claims) == frozenset(other.claims)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PermissionSet({list(self.claims)!r})"


__all__ = ["ClaimsLike", "PermissionSet"]
