"""Access-check helpers over raw claim lists.

Service handlers usually hold permissions as a plain tuple or list of claim
strings (already extracted from whatever token carried them). These helpers
answer the common questions without the caller managing a
:class:`~claimtrie.permission_set.PermissionSet`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .exceptions import PermissionDeniedError
from .logging import safe_preview
from .permission_set import ClaimsLike, PermissionSet

logger = logging.getLogger(__name__)


def _as_permission_set(claims: Any) -> PermissionSet:
    permission_set = PermissionSet.coerce(claims)
    if permission_set.grants_all:
        logger.warning(
            "Unconditional '*' grant in %s, consider narrower claims",
            safe_preview(list(permission_set.claims)),
        )
    return permission_set


def grants_everything(claims: ClaimsLike | PermissionSet) -> bool:
    """Check whether the claims amount to an unconditional grant.

    Example::

        grants_everything(["*"])            # True
        grants_everything(["*:*", "a:b"])   # True
        grants_everything(["*:b"])          # False
    """
    return _as_permission_set(claims).grants_all


def has_permission(claims: ClaimsLike | PermissionSet, permission: str) -> bool:
    """Check if a claim list grants ``permission``.

    Args:
        claims: Claim strings (e.g. ``("account:edit:*", "report:read")``).
        permission: Requested permission string.

    Returns:
        True if access is granted.

    Example::

        has_permission(("account:edit:*",), "account:edit:42")   # True
        has_permission(("account:edit:*",), "account:delete")    # False
    """
    return _as_permission_set(claims).check(permission)


def has_all_permissions(claims: ClaimsLike | PermissionSet, permissions: Iterable[str]) -> bool:
    """Check that every requested permission is granted.

    An empty request list is not granted.
    """
    return _as_permission_set(claims).check_all(permissions)


def has_any_permission(claims: ClaimsLike | PermissionSet, permissions: Iterable[str]) -> bool:
    return _as_permission_set(claims).check_any(permissions)


def require_permission(claims: ClaimsLike | PermissionSet, permission: str) -> None:
    """Raise :class:`PermissionDeniedError` if ``permission`` is not granted."""
    _as_permission_set(claims).require(permission)


def attenuate(parent: ClaimsLike | PermissionSet, requested: ClaimsLike | PermissionSet) -> tuple[str, ...]:
    """Narrow ``requested`` claims to what ``parent`` grants.

    Used when delegating: a child may ask for any claims, but it receives
    only the part its parent already holds. The result never grants more
    than either side.

    Example::

        attenuate(["report:*", "account:read"], ["report:read", "billing:*"])
        # ("report:read",)
        attenuate(["*:read"], ["account:*"])
        # ("account:read",)
    """
    parent_set = PermissionSet.coerce(parent)
    requested_set = PermissionSet.coerce(requested)
    narrowed = PermissionSet.intersection(parent_set, requested_set)

    dropped = [claim for claim in requested_set.claims if not narrowed.check(claim)]
    if dropped:
        logger.debug("Attenuation narrowed requested claims %s", safe_preview(dropped))
    return narrowed.claims


__all__ = [
    "attenuate",
    "grants_everything",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "require_permission",
]
