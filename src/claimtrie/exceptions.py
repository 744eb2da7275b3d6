"""Exception hierarchy for claimtrie.

The core operations (``add``, ``check``, ``claims``, ``intersection``) never
raise: malformed input degrades to "no effect" on write and "not granted" on
read. Exceptions exist for the opt-in surfaces only:

- ``ConfigurationError``: unparsable configuration values.
- ``PermissionDeniedError``: raised by explicit ``require`` calls.

Usage:
    from claimtrie.exceptions import PermissionDeniedError

    try:
        permissions.require("account:edit")
    except PermissionDeniedError as e:
        return deny(e.code, e.permission)
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ClaimTrieError",
    "ConfigurationError",
    "PermissionDeniedError",
]


class ClaimTrieError(Exception):
    """Base exception for claimtrie.

    Attributes:
        code: Stable error code string (e.g. "PERMISSION_DENIED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(ClaimTrieError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class PermissionDeniedError(ClaimTrieError):
    """A required permission is not implied by the granted claims."""

    code: str = "PERMISSION_DENIED"

    def __init__(self, permission: Any, message: str | None = None, **kwargs: Any) -> None:
        self.permission = permission
        super().__init__(message or f"Missing permission: {permission!r}", permission=permission, **kwargs)
