"""Hierarchical permission claims with wildcard-aware checks and intersection.

Claims are colon-delimited scopes (``"account:edit:*"``) with comma
alternatives (``"report:read,export"``) and ``*`` wildcards. A
:class:`PermissionSet` answers whether a requested permission is implied by
its claims and can compute the common grant set of several sets.
"""

__version__ = "0.1.0"

from .access import (
    attenuate,
    grants_everything,
    has_all_permissions,
    has_any_permission,
    has_permission,
    require_permission,
)
from .config import ClaimTrieConfig, LogLevel, load_config_from_env
from .exceptions import ClaimTrieError, ConfigurationError, PermissionDeniedError
from .logging import ClaimTrieFormatter, safe_preview, setup_logging
from .permission_set import PermissionSet
from .setops import intersect
from .trie.parser import (
    PermissionParser,
    configure_default_parser,
    get_default_parser,
    is_well_formed,
    normalize_claim,
    split_permission,
)

intersection = intersect

__all__ = [
    "ClaimTrieConfig",
    "ClaimTrieError",
    "ClaimTrieFormatter",
    "ConfigurationError",
    "LogLevel",
    "PermissionDeniedError",
    "PermissionParser",
    "PermissionSet",
    "attenuate",
    "configure_default_parser",
    "get_default_parser",
    "grants_everything",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "intersect",
    "intersection",
    "is_well_formed",
    "load_config_from_env",
    "normalize_claim",
    "require_permission",
    "safe_preview",
    "setup_logging",
    "split_permission",
]
