"""Permission trie engine.

Provides:
- Node types: ``Terminal`` / ``Branch`` (the Trie Store).
- Parsing: ``split_permission``, ``normalize_claim``, ``is_well_formed``,
  ``PermissionParser``.
- Operations: ``insert``, ``check``, ``collect_claims``, ``canonical_claims``.
"""

from .nodes import TERMINAL, WILDCARD, Branch, Terminal, TrieNode
from .operations import canonical_claims, check, collect_claims, insert
from .parser import (
    ParsedPath,
    PermissionParser,
    Segment,
    configure_default_parser,
    get_default_parser,
    is_well_formed,
    normalize_claim,
    split_permission,
)

__all__ = [
    "TERMINAL",
    "WILDCARD",
    "Branch",
    "ParsedPath",
    "PermissionParser",
    "Segment",
    "Terminal",
    "TrieNode",
    "canonical_claims",
    "check",
    "collect_claims",
    "configure_default_parser",
    "get_default_parser",
    "insert",
    "is_well_formed",
    "normalize_claim",
    "split_permission",
]
