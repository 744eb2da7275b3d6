"""Trie Store node types.

A trie node is either:

- ``Terminal``: this point and everything beneath it is granted.
- ``Branch``: a mapping from a single token to a child node.

The wildcard token ``*`` is an ordinary key here; only the checker gives it
meaning. Each ``Branch`` exclusively owns its children, so the structure has
no cycles and no shared subtrees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

WILDCARD = "*"
PART_SEPARATOR = ":"
TOKEN_SEPARATOR = ","


@dataclass(frozen=True)
class Terminal:
    """Everything from this node down is granted."""

    def __repr__(self) -> str:
        return "Terminal()"


@dataclass
class Branch:
    """Granted scopes below this point, keyed by token."""

    children: dict[str, TrieNode] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.children)


TrieNode = Union[Terminal, Branch]

TERMINAL = Terminal()


__all__ = [
    "PART_SEPARATOR",
    "TERMINAL",
    "TOKEN_SEPARATOR",
    "WILDCARD",
    "Branch",
    "Terminal",
    "TrieNode",
]
