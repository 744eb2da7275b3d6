"""Permission Parser and claim normalization.

Grammar::

    path    := segment (":" segment)*
    segment := token ("," token)*

A parsed path is a tuple of segments, each segment a tuple of alternative
tokens with duplicates removed and first-seen order kept. The empty string
parses to the empty path (the root). Tokens must be non-empty; a path with an
empty token (``"a,"``, ``"a::b"``, ``":*"``) is malformed and is neither
granted nor checked.

Parsing is pure, so results are memoized per parser in a bounded LRU cache.
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from .nodes import PART_SEPARATOR, TOKEN_SEPARATOR, WILDCARD

if TYPE_CHECKING:
    from ..config import ClaimTrieConfig

Segment = tuple[str, ...]
ParsedPath = tuple[Segment, ...]

DEFAULT_CACHE_SIZE = 1024

_TRAILING_WILDCARDS = re.compile(r"(?::\*)+$")


def normalize_claim(claim: str) -> str:
    """Drop the redundant wildcard tail of a claim string.

    A trailing run of ``:*`` segments is implied by the claim ending there.
    A claim made only of wildcard segments (``*``, ``*:*``, ...) becomes the
    empty string, the unconditional grant. Leading and interior wildcards are
    kept::

        normalize_claim("a:*:*")   # "a"
        normalize_claim("*:b:*")   # "*:b"
        normalize_claim("*:*")     # ""
    """
    stripped = _TRAILING_WILDCARDS.sub("", claim)
    if stripped == WILDCARD:
        return ""
    if not stripped:
        # ":*" has an empty first token, it is not a wildcard-only claim.
        return claim
    return stripped


def split_permission(permission: str) -> ParsedPath:
    """Split a permission string into segments of alternative tokens."""
    if not permission:
        return ()
    return tuple(
        tuple(dict.fromkeys(part.split(TOKEN_SEPARATOR)))
        for part in permission.split(PART_SEPARATOR)
    )


def is_well_formed(path: ParsedPath) -> bool:
    """Return False when any segment of ``path`` holds an empty token."""
    return all(all(segment) for segment in path)


def _parse_claim(claim: str) -> ParsedPath:
    return split_permission(normalize_claim(claim))


class PermissionParser:
    """Memoizing front end for :func:`split_permission`.

    Args:
        cache_size: Maximum number of entries kept in each LRU cache.
            ``0`` disables caching and re-parses on every call.
    """

    def __init__(self, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        if cache_size < 0:
            raise ValueError(f"cache_size must be >= 0, got {cache_size}")
        self.cache_size = cache_size
        self._parse: Callable[[str], ParsedPath] = split_permission
        self._parse_claim: Callable[[str], ParsedPath] = _parse_claim
        if cache_size:
            self._parse = functools.lru_cache(maxsize=cache_size)(split_permission)
            self._parse_claim = functools.lru_cache(maxsize=cache_size)(_parse_claim)

    @classmethod
    def from_config(cls, config: ClaimTrieConfig) -> PermissionParser:
        return cls(cache_size=config.parse_cache_size)

    def parse(self, permission: str) -> ParsedPath:
        """Parse a permission request as given."""
        return self._parse(permission)

    def parse_claim(self, claim: str) -> ParsedPath:
        """Normalize and parse a granted claim."""
        return self._parse_claim(claim)

    def cache_info(self) -> Optional[dict[str, Any]]:
        """Return LRU statistics, or None when caching is disabled."""
        if not self.cache_size:
            return None
        return {
            "parse": self._parse.cache_info(),  # type: ignore[attr-defined]
            "parse_claim": self._parse_claim.cache_info(),  # type: ignore[attr-defined]
        }

    def cache_clear(self) -> None:
        if self.cache_size:
            self._parse.cache_clear()  # type: ignore[attr-defined]
            self._parse_claim.cache_clear()  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"PermissionParser(cache_size={self.cache_size})"


_default_parser = PermissionParser()


def get_default_parser() -> PermissionParser:
    """Return the parser shared by permission sets created without one."""
    return _default_parser


def configure_default_parser(source: Union[PermissionParser, ClaimTrieConfig]) -> PermissionParser:
    """Replace the shared parser.

    Accepts either a ready parser or a config whose ``parse_cache_size`` is
    used to build one. Existing permission sets keep the parser they were
    created with.
    """
    global _default_parser
    if isinstance(source, PermissionParser):
        _default_parser = source
    else:
        _default_parser = PermissionParser.from_config(source)
    return _default_parser


__all__ = [
    "DEFAULT_CACHE_SIZE",
    "ParsedPath",
    "PermissionParser",
    "Segment",
    "configure_default_parser",
    "get_default_parser",
    "is_well_formed",
    "normalize_claim",
    "split_permission",
]
