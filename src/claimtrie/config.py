"""Configuration for claimtrie.

Pydantic-validated settings for the ambient concerns of the library
(logging, parse cache sizing). Permission sets themselves are not
configured: they take no options beyond an optional parser.

Direct os.environ/os.getenv usage is confined to
:func:`load_config_from_env`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ClaimTrieConfig(BaseModel):
    """Settings shared by the claimtrie logging and parsing layers."""

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level applied by setup_logging()",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Parsing
    parse_cache_size: int = Field(
        default=1024,
        ge=0,
        description="Maximum number of parsed permission strings kept per parser. 0 disables caching.",
    )

    # Identification
    service_name: Optional[str] = Field(
        default=None,
        description="Logger name to align with log_level (e.g. 'gateway.authz')",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


_TRUE_VALUES = ("true", "1", "yes", "on")


def load_config_from_env() -> ClaimTrieConfig:
    """Load configuration from environment variables.

    Environment variables:
    - CLAIMTRIE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - CLAIMTRIE_LOG_JSON: Use JSON log format (true/false, default: false)
    - CLAIMTRIE_PARSE_CACHE_SIZE: Parse cache bound (default: 1024)
    - CLAIMTRIE_SERVICE_NAME: Logger name for the embedding service

    Returns:
        ClaimTrieConfig instance with values from environment or defaults.

    Raises:
        ConfigurationError: If a variable holds a value that cannot be parsed.
    """
    import os

    raw_cache_size = os.getenv("CLAIMTRIE_PARSE_CACHE_SIZE", "1024")
    try:
        parse_cache_size = int(raw_cache_size)
    except ValueError:
        raise ConfigurationError(
            f"CLAIMTRIE_PARSE_CACHE_SIZE must be an integer, got {raw_cache_size!r}",
            variable="CLAIMTRIE_PARSE_CACHE_SIZE",
        )

    try:
        return ClaimTrieConfig(
            log_level=os.getenv("CLAIMTRIE_LOG_LEVEL", "INFO"),
            log_json=os.getenv("CLAIMTRIE_LOG_JSON", "false").lower() in _TRUE_VALUES,
            parse_cache_size=parse_cache_size,
            service_name=os.getenv("CLAIMTRIE_SERVICE_NAME"),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid claimtrie configuration: {e}", errors=e.errors())


__all__ = [
    "ClaimTrieConfig",
    "LogLevel",
    "load_config_from_env",
]
