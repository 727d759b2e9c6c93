"""Library configuration using Pydantic settings.

Configuration is loaded from:
1. Environment variables (KVARRAY_* prefix)
2. .env file in current directory
3. Default values
"""

from __future__ import annotations

import logging
from functools import lru_cache

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class KvArrayConfig(BaseSettings):
    """Configuration for kvarray collections.

    Environment variables are prefixed with KVARRAY_.
    """

    model_config = SettingsConfigDict(
        env_prefix="KVARRAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Deepest nesting followed by recursive merge, replace and walk
    max_depth: int = 64

    # Seed for the shared generator behind shuffle() and random()
    random_seed: int | None = None

    log_level: str = "WARNING"

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        """Validate the recursion limit is positive."""
        if v < 1:
            msg = f"Invalid max_depth: {v}. Must be a positive integer"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            msg = f"Invalid log level: {v}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return upper


@lru_cache
def get_config() -> KvArrayConfig:
    """Get the global configuration.

    Configuration is cached after first load.

    Returns:
        KvArrayConfig instance.
    """
    return KvArrayConfig()


def clear_config_cache() -> None:
    """Clear the configuration cache (for testing)."""
    get_config.cache_clear()


def configure_logging(level: str | None = None) -> None:
    """Route kvarray's structlog events through a level filter.

    Args:
        level: Level name; defaults to the configured ``log_level``.
    """
    name = (level or get_config().log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        msg = f"Invalid log level: {level}"
        raise ValueError(msg)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
    )
