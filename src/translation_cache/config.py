import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

from platformdirs import user_data_dir

APP_NAME = "translation-cache"
CACHE_FILE_NAME = "translation_cache.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def _env_number(name: str, default, cast):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {value!r}") from None


@dataclass
class CacheConfig:
    """Configuration settings for the translation cache engine."""

    enabled: bool = True
    ttl_hours: float = 24
    max_entries: int = 1000
    eviction_margin: int = 100  # removed beyond capacity on each eviction
    cleanup_interval_seconds: float = 60 * 60
    cache_file: str = ""

    def __post_init__(self) -> None:
        if not self.cache_file:
            self.cache_file = str(Path(user_data_dir(APP_NAME, APP_NAME)) / CACHE_FILE_NAME)
        if self.ttl_hours <= 0:
            raise ValueError("ttl_hours must be positive")
        if self.max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if self.eviction_margin < 0:
            raise ValueError("eviction_margin must not be negative")
        if self.cleanup_interval_seconds <= 0:
            raise ValueError("cleanup_interval_seconds must be positive")

    @property
    def ttl(self) -> timedelta:
        return timedelta(hours=self.ttl_hours)

    @classmethod
    def from_env(cls, cache_file: Optional[str] = None) -> "CacheConfig":
        """Build a config from TRANSLATION_CACHE_* environment variables."""
        defaults = cls.__dataclass_fields__
        return cls(
            enabled=_env_bool("TRANSLATION_CACHE_ENABLED", defaults["enabled"].default),
            ttl_hours=_env_number("TRANSLATION_CACHE_TTL_HOURS", defaults["ttl_hours"].default, float),
            max_entries=_env_number("TRANSLATION_CACHE_MAX_ENTRIES", defaults["max_entries"].default, int),
            eviction_margin=_env_number(
                "TRANSLATION_CACHE_EVICTION_MARGIN", defaults["eviction_margin"].default, int
            ),
            cleanup_interval_seconds=_env_number(
                "TRANSLATION_CACHE_CLEANUP_INTERVAL",
                defaults["cleanup_interval_seconds"].default,
                float,
            ),
            cache_file=cache_file or os.getenv("TRANSLATION_CACHE_FILE", ""),
        )
