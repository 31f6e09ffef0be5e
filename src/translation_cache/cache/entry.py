from dataclasses import dataclass, fields
from datetime import datetime, timedelta
from typing import Any, Optional

from translation_cache.service_types import ServiceType

DEFAULT_TTL = timedelta(hours=24)


@dataclass
class CacheEntry:
    """Represents a cached translation entry."""

    original_text: str
    translated_text: str
    source_language: str
    target_language: str
    service: ServiceType
    created_at: datetime
    cache_key: str

    def is_expired(self, ttl: timedelta = DEFAULT_TTL, now: Optional[datetime] = None) -> bool:
        """Check if cache entry is expired (default: 24 hours)."""
        if now is None:
            now = datetime.now()
        return now > self.created_at + ttl

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "original_text": self.original_text,
            "translated_text": self.translated_text,
            "source_language": self.source_language,
            "target_language": self.target_language,
            "service": self.service.value,
            "created_at": self.created_at.isoformat(),
            "cache_key": self.cache_key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheEntry":
        """Create from dictionary, ignoring fields this version does not know."""
        known = {field.name for field in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        values["service"] = ServiceType.parse(values["service"])
        created_at = datetime.fromisoformat(values["created_at"])
        if created_at.tzinfo is not None:
            # Entries are stamped in naive local time.
            created_at = created_at.astimezone().replace(tzinfo=None)
        values["created_at"] = created_at
        return cls(**values)


def format_size(num_bytes: int) -> str:
    """Render a byte count the way file sizes are usually shown (1 KB = 1000 bytes)."""
    if num_bytes < 1000:
        return f"{num_bytes} bytes"
    size = float(num_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= 1000
        if size < 1000 or unit == "GB":
            break
    return f"{size:.1f} {unit}"


@dataclass(frozen=True)
class CacheStatistics:
    """Point-in-time view of the cache counters."""

    total_entries: int = 0
    hit_count: int = 0
    miss_count: int = 0
    expired_entries: int = 0
    approximate_size_bytes: int = 0

    @property
    def total_requests(self) -> int:
        return self.hit_count + self.miss_count

    @property
    def hit_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.hit_count / self.total_requests

    @property
    def hit_rate_percentage(self) -> str:
        return f"{self.hit_rate * 100:.1f}%"

    @property
    def cache_size(self) -> str:
        return format_size(self.approximate_size_bytes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_entries": self.total_entries,
            "hits": self.hit_count,
            "misses": self.miss_count,
            "hit_rate": self.hit_rate_percentage,
            "total_requests": self.total_requests,
            "expired_entries": self.expired_entries,
            "cache_size": self.cache_size,
        }
