from datetime import datetime, timedelta

import pytest

from translation_cache.cache import CacheEntry, CacheStatistics, format_size
from translation_cache.service_types import ServiceType


def _entry(created_at: datetime) -> CacheEntry:
    return CacheEntry(
        original_text="hello",
        translated_text="hola",
        source_language="en",
        target_language="es",
        service=ServiceType.GOOGLE,
        created_at=created_at,
        cache_key="k",
    )


def test_is_expired_uses_strict_ttl_boundary():
    now = datetime(2024, 1, 2, 12, 0, 0)
    ttl = timedelta(hours=24)

    assert not _entry(now - ttl).is_expired(ttl, now)
    assert _entry(now - ttl - timedelta(microseconds=1)).is_expired(ttl, now)
    assert _entry(datetime.now() - timedelta(hours=25)).is_expired()


def test_to_dict_uses_plain_json_values():
    data = _entry(datetime(2024, 1, 2, 3, 4, 5)).to_dict()
    assert data["service"] == "google"
    assert data["created_at"] == "2024-01-02T03:04:05"
    assert CacheEntry.from_dict(data) == _entry(datetime(2024, 1, 2, 3, 4, 5))


def test_service_type_parse_and_display_name():
    assert ServiceType.parse("QIANWEN") is ServiceType.QIANWEN
    assert ServiceType.parse(ServiceType.GOOGLE) is ServiceType.GOOGLE
    assert ServiceType.GOOGLE.display_name == "Google Translate"
    with pytest.raises(ValueError):
        ServiceType.parse("babelfish")


@pytest.mark.parametrize(
    ("num_bytes", "expected"),
    [
        (0, "0 bytes"),
        (999, "999 bytes"),
        (1000, "1.0 KB"),
        (1_260_000, "1.3 MB"),
        (3_000_000_000, "3.0 GB"),
    ],
)
def test_format_size(num_bytes, expected):
    assert format_size(num_bytes) == expected


def test_statistics_hit_rate_and_dict():
    stats = CacheStatistics(total_entries=2, hit_count=1, miss_count=3, approximate_size_bytes=1500)

    assert stats.hit_rate == 0.25
    assert stats.to_dict() == {
        "total_entries": 2,
        "hits": 1,
        "misses": 3,
        "hit_rate": "25.0%",
        "total_requests": 4,
        "expired_entries": 0,
        "cache_size": "1.5 KB",
    }
    assert CacheStatistics().hit_rate == 0.0
