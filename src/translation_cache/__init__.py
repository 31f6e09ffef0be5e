from translation_cache.cache import (
    CacheEntry,
    CacheStatistics,
    TranslationCache,
    TranslationCacheEngine,
    generate_cache_key,
)
from translation_cache.config import CacheConfig
from translation_cache.service_types import ServiceType

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheStatistics",
    "ServiceType",
    "TranslationCache",
    "TranslationCacheEngine",
    "generate_cache_key",
]
