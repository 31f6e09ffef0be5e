from translation_cache.cache.base import TranslationCache, generate_cache_key
from translation_cache.cache.engine import COMMON_TRANSLATIONS, TranslationCacheEngine
from translation_cache.cache.entry import CacheEntry, CacheStatistics, format_size
from translation_cache.cache.file import CacheFileStore
from translation_cache.cache.manager import CacheManager

__all__ = [
    "COMMON_TRANSLATIONS",
    "CacheEntry",
    "CacheFileStore",
    "CacheManager",
    "CacheStatistics",
    "TranslationCache",
    "TranslationCacheEngine",
    "format_size",
    "generate_cache_key",
]
