import logging

from translation_cache.cache.base import TranslationCache

logger = logging.getLogger(__name__)


class CacheManager:
    """Utility class for presenting translation cache state to operators."""

    def __init__(self, cache: TranslationCache):
        self.cache = cache

    async def print_stats(self) -> None:
        """Print cache statistics."""
        stats = await self.cache.get_stats()
        print("\n📊 Cache Statistics:")
        print("=" * 40)
        for key, value in stats.items():
            print(f"{key.replace('_', ' ').title()}: {value}")
        logger.debug("Printed statistics for %s", type(self.cache).__name__)
