import hashlib
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from translation_cache.service_types import ServiceType

KEY_DELIMITER = "|"


def generate_cache_key(
    text: str,
    source_lang: str,
    target_lang: str,
    service: Union[ServiceType, str],
) -> str:
    """Derive the SHA-256 hex key for a translation request."""
    service_value = ServiceType.parse(service).value
    content = KEY_DELIMITER.join((text, source_lang, target_lang, service_value))
    # Lone surrogates must still hash.
    return hashlib.sha256(content.encode("utf-8", errors="surrogatepass")).hexdigest()


class TranslationCache(ABC):
    """Abstract base class for translation caches."""

    @abstractmethod
    async def get(
        self, text: str, source_lang: str, target_lang: str, service: Union[ServiceType, str]
    ) -> Optional[str]:
        """Get cached translation."""
        raise NotImplementedError

    @abstractmethod
    async def set(
        self,
        text: str,
        translation: str,
        source_lang: str,
        target_lang: str,
        service: Union[ServiceType, str],
    ) -> None:
        """Store translation in cache."""
        raise NotImplementedError

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cache entries."""
        raise NotImplementedError

    @abstractmethod
    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        raise NotImplementedError

    def _generate_hash(
        self, text: str, source_lang: str, target_lang: str, service: Union[ServiceType, str]
    ) -> str:
        """Generate hash key for cache entry."""
        return generate_cache_key(text, source_lang, target_lang, service)
