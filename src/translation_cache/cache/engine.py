import asyncio
import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from translation_cache.cache.base import TranslationCache
from translation_cache.cache.entry import CacheEntry, CacheStatistics
from translation_cache.cache.file import CacheFileStore
from translation_cache.config import CacheConfig
from translation_cache.service_types import ServiceType

logger = logging.getLogger(__name__)

PreheatPair = tuple[str, str, str, str, Union[ServiceType, str]]

COMMON_TRANSLATIONS: list[PreheatPair] = [
    ("Hello", "你好", "en", "zh", ServiceType.QIANWEN),
    ("Thank you", "谢谢", "en", "zh", ServiceType.QIANWEN),
    ("Good morning", "早上好", "en", "zh", ServiceType.QIANWEN),
    ("How are you?", "你好吗？", "en", "zh", ServiceType.QIANWEN),
]


def _encoded_size(payload: str) -> int:
    return len(payload.encode("utf-8", errors="surrogatepass"))


class TranslationCacheEngine(TranslationCache):
    """In-memory translation cache mirrored to a JSON file.

    Lookups and stores only touch the in-memory table. Every mutation queues a
    snapshot of the whole table for a single background writer, and a second
    background task purges expired entries on a fixed interval. All access to
    the table and the hit/miss counters happens under one lock.

    Only one engine may own a given cache file at a time; callers construct the
    engine once and pass it to whatever needs it.
    """

    def __init__(self, config: Optional[CacheConfig] = None):
        self.config = config or CacheConfig()
        self.enabled = self.config.enabled
        self.store = CacheFileStore(self.config.cache_file)
        self.cache: dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

        self._lock = asyncio.Lock()
        self._write_queue: asyncio.Queue[str] = asyncio.Queue()
        self._size_bytes = _encoded_size(CacheFileStore.serialize([]))
        # Bumped by clear() so a load that started earlier drops what it read.
        self._generation = 0
        self._queued_any_write = False
        self._load_task: Optional[asyncio.Task] = None
        self._writer_task: Optional[asyncio.Task] = None
        self._cleanup_task: Optional[asyncio.Task] = None

        logger.info("Translation cache initialized: %s", self.store.path)

    async def __aenter__(self) -> "TranslationCacheEngine":
        await self.start()
        return self

    async def __aexit__(self, *_exc_info) -> None:
        await self.close()

    async def start(self) -> None:
        """Start loading the cache file and the writer and cleanup tasks."""
        if self._writer_task is not None:
            return
        self._writer_task = asyncio.create_task(self._writer_loop())
        self._load_task = asyncio.create_task(self._load(self._generation))
        self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def wait_loaded(self) -> None:
        """Wait for the startup load to finish."""
        if self._load_task is not None:
            await self._load_task

    async def flush(self) -> None:
        """Wait until every queued write has been attempted."""
        if self._writer_task is None or self._writer_task.done():
            while not self._write_queue.empty():
                payload = self._write_queue.get_nowait()
                await self._write(payload)
                self._write_queue.task_done()
            return
        await self._write_queue.join()

    async def close(self) -> None:
        """Stop background tasks after pending writes are on disk."""
        if self._writer_task is None:
            return
        background = [task for task in (self._cleanup_task, self._load_task) if task is not None]
        for task in background:
            task.cancel()
        await asyncio.gather(*background, return_exceptions=True)

        await self.flush()
        self._writer_task.cancel()
        await asyncio.gather(self._writer_task, return_exceptions=True)
        self._writer_task = self._load_task = self._cleanup_task = None
        logger.info("Translation cache closed: %s", self.store.path)

    async def get(
        self, text: str, source_lang: str, target_lang: str, service: Union[ServiceType, str]
    ) -> Optional[str]:
        """Get cached translation."""
        if not self.enabled:
            return None

        hash_key = self._generate_hash(text, source_lang, target_lang, service)

        async with self._lock:
            entry = self.cache.get(hash_key)
            if entry is not None and not entry.is_expired(self.config.ttl):
                self.hits += 1
                logger.debug("Cache hit for: %s...", text[:50])
                return entry.translated_text
            self.misses += 1

        if entry is not None:
            logger.debug("Cache entry expired for: %s...", text[:50])
        else:
            logger.debug("Cache miss for: %s...", text[:50])
        return None

    async def set(
        self,
        text: str,
        translation: str,
        source_lang: str,
        target_lang: str,
        service: Union[ServiceType, str],
    ) -> None:
        """Store translation in cache, replacing any entry with the same key."""
        if not self.enabled:
            return

        hash_key = self._generate_hash(text, source_lang, target_lang, service)
        entry = CacheEntry(
            original_text=text,
            translated_text=translation,
            source_language=source_lang,
            target_language=target_lang,
            service=ServiceType.parse(service),
            created_at=datetime.now(),
            cache_key=hash_key,
        )

        async with self._lock:
            # Reinsert so dict order follows write order.
            self.cache.pop(hash_key, None)
            self.cache[hash_key] = entry
            if len(self.cache) > self.config.max_entries:
                self._evict_oldest()
            self._persist()

        logger.debug("Cached translation for: %s...", text[:50])

    async def clear(self) -> None:
        """Clear all cache entries and reset hit/miss counters."""
        async with self._lock:
            self.cache.clear()
            self._generation += 1
            self.hits = 0
            self.misses = 0
            self._persist()
        logger.info("Translation cache cleared")

    async def clear_expired(self) -> int:
        """Remove expired entries and return count of removed entries."""
        now = datetime.now()
        async with self._lock:
            expired_keys = [
                key for key, entry in self.cache.items() if entry.is_expired(self.config.ttl, now)
            ]
            for key in expired_keys:
                del self.cache[key]
            self._persist()

        logger.info("Cleaned up %s expired cache entries", len(expired_keys))
        return len(expired_keys)

    async def preheat(self, pairs: Optional[Iterable[PreheatPair]] = None) -> int:
        """Seed the cache with known translations through the normal store path."""
        if pairs is None:
            pairs = COMMON_TRANSLATIONS
        count = 0
        for text, translation, source_lang, target_lang, service in pairs:
            await self.set(text, translation, source_lang, target_lang, service)
            count += 1
        logger.info("Preheated cache with %s translations", count)
        return count

    def snapshot(self) -> CacheStatistics:
        """Return current statistics without touching the disk."""
        now = datetime.now()
        expired = sum(1 for entry in self.cache.values() if entry.is_expired(self.config.ttl, now))
        return CacheStatistics(
            total_entries=len(self.cache),
            hit_count=self.hits,
            miss_count=self.misses,
            expired_entries=expired,
            approximate_size_bytes=self._size_bytes,
        )

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        return {
            "type": "file",
            "cache_file": str(self.store.path),
            "enabled": self.enabled,
            **self.snapshot().to_dict(),
        }

    def _evict_oldest(self) -> int:
        """Drop the oldest entries so the table sits a margin below capacity."""
        excess = len(self.cache) - self.config.max_entries + self.config.eviction_margin
        # sorted() is stable, so entries with equal timestamps leave in write order.
        oldest = sorted(self.cache.values(), key=lambda entry: entry.created_at)[:excess]
        for entry in oldest:
            del self.cache[entry.cache_key]
        logger.debug("Cache full, removed %s oldest entries", len(oldest))
        return len(oldest)

    def _persist(self) -> None:
        """Queue the current table for the writer. Caller holds the lock."""
        payload = CacheFileStore.serialize(list(self.cache.values()))
        self._size_bytes = _encoded_size(payload)
        self._queued_any_write = True
        # A newer snapshot supersedes any that the writer has not picked up yet.
        while not self._write_queue.empty():
            self._write_queue.get_nowait()
            self._write_queue.task_done()
        self._write_queue.put_nowait(payload)

    async def _write(self, payload: str) -> None:
        try:
            await asyncio.to_thread(self.store.save, payload)
        except OSError as exc:
            logger.warning("Failed to save cache to %s: %s", self.store.path, exc)

    async def _writer_loop(self) -> None:
        while True:
            payload = await self._write_queue.get()
            try:
                await self._write(payload)
            finally:
                self._write_queue.task_done()

    async def _load(self, generation: Optional[int] = None) -> None:
        if generation is None:
            generation = self._generation
        entries = await asyncio.to_thread(self.store.load)
        now = datetime.now()
        loaded = discarded = evicted = 0

        async with self._lock:
            if self._generation != generation:
                logger.info(
                    "Cache cleared while loading, dropped %s records from %s",
                    len(entries),
                    self.store.path,
                )
                return

            for entry in sorted(entries, key=lambda item: item.created_at):
                if entry.is_expired(self.config.ttl, now):
                    discarded += 1
                    continue
                # Anything stored since startup is newer than the file.
                if entry.cache_key in self.cache:
                    continue
                self.cache[entry.cache_key] = entry
                loaded += 1
            if len(self.cache) > self.config.max_entries:
                evicted = self._evict_oldest()

            # Earlier writes saved a table without the loaded records.
            if discarded or evicted or self._queued_any_write:
                self._persist()
            else:
                self._size_bytes = _encoded_size(CacheFileStore.serialize(list(self.cache.values())))

        logger.info(
            "Loaded %s cache entries from %s (%s expired discarded)",
            loaded,
            self.store.path,
            discarded,
        )

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.cleanup_interval_seconds)
            try:
                await self.clear_expired()
            except Exception as exc:
                logger.error("Scheduled cache cleanup failed: %s", exc)
