import json
import logging
import os
from pathlib import Path
from typing import Union

from translation_cache.cache.entry import CacheEntry

logger = logging.getLogger(__name__)


class CacheFileStore:
    """Whole-table JSON mirror of the cache on local storage.

    The file holds a JSON array of ``CacheEntry.to_dict()`` records. Writes go
    to a temporary sibling first and then replace the target, so an interrupted
    write leaves the previous file untouched.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def _tmp_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.tmp")

    def load(self) -> list[CacheEntry]:
        """Read persisted entries. Missing, unreadable or malformed files yield []."""
        if not self.path.exists():
            logger.debug("No cache file at %s", self.path)
            return []

        try:
            with self.path.open(encoding="utf-8", errors="surrogatepass") as f:
                records = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load cache file %s: %s", self.path, exc)
            return []

        if not isinstance(records, list):
            logger.warning("Corrupted cache file %s: expected a JSON array", self.path)
            return []

        entries = []
        for record in records:
            try:
                entries.append(CacheEntry.from_dict(record))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping corrupted cache record in %s: %s", self.path, exc)

        logger.debug("Loaded %s cache records from %s", len(entries), self.path)
        return entries

    def save(self, payload: str) -> None:
        """Atomically replace the cache file with ``payload`` (serialized JSON)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._tmp_path
        with tmp_path.open("w", encoding="utf-8", errors="surrogatepass") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(self.path)
        logger.debug("Saved cache file %s (%s characters)", self.path, len(payload))

    @staticmethod
    def serialize(entries: list[CacheEntry]) -> str:
        return json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)
