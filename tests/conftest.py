import sys
from pathlib import Path

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from translation_cache.cache import TranslationCacheEngine  # noqa: E402
from translation_cache.config import CacheConfig  # noqa: E402

ENV_VARS = (
    "TRANSLATION_CACHE_ENABLED",
    "TRANSLATION_CACHE_TTL_HOURS",
    "TRANSLATION_CACHE_MAX_ENTRIES",
    "TRANSLATION_CACHE_EVICTION_MARGIN",
    "TRANSLATION_CACHE_CLEANUP_INTERVAL",
    "TRANSLATION_CACHE_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment out of config parsing."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cache_file(tmp_path: Path) -> Path:
    return tmp_path / "translation_cache.json"


@pytest.fixture
def make_engine(cache_file: Path):
    """Create engines that persist to the per-test cache file."""

    def _create(**overrides) -> TranslationCacheEngine:
        overrides.setdefault("cache_file", str(cache_file))
        return TranslationCacheEngine(CacheConfig(**overrides))

    return _create
