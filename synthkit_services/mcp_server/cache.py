"""Dataset Cache

In-memory LRU cache of generated datasets keyed by generation parameters.
Generation is deterministic, so a cached dataset is always identical to a
freshly generated one; the cache only saves CPU on repeated requests.

Design:
- LRU eviction with configurable max size and TTL
- Thread-safe for concurrent tool calls
- Tracks hit/miss/eviction counts for health reporting
"""

import hashlib
import threading
import time
from collections import OrderedDict
from typing import Any, Callable

import structlog

from synthkit.config import Settings
from synthkit.synthetic.assembler import Dataset, GenerationConfig

logger = structlog.get_logger(__name__)


class DatasetCache:
    """LRU cache of :class:`Dataset` objects with TTL support."""

    def __init__(
        self,
        max_size: int = 100,
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize dataset cache.

        Args:
            max_size: Maximum number of cached datasets (default: 100)
            ttl_seconds: Lifetime of an entry in seconds (default: 3600)
            clock: Monotonic time source, replaceable in tests
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be positive: {max_size}")
        self._cache: OrderedDict[str, dict[str, Any]] = OrderedDict()
        self._lock = threading.Lock()
        self._clock = clock
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds

        self._hits = 0
        self._misses = 0
        self._evictions = 0

        logger.info(
            "dataset_cache_initialized",
            max_size=max_size,
            ttl_seconds=ttl_seconds,
        )

    def get(self, config: GenerationConfig) -> Dataset | None:
        """Return the cached dataset for ``config``, or None if absent or expired."""
        cache_key = self.make_key(config)

        with self._lock:
            entry = self._cache.get(cache_key)
            if entry is None:
                self._misses += 1
                logger.debug("cache_miss", key=cache_key[:16])
                return None

            age = self._clock() - entry["timestamp"]
            if age > self.ttl_seconds:
                del self._cache[cache_key]
                self._misses += 1
                logger.debug("cache_expired", key=cache_key[:16], age_seconds=int(age))
                return None

            self._cache.move_to_end(cache_key)
            self._hits += 1
            logger.info(
                "cache_hit",
                key=cache_key[:16],
                age_seconds=int(age),
                hit_rate=self._hit_rate(),
            )
            return entry["dataset"]

    def set(self, config: GenerationConfig, dataset: Dataset) -> None:
        cache_key = self.make_key(config)

        with self._lock:
            self._cache[cache_key] = {"dataset": dataset, "timestamp": self._clock()}
            self._cache.move_to_end(cache_key)

            if len(self._cache) > self.max_size:
                oldest_key = next(iter(self._cache))
                del self._cache[oldest_key]
                self._evictions += 1
                logger.debug("cache_eviction", total_evictions=self._evictions)

            logger.debug("cache_set", key=cache_key[:16], cache_size=len(self._cache))

    def clear(self) -> None:
        with self._lock:
            entries_cleared = len(self._cache)
            self._cache.clear()
            logger.info("cache_cleared", entries_cleared=entries_cleared)

    def get_stats(self) -> dict[str, Any]:
        """Return hits, misses, hit_rate, size, max_size, evictions and ttl."""
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hit_rate(),
                "size": len(self._cache),
                "max_size": self.max_size,
                "evictions": self._evictions,
                "ttl_seconds": self.ttl_seconds,
            }

    def _hit_rate(self) -> float:
        total = self._hits + self._misses
        return self._hits / total if total > 0 else 0.0

    @staticmethod
    def make_key(config: GenerationConfig) -> str:
        """SHA-256 of the generation parameters (64-character hex string)."""
        return hashlib.sha256(repr(config.cache_key()).encode()).hexdigest()


_global_cache: DatasetCache | None = None
_cache_lock = threading.Lock()


def get_dataset_cache() -> DatasetCache:
    """Process-wide cache sized from the environment settings."""
    global _global_cache
    if _global_cache is None:
        with _cache_lock:
            if _global_cache is None:
                settings = Settings.from_env()
                _global_cache = DatasetCache(
                    max_size=settings.cache_size,
                    ttl_seconds=settings.cache_ttl_seconds,
                )
    return _global_cache
