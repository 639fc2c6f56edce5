"""Bounded TTL cache sitting in front of every upstream call."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """A single cache entry with TTL."""

    value: T
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """Live while ``now - stored_at <= ttl``."""
        return now - self.stored_at > self.ttl


class TTLCache:
    """In-memory key/value store with per-entry expiry and a size bound.

    Expired entries are dropped lazily on read and in bulk by ``cleanup()``.
    When full, ``set`` first sweeps expired entries and only then evicts the
    oldest-inserted one. Every public method holds the same lock, so a
    capacity check and the insert that follows it cannot interleave with
    another writer.
    """

    def __init__(
        self,
        default_ttl: float = Constants.DEFAULT_CACHE_TTL_SEC,
        max_entries: int = Constants.DEFAULT_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the cache.

        Args:
            default_ttl: Time-to-live in seconds used when ``set`` gets none.
            max_entries: Maximum number of entries held at once.
            clock: Time source in seconds, replaceable in tests.
        """
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._default_ttl = default_ttl
        self._max_entries = int(max_entries)
        self._clock = clock
        # dicts keep insertion order; the first key is the oldest insert
        self._cache: Dict[str, CacheEntry[Any]] = {}
        self._lock = threading.Lock()

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store ``value`` under ``key``.

        Args:
            key: Cache key.
            value: Value to store; None, False and empty containers are valid.
            ttl: Optional TTL override in seconds.
        """
        effective_ttl = self._default_ttl if ttl is None else ttl
        if effective_ttl <= 0:
            raise ValueError("ttl must be positive")

        with self._lock:
            now = self._clock()
            if key in self._cache:
                # re-inserting moves the key to the end of insertion order
                del self._cache[key]
            elif len(self._cache) >= self._max_entries:
                self._cleanup_locked(now)
                if len(self._cache) >= self._max_entries:
                    oldest = next(iter(self._cache))
                    del self._cache[oldest]
                    if is_debug_enabled(logger):
                        logger.debug(
                            "Removed oldest cache entry",
                            extra=extra_context(event="cache_evict", component="cache", key=oldest),
                        )
            self._cache[key] = CacheEntry(value=value, stored_at=now, ttl=effective_ttl)

        if is_debug_enabled(logger):
            logger.debug(
                "Cache set",
                extra=extra_context(event="cache_set", component="cache", key=key, ttl=effective_ttl),
            )

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for ``key`` or ``default``."""
        with self._lock:
            entry = self._live_entry_locked(key)
        if entry is None:
            if is_debug_enabled(logger):
                logger.debug("Cache miss", extra=extra_context(event="cache_miss", component="cache", key=key))
            return default
        if is_debug_enabled(logger):
            logger.debug("Cache hit", extra=extra_context(event="cache_hit", component="cache", key=key))
        return entry.value

    def has(self, key: str) -> bool:
        """Same freshness check as ``get`` without returning the value."""
        with self._lock:
            return self._live_entry_locked(key) is not None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def delete(self, key: str) -> bool:
        """Remove ``key``; return whether anything was removed."""
        with self._lock:
            removed = self._cache.pop(key, None) is not None
        if removed and is_debug_enabled(logger):
            logger.debug("Cache deleted", extra=extra_context(event="cache_delete", component="cache", key=key))
        return removed

    def clear(self) -> None:
        """Clear all cached entries."""
        with self._lock:
            previous = len(self._cache)
            self._cache.clear()
        logger.info("Cache cleared", extra=extra_context(event="cache_clear", component="cache", previous_size=previous))

    def cleanup(self) -> int:
        """Remove every expired entry and return how many were removed."""
        with self._lock:
            return self._cleanup_locked(self._clock())

    def stats(self) -> Dict[str, int]:
        """Get cache statistics."""
        with self._lock:
            return {"size": len(self._cache), "max_size": self._max_entries}

    def _live_entry_locked(self, key: str) -> Optional[CacheEntry[Any]]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._cache[key]
            if is_debug_enabled(logger):
                logger.debug("Cache expired", extra=extra_context(event="cache_expired", component="cache", key=key))
            return None
        return entry

    def _cleanup_locked(self, now: float) -> int:
        expired = [k for k, v in self._cache.items() if v.is_expired(now)]
        for key in expired:
            del self._cache[key]
        if expired and is_debug_enabled(logger):
            logger.debug(
                "Cache cleanup",
                extra=extra_context(
                    event="cache_cleanup",
                    component="cache",
                    removed=len(expired),
                    remaining=len(self._cache),
                ),
            )
        return len(expired)
