"""Bounded in-memory cache with a fixed TTL, one instance per repository."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value and the monotonic time it was stored."""

    value: V
    inserted_at: float


class BoundedTTLCache(Generic[K, V]):
    """Thread-safe cache holding at most ``max_size`` entries for ``ttl`` seconds.

    When a new key is stored into a full cache, the entry with the oldest
    insertion time is evicted first. Reads never refresh an entry's age.
    """

    def __init__(self, max_size: int = 100, ttl: float = 300.0) -> None:
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self.max_size = max_size
        self.ttl = ttl
        self._store: dict[K, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, entry: CacheEntry[V]) -> bool:
        return time.monotonic() - entry.inserted_at < self.ttl

    def get(self, key: K) -> V | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if not self._is_fresh(entry):
                del self._store[key]
                return None
            return entry.value

    def put(self, key: K, value: V) -> None:
        with self._lock:
            if key in self._store:
                # Re-insert so iteration order follows insertion time.
                del self._store[key]
            elif len(self._store) >= self.max_size:
                oldest = min(self._store, key=lambda k: self._store[k].inserted_at)
                del self._store[oldest]
                log.debug("Evicted cache key %r", oldest)
            self._store[key] = CacheEntry(value, time.monotonic())

    def invalidate(self, key: K) -> None:
        with self._lock:
            self._store.pop(key, None)

    def contains_key(self, key: K) -> bool:
        """True when ``get(key)`` would return a value."""
        with self._lock:
            entry = self._store.get(key)
            return entry is not None and self._is_fresh(entry)

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)  # type: ignore[arg-type]

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet reclaimed."""
        with self._lock:
            return len(self._store)

    def __len__(self) -> int:
        return self.size()

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
