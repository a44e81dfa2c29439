"""Simple in-memory TTL cache. No Redis needed at this scale.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
OpenDota may be called twice for the same key (once per worker). The
keyspace is small (heroes x query kinds), so there is no capacity bound;
entries leave only by expiring.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable


@dataclass(frozen=True)
class CacheKey:
    """Identity of one cached computation, e.g. ("hero-matchups", 1)."""

    namespace: str
    entity: Hashable = None
    variant: Hashable = None

    def __str__(self) -> str:
        parts = [self.namespace]
        if self.entity is not None:
            parts.append(str(self.entity))
        if self.variant is not None:
            parts.append(str(self.variant))
        return ":".join(parts)


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    computed_at: float
    ttl_seconds: int

    @property
    def expires_at(self) -> float:
        return self.computed_at + self.ttl_seconds

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class TTLCache:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._store: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Any | None:
        entry = self.get_entry(key)
        return entry.value if entry else None

    def get_entry(self, key: CacheKey) -> CacheEntry | None:
        """Return the fresh entry for key, dropping it if expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_fresh(self._clock()):
                return entry
            del self._store[key]
            return None

    def set(self, key: CacheKey, value: Any, ttl_seconds: int = 60) -> None:
        entry = CacheEntry(value=value, computed_at=self._clock(), ttl_seconds=ttl_seconds)
        with self._lock:
            self._store[key] = entry

    def invalidate(self, key: CacheKey) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __contains__(self, key: CacheKey) -> bool:
        return self.get_entry(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
