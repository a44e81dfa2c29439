"""Get-or-populate on top of TTLCache.

Only successful computations are stored. A failing compute propagates to the
caller unchanged, and the caller decides what to show instead.
"""

import asyncio
import inspect
import logging
from functools import partial
from typing import Any, Awaitable, Callable

from services.cache import CacheKey, TTLCache

logger = logging.getLogger(__name__)

Compute = Callable[[], Any | Awaitable[Any]]


class CacheOrchestrator:
    def __init__(self, cache: TTLCache, coalesce: bool = True):
        self.cache = cache
        self.coalesce = coalesce
        self.hits = 0
        self.misses = 0
        self.coalesced = 0
        self._generation = 0
        self._in_flight: dict[CacheKey, asyncio.Task] = {}

    def stats(self) -> dict:
        return {
            "entries": len(self.cache),
            "hits": self.hits,
            "misses": self.misses,
            "coalesced": self.coalesced,
            "in_flight": len(self._in_flight),
        }

    def clear(self) -> None:
        """Drop every entry and detach computations that are still running.

        A detached computation still answers the callers already waiting on
        it, but its value is not stored.
        """
        self._generation += 1
        self._in_flight.clear()
        self.cache.clear()
        logger.info("Cache cleared (generation %d)", self._generation)

    async def resolve(self, key: CacheKey, ttl_seconds: int, compute: Compute) -> Any:
        """Return the cached value for key, computing and storing it on a miss.

        With coalescing on, the computation runs in its own task. A second
        caller that misses while it is running waits for that result instead
        of computing again, and a caller that gets cancelled leaves the
        computation running for the others.
        """
        entry = self.cache.get_entry(key)
        if entry is not None:
            self.hits += 1
            return entry.value

        pending = self._in_flight.get(key) if self.coalesce else None
        if pending is not None and not pending.done():
            self.coalesced += 1
            logger.debug("Joining in-flight computation for %s", key)
            return await asyncio.shield(pending)

        self.misses += 1
        logger.debug("Cache miss for %s", key)
        generation = self._generation

        if not self.coalesce:
            return await self._populate(key, ttl_seconds, compute, generation)

        task = asyncio.ensure_future(self._populate(key, ttl_seconds, compute, generation))
        self._in_flight[key] = task
        task.add_done_callback(partial(self._settle, key))
        return await asyncio.shield(task)

    async def _populate(self, key: CacheKey, ttl_seconds: int, compute: Compute, generation: int) -> Any:
        try:
            value = await _call(compute)
        except Exception as e:
            logger.warning("Computation for %s failed: %s", key, e)
            raise

        if generation == self._generation:
            self.cache.set(key, value, ttl_seconds=ttl_seconds)
        else:
            logger.debug("Not storing %s, computed before the last clear", key)
        return value

    def _settle(self, key: CacheKey, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Every caller may have gone away; mark the exception as retrieved.
        if not task.cancelled():
            task.exception()


async def _call(compute: Compute) -> Any:
    result = compute()
    if inspect.isawaitable(result):
        result = await result
    return result
