"""Cached read model for hero and item pages.

Every read goes through CacheOrchestrator.resolve under a structured key.
Enrichment from OpenDota (matchups, item builds, abilities) is optional: a
failing sub-resource is replaced by its empty shape so the page still
renders. A missing local record is not optional and raises.

Degraded upstream results are turned back into exceptions inside the
compute functions (UpstreamResult.unwrap) so they are never cached.
"""

import asyncio
import copy
import logging
from typing import Any, Awaitable, Callable

from errors import MissingLocalRecordError
from services.abilities import resolve_hero_abilities
from services.cache import CacheKey
from services.hero_stats import summarize_hero_stats
from services.item_builds import aggregate_item_popularity
from services.matchups import aggregate_matchups
from services.opendota import OpenDotaClient
from services.orchestrator import CacheOrchestrator
from services.records import RecordStore
from services.search import rank_results
from services.slugs import hero_slug

logger = logging.getLogger(__name__)

DAY = 86400
HERO_STATS_TTL = 3600


def empty_matchups() -> dict:
    return {"counters": [], "good_against": []}


def empty_abilities() -> dict:
    return {"abilities": [], "talents": []}


def empty_hero_stats() -> dict:
    return {"top_by_win_rate": [], "top_by_pick_rate": []}


def full_portrait(img: str | None) -> str | None:
    """Swap a small or vertical hero portrait URL for the full-size one."""
    if not img:
        return img
    return img.replace("/sb.png", "_full.png").replace("/vert.jpg", "_full.png")


class Encyclopedia:
    def __init__(
        self,
        orchestrator: CacheOrchestrator,
        client: OpenDotaClient,
        records: RecordStore,
        ttl_seconds: int = DAY,
        talent_header_fallback: bool = False,
    ):
        self.orchestrator = orchestrator
        self.client = client
        self.records = records
        self.ttl_seconds = ttl_seconds
        self.talent_header_fallback = talent_header_fallback

    async def _with_default(
        self, key: CacheKey, ttl: int, compute: Callable[[], Awaitable[Any]], default: Callable[[], Any]
    ) -> Any:
        try:
            return await self.orchestrator.resolve(key, ttl, compute)
        except Exception as e:
            logger.warning("Using empty %s after failure: %s", key, e)
            return default()

    # -- local records ---------------------------------------------------

    async def get_hero(self, hero_id: int) -> dict:
        async def compute():
            hero = await self.records.get_hero(hero_id)
            if hero is None:
                raise MissingLocalRecordError("hero", hero_id)
            return hero

        return await self.orchestrator.resolve(CacheKey("hero", hero_id), self.ttl_seconds, compute)

    async def list_heroes(self, search: str | None = None, role: str | None = None, attribute: str | None = None) -> list[dict]:
        key = CacheKey("heroes", None, (search, role, attribute))
        return await self.orchestrator.resolve(
            key, self.ttl_seconds, lambda: self.records.list_heroes(search=search, role=role, attribute=attribute)
        )

    async def get_item(self, item_id: int) -> dict:
        async def compute():
            item = await self.records.get_item(item_id)
            if item is None:
                raise MissingLocalRecordError("item", item_id)
            return item

        return await self.orchestrator.resolve(CacheKey("item", item_id), self.ttl_seconds, compute)

    async def list_items(self) -> list[dict]:
        return await self.orchestrator.resolve(CacheKey("items"), self.ttl_seconds, self.records.list_items)

    async def search(self, query: str) -> list[dict]:
        query = query.lower().strip()
        if not query:
            return []

        async def compute():
            heroes, items = await self.records.search(query)
            return rank_results(query, heroes, items)

        return await self.orchestrator.resolve(CacheKey("search", query), self.ttl_seconds, compute)

    # -- upstream enrichment ---------------------------------------------

    async def get_matchups(self, hero_id: int) -> dict:
        async def compute():
            result = await self.client.get_hero_matchups(hero_id)
            return aggregate_matchups(result.unwrap()).to_dict()

        return await self._with_default(
            CacheKey("hero-matchups", hero_id), self.ttl_seconds, compute, empty_matchups
        )

    async def get_item_builds(self, hero_id: int) -> dict | None:
        async def compute():
            result = await self.client.get_hero_item_popularity(hero_id)
            return aggregate_item_popularity(result.unwrap()).to_dict()

        return await self._with_default(CacheKey("hero-items", hero_id), self.ttl_seconds, compute, lambda: None)

    async def _constants(self, resource: str, fetch: Callable[[], Awaitable[Any]]) -> dict:
        async def compute():
            return (await fetch()).unwrap()

        return await self.orchestrator.resolve(CacheKey("constants", resource), self.ttl_seconds, compute)

    async def get_abilities(self, hero_name: str) -> dict:
        async def compute():
            hero_abilities, details = await asyncio.gather(
                self._constants("hero_abilities", self.client.get_hero_abilities),
                self._constants("abilities", self.client.get_abilities),
            )
            return resolve_hero_abilities(
                hero_name, hero_abilities, details, header_fallback=self.talent_header_fallback
            ).to_dict()

        return await self._with_default(
            CacheKey("hero-abilities", hero_name), self.ttl_seconds, compute, empty_abilities
        )

    async def get_hero_stats(self) -> dict:
        async def compute():
            result = await self.client.get_hero_stats()
            return summarize_hero_stats(result.unwrap()).to_dict()

        return await self._with_default(CacheKey("hero-stats"), HERO_STATS_TTL, compute, empty_hero_stats)

    # -- pages -----------------------------------------------------------

    async def get_hero_detail(self, hero_id: int) -> dict:
        """Hero record plus enrichment. Raises MissingLocalRecordError."""
        hero = await self.get_hero(hero_id)

        matchups, item_builds, abilities = await asyncio.gather(
            self.get_matchups(hero_id),
            self.get_item_builds(hero_id),
            self.get_abilities(hero["name"]),
        )

        detail = {
            **hero,
            "img": full_portrait(hero.get("img")),
            "slug": hero_slug(hero["localized_name"], hero["id"]),
            "counters": matchups["counters"],
            "good_against": matchups["good_against"],
            "item_builds": item_builds,
            "abilities": abilities["abilities"],
            "talents": abilities["talents"],
        }
        # The parts are shared with cache entries
        return copy.deepcopy(detail)
