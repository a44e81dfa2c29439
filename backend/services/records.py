"""Local hero/item record store.

Reads return plain dicts so results can be cached and serialized directly.
Writes happen only through the sync route.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, or_, select

from database import DatabaseManager
from models import Hero, Item
from services.hero_stats import cdn

logger = logging.getLogger(__name__)


def localize_item_name(key: str) -> str:
    """Turn an item key like "power_treads" into "Power Treads"."""
    return " ".join(word.capitalize() for word in key.split("_"))


class RecordStore:
    def __init__(self, db: DatabaseManager):
        self.db = db

    async def get_hero(self, hero_id: int) -> dict | None:
        async with self.db.session() as session:
            hero = await session.get(Hero, hero_id)
            return hero.to_dict() if hero else None

    async def list_heroes(
        self,
        search: str | None = None,
        role: str | None = None,
        attribute: str | None = None,
    ) -> list[dict]:
        stmt = select(Hero).order_by(Hero.localized_name)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(func.lower(Hero.localized_name).like(pattern), func.lower(Hero.name).like(pattern))
            )
        if attribute:
            stmt = stmt.where(Hero.primary_attr == attribute)

        async with self.db.session() as session:
            heroes = (await session.scalars(stmt)).all()

        # roles is a JSON column, filter in Python
        if role:
            heroes = [h for h in heroes if role in (h.roles or [])]
        return [h.to_dict() for h in heroes]

    async def get_item(self, item_id: int) -> dict | None:
        async with self.db.session() as session:
            item = await session.get(Item, item_id)
            return item.to_dict() if item else None

    async def list_items(self) -> list[dict]:
        async with self.db.session() as session:
            items = (await session.scalars(select(Item).order_by(Item.id))).all()
            return [i.to_dict() for i in items]

    async def search(self, query: str, limit: int = 10) -> tuple[list[dict], list[dict]]:
        """Heroes and purchasable items whose name contains query.

        Up to `limit` of each. Recipes and free items are left out.
        """
        pattern = f"%{query.lower()}%"
        hero_stmt = (
            select(Hero)
            .where(or_(func.lower(Hero.localized_name).like(pattern), func.lower(Hero.name).like(pattern)))
            .limit(limit)
        )
        item_stmt = (
            select(Item)
            .where(
                or_(func.lower(Item.localized_name).like(pattern), func.lower(Item.name).like(pattern)),
                Item.cost > 0,
            )
            .limit(limit * 2)
        )

        async with self.db.session() as session:
            heroes = (await session.scalars(hero_stmt)).all()
            items = (await session.scalars(item_stmt)).all()

        items = [i for i in items if not i.recipe][:limit]
        return [h.to_dict() for h in heroes], [i.to_dict() for i in items]

    async def upsert_heroes(self, raw: list[dict]) -> int:
        """Insert or update heroes from an OpenDota /heroStats payload."""
        now = datetime.now(timezone.utc)
        async with self.db.session() as session:
            for hero in raw:
                await session.merge(
                    Hero(
                        id=hero["id"],
                        name=hero["name"],
                        localized_name=hero["localized_name"],
                        primary_attr=hero["primary_attr"],
                        attack_type=hero["attack_type"],
                        roles=hero.get("roles") or [],
                        img=cdn(hero.get("img")),
                        icon=cdn(hero.get("icon")),
                        base_health=hero.get("base_health"),
                        base_mana=hero.get("base_mana"),
                        base_armor=hero.get("base_armor"),
                        move_speed=hero.get("move_speed"),
                        attack_range=hero.get("attack_range"),
                        base_str=hero.get("base_str"),
                        base_agi=hero.get("base_agi"),
                        base_int=hero.get("base_int"),
                        str_gain=hero.get("str_gain"),
                        agi_gain=hero.get("agi_gain"),
                        int_gain=hero.get("int_gain"),
                        last_synced_at=now,
                    )
                )
        logger.info("Synced %d heroes", len(raw))
        return len(raw)

    async def upsert_items(self, raw: dict[str, dict]) -> int:
        """Insert or update items from an OpenDota /constants/items payload."""
        now = datetime.now(timezone.utc)
        count = 0
        async with self.db.session() as session:
            for key, item in raw.items():
                if not item.get("id"):
                    continue
                hint = item.get("hint")
                await session.merge(
                    Item(
                        id=item["id"],
                        name=key,
                        localized_name=item.get("dname") or localize_item_name(key),
                        cost=item.get("cost"),
                        secret_shop=_flag(item.get("secret_shop")),
                        side_shop=_flag(item.get("side_shop")),
                        recipe=_flag(item.get("recipe")),
                        components=item.get("components"),
                        description=" ".join(hint) if hint else None,
                        img=cdn(item.get("img")),
                        last_synced_at=now,
                    )
                )
                count += 1
        logger.info("Synced %d items", count)
        return count


def _flag(value) -> bool | None:
    return None if value is None else bool(value)
