"""Hero routes: listing, detail page data, popularity."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from dependencies import get_encyclopedia
from errors import MissingLocalRecordError
from services.encyclopedia import Encyclopedia
from services.slugs import hero_id_from_slug, hero_slug

router = APIRouter()


@router.get("/heroes")
async def list_heroes(
    search: str | None = Query(None),
    role: str | None = Query(None),
    attribute: str | None = Query(None),
    encyclopedia: Encyclopedia = Depends(get_encyclopedia),
) -> list[dict]:
    """Local hero records, optionally filtered by name, role or primary attribute."""
    return await encyclopedia.list_heroes(search=search, role=role, attribute=attribute)


@router.get("/heroes/{slug}")
async def hero_detail(slug: str, encyclopedia: Encyclopedia = Depends(get_encyclopedia)) -> dict:
    """Hero record plus counters, item builds, abilities and talents.

    A legacy bare id like "1" is permanently redirected to "anti-mage-1".
    Enrichment sections come back empty when OpenDota is unavailable.
    """
    hero_id = hero_id_from_slug(slug)
    if not hero_id:
        raise MissingLocalRecordError("hero", hero_id)

    if slug.isdigit():
        hero = await encyclopedia.get_hero(hero_id)
        return RedirectResponse(f"/heroes/{hero_slug(hero['localized_name'], hero['id'])}", status_code=308)

    return await encyclopedia.get_hero_detail(hero_id)


@router.get("/hero-stats")
async def hero_stats(encyclopedia: Encyclopedia = Depends(get_encyclopedia)) -> dict:
    """Top 10 heroes by win rate and by pick count across all ranks."""
    return await encyclopedia.get_hero_stats()
