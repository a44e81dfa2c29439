"""Sync heroes and items from OpenDota into the local record store.

Protected by the X-API-Key header. With SYNC_API_KEY unset every request is
refused.
"""

import logging

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from config import Settings
from dependencies import get_client, get_orchestrator, get_records, get_settings
from errors import SyncError
from services.opendota import OpenDotaClient
from services.orchestrator import CacheOrchestrator
from services.records import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sync")
async def sync_info() -> dict:
    return {
        "message": "Use POST to sync data from OpenDota API",
        "endpoints": {"sync": "POST /sync"},
    }


@router.post("/sync")
async def sync(
    x_api_key: str | None = Header(None),
    client: OpenDotaClient = Depends(get_client),
    records: RecordStore = Depends(get_records),
    orchestrator: CacheOrchestrator = Depends(get_orchestrator),
    config: Settings = Depends(get_settings),
):
    if not config.sync_api_key:
        logger.error("SYNC_API_KEY is not set; refusing sync")
        return JSONResponse({"error": "Server configuration error"}, status_code=500)

    if x_api_key != config.sync_api_key:
        return JSONResponse({"error": "Unauthorized. Invalid or missing API key."}, status_code=401)

    heroes = await client.get_hero_stats()
    if not heroes.ok:
        raise SyncError(f"Failed to sync heroes: {heroes.error}", status_code=502)
    items = await client.get_items()
    if not items.ok:
        raise SyncError(f"Failed to sync items: {items.error}", status_code=502)

    heroes_count = await records.upsert_heroes(heroes.data)
    items_count = await records.upsert_items(items.data)

    # Cached records and pages now predate the sync
    orchestrator.clear()

    return {"success": True, "heroes_count": heroes_count, "items_count": items_count}
