"""Health and readiness check routes."""

from fastapi import APIRouter, Depends

from config import Settings
from dependencies import get_client, get_orchestrator, get_settings
from services.opendota import OpenDotaClient
from services.orchestrator import CacheOrchestrator

router = APIRouter()


@router.get("/ready")
async def ready(config: Settings = Depends(get_settings)) -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "dotacodex-api", "commit": config.git_sha}


@router.get("/health")
async def health(
    orchestrator: CacheOrchestrator = Depends(get_orchestrator),
    client: OpenDotaClient = Depends(get_client),
    config: Settings = Depends(get_settings),
) -> dict:
    """Cache and upstream counters. Still no OpenDota call, quota is precious."""
    return {
        "status": "ok",
        "service": "dotacodex-api",
        "commit": config.git_sha,
        "cache": orchestrator.stats(),
        "upstream": {"base_url": client.base_url, "calls": client.call_count},
    }
