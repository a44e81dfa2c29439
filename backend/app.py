"""FastAPI application entry point for the DotaCodex API."""

import logging
import sys

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings
from database import DatabaseManager
from errors import register_error_handlers
from services.cache import TTLCache
from services.encyclopedia import Encyclopedia
from services.opendota import OpenDotaClient
from services.orchestrator import CacheOrchestrator
from services.records import RecordStore

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def build_encyclopedia(config: Settings, db: DatabaseManager, client: OpenDotaClient | None = None) -> Encyclopedia:
    """One cache per process, shared by every request through app.state."""
    client = client or OpenDotaClient(
        base_url=config.opendota_base_url,
        api_key=config.opendota_api_key,
        timeout=config.upstream_timeout_seconds,
    )
    orchestrator = CacheOrchestrator(TTLCache(), coalesce=config.cache_coalesce_misses)
    return Encyclopedia(
        orchestrator=orchestrator,
        client=client,
        records=RecordStore(db),
        ttl_seconds=config.cache_ttl_seconds,
        talent_header_fallback=config.talent_header_fallback,
    )


def create_app(config: Settings = settings, client: OpenDotaClient | None = None) -> FastAPI:
    app = FastAPI(title="DotaCodex API", version="1.0.0")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if config.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    db = DatabaseManager(config.database_url)
    app.state.settings = config
    app.state.db = db
    app.state.encyclopedia = build_encyclopedia(config, db, client)

    from routes.health import router as health_router
    from routes.heroes import router as heroes_router
    from routes.items import router as items_router
    from routes.search import router as search_router
    from routes.sync import router as sync_router

    app.include_router(health_router)
    app.include_router(heroes_router)
    app.include_router(items_router)
    app.include_router(search_router)
    app.include_router(sync_router)

    @app.on_event("startup")
    async def _startup() -> None:
        missing = config.validate()
        if missing:
            logger.warning("Missing env vars (sync disabled): %s", ", ".join(missing))
        await db.init()

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        await app.state.encyclopedia.client.aclose()
        await db.dispose()

    return app


app = create_app()
