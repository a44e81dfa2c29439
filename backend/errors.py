"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DotaCodexError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class MissingLocalRecordError(DotaCodexError):
    def __init__(self, kind: str, record_id: int):
        super().__init__(f"{kind.capitalize()} not found: {record_id}", status_code=404)
        self.kind = kind
        self.record_id = record_id


class SyncError(DotaCodexError):
    pass


class UpstreamError(DotaCodexError):
    """OpenDota call failed. The client absorbs these into a degraded result."""

    def __init__(self, message: str, endpoint: str, status_code: int = 502):
        super().__init__(message, status_code=status_code)
        self.endpoint = endpoint


class UpstreamTimeout(UpstreamError):
    def __init__(self, endpoint: str, timeout: float):
        super().__init__(f"OpenDota request timed out after {timeout}s: {endpoint}", endpoint, status_code=504)


class UpstreamHTTPError(UpstreamError):
    def __init__(self, endpoint: str, status: int):
        super().__init__(f"OpenDota API error: {status} for {endpoint}", endpoint)
        self.upstream_status = status


class UpstreamTransportError(UpstreamError):
    def __init__(self, endpoint: str, reason: str):
        super().__init__(f"OpenDota transport error for {endpoint}: {reason}", endpoint)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(DotaCodexError)
    async def handle_dotacodex_error(_request: Request, exc: DotaCodexError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
