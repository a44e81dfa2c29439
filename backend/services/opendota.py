"""OpenDota API client.

The API enforces per-minute and per-day quotas. Every failure (timeout,
non-2xx, network) is absorbed here: callers get an UpstreamResult whose
data is an empty value of the expected shape and whose error says why.
This client never raises to its caller.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

import httpx

from errors import UpstreamError, UpstreamHTTPError, UpstreamTimeout, UpstreamTransportError

logger = logging.getLogger(__name__)

OPENDOTA_BASE_URL = "https://api.opendota.com/api"

QUOTA_HEADERS = ("x-rate-limit-remaining-minute", "x-rate-limit-remaining-day")


@dataclass(frozen=True)
class UpstreamResult:
    """Either fetched data or a degraded empty value plus the reason."""

    endpoint: str
    data: Any
    error: UpstreamError | None = None
    latency_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return data, raising the absorbed error for degraded results."""
        if self.error is not None:
            raise self.error
        return self.data


class OpenDotaClient:
    def __init__(
        self,
        base_url: str = OPENDOTA_BASE_URL,
        api_key: str | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.call_count = 0
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_resource(self, endpoint: str, empty: Callable[[], Any] = list) -> UpstreamResult:
        """GET one resource. On any failure, data is ``empty()``."""
        self.call_count += 1
        params = {"api_key": self.api_key} if self.api_key else None
        started = time.perf_counter()
        response = None

        try:
            response = await asyncio.wait_for(
                self._client.get(f"{self.base_url}{endpoint}", params=params),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (asyncio.TimeoutError, httpx.TimeoutException):
            error = UpstreamTimeout(endpoint, self.timeout)
        except httpx.HTTPStatusError as e:
            error = UpstreamHTTPError(endpoint, e.response.status_code)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers a 2xx body that is not JSON
            error = UpstreamTransportError(endpoint, str(e) or type(e).__name__)
        else:
            latency_ms = (time.perf_counter() - started) * 1000
            logger.debug("OpenDota %s -> %s in %.0fms", endpoint, response.status_code, latency_ms)
            return UpstreamResult(endpoint=endpoint, data=data, latency_ms=latency_ms)

        latency_ms = (time.perf_counter() - started) * 1000
        _log_failure(endpoint, error, response, latency_ms)
        return UpstreamResult(endpoint=endpoint, data=empty(), error=error, latency_ms=latency_ms)

    async def get_hero_stats(self) -> UpstreamResult:
        return await self.fetch_resource("/heroStats", empty=list)

    async def get_hero_matchups(self, hero_id: int) -> UpstreamResult:
        return await self.fetch_resource(f"/heroes/{hero_id}/matchups", empty=list)

    async def get_hero_item_popularity(self, hero_id: int) -> UpstreamResult:
        return await self.fetch_resource(f"/heroes/{hero_id}/itemPopularity", empty=dict)

    async def get_items(self) -> UpstreamResult:
        return await self.fetch_resource("/constants/items", empty=dict)

    async def get_abilities(self) -> UpstreamResult:
        return await self.fetch_resource("/constants/abilities", empty=dict)

    async def get_hero_abilities(self) -> UpstreamResult:
        return await self.fetch_resource("/constants/hero_abilities", empty=dict)


def _log_failure(
    endpoint: str,
    error: UpstreamError,
    response: httpx.Response | None,
    latency_ms: float,
) -> None:
    status = response.status_code if response is not None else None
    quota = {}
    if response is not None:
        quota = {h: response.headers[h] for h in QUOTA_HEADERS if h in response.headers}
    logger.warning(
        "OpenDota call degraded to empty: endpoint=%s status=%s latency=%.0fms quota=%s error=%s",
        endpoint,
        status,
        latency_ms,
        quota or "n/a",
        error,
    )
