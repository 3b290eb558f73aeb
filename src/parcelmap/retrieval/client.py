"""GeoQueryClient: geocoding and parcel lookup behind injected endpoints."""

import logging

import httpx

from parcelmap.config import settings
from parcelmap.core.types import Coordinate, Outcome, ParcelRecord
from parcelmap.retrieval.geocode import geocode
from parcelmap.retrieval.parcel import lookup_parcel

logger = logging.getLogger(__name__)


class GeoQueryClient:
    """Both external lookups, sharing one HTTP connection pool.

    Endpoints default to Settings. Pass `http` to share an existing
    httpx.AsyncClient; the caller then owns closing it.
    """

    def __init__(
        self,
        geocoder_url: str | None = None,
        parcel_url: str | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        self.geocoder_url = geocoder_url or settings.geocoder_url
        self.parcel_url = parcel_url or settings.parcel_lookup_url
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=settings.http_timeout)

    async def geocode(self, query: str) -> Outcome[Coordinate]:
        return await geocode(query, url=self.geocoder_url, client=self._http)

    async def lookup_parcel(self, coord: Coordinate) -> Outcome[ParcelRecord]:
        return await lookup_parcel(coord, url=self.parcel_url, client=self._http)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()
            logger.debug("Closed HTTP client")

    async def __aenter__(self) -> "GeoQueryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
