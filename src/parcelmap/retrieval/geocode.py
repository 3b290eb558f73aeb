"""Address resolution: free text to coordinates.

Queries a Nominatim-compatible search endpoint and keeps only the first
ranked candidate. Candidates carry lat/lon as decimal strings:

    [{"lat": "40.7128", "lon": "-74.0060", "display_name": "..."}]

An empty list means the address is unknown (NOT_FOUND), which is a normal
answer and is never retried.
"""

import logging

import httpx

from parcelmap.config import settings
from parcelmap.core.types import Coordinate, InvalidInput, Outcome
from parcelmap.observability.tracing import trace
from parcelmap.retrieval.transport import describe_error, get_json

logger = logging.getLogger(__name__)


def _parse_candidate(candidate: dict) -> Coordinate:
    """Convert a geocoder candidate's lat/lon strings to a Coordinate."""
    return Coordinate(
        latitude=float(candidate["lat"]),
        longitude=float(candidate["lon"]),
    )


@trace(name="geocode", span_type="TOOL")
async def geocode(
    query: str,
    *,
    url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> Outcome[Coordinate]:
    """Geocode free text to the first candidate's coordinate.

    Raises:
        InvalidInput: query is empty or whitespace-only (no request is made).

    Returns:
        Outcome FOUND with a Coordinate, NOT_FOUND for zero candidates,
        TRANSPORT_ERROR for network, status or payload failures.
    """
    if not query or not query.strip():
        raise InvalidInput("Search text is blank")

    query = query.strip()
    params = {"q": query, "format": "json", "limit": 1}

    try:
        data = await get_json(url or settings.geocoder_url, params, client)
    except (httpx.HTTPError, ValueError) as e:
        error = describe_error(e)
        logger.error("Geocoding request failed: %s", error, extra={"query": query})
        return Outcome.transport_error(error)

    if not isinstance(data, list):
        logger.error("Unexpected geocoder payload type: %s", type(data).__name__)
        return Outcome.transport_error("Unexpected geocoder response")

    if not data:
        logger.warning("No geocoding results for: %s", query, extra={"query": query})
        return Outcome.not_found()

    try:
        coord = _parse_candidate(data[0])
    except (KeyError, TypeError, ValueError) as e:
        # InvalidInput (out-of-range coordinate) is a ValueError too
        logger.error("Malformed geocoder candidate %r: %s", data[0], e)
        return Outcome.transport_error(f"Malformed geocoder candidate: {e}")

    logger.info(
        "Address found: %s, %s", coord.latitude, coord.longitude,
        extra={"query": query, "latitude": coord.latitude, "longitude": coord.longitude},
    )
    return Outcome.found(coord)
