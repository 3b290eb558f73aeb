"""Parcel lookup: coordinates to the parcel under that point.

The parcel service answers GET ?lat=<lat>&lon=<lon> with

    {"parcels": [{"address": ..., "owner": ..., "area": ..., ...}, ...]}

Only the first parcel is used. No parcels (a click in open water, a
point outside coverage) is EMPTY, a normal outcome distinct from a
TRANSPORT_ERROR.
"""

import logging

import httpx

from parcelmap.config import settings
from parcelmap.core.types import Coordinate, Outcome, ParcelRecord
from parcelmap.observability.tracing import trace
from parcelmap.retrieval.transport import describe_error, get_json

logger = logging.getLogger(__name__)


@trace(name="lookup_parcel", span_type="TOOL")
async def lookup_parcel(
    coord: Coordinate,
    *,
    url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> Outcome[ParcelRecord]:
    """Look up the parcel at a coordinate.

    Returns:
        Outcome FOUND with the first ParcelRecord, EMPTY when the service
        reports no parcels, TRANSPORT_ERROR for network, status or
        payload failures.
    """
    params = {"lat": coord.latitude, "lon": coord.longitude}
    log_extra = {"latitude": coord.latitude, "longitude": coord.longitude}

    try:
        data = await get_json(url or settings.parcel_lookup_url, params, client)
    except (httpx.HTTPError, ValueError) as e:
        error = describe_error(e)
        logger.error("Error fetching parcel details: %s", error, extra=log_extra)
        return Outcome.transport_error(error)

    parcels = data.get("parcels") if isinstance(data, dict) else None
    if not isinstance(parcels, list) or not parcels:
        logger.warning("No parcel data available.", extra=log_extra)
        return Outcome.empty()

    first = parcels[0]
    if not isinstance(first, dict):
        logger.error("Malformed parcel entry: %r", first, extra=log_extra)
        return Outcome.transport_error("Malformed parcel entry")

    record = ParcelRecord.from_payload(first)
    logger.info("Parcel found: %s", record.address or "<no address>", extra=log_extra)
    return Outcome.found(record)
