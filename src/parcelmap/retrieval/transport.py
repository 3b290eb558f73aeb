"""Shared HTTP GET for the geocoder and the parcel service.

Single attempt, no caching: callers turn failures into outcomes and the
coordinator decides whether anything gets re-issued.
"""

import logging
import time
from typing import Any

import httpx

from parcelmap.config import settings

logger = logging.getLogger(__name__)


async def get_json(
    url: str,
    params: dict[str, Any],
    client: httpx.AsyncClient | None = None,
) -> Any:
    """GET url with params and return the decoded JSON body.

    Uses the given client when provided (caller owns its lifetime),
    otherwise a short-lived one. Raises httpx.HTTPError on transport or
    status failures and ValueError on a non-JSON body.
    """
    headers = {"User-Agent": settings.user_agent}
    start = time.monotonic()

    if client is not None:
        resp = await client.get(url, params=params, headers=headers)
    else:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as owned:
            resp = await owned.get(url, params=params, headers=headers)

    logger.debug(
        "GET %s -> %s in %.1f ms", url, resp.status_code, (time.monotonic() - start) * 1000,
    )
    resp.raise_for_status()
    return resp.json()


def describe_error(exc: Exception) -> str:
    """One-line description of a transport failure, with body for HTTP errors."""
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}: {exc.response.text[:200]}".strip()
    return f"{type(exc).__name__}: {exc}"
