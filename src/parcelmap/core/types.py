"""Domain types for parcelmap.

All shared dataclasses live here so the retrieval, state, pipeline and
view layers agree on one model. Every value is frozen: state changes
replace a snapshot wholesale instead of mutating it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InvalidInput(ValueError):
    """User-correctable input rejected before any external call."""


# ---------------------------------------------------------------------------
# Geography
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point. Out-of-range values raise InvalidInput."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidInput(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidInput(f"Longitude out of range: {self.longitude}")


# ---------------------------------------------------------------------------
# Parcel record from the parcel lookup service
# ---------------------------------------------------------------------------

# Upstream payload keys per field, in lookup order. The service has shipped
# both snake_case and camelCase variants plus a few short names.
_PAYLOAD_ALIASES: dict[str, tuple[str, ...]] = {
    "address": ("address",),
    "owner": ("owner",),
    "area_sqft": ("area_sqft", "areaSqFt", "area"),
    "city": ("city",),
    "state": ("state",),
    "zip_code": ("zip_code", "zipCode", "zip"),
    "floor_area_ratio": ("floor_area_ratio", "floorAreaRatio", "far"),
    "zoning_code": ("zoning_code", "zoningCode", "zoning"),
    "zoning_description": ("zoning_description", "zoningDescription"),
    "max_building_height_ft": ("max_building_height_ft", "maxBuildingHeightFt"),
    "max_density_du_per_acre": ("max_density_du_per_acre", "maxDensityDuPerAcre"),
}

_TEXT_FIELDS = ("city", "state", "zip_code", "zoning_code", "zoning_description")
_NUMERIC_FIELDS = (
    "floor_area_ratio",
    "max_building_height_ft",
    "max_density_du_per_acre",
)


def _pick(payload: dict, field_name: str) -> Any:
    """Return the first non-null value among a field's payload aliases."""
    for key in _PAYLOAD_ALIASES[field_name]:
        val = payload.get(key)
        if val is not None:
            return val
    return None


def _optional_float(val: Any) -> float | None:
    """Convert to float, keeping None for absent or unparseable values.

    Zero stays zero: '0' → 0.0, '' → None, 'n/a' → None.
    """
    if val is None or isinstance(val, bool):
        return None
    s = str(val).replace(",", "").strip()
    if not s:
        return None
    try:
        return float(s)
    except ValueError:
        return None


def _optional_text(val: Any) -> str | None:
    """Convert to a stripped string, None for absent values.

    Integer zip codes come back as numbers from some sources: 10001 → '10001'.
    """
    if val is None:
        return None
    if isinstance(val, float) and val.is_integer():
        val = int(val)
    s = str(val).strip()
    return s or None


@dataclass(frozen=True)
class ParcelRecord:
    """One parcel as reported by the parcel service.

    Optional fields are None when the source did not report them. A
    reported zero (e.g. floor_area_ratio=0.0) is kept as zero.
    """

    address: str
    owner: str
    area_sqft: float | None

    city: str | None = None
    state: str | None = None
    zip_code: str | None = None

    # Zoning
    floor_area_ratio: float | None = None
    zoning_code: str | None = None
    zoning_description: str | None = None
    max_building_height_ft: float | None = None
    max_density_du_per_acre: float | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "ParcelRecord":
        """Build a record from one element of the service's `parcels` list."""
        missing = [
            name for name in ("address", "owner", "area_sqft")
            if _pick(payload, name) is None
        ]
        if missing:
            logger.warning("Parcel payload missing required fields: %s", ", ".join(missing))

        kwargs: dict[str, Any] = {
            "address": _optional_text(_pick(payload, "address")) or "",
            "owner": _optional_text(_pick(payload, "owner")) or "",
            "area_sqft": _optional_float(_pick(payload, "area_sqft")),
        }
        for name in _TEXT_FIELDS:
            kwargs[name] = _optional_text(_pick(payload, name))
        for name in _NUMERIC_FIELDS:
            kwargs[name] = _optional_float(_pick(payload, name))
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Single source of truth for the view
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LocationState:
    """Current map focus plus the parcel under it.

    parcel is only set by the most recently issued lookup for focus.
    """

    focus: Coordinate
    parcel: ParcelRecord | None = None
    loading: bool = False
    zoom: int = 15


# ---------------------------------------------------------------------------
# External call outcomes
# ---------------------------------------------------------------------------

class OutcomeKind(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"          # geocoder returned zero candidates
    EMPTY = "empty"                  # no parcel at this point
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one geocode or parcel lookup call.

    NOT_FOUND and EMPTY are normal answers, not failures. Only
    TRANSPORT_ERROR carries an error message.
    """

    kind: OutcomeKind
    value: T | None = None
    error: str = ""

    @classmethod
    def found(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeKind.FOUND, value=value)

    @classmethod
    def not_found(cls) -> "Outcome[T]":
        return cls(OutcomeKind.NOT_FOUND)

    @classmethod
    def empty(cls) -> "Outcome[T]":
        return cls(OutcomeKind.EMPTY)

    @classmethod
    def transport_error(cls, error: str) -> "Outcome[T]":
        return cls(OutcomeKind.TRANSPORT_ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.FOUND


# ---------------------------------------------------------------------------
# User-visible notices
# ---------------------------------------------------------------------------

class NoticeKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class Notice:
    """Transient message for the user (validation, not found, failure)."""

    kind: NoticeKind
    message: str
