"""Core domain types shared across all parcelmap modules."""

from parcelmap.core.types import (
    Coordinate,
    InvalidInput,
    LocationState,
    Notice,
    NoticeKind,
    Outcome,
    OutcomeKind,
    ParcelRecord,
)

__all__ = [
    "Coordinate",
    "InvalidInput",
    "LocationState",
    "Notice",
    "NoticeKind",
    "Outcome",
    "OutcomeKind",
    "ParcelRecord",
]
