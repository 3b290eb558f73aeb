"""Shared test fixtures."""

import asyncio

import mlflow
import pytest

from parcelmap.core.types import Coordinate, LocationState, Outcome
from parcelmap.pipeline.coordinator import InteractionCoordinator
from parcelmap.state.location import LocationStore

NYC = Coordinate(40.7128, -74.006)


@pytest.fixture(scope="session", autouse=True)
def _isolated_mlflow(tmp_path_factory):
    """Point MLflow at a throwaway store and switch tracing off for the session.

    Re-enabling tracing at teardown may still create tables, so it runs while
    the temporary tracking URI is active and the caller's URI is restored after.
    """
    previous = mlflow.get_tracking_uri()
    db = tmp_path_factory.mktemp("mlflow") / "mlflow.db"
    mlflow.set_tracking_uri(f"sqlite:///{db}")
    mlflow.tracing.disable()
    yield
    mlflow.tracing.enable()
    mlflow.set_tracking_uri(previous)


class FakeGeoQuery:
    """In-memory GeoQuery client.

    With hold_* set, each call parks on a future appended to the matching
    *_pending list so tests decide when, and in which order, calls settle.
    """

    def __init__(
        self,
        geocode_results: dict[str, Outcome] | None = None,
        parcel_results: dict[Coordinate, Outcome] | None = None,
        hold_geocode: bool = False,
        hold_lookup: bool = False,
    ):
        self.geocode_results = geocode_results or {}
        self.parcel_results = parcel_results or {}
        self.hold_geocode = hold_geocode
        self.hold_lookup = hold_lookup
        self.geocode_calls: list[str] = []
        self.lookup_calls: list[Coordinate] = []
        self.geocode_pending: list[asyncio.Future] = []
        self.lookup_pending: list[asyncio.Future] = []

    async def geocode(self, query: str) -> Outcome:
        self.geocode_calls.append(query)
        if self.hold_geocode:
            fut = asyncio.get_running_loop().create_future()
            self.geocode_pending.append(fut)
            return await fut
        return self.geocode_results.get(query, Outcome.not_found())

    async def lookup_parcel(self, coord: Coordinate) -> Outcome:
        self.lookup_calls.append(coord)
        if self.hold_lookup:
            fut = asyncio.get_running_loop().create_future()
            self.lookup_pending.append(fut)
            return await fut
        return self.parcel_results.get(coord, Outcome.empty())


@pytest.fixture
def store() -> LocationStore:
    return LocationStore(LocationState(focus=NYC))


@pytest.fixture
def fake_client() -> FakeGeoQuery:
    return FakeGeoQuery()


@pytest.fixture
def coordinator(fake_client, store) -> InteractionCoordinator:
    return InteractionCoordinator(fake_client, store)
