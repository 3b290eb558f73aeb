"""Tests for the LocationStore update/subscribe contract."""

import pytest

from parcelmap.core.types import Coordinate, LocationState, ParcelRecord
from parcelmap.state.location import LocationStore

START = Coordinate(40.7128, -74.006)


def _store() -> LocationStore:
    return LocationStore(LocationState(focus=START))


class TestLocationStore:
    def test_initial_snapshot(self):
        store = _store()
        assert store.snapshot.focus == START
        assert store.snapshot.parcel is None
        assert store.snapshot.loading is False

    def test_update_replaces_snapshot(self):
        store = _store()
        before = store.snapshot
        after = store.update(focus=Coordinate(41.0, -73.0), loading=True)

        assert after is store.snapshot
        assert after is not before
        assert before.focus == START
        assert before.loading is False
        assert after.focus == Coordinate(41.0, -73.0)
        assert after.loading is True

    def test_update_keeps_untouched_fields(self):
        store = _store()
        parcel = ParcelRecord(address="1 Main St", owner="Jane Doe", area_sqft=100.0)
        store.update(parcel=parcel)
        store.update(loading=True)
        assert store.snapshot.parcel == parcel

    def test_subscribers_get_new_snapshot(self):
        store = _store()
        seen = []
        store.subscribe(seen.append)
        store.update(loading=True)
        store.update(loading=False)
        assert [s.loading for s in seen] == [True, False]

    def test_unsubscribe(self):
        store = _store()
        seen = []
        unsubscribe = store.subscribe(seen.append)
        store.update(loading=True)
        unsubscribe()
        unsubscribe()  # idempotent
        store.update(loading=False)
        assert len(seen) == 1

    def test_failing_subscriber_does_not_block_others(self, caplog):
        store = _store()
        seen = []

        def broken(_state):
            raise RuntimeError("render failed")

        store.subscribe(broken)
        store.subscribe(seen.append)
        store.update(loading=True)

        assert len(seen) == 1
        assert "listener" in caplog.text

    def test_unknown_field_rejected(self):
        store = _store()
        with pytest.raises(TypeError):
            store.update(sequence=3)
