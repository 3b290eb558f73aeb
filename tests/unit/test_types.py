"""Tests for the core domain types."""

import pytest

from parcelmap.core.types import (
    Coordinate,
    InvalidInput,
    LocationState,
    Outcome,
    OutcomeKind,
    ParcelRecord,
)


class TestCoordinate:
    def test_valid(self):
        c = Coordinate(40.7128, -74.006)
        assert c.latitude == 40.7128
        assert c.longitude == -74.006

    def test_bounds_inclusive(self):
        Coordinate(90.0, 180.0)
        Coordinate(-90.0, -180.0)

    def test_latitude_out_of_range(self):
        with pytest.raises(InvalidInput, match="Latitude"):
            Coordinate(90.5, 0.0)

    def test_longitude_out_of_range(self):
        with pytest.raises(InvalidInput, match="Longitude"):
            Coordinate(0.0, -180.1)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            Coordinate(-91.0, 0.0)

    def test_immutable(self):
        c = Coordinate(1.0, 2.0)
        with pytest.raises(AttributeError):
            c.latitude = 3.0

    def test_value_equality(self):
        assert Coordinate(40.0, -74.0) == Coordinate(40.0, -74.0)
        assert len({Coordinate(40.0, -74.0), Coordinate(40.0, -74.0)}) == 1


class TestParcelRecordFromPayload:
    def test_short_upstream_names(self):
        record = ParcelRecord.from_payload({
            "address": "350 5th Ave",
            "owner": "Empire State Realty",
            "area": 87500,
            "city": "New York",
            "state": "NY",
            "zipCode": 10118,
            "far": 15,
            "zoning": "C5-3",
            "zoningDescription": "Restricted Central Commercial",
            "maxBuildingHeightFt": 1454,
            "maxDensityDuPerAcre": 50.5,
        })
        assert record.address == "350 5th Ave"
        assert record.owner == "Empire State Realty"
        assert record.area_sqft == 87500.0
        assert record.zip_code == "10118"
        assert record.floor_area_ratio == 15.0
        assert record.zoning_code == "C5-3"
        assert record.zoning_description == "Restricted Central Commercial"
        assert record.max_building_height_ft == 1454.0
        assert record.max_density_du_per_acre == 50.5

    def test_snake_case_names(self):
        record = ParcelRecord.from_payload({
            "address": "1 Main St",
            "owner": "Jane Doe",
            "area_sqft": "7,500",
            "zip_code": "07302",
            "floor_area_ratio": "0.5",
            "zoning_code": "R-1",
        })
        assert record.area_sqft == 7500.0
        assert record.zip_code == "07302"
        assert record.floor_area_ratio == 0.5
        assert record.zoning_code == "R-1"

    def test_camel_case_names(self):
        record = ParcelRecord.from_payload({
            "address": "1 Main St",
            "owner": "Jane Doe",
            "areaSqFt": 1200,
            "floorAreaRatio": 2,
            "zoningCode": "M1",
        })
        assert record.area_sqft == 1200.0
        assert record.floor_area_ratio == 2.0
        assert record.zoning_code == "M1"

    def test_absent_optionals_are_none(self):
        record = ParcelRecord.from_payload({"address": "A", "owner": "B", "area": 10})
        assert record.city is None
        assert record.state is None
        assert record.zip_code is None
        assert record.floor_area_ratio is None
        assert record.zoning_code is None
        assert record.max_building_height_ft is None
        assert record.max_density_du_per_acre is None

    def test_zero_is_not_absent(self):
        record = ParcelRecord.from_payload({
            "address": "A", "owner": "B", "area": 0,
            "far": 0, "maxBuildingHeightFt": "0",
        })
        assert record.area_sqft == 0.0
        assert record.floor_area_ratio == 0.0
        assert record.max_building_height_ft == 0.0

    def test_unparseable_numeric_is_none(self):
        record = ParcelRecord.from_payload({
            "address": "A", "owner": "B", "area": 10, "far": "n/a", "maxDensityDuPerAcre": "",
        })
        assert record.floor_area_ratio is None
        assert record.max_density_du_per_acre is None

    def test_blank_text_is_none(self):
        record = ParcelRecord.from_payload({"address": "A", "owner": "B", "area": 1, "city": "  "})
        assert record.city is None

    def test_missing_required_fields_fall_back(self, caplog):
        with caplog.at_level("WARNING"):
            record = ParcelRecord.from_payload({"city": "Hoboken"})
        assert record.address == ""
        assert record.owner == ""
        assert record.area_sqft is None
        assert record.city == "Hoboken"
        assert "missing required fields" in caplog.text

    def test_snake_case_wins_over_alias(self):
        record = ParcelRecord.from_payload({
            "address": "A", "owner": "B", "area_sqft": 100, "area": 999,
        })
        assert record.area_sqft == 100.0


class TestLocationState:
    def test_defaults(self):
        state = LocationState(focus=Coordinate(40.7128, -74.006))
        assert state.parcel is None
        assert state.loading is False
        assert state.zoom == 15


class TestOutcome:
    def test_found(self):
        outcome = Outcome.found(Coordinate(1.0, 2.0))
        assert outcome.kind is OutcomeKind.FOUND
        assert outcome.ok
        assert outcome.value == Coordinate(1.0, 2.0)

    def test_not_found_and_empty_are_distinct(self):
        assert Outcome.not_found().kind is OutcomeKind.NOT_FOUND
        assert Outcome.empty().kind is OutcomeKind.EMPTY
        assert Outcome.not_found() != Outcome.empty()
        assert not Outcome.empty().ok

    def test_transport_error_carries_message(self):
        outcome = Outcome.transport_error("ConnectError: refused")
        assert outcome.kind is OutcomeKind.TRANSPORT_ERROR
        assert outcome.value is None
        assert outcome.error == "ConnectError: refused"
