"""Unit tests for earthquake record parsing.

These tests demonstrate the benefit of the Functional Core pattern:
- No mocks needed
- Fast, deterministic execution
- Simple assertions on pure functions
"""

from datetime import datetime, timezone

import pytest

from quakeboard.core.earthquake import (
    MAX_MAGNITUDE,
    UNKNOWN_LOCATION,
    Earthquake,
    filter_by_magnitude,
    parse_earthquake,
    parse_earthquakes,
    parse_timestamp,
    sort_by_recency,
)


# Sample backend record for testing
SAMPLE_RECORD = {
    "id": 1042,
    "sourceId": "us7000abcd",
    "timestamp": "2025-03-04T12:30:00.000Z",
    "latitude": -23.65,
    "longitude": -70.4,
    "magnitude": 5.6,
    "depth": 35.0,
    "additionalData": {
        "place": "30 km N of Antofagasta, Chile",
        "flynn_region": "NEAR COAST OF NORTHERN CHILE",
    },
    "createdAt": "2025-03-04T12:31:00.000Z",
    "updatedAt": "2025-03-04T12:31:00.000Z",
}


def make_earthquake(id: str, hour: int, magnitude: float = 5.0) -> Earthquake:
    return Earthquake(
        id=id,
        time=datetime(2025, 3, 4, hour, 0, 0, tzinfo=timezone.utc),
        latitude=0.0,
        longitude=0.0,
        magnitude=magnitude,
        depth_km=10.0,
    )


class TestParseTimestamp:
    """Tests for parse_timestamp()."""

    def test_parses_z_suffix_as_utc(self):
        result = parse_timestamp("2025-03-04T12:30:00Z")
        assert result == datetime(2025, 3, 4, 12, 30, tzinfo=timezone.utc)

    def test_naive_timestamp_is_utc(self):
        result = parse_timestamp("2025-03-04T12:30:00")
        assert result.tzinfo is not None
        assert result == datetime(2025, 3, 4, 12, 30, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self):
        result = parse_timestamp("2025-03-04T14:30:00+02:00")
        assert result == datetime(2025, 3, 4, 12, 30, tzinfo=timezone.utc)

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


class TestParseEarthquake:
    """Tests for parse_earthquake() pure function."""

    def test_parses_valid_record(self):
        """Should parse a valid backend record into Earthquake."""
        result = parse_earthquake(SAMPLE_RECORD)

        assert result is not None
        assert result.id == "1042"
        assert result.source_id == "us7000abcd"
        assert result.magnitude == 5.6
        assert result.latitude == -23.65
        assert result.longitude == -70.4
        assert result.depth_km == 35.0
        assert result.place == "30 km N of Antofagasta, Chile"
        assert result.time == datetime(2025, 3, 4, 12, 30, tzinfo=timezone.utc)

    def test_falls_back_to_flynn_region(self):
        record = {**SAMPLE_RECORD, "additionalData": {"flynn_region": "NORTHERN CHILE"}}

        result = parse_earthquake(record)

        assert result is not None
        assert result.location_label == "NORTHERN CHILE"

    def test_missing_place_uses_sentinel(self):
        """Absent location is never a failure."""
        record = {**SAMPLE_RECORD, "additionalData": {}}

        result = parse_earthquake(record)

        assert result is not None
        assert result.place is None
        assert result.location_label == UNKNOWN_LOCATION

    def test_missing_additional_data_uses_sentinel(self):
        record = {k: v for k, v in SAMPLE_RECORD.items() if k != "additionalData"}

        result = parse_earthquake(record)

        assert result is not None
        assert result.location_label == "Unknown Location"

    def test_returns_none_for_missing_magnitude(self):
        record = {k: v for k, v in SAMPLE_RECORD.items() if k != "magnitude"}
        assert parse_earthquake(record) is None

    def test_returns_none_for_missing_timestamp(self):
        record = {k: v for k, v in SAMPLE_RECORD.items() if k != "timestamp"}
        assert parse_earthquake(record) is None

    def test_returns_none_for_bad_timestamp(self):
        assert parse_earthquake({**SAMPLE_RECORD, "timestamp": "not a date"}) is None

    def test_returns_none_for_non_numeric_magnitude(self):
        assert parse_earthquake({**SAMPLE_RECORD, "magnitude": "big"}) is None

    def test_returns_none_for_out_of_range_coordinates(self):
        assert parse_earthquake({**SAMPLE_RECORD, "latitude": 91.0}) is None
        assert parse_earthquake({**SAMPLE_RECORD, "longitude": -181.0}) is None

    def test_returns_none_for_negative_magnitude(self):
        assert parse_earthquake({**SAMPLE_RECORD, "magnitude": -0.5}) is None

    def test_returns_none_for_implausible_magnitude(self):
        assert parse_earthquake({**SAMPLE_RECORD, "magnitude": 1500}) is None
        assert parse_earthquake({**SAMPLE_RECORD, "magnitude": MAX_MAGNITUDE + 0.1}) is None

    def test_accepts_max_magnitude(self):
        assert parse_earthquake({**SAMPLE_RECORD, "magnitude": MAX_MAGNITUDE}) is not None

    def test_returns_none_for_non_finite_values(self):
        assert parse_earthquake({**SAMPLE_RECORD, "magnitude": "nan"}) is None
        assert parse_earthquake({**SAMPLE_RECORD, "depth": float("inf")}) is None


class TestParseEarthquakes:
    """Tests for parse_earthquakes()."""

    def test_drops_invalid_records(self):
        records = [SAMPLE_RECORD, {"id": 2}, {**SAMPLE_RECORD, "id": 3}]

        result = parse_earthquakes(records)

        assert [e.id for e in result] == ["1042", "3"]

    def test_keeps_input_order(self):
        older = {**SAMPLE_RECORD, "id": 1, "timestamp": "2025-03-04T01:00:00Z"}
        newer = {**SAMPLE_RECORD, "id": 2, "timestamp": "2025-03-04T09:00:00Z"}

        result = parse_earthquakes([older, newer])

        assert [e.id for e in result] == ["1", "2"]

    def test_empty_list(self):
        assert parse_earthquakes([]) == []


class TestSortByRecency:
    """Tests for sort_by_recency()."""

    def test_newest_first(self):
        quakes = [make_earthquake("a", 1), make_earthquake("b", 5), make_earthquake("c", 3)]

        result = sort_by_recency(quakes)

        assert [e.id for e in result] == ["b", "c", "a"]

    def test_ties_keep_input_order(self):
        quakes = [make_earthquake("a", 2), make_earthquake("b", 2), make_earthquake("c", 2)]

        result = sort_by_recency(quakes)

        assert [e.id for e in result] == ["a", "b", "c"]

    def test_does_not_mutate_input(self):
        quakes = [make_earthquake("a", 1), make_earthquake("b", 5)]

        sort_by_recency(quakes)

        assert [e.id for e in quakes] == ["a", "b"]


class TestFilterByMagnitude:
    """Tests for filter_by_magnitude()."""

    @pytest.fixture
    def earthquakes(self):
        return [
            make_earthquake("small", 1, magnitude=2.5),
            make_earthquake("medium", 2, magnitude=4.5),
            make_earthquake("large", 3, magnitude=6.0),
        ]

    def test_min_magnitude_inclusive(self, earthquakes):
        result = filter_by_magnitude(earthquakes, min_magnitude=4.5)
        assert [e.id for e in result] == ["medium", "large"]

    def test_nothing_above_threshold(self, earthquakes):
        assert filter_by_magnitude(earthquakes, min_magnitude=7.0) == []
