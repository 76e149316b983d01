"""Earthquake data models and parsing - Pure functions.

This module handles decoding backend event records into typed Earthquake
objects. All functions are pure with no side effects.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


logger = logging.getLogger(__name__)


# Largest magnitude accepted from the backend
MAX_MAGNITUDE = 12.0

# Shown whenever an event carries no usable place name
UNKNOWN_LOCATION = "Unknown Location"


@dataclass(frozen=True)
class Earthquake:
    """Immutable earthquake data model.

    Attributes:
        id: Unique event ID, stable across refresh cycles
        time: Event timestamp (UTC)
        latitude: Epicenter latitude
        longitude: Epicenter longitude
        magnitude: Earthquake magnitude
        depth_km: Depth in kilometers
        place: Human-readable location description (optional)
        source_id: Upstream catalogue ID (optional)
    """
    id: str
    time: datetime
    latitude: float
    longitude: float
    magnitude: float
    depth_km: float
    place: str | None = None
    source_id: str = ""

    @property
    def location_label(self) -> str:
        """Return the place name, or the sentinel when it is absent."""
        return self.place or UNKNOWN_LOCATION

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Pure function. A trailing 'Z' and naive timestamps are read as UTC.

    Raises:
        ValueError: If the value is not ISO-8601
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _get_place(additional: dict[str, Any] | None) -> str | None:
    """Pick the best available place name from the additional data."""
    if not additional:
        return None
    return additional.get("place") or additional.get("flynn_region") or None


def parse_earthquake(record: dict[str, Any]) -> Earthquake | None:
    """Parse a single backend record into an Earthquake.

    Pure function: takes raw dict, returns typed Earthquake or None if invalid.

    Args:
        record: Event record as served by the seismic backend

    Returns:
        Earthquake object or None if parsing fails
    """
    try:
        timestamp = record.get("timestamp")
        if not isinstance(timestamp, str):
            return None

        latitude = float(record["latitude"])
        longitude = float(record["longitude"])
        magnitude = float(record["magnitude"])
        depth = float(record["depth"])

        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            return None
        if not math.isfinite(magnitude) or not math.isfinite(depth):
            return None
        if not 0 <= magnitude <= MAX_MAGNITUDE or depth < 0:
            return None

        return Earthquake(
            id=str(record["id"]),
            time=parse_timestamp(timestamp),
            latitude=latitude,
            longitude=longitude,
            magnitude=magnitude,
            depth_km=depth,
            place=_get_place(record.get("additionalData")),
            source_id=str(record.get("sourceId") or ""),
        )
    except (KeyError, TypeError, ValueError, AttributeError):
        return None


def parse_earthquakes(records: list[dict[str, Any]]) -> list[Earthquake]:
    """Parse a list of backend records into Earthquakes.

    Pure function: drops invalid records and keeps the input order, which is
    the tie-breaker for every later recency sort.

    Args:
        records: Event records from the backend

    Returns:
        List of valid Earthquake objects
    """
    earthquakes = []

    for record in records:
        earthquake = parse_earthquake(record)
        if earthquake is None:
            logger.debug("Skipping invalid event record: %r", record)
            continue
        earthquakes.append(earthquake)

    return earthquakes


def sort_by_recency(earthquakes: list[Earthquake]) -> list[Earthquake]:
    """Sort earthquakes newest first.

    Pure function. The sort is stable, so events sharing a timestamp keep
    their input order.
    """
    return sorted(earthquakes, key=lambda e: e.time, reverse=True)


def filter_by_magnitude(
    earthquakes: list[Earthquake],
    min_magnitude: float,
) -> list[Earthquake]:
    """Keep earthquakes at or above a magnitude.

    Pure function.

    Args:
        earthquakes: List of earthquakes to filter
        min_magnitude: Minimum magnitude (inclusive)

    Returns:
        Filtered list of earthquakes, input order kept
    """
    return [e for e in earthquakes if e.magnitude >= min_magnitude]
