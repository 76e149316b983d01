"""Geographic calculations - Pure functions.

This module provides viewport and boundary calculations for the regional
map view. All functions are pure and total: malformed regions are
normalized, never rejected.
"""

from dataclasses import dataclass
from collections.abc import Sequence

from quakeboard.core.earthquake import Earthquake


# Fraction of each axis span added on both sides of a region
REGION_MARGIN = 0.1

# Zoom used for the world map and when no region is configured
DEFAULT_ZOOM = 2

# (minimum span in degrees, zoom), widest first
ZOOM_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (90.0, 2),
    (45.0, 3),
    (20.0, 4),
    (10.0, 5),
    (5.0, 6),
    (2.0, 7),
)
MAX_ZOOM = 8


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @classmethod
    def from_corners(cls, corners: Sequence[Sequence[float]]) -> "BoundingBox":
        """Build a box from two [lat, lon] corners in any order.

        Corners are sorted into min/max and clamped to valid ranges.
        """
        (lat1, lon1), (lat2, lon2) = corners
        return cls(
            min_latitude=_clamp(min(lat1, lat2), -90.0, 90.0),
            max_latitude=_clamp(max(lat1, lat2), -90.0, 90.0),
            min_longitude=_clamp(min(lon1, lon2), -180.0, 180.0),
            max_longitude=_clamp(max(lon1, lon2), -180.0, 180.0),
        )

    def normalized(self) -> "BoundingBox":
        """Return a copy with min/max sorted and clamped."""
        return BoundingBox.from_corners((
            (self.min_latitude, self.min_longitude),
            (self.max_latitude, self.max_longitude),
        ))

    @property
    def latitude_span(self) -> float:
        return abs(self.max_latitude - self.min_latitude)

    @property
    def longitude_span(self) -> float:
        return abs(self.max_longitude - self.min_longitude)

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point is within this bounding box."""
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )


WORLD_BOUNDS = BoundingBox(
    min_latitude=-90.0,
    max_latitude=90.0,
    min_longitude=-180.0,
    max_longitude=180.0,
)


@dataclass(frozen=True)
class Viewport:
    """Map camera for a world or regional view.

    Attributes:
        center: (latitude, longitude) of the map center
        zoom: Discrete zoom level
        bounds: Visible area
    """
    center: tuple[float, float]
    zoom: int
    bounds: BoundingBox


def expanded_bounds(region: BoundingBox | None) -> BoundingBox:
    """Grow a region by REGION_MARGIN on each axis.

    Pure function.

    Args:
        region: Region to expand, or None for the whole world

    Returns:
        Expanded box clamped to valid latitude/longitude ranges
    """
    if region is None:
        return WORLD_BOUNDS

    box = region.normalized()
    lat_pad = box.latitude_span * REGION_MARGIN
    lon_pad = box.longitude_span * REGION_MARGIN

    return BoundingBox(
        min_latitude=_clamp(box.min_latitude - lat_pad, -90.0, 90.0),
        max_latitude=_clamp(box.max_latitude + lat_pad, -90.0, 90.0),
        min_longitude=_clamp(box.min_longitude - lon_pad, -180.0, 180.0),
        max_longitude=_clamp(box.max_longitude + lon_pad, -180.0, 180.0),
    )


def bounds_zoom(region: BoundingBox | None) -> int:
    """Map the larger axis span of a region to a zoom level.

    Pure function. Smaller regions get higher zoom.
    """
    if region is None:
        return DEFAULT_ZOOM

    box = region.normalized()
    span = max(box.latitude_span, box.longitude_span)

    for min_span, zoom in ZOOM_THRESHOLDS:
        if span > min_span:
            return zoom
    return MAX_ZOOM


def is_within_bounds(
    latitude: float,
    longitude: float,
    region: BoundingBox | None,
) -> bool:
    """Check if a point falls inside the expanded region.

    Pure function. Always True when no region is configured.
    """
    if region is None:
        return True
    return expanded_bounds(region).contains(latitude, longitude)


def region_center(region: BoundingBox | None) -> tuple[float, float]:
    """Midpoint of a region, or (0, 0) when there is none."""
    if region is None:
        return (0.0, 0.0)

    box = region.normalized()
    return (
        (box.min_latitude + box.max_latitude) / 2,
        (box.min_longitude + box.max_longitude) / 2,
    )


def filter_by_bounds(
    earthquakes: Sequence[Earthquake],
    region: BoundingBox | None,
) -> list[Earthquake]:
    """Filter earthquakes to those visible in a regional view.

    Pure function.
    """
    return [
        e for e in earthquakes
        if is_within_bounds(e.latitude, e.longitude, region)
    ]


def map_viewport(region: BoundingBox | None) -> Viewport:
    """Compute the camera for a map view.

    Pure function.
    """
    return Viewport(
        center=region_center(region),
        zoom=bounds_zoom(region),
        bounds=expanded_bounds(region),
    )
