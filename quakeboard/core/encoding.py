"""Visual encoding - Pure functions.

Maps an event's magnitude and recency to marker size, color and opacity.
The actual drawing is done by the rendering surface; this module only
computes the parameters.
"""

import math
from dataclasses import dataclass
from datetime import datetime

from quakeboard.core.earthquake import MAX_MAGNITUDE, Earthquake


# Smallest marker radius in pixels, keeps minor events visible
MIN_MARKER_RADIUS = 4.0

# Markers never fade below this
MIN_OPACITY = 0.6

# Upper bound (exclusive, in hours) of each recency bucket, newest first
RECENCY_COLORS: tuple[tuple[float, str], ...] = (
    (1.0, "#FF0000"),  # red (< 1 hour)
    (2.0, "#FF3300"),  # orange-red
    (4.0, "#FF6600"),  # orange
    (8.0, "#FF9900"),  # yellow-orange
)
OLDEST_COLOR = "#FFCC00"  # yellow (>= 8 hours)

# Events at or above this magnitude keep their map label open
PERMANENT_LABEL_MAGNITUDE = 5.0


@dataclass(frozen=True)
class MarkerStyle:
    """Immutable drawing parameters for one map marker.

    Attributes:
        earthquake_id: Event the marker belongs to
        latitude: Marker center latitude
        longitude: Marker center longitude
        radius: Circle radius in pixels
        fill_color: Hex fill color (recency)
        fill_opacity: Fill opacity (recency)
        label: Tooltip text
        permanent_label: Whether the tooltip stays open
        stroke_color: Outline color
        stroke_weight: Outline width in pixels
        stroke_opacity: Outline opacity
    """
    earthquake_id: str
    latitude: float
    longitude: float
    radius: float
    fill_color: str
    fill_opacity: float
    label: str
    permanent_label: bool
    stroke_color: str = "#FFFFFF"
    stroke_weight: int = 1
    stroke_opacity: float = 0.8


def get_marker_radius(magnitude: float, floor: float = MIN_MARKER_RADIUS) -> float:
    """Determine marker radius based on magnitude.

    Pure function. Exponential scaling so that large events dominate the map.

    Args:
        magnitude: Earthquake magnitude
        floor: Smallest radius returned

    Returns:
        Marker radius in pixels
    """
    magnitude = min(magnitude, MAX_MAGNITUDE)
    return max(floor, MIN_MARKER_RADIUS * math.exp(magnitude / 2))


def hours_since(time: datetime, now: datetime) -> float:
    """Hours elapsed between an event and now.

    Pure function. Events stamped in the future (clock skew) count as 0.
    """
    return max(0.0, (now - time).total_seconds() / 3600)


def get_recency_color(time: datetime, now: datetime) -> str:
    """Get hex fill color for how recent an event is.

    Pure function. Most recent is red, oldest is yellow.

    Args:
        time: Event timestamp
        now: Current time

    Returns:
        Hex color string
    """
    hours = hours_since(time, now)

    for upper, color in RECENCY_COLORS:
        if hours < upper:
            return color
    return OLDEST_COLOR


def get_recency_opacity(
    time: datetime,
    now: datetime,
    min_opacity: float = MIN_OPACITY,
) -> float:
    """Get fill opacity for how recent an event is.

    Pure function. Fades linearly over 24 hours down to min_opacity.
    """
    return max(min_opacity, 1 - hours_since(time, now) / 24)


def get_magnitude_color(magnitude: float) -> str:
    """Get hex text color for a magnitude in the ticker.

    Pure function.
    """
    if magnitude >= 7.0:
        return "#ef4444"  # red-500
    elif magnitude >= 6.0:
        return "#f97316"  # orange-500
    elif magnitude >= 5.0:
        return "#eab308"  # yellow-500
    elif magnitude >= 4.0:
        return "#22c55e"  # green-500
    return "#ffffff"


def get_detail_zoom_level(magnitude: float) -> int:
    """Determine detail map zoom level based on magnitude.

    Pure function. Larger earthquakes get zoomed out to show more context.
    """
    if magnitude >= 7.0:
        return 4
    elif magnitude >= 6.0:
        return 5
    elif magnitude >= 5.0:
        return 6
    return 7


def get_detail_marker_radius(magnitude: float) -> float:
    """Epicenter marker radius on the detail map."""
    return max(10.0, magnitude * 3)


def encode_marker(earthquake: Earthquake, now: datetime) -> MarkerStyle:
    """Create marker parameters for an earthquake.

    Pure function.

    Args:
        earthquake: Event to draw
        now: Current time, for recency

    Returns:
        MarkerStyle with all parameters set
    """
    return MarkerStyle(
        earthquake_id=earthquake.id,
        latitude=earthquake.latitude,
        longitude=earthquake.longitude,
        radius=get_marker_radius(earthquake.magnitude),
        fill_color=get_recency_color(earthquake.time, now),
        fill_opacity=get_recency_opacity(earthquake.time, now),
        label=f"M{earthquake.magnitude:.1f} {earthquake.location_label}",
        permanent_label=earthquake.magnitude >= PERMANENT_LABEL_MAGNITUDE,
    )


def encode_markers(earthquakes: list[Earthquake], now: datetime) -> list[MarkerStyle]:
    """Create markers for a snapshot, largest magnitude first.

    Pure function. Drawing in this order keeps small markers on top of
    large ones.
    """
    ordered = sorted(earthquakes, key=lambda e: e.magnitude, reverse=True)
    return [encode_marker(e, now) for e in ordered]
