"""Detail card formatting - Pure functions.

This module formats earthquake data into the text shown on detail cards.
All functions are pure with no side effects.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from quakeboard.core.earthquake import Earthquake
from quakeboard.core.encoding import get_detail_marker_radius, get_detail_zoom_level
from quakeboard.core.ticker import TimezoneLabel


# Clocks shown on every detail card
DETAIL_TIMEZONES: tuple[TimezoneLabel, ...] = (
    TimezoneLabel("UTC (GMT)", "UTC"),
    TimezoneLabel("Los Angeles (PST/PDT)", "America/Los_Angeles"),
    TimezoneLabel("New York (EST/EDT)", "America/New_York"),
    TimezoneLabel("Central European (CET/CEST)", "Europe/Berlin"),
)


@dataclass(frozen=True)
class DetailCard:
    """Everything the detail view displays for one event.

    Attributes:
        earthquake_id: Event shown
        magnitude_text: e.g. "M6.2"
        location: Place name or sentinel
        date_text: e.g. "March 4, 2025"
        depth_text: e.g. "10.0 km"
        coordinates_text: e.g. "35.123, -117.456"
        regional_times: (label, "HH:MM:SS") per clock
        description: Severity blurb
        latitude: Map center latitude
        longitude: Map center longitude
        zoom: Detail map zoom level
        marker_radius: Epicenter marker radius in pixels
    """
    earthquake_id: str
    magnitude_text: str
    location: str
    date_text: str
    depth_text: str
    coordinates_text: str
    regional_times: tuple[tuple[str, str], ...]
    description: str
    latitude: float
    longitude: float
    zoom: int
    marker_radius: float


def get_magnitude_description(magnitude: float) -> str:
    """Get a one-sentence damage description for a magnitude.

    Pure function.
    """
    if magnitude >= 7.0:
        return "Major earthquake capable of causing widespread, serious damage."
    elif magnitude >= 6.0:
        return "Strong earthquake capable of causing significant damage in populated areas."
    elif magnitude >= 5.0:
        return "Moderate earthquake that can cause damage to poorly constructed buildings."
    return "Light to moderate earthquake, rarely causes significant damage."


def format_clock(time: datetime, zone: str) -> str:
    """Format a time as HH:MM:SS in an IANA timezone.

    Pure function. Unknown zones fall back to UTC.
    """
    try:
        tz = ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError):
        tz = ZoneInfo("UTC")
    return time.astimezone(tz).strftime("%H:%M:%S")


def format_regional_times(
    time: datetime,
    zones: Sequence[TimezoneLabel] = DETAIL_TIMEZONES,
) -> tuple[tuple[str, str], ...]:
    """Format an event time on each of the given clocks."""
    return tuple((label.name, format_clock(time, label.zone)) for label in zones)


def format_detail_card(earthquake: Earthquake) -> DetailCard:
    """Format an earthquake as a detail card.

    Pure function.

    Args:
        earthquake: Event to present

    Returns:
        DetailCard with all display fields set
    """
    date_text = f"{earthquake.time:%B} {earthquake.time.day}, {earthquake.time:%Y}"

    return DetailCard(
        earthquake_id=earthquake.id,
        magnitude_text=f"M{earthquake.magnitude:.1f}",
        location=earthquake.location_label,
        date_text=date_text,
        depth_text=f"{earthquake.depth_km:.1f} km",
        coordinates_text=f"{earthquake.latitude:.3f}, {earthquake.longitude:.3f}",
        regional_times=format_regional_times(earthquake.time),
        description=get_magnitude_description(earthquake.magnitude),
        latitude=earthquake.latitude,
        longitude=earthquake.longitude,
        zoom=get_detail_zoom_level(earthquake.magnitude),
        marker_radius=get_detail_marker_radius(earthquake.magnitude),
    )
