"""Lower-thirds ticker - Pure functions.

Builds the scrolling event strip and the arithmetic for its scroll offset
and timezone label rotation. Timers live in the shell (TickerRotator).
"""

from collections.abc import Sequence
from dataclasses import dataclass

from quakeboard.core.earthquake import Earthquake, sort_by_recency
from quakeboard.core.encoding import get_magnitude_color


@dataclass(frozen=True)
class TimezoneLabel:
    """A named clock shown next to the ticker.

    Attributes:
        name: Display name (e.g., "Tokyo")
        zone: IANA timezone (e.g., "Asia/Tokyo")
    """
    name: str
    zone: str


DEFAULT_TIMEZONES: tuple[TimezoneLabel, ...] = (
    TimezoneLabel("Los Angeles", "America/Los_Angeles"),
    TimezoneLabel("New York", "America/New_York"),
    TimezoneLabel("Antofagasta", "America/Santiago"),
    TimezoneLabel("UTC", "UTC"),
    TimezoneLabel("Berlin", "Europe/Berlin"),
    TimezoneLabel("Kyiv", "Europe/Kyiv"),
    TimezoneLabel("Tokyo", "Asia/Tokyo"),
)


@dataclass(frozen=True)
class TickerItem:
    """One entry of the scrolling strip.

    Attributes:
        earthquake_id: Event the entry belongs to
        magnitude_text: e.g. "M5.1"
        location: Place name or the unknown-location sentinel
        color: Hex color for the magnitude text
    """
    earthquake_id: str
    magnitude_text: str
    location: str
    color: str

    @property
    def text(self) -> str:
        return f"{self.magnitude_text} • {self.location}"


def build_ticker_items(earthquakes: Sequence[Earthquake]) -> tuple[TickerItem, ...]:
    """Build ticker entries for the full snapshot, newest first.

    Pure function.
    """
    return tuple(
        TickerItem(
            earthquake_id=e.id,
            magnitude_text=f"M{e.magnitude:.1f}",
            location=e.location_label,
            color=get_magnitude_color(e.magnitude),
        )
        for e in sort_by_recency(list(earthquakes))
    )


def duplicate_items(items: Sequence[TickerItem]) -> tuple[TickerItem, ...]:
    """Two back-to-back copies of the strip.

    Pure function. When the first copy has scrolled out the second sits
    exactly where the first started, so the wrap is invisible.
    """
    return tuple(items) * 2


def estimate_content_width(
    items: Sequence[TickerItem],
    char_width_px: float,
    item_spacing_px: float = 32.0,
) -> float:
    """Approximate pixel width of one copy of the strip.

    Pure function. The rendering surface can replace this with a measured
    width.
    """
    return sum(len(item.text) * char_width_px + item_spacing_px for item in items)


def advance_scroll(position: float, step: float, content_width: float) -> float:
    """Move the strip left by one frame step.

    Pure function.

    Args:
        position: Current horizontal offset (zero or negative)
        step: Pixels to move per frame
        content_width: Width of one copy of the strip

    Returns:
        New offset, back at 0 once a full copy has scrolled past
    """
    if content_width <= 0:
        return 0.0

    position -= step
    if abs(position) >= content_width:
        return 0.0
    return position


def next_timezone_index(index: int, count: int) -> int:
    """Advance the timezone label, wrapping at the end of the list."""
    if count <= 0:
        return 0
    return (index + 1) % count
