"""Functional Core - Pure functions with no side effects.

This module contains all display logic as pure functions:
- Earthquake record parsing
- Significant event grouping
- Visual encoding (marker size, color, opacity)
- Regional viewport calculations
- View rotation transitions
- Ticker and detail card formatting

All functions here are deterministic and have no I/O or timers.
"""

from quakeboard.core.earthquake import Earthquake, parse_earthquakes, sort_by_recency
from quakeboard.core.grouping import group_significant
from quakeboard.core.encoding import (
    get_marker_radius,
    get_recency_color,
    get_recency_opacity,
    encode_markers,
)
from quakeboard.core.geo import (
    BoundingBox,
    bounds_zoom,
    expanded_bounds,
    is_within_bounds,
    region_center,
)
from quakeboard.core.rotation import (
    RenderDirective,
    RotationState,
    ViewMode,
    build_directive,
    next_state,
)

__all__ = [
    # Earthquake
    "Earthquake",
    "parse_earthquakes",
    "sort_by_recency",
    # Grouping
    "group_significant",
    # Encoding
    "get_marker_radius",
    "get_recency_color",
    "get_recency_opacity",
    "encode_markers",
    # Geo
    "BoundingBox",
    "bounds_zoom",
    "expanded_bounds",
    "is_within_bounds",
    "region_center",
    # Rotation
    "RenderDirective",
    "RotationState",
    "ViewMode",
    "build_directive",
    "next_state",
]
