"""Significant event grouping - Pure functions.

Splits the significant part of an event snapshot into fixed-size pages.
Each page bounds how many detail cards are shown before the rotation
returns to the world map.
"""

from collections.abc import Sequence

from quakeboard.core.earthquake import Earthquake, filter_by_magnitude, sort_by_recency


DEFAULT_SIGNIFICANCE_THRESHOLD = 5.0
DEFAULT_PAGE_SIZE = 4

SignificantGroup = tuple[Earthquake, ...]


def get_significant(
    earthquakes: Sequence[Earthquake],
    threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD,
) -> list[Earthquake]:
    """Return events at or above the threshold, newest first.

    Pure function.

    Args:
        earthquakes: Event snapshot
        threshold: Minimum magnitude (inclusive)

    Returns:
        Significant earthquakes sorted by recency
    """
    return sort_by_recency(filter_by_magnitude(list(earthquakes), min_magnitude=threshold))


def group_significant(
    earthquakes: Sequence[Earthquake],
    threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> tuple[SignificantGroup, ...]:
    """Partition significant earthquakes into pages.

    Pure function. Identical input always yields an identical grouping;
    concatenating the groups reproduces get_significant() exactly.

    Args:
        earthquakes: Event snapshot
        threshold: Minimum magnitude (inclusive)
        page_size: Maximum events per group

    Returns:
        Ordered groups; the last one may be shorter. Empty when no event
        meets the threshold.

    Raises:
        ValueError: If page_size is smaller than 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")

    significant = get_significant(earthquakes, threshold)

    return tuple(
        tuple(significant[i:i + page_size])
        for i in range(0, len(significant), page_size)
    )
