"""Dashboard - Wires Functional Core and Imperative Shell.

This module coordinates the view rotation, the ticker and the pure render
functions. It's the "glue" between the event snapshot supplied by the
external poller and the frames consumed by the rendering surface.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from quakeboard.core.config import Config
from quakeboard.core.earthquake import Earthquake, parse_earthquakes
from quakeboard.core.encoding import MarkerStyle, encode_markers
from quakeboard.core.formatter import DetailCard, format_detail_card
from quakeboard.core.geo import Viewport, filter_by_bounds, map_viewport
from quakeboard.core.rotation import RenderDirective, ViewMode
from quakeboard.shell.rotation_engine import RotationEngine
from quakeboard.shell.scheduler import Scheduler
from quakeboard.shell.ticker_rotator import TickerFrame, TickerRotator


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DisplayFrame:
    """Everything the rendering surface needs for one moment.

    Attributes:
        mode: Active view
        group_index: Current page of significant events
        item_index: Current event within the page
        region_name: Name of the regional view (Regional only)
        viewport: Map camera (World/Regional)
        markers: Encoded markers (World/Regional)
        detail: Detail card (Detail only)
        ticker: Ticker state
        rendered_at: Time used for recency encoding
    """
    mode: ViewMode
    group_index: int
    item_index: int
    region_name: str | None
    viewport: Viewport | None
    markers: tuple[MarkerStyle, ...]
    detail: DetailCard | None
    ticker: TickerFrame
    rendered_at: datetime


@dataclass
class IngestResult:
    """Result of replacing the event snapshot.

    Attributes:
        received: Records in the request
        accepted: Records decoded into earthquakes
    """
    received: int
    accepted: int

    @property
    def rejected(self) -> int:
        return self.received - self.accepted

    @property
    def summary(self) -> str:
        """Human-readable summary of the ingest."""
        return f"Received {self.received} events, {self.accepted} accepted, {self.rejected} rejected"


class Dashboard:
    """Coordinates the unattended seismic display.

    This class wires together:
    - RotationEngine (which view is shown)
    - TickerRotator (scrolling strip and clock)
    - Core functions (encoding, viewport, detail card)
    """

    def __init__(
        self,
        config: Config,
        scheduler: Scheduler,
        clock: Callable[[], datetime] | None = None,
        rotation: RotationEngine | None = None,
        ticker: TickerRotator | None = None,
    ) -> None:
        """Initialize dashboard with configuration.

        Args:
            config: Application configuration
            scheduler: Timer source shared by both engines
            clock: Wall clock for recency encoding (UTC now if not provided)
            rotation: Rotation engine (created if not provided)
            ticker: Ticker rotator (created if not provided)
        """
        self.config = config
        self.clock = clock or _utcnow
        self.rotation = rotation or RotationEngine(scheduler, config.rotation)
        self.ticker = ticker or TickerRotator(scheduler, config.ticker)
        self._last_transition: datetime | None = None
        self.rotation.add_listener(self._on_directive)

    @property
    def mounted(self) -> bool:
        return self.rotation.mounted

    @property
    def earthquakes(self) -> tuple[Earthquake, ...]:
        return self.rotation.earthquakes

    @property
    def last_transition(self) -> datetime | None:
        """Wall-clock time of the most recent view change, None before the first."""
        return self._last_transition

    def mount(self) -> None:
        """Start both engines."""
        self._last_transition = None
        self.rotation.mount()
        self.ticker.mount()

    def unmount(self) -> None:
        """Stop both engines and cancel all their timers."""
        self.rotation.unmount()
        self.ticker.unmount()

    def update_earthquakes(self, earthquakes: Sequence[Earthquake]) -> None:
        """Replace the snapshot shown by both engines."""
        snapshot = tuple(earthquakes)
        self.rotation.update_earthquakes(snapshot)
        self.ticker.update_earthquakes(snapshot)
        logger.info(
            "Snapshot updated: %d events, %d significant groups",
            len(snapshot),
            len(self.rotation.groups),
        )

    def load_records(self, records: list[dict[str, Any]]) -> IngestResult:
        """Decode backend records and replace the snapshot."""
        earthquakes = parse_earthquakes(records)
        result = IngestResult(received=len(records), accepted=len(earthquakes))

        if result.rejected:
            logger.warning("Dropped %d invalid event records", result.rejected)

        self.update_earthquakes(earthquakes)
        return result

    def _on_directive(self, directive: RenderDirective) -> None:
        self._last_transition = self.clock()
        logger.debug(
            "Display switched to %s (group %d, item %d)",
            directive.mode.value,
            directive.group_index,
            directive.item_index,
        )

    def render(self) -> DisplayFrame:
        """Build the frame for the current state."""
        directive = self.rotation.directive
        return self._build_frame(directive, self.clock())

    def _build_frame(self, directive: RenderDirective, now: datetime) -> DisplayFrame:
        viewport = None
        markers: tuple[MarkerStyle, ...] = ()
        detail = None
        region_name = None

        if directive.mode is ViewMode.DETAIL and directive.earthquake is not None:
            detail = format_detail_card(directive.earthquake)
        else:
            earthquakes = list(directive.earthquakes)
            if directive.mode is ViewMode.REGIONAL:
                earthquakes = filter_by_bounds(earthquakes, directive.region)
                region = self.config.rotation.region
                region_name = region.name if region else None
            viewport = map_viewport(directive.region)
            markers = tuple(encode_markers(earthquakes, now))

        return DisplayFrame(
            mode=directive.mode,
            group_index=directive.group_index,
            item_index=directive.item_index,
            region_name=region_name,
            viewport=viewport,
            markers=markers,
            detail=detail,
            ticker=self.ticker.frame(now),
            rendered_at=now,
        )
