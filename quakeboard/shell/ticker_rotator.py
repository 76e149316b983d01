"""Ticker Rotator - Imperative Shell.

Runs the two ticker timers: the per-frame scroll of the event strip and
the timezone label rotation. Neither shares state with the view rotation.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from quakeboard.core.config import TickerConfig
from quakeboard.core.earthquake import Earthquake
from quakeboard.core.formatter import format_clock
from quakeboard.core.ticker import (
    TickerItem,
    TimezoneLabel,
    advance_scroll,
    build_ticker_items,
    duplicate_items,
    estimate_content_width,
    next_timezone_index,
)
from quakeboard.shell.scheduler import Scheduler, TimerHandle


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickerFrame:
    """Snapshot of the ticker for the rendering surface.

    Attributes:
        items: Strip contents, two copies back to back
        offset_px: Horizontal offset of the strip
        timezone: Clock currently shown (None if no clocks configured)
        timezone_visible: False during the fade gap between clocks
        clock_text: HH:MM:SS in the shown zone (None without a clock or time)
    """
    items: tuple[TickerItem, ...]
    offset_px: float
    timezone: TimezoneLabel | None
    timezone_visible: bool
    clock_text: str | None = None


class TickerRotator:
    """Scrolling strip and rotating clock label."""

    def __init__(
        self,
        scheduler: Scheduler,
        config: TickerConfig | None = None,
        earthquakes: Sequence[Earthquake] = (),
    ) -> None:
        self.scheduler = scheduler
        self.config = config or TickerConfig()
        self._items: tuple[TickerItem, ...] = build_ticker_items(earthquakes)
        self._measured_width: float | None = None
        self._position = 0.0
        self._timezone_index = 0
        self._timezone_visible = True
        self._mounted = False
        self._frame_timer: TimerHandle | None = None
        self._timezone_timer: TimerHandle | None = None
        self._fade_timer: TimerHandle | None = None

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def position(self) -> float:
        return self._position

    @property
    def timezone_index(self) -> int:
        return self._timezone_index

    @property
    def content_width(self) -> float:
        """Width of one copy of the strip, measured if known."""
        if self._measured_width is not None:
            return self._measured_width
        return estimate_content_width(self._items, self.config.char_width_px)

    def set_content_width(self, width_px: float) -> None:
        """Use a width measured by the rendering surface instead of the estimate."""
        self._measured_width = width_px

    def update_earthquakes(self, earthquakes: Sequence[Earthquake]) -> None:
        """Rebuild the strip. The scroll keeps its position."""
        self._items = build_ticker_items(earthquakes)
        self._measured_width = None

    def frame(self, now: datetime | None = None) -> TickerFrame:
        """Current strip and clock; the clock reads `now` in the shown zone."""
        timezones = self.config.timezones
        timezone = timezones[self._timezone_index] if timezones else None
        clock_text = None
        if timezone is not None and now is not None:
            clock_text = format_clock(now, timezone.zone)
        return TickerFrame(
            items=duplicate_items(self._items),
            offset_px=self._position,
            timezone=timezone,
            timezone_visible=self._timezone_visible,
            clock_text=clock_text,
        )

    def mount(self) -> None:
        """Start scrolling and the clock rotation."""
        self._mounted = True
        self._position = 0.0
        self._timezone_index = 0
        self._timezone_visible = True
        self._request_frame()
        self._schedule_timezone()
        logger.info("Ticker mounted with %d timezones", len(self.config.timezones))

    def unmount(self) -> None:
        """Cancel every outstanding ticker timer."""
        self._mounted = False
        for timer in (self._frame_timer, self._timezone_timer, self._fade_timer):
            if timer is not None:
                timer.cancel()
        self._frame_timer = None
        self._timezone_timer = None
        self._fade_timer = None
        logger.info("Ticker unmounted")

    def _request_frame(self) -> None:
        if self._frame_timer is not None:
            self._frame_timer.cancel()
        self._frame_timer = self.scheduler.call_later(
            self.config.frame_interval_seconds,
            self._on_frame,
        )

    def _on_frame(self) -> None:
        self._frame_timer = None
        if not self._mounted:
            return
        self._position = advance_scroll(
            self._position,
            self.config.scroll_step_px,
            self.content_width,
        )
        self._request_frame()

    def _schedule_timezone(self) -> None:
        if self._timezone_timer is not None:
            self._timezone_timer.cancel()
        self._timezone_timer = self.scheduler.call_later(
            self.config.timezone_dwell_seconds,
            self._on_timezone,
        )

    def _on_timezone(self) -> None:
        """Hide the clock label, then switch it after the fade gap."""
        self._timezone_timer = None
        if not self._mounted:
            return
        self._timezone_visible = False
        if self._fade_timer is not None:
            self._fade_timer.cancel()
        self._fade_timer = self.scheduler.call_later(
            self.config.fade_gap_seconds,
            self._on_fade_complete,
        )
        self._schedule_timezone()

    def _on_fade_complete(self) -> None:
        self._fade_timer = None
        if not self._mounted:
            return
        self._timezone_index = next_timezone_index(
            self._timezone_index,
            len(self.config.timezones),
        )
        self._timezone_visible = True
        logger.debug("Ticker clock -> %s", self.frame().timezone)
