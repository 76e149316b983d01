"""Rotation Engine - Imperative Shell.

Owns the timer that drives the view rotation. All decisions are made by
the pure functions in quakeboard.core.rotation; this class only holds the
current state, the event snapshot and one pending timer handle.
"""

import logging
from collections.abc import Callable, Sequence

from quakeboard.core.config import RotationConfig
from quakeboard.core.earthquake import Earthquake
from quakeboard.core.grouping import SignificantGroup, group_significant
from quakeboard.core.rotation import (
    INITIAL_STATE,
    RenderDirective,
    RotationState,
    build_directive,
    next_state,
    normalize_state,
)
from quakeboard.shell.scheduler import Scheduler, TimerHandle


logger = logging.getLogger(__name__)

DirectiveListener = Callable[[RenderDirective], None]


class RotationEngine:
    """Timer-driven World / Regional / Detail rotation.

    Each tick schedules exactly one next tick after a full display
    interval, cancelling any timer still pending, so two ticks can never
    race to mutate the state.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        config: RotationConfig | None = None,
        earthquakes: Sequence[Earthquake] = (),
    ) -> None:
        """Initialize the engine without starting it.

        Args:
            scheduler: Timer source
            config: Rotation settings (defaults if not provided)
            earthquakes: Initial event snapshot
        """
        self.scheduler = scheduler
        self.config = config or RotationConfig()
        self._earthquakes: tuple[Earthquake, ...] = tuple(earthquakes)
        self._state = INITIAL_STATE
        self._timer: TimerHandle | None = None
        self._mounted = False
        self._listeners: list[DirectiveListener] = []
        self._signature = self._governing_signature(self._state, self.groups)

    @property
    def state(self) -> RotationState:
        return self._state

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def earthquakes(self) -> tuple[Earthquake, ...]:
        return self._earthquakes

    @property
    def groups(self) -> tuple[SignificantGroup, ...]:
        """Grouping of the live snapshot, recomputed on every access."""
        return group_significant(
            self._earthquakes,
            threshold=self.config.significance_threshold,
            page_size=self.config.page_size,
        )

    @property
    def directive(self) -> RenderDirective:
        """What to render for the current state."""
        return build_directive(
            self._state,
            self._earthquakes,
            self.groups,
            self.config.region_bounds,
        )

    def add_listener(self, listener: DirectiveListener) -> None:
        """Register a callback invoked with the new directive after each transition."""
        self._listeners.append(listener)

    def mount(self) -> None:
        """Start the rotation from the world map."""
        self._state = INITIAL_STATE
        self._mounted = True
        self._signature = self._governing_signature(self._state, self.groups)
        logger.info(
            "Rotation mounted: %d events, %d groups, interval %.1fs",
            len(self._earthquakes),
            len(self.groups),
            self.config.display_interval_seconds,
        )
        self._schedule()

    def unmount(self) -> None:
        """Stop the rotation and cancel the pending tick."""
        self._mounted = False
        self._cancel()
        logger.info("Rotation unmounted")

    def update_earthquakes(self, earthquakes: Sequence[Earthquake]) -> None:
        """Replace the event snapshot.

        When the refresh changes the grouping the current state depends on,
        the state is reinterpreted against the new grouping and the display
        interval restarts.
        """
        self._earthquakes = tuple(earthquakes)
        groups = self.groups

        state = normalize_state(self._state, groups)
        if state != self._state:
            logger.warning(
                "Rotation state %s no longer fits %d groups, returning to world view",
                self._state,
                len(groups),
            )
            self._state = state

        signature = self._governing_signature(self._state, groups)
        if signature != self._signature:
            self._signature = signature
            if self._mounted:
                self._schedule()

    def _governing_signature(
        self,
        state: RotationState,
        groups: tuple[SignificantGroup, ...],
    ) -> tuple[int, int, int]:
        """(significant count, group count, current group length)."""
        current = len(groups[state.group_index]) if state.group_index < len(groups) else 0
        return (sum(len(g) for g in groups), len(groups), current)

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule(self) -> None:
        self._cancel()
        self._timer = self.scheduler.call_later(
            self.config.display_interval_seconds,
            self._on_tick,
        )

    def _on_tick(self) -> None:
        """Advance one display interval."""
        self._timer = None
        if not self._mounted:
            return

        groups = self.groups
        previous = self._state
        self._state = next_state(previous, groups, self.config.regional_enabled)
        self._signature = self._governing_signature(self._state, groups)

        logger.debug("Rotation %s -> %s", previous, self._state)

        directive = self.directive
        for listener in list(self._listeners):
            try:
                listener(directive)
            except Exception:
                logger.exception("Render listener failed")

        if self._mounted:
            self._schedule()
