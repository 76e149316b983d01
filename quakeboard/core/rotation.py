"""View rotation state machine - Pure functions.

The display cycles World -> (Regional) -> Detail cards -> World. This module
holds the state, the transition table and the render directive derivation.
Timing is handled by the shell (RotationEngine); every function here is a
pure function of the current state and the current grouping.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from quakeboard.core.earthquake import Earthquake
from quakeboard.core.geo import BoundingBox
from quakeboard.core.grouping import SignificantGroup


class ViewMode(Enum):
    """Views the display rotates through."""
    WORLD = "world"
    REGIONAL = "regional"
    DETAIL = "detail"


@dataclass(frozen=True)
class RotationState:
    """Which view is shown and which event it points at.

    Attributes:
        mode: Active view
        group_index: Current page of significant events
        item_index: Current event within the page (Detail only)
    """
    mode: ViewMode = ViewMode.WORLD
    group_index: int = 0
    item_index: int = 0


INITIAL_STATE = RotationState(ViewMode.WORLD, 0, 0)


@dataclass(frozen=True)
class RenderDirective:
    """What the rendering surface should show for the current interval.

    Attributes:
        mode: Active view
        earthquakes: Full snapshot (World/Regional), empty for Detail
        region: Bounding region (Regional only)
        earthquake: Selected event (Detail only)
        group_index: Current page
        item_index: Current event within the page
    """
    mode: ViewMode
    earthquakes: tuple[Earthquake, ...] = ()
    region: BoundingBox | None = None
    earthquake: Earthquake | None = None
    group_index: int = 0
    item_index: int = 0


def is_valid_state(state: RotationState, groups: Sequence[SignificantGroup]) -> bool:
    """Check a state's indices against the current grouping.

    Pure function.
    """
    if state.group_index < 0 or state.item_index < 0:
        return False

    if not groups:
        return state.mode is ViewMode.WORLD and state.group_index == 0

    if state.group_index >= len(groups):
        return False

    if state.mode is ViewMode.DETAIL:
        return state.item_index < len(groups[state.group_index])

    return True


def normalize_state(
    state: RotationState,
    groups: Sequence[SignificantGroup],
) -> RotationState:
    """Redirect a state that no longer fits the grouping to World.

    Pure function. Used after the event snapshot changes under a running
    rotation.
    """
    if is_valid_state(state, groups):
        return state
    return INITIAL_STATE


def _from_world(
    state: RotationState,
    groups: Sequence[SignificantGroup],
    regional_enabled: bool,
) -> RotationState:
    if not groups:
        return INITIAL_STATE
    if regional_enabled:
        return RotationState(ViewMode.REGIONAL, state.group_index, 0)
    return RotationState(ViewMode.DETAIL, state.group_index, 0)


def _from_regional(
    state: RotationState,
    groups: Sequence[SignificantGroup],
    regional_enabled: bool,
) -> RotationState:
    if not groups:
        return INITIAL_STATE
    return RotationState(ViewMode.DETAIL, state.group_index, 0)


def _from_detail(
    state: RotationState,
    groups: Sequence[SignificantGroup],
    regional_enabled: bool,
) -> RotationState:
    if not groups:
        return INITIAL_STATE

    if state.item_index + 1 < len(groups[state.group_index]):
        return RotationState(ViewMode.DETAIL, state.group_index, state.item_index + 1)

    # Every page restarts the World (and Regional) preamble
    if state.group_index + 1 < len(groups):
        return RotationState(ViewMode.WORLD, state.group_index + 1, 0)

    return INITIAL_STATE


Transition = Callable[[RotationState, Sequence[SignificantGroup], bool], RotationState]

TRANSITIONS: dict[ViewMode, Transition] = {
    ViewMode.WORLD: _from_world,
    ViewMode.REGIONAL: _from_regional,
    ViewMode.DETAIL: _from_detail,
}


def next_state(
    state: RotationState,
    groups: Sequence[SignificantGroup],
    regional_enabled: bool = False,
) -> RotationState:
    """Compute the state for the next display interval.

    Pure function. The state is first reinterpreted against the current
    grouping, so a refreshed snapshot never leads to an invalid render.

    Args:
        state: State shown during the interval that just elapsed
        groups: Grouping recomputed from the live snapshot
        regional_enabled: Whether a regional view is configured

    Returns:
        Next rotation state
    """
    current = normalize_state(state, groups)
    return TRANSITIONS[current.mode](current, groups, regional_enabled)


def build_directive(
    state: RotationState,
    earthquakes: Sequence[Earthquake],
    groups: Sequence[SignificantGroup],
    region: BoundingBox | None = None,
) -> RenderDirective:
    """Derive the render directive for a state.

    Pure function. A state whose indices do not fit the grouping renders
    as the world map instead of an empty detail card.
    """
    current = normalize_state(state, groups)

    if current.mode is ViewMode.DETAIL:
        return RenderDirective(
            mode=ViewMode.DETAIL,
            earthquake=groups[current.group_index][current.item_index],
            group_index=current.group_index,
            item_index=current.item_index,
        )

    return RenderDirective(
        mode=current.mode,
        earthquakes=tuple(earthquakes),
        region=region if current.mode is ViewMode.REGIONAL else None,
        group_index=current.group_index,
        item_index=current.item_index,
    )
