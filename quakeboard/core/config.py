"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from quakeboard.core.geo import BoundingBox
from quakeboard.core.grouping import DEFAULT_PAGE_SIZE, DEFAULT_SIGNIFICANCE_THRESHOLD
from quakeboard.core.ticker import DEFAULT_TIMEZONES, TimezoneLabel


@dataclass
class DisplayRegion:
    """A geographic region shown as the regional map.

    Attributes:
        name: Human-readable name
        bounds: Geographic bounding box
    """
    name: str
    bounds: BoundingBox


@dataclass
class RotationConfig:
    """View rotation settings.

    Attributes:
        significance_threshold: Minimum magnitude for a detail card
        page_size: Detail cards per group before returning to the world map
        display_interval_seconds: How long each view stays on screen
        region: Regional view, None to rotate World -> Detail only
    """
    significance_threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD
    page_size: int = DEFAULT_PAGE_SIZE
    display_interval_seconds: float = 15.0
    region: DisplayRegion | None = None

    @property
    def regional_enabled(self) -> bool:
        return self.region is not None

    @property
    def region_bounds(self) -> BoundingBox | None:
        return self.region.bounds if self.region else None


@dataclass
class TickerConfig:
    """Lower-thirds ticker settings.

    Attributes:
        scroll_step_px: Pixels the strip moves per frame
        frame_interval_seconds: Delay between animation frames
        timezones: Clocks cycled next to the strip
        timezone_dwell_seconds: How long each clock is shown
        fade_gap_seconds: Blank gap when switching clocks
        char_width_px: Character width used to estimate strip width
    """
    scroll_step_px: float = 1.0
    frame_interval_seconds: float = 1 / 60
    timezones: list[TimezoneLabel] = field(default_factory=lambda: list(DEFAULT_TIMEZONES))
    timezone_dwell_seconds: float = 10.0
    fade_gap_seconds: float = 0.15
    char_width_px: float = 11.0


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        rotation: View rotation settings
        ticker: Ticker settings
    """
    rotation: RotationConfig = field(default_factory=RotationConfig)
    ticker: TickerConfig = field(default_factory=TickerConfig)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_bounds(bounds: BoundingBox, field_name: str) -> list[ValidationError]:
    """Validate a bounding box.

    Pure function. Inverted corners are only a warning since the regional
    view normalizes them.

    Args:
        bounds: Bounding box to validate
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    errors.extend(validate_coordinates(
        bounds.min_latitude, bounds.min_longitude,
        f"{field_name}.min",
    ))
    errors.extend(validate_coordinates(
        bounds.max_latitude, bounds.max_longitude,
        f"{field_name}.max",
    ))

    if bounds.min_latitude > bounds.max_latitude:
        errors.append(ValidationError(
            field=field_name,
            message=f"min_latitude ({bounds.min_latitude}) > max_latitude ({bounds.max_latitude})",
            severity="warning",
        ))

    if bounds.min_longitude > bounds.max_longitude:
        errors.append(ValidationError(
            field=field_name,
            message=f"min_longitude ({bounds.min_longitude}) > max_longitude ({bounds.max_longitude})",
            severity="warning",
        ))

    return errors


def validate_timezone(zone: str, field_name: str) -> list[ValidationError]:
    """Warn about timezone names the system database does not know.

    Pure function.
    """
    try:
        ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError):
        return [ValidationError(
            field=field_name,
            message=f"Unknown timezone '{zone}', clock will show UTC",
            severity="warning",
        )]
    return []


def _validate_positive(value: float, field_name: str) -> list[ValidationError]:
    if value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Must be positive, got {value}",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []
    rotation = config.rotation
    ticker = config.ticker

    if rotation.page_size < 1:
        errors.append(ValidationError(
            field="rotation.page_size",
            message=f"Page size must be at least 1, got {rotation.page_size}",
        ))

    if rotation.significance_threshold < 0:
        errors.append(ValidationError(
            field="rotation.significance_threshold",
            message=f"Threshold must not be negative, got {rotation.significance_threshold}",
        ))

    errors.extend(_validate_positive(
        rotation.display_interval_seconds,
        "rotation.display_interval_seconds",
    ))

    if rotation.region is not None:
        errors.extend(validate_bounds(rotation.region.bounds, "rotation.region.bounds"))

    errors.extend(_validate_positive(ticker.frame_interval_seconds, "ticker.frame_interval_seconds"))
    errors.extend(_validate_positive(ticker.timezone_dwell_seconds, "ticker.timezone_dwell_seconds"))

    if ticker.scroll_step_px < 0:
        errors.append(ValidationError(
            field="ticker.scroll_step_px",
            message=f"Scroll step must not be negative, got {ticker.scroll_step_px}",
        ))

    if ticker.fade_gap_seconds < 0 or ticker.fade_gap_seconds >= ticker.timezone_dwell_seconds:
        errors.append(ValidationError(
            field="ticker.fade_gap_seconds",
            message=f"Fade gap must be within [0, timezone_dwell_seconds), got {ticker.fade_gap_seconds}",
        ))

    if not ticker.timezones:
        errors.append(ValidationError(
            field="ticker.timezones",
            message="No ticker timezones configured",
        ))

    for i, label in enumerate(ticker.timezones):
        errors.extend(validate_timezone(label.zone, f"ticker.timezones[{i}]"))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
