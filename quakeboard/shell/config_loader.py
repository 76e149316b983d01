"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, RotationConfig, TickerConfig) are defined in
quakeboard/core/config.py to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakeboard.core.config import Config, DisplayRegion, RotationConfig, TickerConfig
from quakeboard.core.geo import BoundingBox
from quakeboard.core.ticker import DEFAULT_TIMEZONES, TimezoneLabel


logger = logging.getLogger(__name__)


def _parse_bounds(data: dict[str, Any] | list[Any]) -> BoundingBox:
    """Parse a bounding box from config data.

    Accepts either min/max keys or a pair of [lat, lon] corners. Corners
    are normalized, so their order does not matter.
    """
    if isinstance(data, (list, tuple)):
        corners = [(float(lat), float(lon)) for lat, lon in data]
        return BoundingBox.from_corners(corners)

    return BoundingBox(
        min_latitude=float(data["min_latitude"]),
        max_latitude=float(data["max_latitude"]),
        min_longitude=float(data["min_longitude"]),
        max_longitude=float(data["max_longitude"]),
    )


def _parse_region(data: dict[str, Any] | None) -> DisplayRegion | None:
    """Parse the optional regional view from config data."""
    if not data:
        return None
    return DisplayRegion(
        name=data.get("name", "Region"),
        bounds=_parse_bounds(data["bounds"]),
    )


def _parse_timezone(data: dict[str, Any] | str) -> TimezoneLabel:
    """Parse a timezone label; a bare string is used as both name and zone."""
    if isinstance(data, str):
        return TimezoneLabel(name=data, zone=data)
    return TimezoneLabel(name=data["name"], zone=data["zone"])


def _parse_rotation(data: dict[str, Any]) -> RotationConfig:
    """Parse rotation settings from config data."""
    defaults = RotationConfig()
    return RotationConfig(
        significance_threshold=float(data.get("significance_threshold", defaults.significance_threshold)),
        page_size=int(data.get("page_size", defaults.page_size)),
        display_interval_seconds=float(data.get("display_interval_seconds", defaults.display_interval_seconds)),
        region=_parse_region(data.get("region")),
    )


def _parse_ticker(data: dict[str, Any]) -> TickerConfig:
    """Parse ticker settings from config data."""
    defaults = TickerConfig()

    timezones = list(DEFAULT_TIMEZONES)
    if "timezones" in data:
        timezones = [_parse_timezone(t) for t in data["timezones"] or []]

    return TickerConfig(
        scroll_step_px=float(data.get("scroll_step_px", defaults.scroll_step_px)),
        frame_interval_seconds=float(data.get("frame_interval_seconds", defaults.frame_interval_seconds)),
        timezones=timezones,
        timezone_dwell_seconds=float(data.get("timezone_dwell_seconds", defaults.timezone_dwell_seconds)),
        fade_gap_seconds=float(data.get("fade_gap_seconds", defaults.fade_gap_seconds)),
        char_width_px=float(data.get("char_width_px", defaults.char_width_px)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    Pure function.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    return Config(
        rotation=_parse_rotation(data.get("rotation") or {}),
        ticker=_parse_ticker(data.get("ticker") or {}),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: interval %.1fs, page size %d, region %s, %d timezones",
        config.rotation.display_interval_seconds,
        config.rotation.page_size,
        config.rotation.region.name if config.rotation.region else "none",
        len(config.ticker.timezones),
    )

    return config


def _parse_timezone_list(value: str) -> list[TimezoneLabel]:
    """Parse "Name=Zone;Name=Zone" into timezone labels."""
    labels = []
    for part in value.split(";"):
        part = part.strip()
        if not part:
            continue
        name, _, zone = part.partition("=")
        name = name.strip()
        labels.append(TimezoneLabel(name=name, zone=zone.strip() or name))
    return labels


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        DISPLAY_INTERVAL_SECONDS: Seconds each view is shown
        SIGNIFICANCE_THRESHOLD: Minimum magnitude for detail cards
        PAGE_SIZE: Detail cards per group
        REGION_BOUNDS: Comma-separated bounds (min_lat,max_lat,min_lon,max_lon)
        REGION_NAME: Name of the regional view
        TICKER_SCROLL_STEP: Ticker pixels per frame
        TICKER_TIMEZONES: Semicolon-separated Name=Zone pairs
        TIMEZONE_DWELL_SECONDS: Seconds each clock is shown

    Returns:
        Config object from environment
    """
    rotation_defaults = RotationConfig()
    ticker_defaults = TickerConfig()

    region = None
    bounds_str = os.environ.get("REGION_BOUNDS")
    if bounds_str:
        parts = [float(p.strip()) for p in bounds_str.split(",")]
        if len(parts) == 4:
            region = DisplayRegion(
                name=os.environ.get("REGION_NAME", "Region"),
                bounds=BoundingBox(
                    min_latitude=parts[0],
                    max_latitude=parts[1],
                    min_longitude=parts[2],
                    max_longitude=parts[3],
                ),
            )
        else:
            logger.warning("REGION_BOUNDS needs 4 values, got %d; regional view disabled", len(parts))

    rotation = RotationConfig(
        significance_threshold=float(os.environ.get(
            "SIGNIFICANCE_THRESHOLD", rotation_defaults.significance_threshold,
        )),
        page_size=int(os.environ.get("PAGE_SIZE", rotation_defaults.page_size)),
        display_interval_seconds=float(os.environ.get(
            "DISPLAY_INTERVAL_SECONDS", rotation_defaults.display_interval_seconds,
        )),
        region=region,
    )

    timezones = list(DEFAULT_TIMEZONES)
    timezones_str = os.environ.get("TICKER_TIMEZONES")
    if timezones_str:
        timezones = _parse_timezone_list(timezones_str)

    ticker = TickerConfig(
        scroll_step_px=float(os.environ.get("TICKER_SCROLL_STEP", ticker_defaults.scroll_step_px)),
        timezones=timezones,
        timezone_dwell_seconds=float(os.environ.get(
            "TIMEZONE_DWELL_SECONDS", ticker_defaults.timezone_dwell_seconds,
        )),
    )

    return Config(rotation=rotation, ticker=ticker)
