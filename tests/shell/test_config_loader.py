"""Tests for the Configuration Loader module.

Tests configuration loading from YAML files and environment variables.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from quakeboard.shell.config_loader import (
    _parse_bounds,
    _parse_region,
    _parse_timezone,
    _parse_timezone_list,
    load_config,
    load_config_from_dict,
    load_config_from_env,
)
from quakeboard.core.config import Config
from quakeboard.core.geo import BoundingBox
from quakeboard.core.ticker import DEFAULT_TIMEZONES, TimezoneLabel


EXAMPLE_CONFIG = Path(__file__).parents[2] / "config" / "config.example.yaml"

ENV_KEYS = (
    "CONFIG_PATH",
    "DISPLAY_INTERVAL_SECONDS",
    "SIGNIFICANCE_THRESHOLD",
    "PAGE_SIZE",
    "REGION_BOUNDS",
    "REGION_NAME",
    "TICKER_SCROLL_STEP",
    "TICKER_TIMEZONES",
    "TIMEZONE_DWELL_SECONDS",
)


@pytest.fixture
def clean_env():
    """Environment without any of the loader's variables."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_KEYS}
    with patch.dict(os.environ, env, clear=True):
        yield


def write_yaml(content: str) -> str:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(content)
        return f.name


class TestParseBounds:
    """Tests for _parse_bounds function."""

    def test_min_max_keys(self):
        result = _parse_bounds({
            "min_latitude": 32.0,
            "max_latitude": 42.0,
            "min_longitude": -125.0,
            "max_longitude": -114.0,
        })

        assert result == BoundingBox(32.0, 42.0, -125.0, -114.0)

    def test_corners_in_any_order(self):
        result = _parse_bounds([[-17.5, -75.0], [-56.0, -66.0]])

        assert result == BoundingBox(-56.0, -17.5, -75.0, -66.0)

    def test_corners_are_clamped(self):
        result = _parse_bounds([[-100, -200], [10, 20]])

        assert result.min_latitude == -90.0
        assert result.min_longitude == -180.0

    def test_missing_key_raises(self):
        with pytest.raises(KeyError):
            _parse_bounds({"min_latitude": 0})


class TestParseRegion:
    """Tests for _parse_region function."""

    def test_none_disables(self):
        assert _parse_region(None) is None
        assert _parse_region({}) is None

    def test_default_name(self):
        region = _parse_region({"bounds": [[0, 0], [10, 10]]})

        assert region.name == "Region"


class TestParseTimezone:
    """Tests for _parse_timezone and _parse_timezone_list."""

    def test_mapping(self):
        assert _parse_timezone({"name": "Tokyo", "zone": "Asia/Tokyo"}) == TimezoneLabel("Tokyo", "Asia/Tokyo")

    def test_bare_string(self):
        assert _parse_timezone("UTC") == TimezoneLabel("UTC", "UTC")

    def test_list(self):
        result = _parse_timezone_list("Tokyo=Asia/Tokyo; UTC ;;Berlin=Europe/Berlin")

        assert result == [
            TimezoneLabel("Tokyo", "Asia/Tokyo"),
            TimezoneLabel("UTC", "UTC"),
            TimezoneLabel("Berlin", "Europe/Berlin"),
        ]


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_empty_dict_gives_defaults(self):
        assert load_config_from_dict({}) == Config()

    def test_rotation_section(self):
        config = load_config_from_dict({
            "rotation": {
                "significance_threshold": 6,
                "page_size": 3,
                "display_interval_seconds": 20,
                "region": {
                    "name": "Chile",
                    "bounds": [[-17.5, -75.0], [-56.0, -66.0]],
                },
            },
        })

        assert config.rotation.significance_threshold == 6.0
        assert config.rotation.page_size == 3
        assert config.rotation.display_interval_seconds == 20.0
        assert config.rotation.regional_enabled is True
        assert config.rotation.region.name == "Chile"

    def test_ticker_section(self):
        config = load_config_from_dict({
            "ticker": {
                "scroll_step_px": 2,
                "timezones": ["UTC", {"name": "Kyiv", "zone": "Europe/Kyiv"}],
                "timezone_dwell_seconds": 5,
                "fade_gap_seconds": 0.3,
            },
        })

        assert config.ticker.scroll_step_px == 2.0
        assert config.ticker.timezones == [
            TimezoneLabel("UTC", "UTC"),
            TimezoneLabel("Kyiv", "Europe/Kyiv"),
        ]
        assert config.ticker.timezone_dwell_seconds == 5.0
        assert config.ticker.fade_gap_seconds == 0.3

    def test_timezones_default_when_absent(self):
        config = load_config_from_dict({"ticker": {"scroll_step_px": 2}})

        assert config.ticker.timezones == list(DEFAULT_TIMEZONES)

    def test_null_timezones_means_none(self):
        config = load_config_from_dict({"ticker": {"timezones": None}})

        assert config.ticker.timezones == []


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_yaml_file(self):
        temp_path = write_yaml(
            "rotation:\n"
            "  page_size: 2\n"
            "  display_interval_seconds: 10\n"
            "ticker:\n"
            "  timezones:\n"
            "    - name: Tokyo\n"
            "      zone: Asia/Tokyo\n"
        )

        try:
            result = load_config(temp_path)

            assert result.rotation.page_size == 2
            assert result.rotation.display_interval_seconds == 10.0
            assert result.ticker.timezones == [TimezoneLabel("Tokyo", "Asia/Tokyo")]
        finally:
            os.unlink(temp_path)

    def test_missing_file_gives_defaults(self):
        result = load_config("/nonexistent/quakeboard.yaml")

        assert result == Config()

    def test_empty_file_gives_defaults(self):
        temp_path = write_yaml("")

        try:
            result = load_config(temp_path)

            assert isinstance(result, Config)
            assert result == Config()
        finally:
            os.unlink(temp_path)

    def test_invalid_yaml_raises(self):
        temp_path = write_yaml("rotation: [unclosed\n")

        try:
            with pytest.raises(yaml.YAMLError):
                load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_uses_config_path_env(self, clean_env):
        temp_path = write_yaml("rotation:\n  page_size: 7\n")

        try:
            with patch.dict(os.environ, {"CONFIG_PATH": temp_path}):
                result = load_config()

            assert result.rotation.page_size == 7
        finally:
            os.unlink(temp_path)

    def test_example_config_loads(self):
        result = load_config(EXAMPLE_CONFIG)

        assert result.rotation.regional_enabled is True
        assert len(result.ticker.timezones) == 7


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    def test_defaults(self, clean_env):
        config = load_config_from_env()

        assert config.rotation.display_interval_seconds == 15.0
        assert config.rotation.region is None
        assert config.ticker.timezones == list(DEFAULT_TIMEZONES)

    def test_reads_variables(self, clean_env):
        with patch.dict(os.environ, {
            "DISPLAY_INTERVAL_SECONDS": "30",
            "SIGNIFICANCE_THRESHOLD": "4.5",
            "PAGE_SIZE": "6",
            "TICKER_SCROLL_STEP": "1.5",
            "TICKER_TIMEZONES": "UTC=UTC;Tokyo=Asia/Tokyo",
            "TIMEZONE_DWELL_SECONDS": "8",
        }):
            config = load_config_from_env()

        assert config.rotation.display_interval_seconds == 30.0
        assert config.rotation.significance_threshold == 4.5
        assert config.rotation.page_size == 6
        assert config.ticker.scroll_step_px == 1.5
        assert [t.name for t in config.ticker.timezones] == ["UTC", "Tokyo"]
        assert config.ticker.timezone_dwell_seconds == 8.0

    def test_region_bounds(self, clean_env):
        with patch.dict(os.environ, {
            "REGION_BOUNDS": "-56.0, -17.5, -75.0, -66.0",
            "REGION_NAME": "Chile",
        }):
            config = load_config_from_env()

        assert config.rotation.region.name == "Chile"
        assert config.rotation.region_bounds == BoundingBox(-56.0, -17.5, -75.0, -66.0)

    def test_incomplete_region_bounds_disable_region(self, clean_env):
        with patch.dict(os.environ, {"REGION_BOUNDS": "1,2,3"}):
            config = load_config_from_env()

        assert config.rotation.region is None
