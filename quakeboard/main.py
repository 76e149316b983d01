"""ASGI Entry Point.

This module provides the entry point for the display service.
It's a thin wrapper that loads configuration and builds the API app.

Run with any ASGI server, e.g. ``uvicorn quakeboard.main:app``.
"""

import logging
import os

from fastapi import FastAPI

from quakeboard.api_handler import create_app
from quakeboard.core.config import Config, validate_config
from quakeboard.dashboard import Dashboard
from quakeboard.shell.config_loader import load_config, load_config_from_env
from quakeboard.shell.scheduler import AsyncioScheduler


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("DISPLAY_INTERVAL_SECONDS") or os.environ.get("REGION_BOUNDS"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def build_app(config: Config | None = None) -> FastAPI:
    """Validate configuration and build the display app.

    Raises:
        ValueError: If the configuration has errors
    """
    config = config or _get_config()

    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not result.valid:
        for error in result.critical_errors:
            logger.error("Config %s: %s", error.field, error.message)
        raise ValueError(f"Invalid configuration: {len(result.critical_errors)} errors")

    dashboard = Dashboard(config, AsyncioScheduler())
    return create_app(dashboard)


app = build_app()
