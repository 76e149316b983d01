"""Imperative Shell - Timers and side effects.

This module contains all code that keeps state over time or touches the
outside world:
- Timer scheduling (asyncio loop or virtual clock)
- View rotation engine
- Ticker scroll and clock rotation
- Configuration loading (environment/files)

Keep this layer thin and simple. All display logic should be in core.
"""

from quakeboard.shell.scheduler import AsyncioScheduler, ManualScheduler
from quakeboard.shell.rotation_engine import RotationEngine
from quakeboard.shell.ticker_rotator import TickerRotator
from quakeboard.shell.config_loader import load_config, Config

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "RotationEngine",
    "TickerRotator",
    "load_config",
    "Config",
]
