"""Utility functions for PAR CC Status."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import ClockReading

logger = logging.getLogger(__name__)


def expand_path(path: str | Path) -> Path:
    """Expand ~ and environment variables in a path.

    Args:
        path: Path string or Path object

    Returns:
        Expanded Path object
    """
    path_str = str(path)
    path_str = os.path.expanduser(path_str)
    path_str = os.path.expandvars(path_str)
    return Path(path_str)


def get_current_time(timezone_name: str = "auto") -> datetime:
    """Current wall-clock time in the configured timezone.

    "auto" or an unknown zone name uses the system local time.
    """
    if timezone_name and timezone_name != "auto":
        try:
            return datetime.now(ZoneInfo(timezone_name))
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug(f"Unknown timezone {timezone_name!r}, using local time")
    return datetime.now().astimezone()


def get_clock_reading(timezone_name: str = "auto") -> ClockReading:
    """Read the clock once for a render."""
    return ClockReading(timestamp=get_current_time(timezone_name))


def get_file_size(path: str | Path | None) -> int:
    """Size of a regular file in bytes, 0 when missing or unreadable."""
    if not path:
        return 0
    try:
        file_path = expand_path(path)
        if not file_path.is_file():
            return 0
        return file_path.stat().st_size
    except OSError as e:
        logger.debug(f"Cannot stat {path}: {e}")
        return 0
