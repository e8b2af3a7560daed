"""Desktop app activity scanning.

The Claude desktop app keeps its conversation state in a few storage
directories. The bytes of files modified since a usage window opened serve as
a proxy for the tokens consumed in that window.
"""

from __future__ import annotations

import logging
import os
import platform
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def default_activity_dirs() -> list[Path]:
    """Candidate desktop app storage directories for this platform."""
    home = Path.home()
    system = platform.system()
    if system == "Darwin":
        support = home / "Library" / "Application Support" / "Claude"
        return [
            support / "Session Storage",
            support / "IndexedDB",
            home / "Library" / "HTTPStorages" / "com.anthropic.claudefordesktop",
        ]
    if system == "Windows":
        appdata = Path(os.getenv("APPDATA") or home / "AppData" / "Roaming")
        return [appdata / "Claude" / "Session Storage", appdata / "Claude" / "IndexedDB"]
    config_home = Path(os.getenv("XDG_CONFIG_HOME") or home / ".config")
    return [config_home / "Claude" / "Session Storage", config_home / "Claude" / "IndexedDB"]


def _directory_activity(directory: Path, since_ts: float) -> int:
    """Bytes of files under a directory modified after a timestamp."""
    total = 0

    def _skip(error: OSError) -> None:
        logger.debug(f"Skipping unreadable path: {error.filename}")

    for root, _dirs, files in os.walk(directory, onerror=_skip):
        for name in files:
            try:
                stat = (Path(root) / name).stat()
            except OSError:
                continue
            if stat.st_mtime > since_ts:
                total += stat.st_size
    return total


def scan_activity_bytes(directories: Iterable[Path], since: datetime) -> int:
    """Sum the size of files modified after `since` in the given directories.

    Missing or unreadable directories and files contribute nothing.

    Args:
        directories: Directories to scan recursively
        since: Only files modified after this moment are counted

    Returns:
        Total bytes, never negative
    """
    since_ts = since.timestamp()
    total = 0
    for directory in directories:
        try:
            if not directory.is_dir():
                continue
        except OSError:
            continue
        logger.debug(f"Scanning directory for activity: {directory}")
        dir_activity = _directory_activity(directory, since_ts)
        if dir_activity:
            logger.debug(f"Directory activity detected: {dir_activity} bytes")
        total += dir_activity
    return total
