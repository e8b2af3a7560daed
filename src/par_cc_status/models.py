"""Data models for PAR CC Status."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

from .enums import ProjectType, TokenSource

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class ClockReading:
    """Wall-clock reading taken once per render."""

    timestamp: datetime

    @property
    def minutes(self) -> int:
        """Minutes since local midnight (0-1439)."""
        return self.timestamp.hour * 60 + self.timestamp.minute

    def at_minute(self, minute: int) -> datetime:
        """Return the datetime for the given minute of the same day."""
        midnight = self.timestamp.replace(hour=0, minute=0, second=0, microsecond=0)
        return midnight + timedelta(minutes=minute)

    @classmethod
    def from_minutes(cls, minutes: int, day: datetime | None = None) -> ClockReading:
        """Build a reading for a minute of day, mostly useful in tests."""
        base = day or datetime(2025, 1, 1)
        midnight = base.replace(hour=0, minute=0, second=0, microsecond=0)
        return cls(timestamp=midnight + timedelta(minutes=minutes % MINUTES_PER_DAY))


@dataclass(frozen=True)
class Window:
    """Half-open daily usage window [start_minute, end_minute)."""

    start_minute: int
    end_minute: int

    @property
    def duration(self) -> int:
        """Window length in minutes."""
        return self.end_minute - self.start_minute

    @property
    def label(self) -> str:
        """Window as HH:MM-HH:MM."""
        return f"{_hhmm(self.start_minute)}-{_hhmm(self.end_minute)}"

    def contains(self, minute: int) -> bool:
        """Check whether a minute of day falls inside the window."""
        return self.start_minute <= minute < self.end_minute


@dataclass(frozen=True)
class InsideWindow:
    """Clock is inside a usage window."""

    window: Window
    elapsed_minutes: int
    remaining_minutes: int

    @property
    def progress(self) -> int:
        """Elapsed share of the window as a truncated percentage."""
        if self.window.duration <= 0:
            return 0
        return self.elapsed_minutes * 100 // self.window.duration


@dataclass(frozen=True)
class OutsideWindow:
    """Clock is outside every usage window."""

    minutes_until_open: int
    is_tomorrow: bool = False

    @property
    def starts_now(self) -> bool:
        """True for the zero-width gap between two adjacent windows."""
        return self.minutes_until_open == 0 and not self.is_tomorrow


WindowStatus = InsideWindow | OutsideWindow


@dataclass(frozen=True)
class TokenEstimate:
    """Estimated token usage for the current window."""

    percentage: int
    estimated_tokens: int
    source: TokenSource


@dataclass(frozen=True)
class StatusComponent:
    """One segment of the status line."""

    label: str
    text: str


@dataclass(frozen=True)
class GitInfo:
    """Version control state of the working directory."""

    branch: str | None = None
    clean: bool | None = None


@dataclass(frozen=True)
class ProjectInfo:
    """Project identification for the working directory."""

    name: str
    path: Path | None = None
    project_type: ProjectType | None = None


@dataclass(frozen=True)
class SessionInput:
    """Fields read from the Claude Code status line JSON.

    model_name is not part of the rendered line; it only appears in debug output.
    """

    current_dir: str
    model_name: str = "Claude"
    output_style: str = "default"
    transcript_path: str | None = None


def _hhmm(minute: int) -> str:
    hours, minutes = divmod(minute, 60)
    return f"{hours:02d}:{minutes:02d}"
