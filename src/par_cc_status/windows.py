"""Daily usage window calculations."""

from __future__ import annotations

from datetime import datetime

from .models import MINUTES_PER_DAY, ClockReading, InsideWindow, OutsideWindow, Window, WindowStatus

# 08:00-13:00, 13:00-18:00, 18:00-23:00
DAILY_WINDOWS: tuple[Window, ...] = (
    Window(480, 780),
    Window(780, 1080),
    Window(1080, 1380),
)


def calculate_window_status(clock_minutes: int, windows: tuple[Window, ...] = DAILY_WINDOWS) -> WindowStatus:
    """Locate a minute of day relative to the usage windows.

    Args:
        clock_minutes: Minutes since local midnight
        windows: Ordered, non-overlapping windows

    Returns:
        InsideWindow with elapsed/remaining minutes, or OutsideWindow with
        the minutes until the next window opens
    """
    for window in windows:
        if window.contains(clock_minutes):
            return InsideWindow(
                window=window,
                elapsed_minutes=clock_minutes - window.start_minute,
                remaining_minutes=window.end_minute - clock_minutes,
            )

    if not windows:
        return OutsideWindow(minutes_until_open=0, is_tomorrow=False)

    first = windows[0]
    if clock_minutes < first.start_minute:
        return OutsideWindow(minutes_until_open=first.start_minute - clock_minutes)

    for current, following in zip(windows, windows[1:]):
        if current.end_minute <= clock_minutes < following.start_minute:
            # Only custom window sets have real gaps. They count down to the next window
            # instead of reporting "starts now" for the whole gap.
            return OutsideWindow(minutes_until_open=max(0, following.start_minute - clock_minutes))

    return OutsideWindow(
        minutes_until_open=(MINUTES_PER_DAY - clock_minutes) + first.start_minute,
        is_tomorrow=True,
    )


def window_start(clock: ClockReading, status: WindowStatus) -> datetime | None:
    """Datetime at which the current window opened, or None outside a window."""
    if isinstance(status, InsideWindow):
        return clock.at_minute(status.window.start_minute)
    return None


def format_minutes(minutes: int) -> str:
    """Format a minute count as 2h30m, 3h or 45m.

    Hours are only used above 60 minutes, so exactly one hour is 60m.
    """
    if minutes > 60:
        hours, mins = divmod(minutes, 60)
        if mins > 0:
            return f"{hours}h{mins}m"
        return f"{hours}h"
    return f"{minutes}m"


def describe_outside(status: OutsideWindow) -> str:
    """Plain text for a clock reading outside every window."""
    if status.starts_now:
        return "starts now"
    text = f"opens in {format_minutes(status.minutes_until_open)}"
    if status.is_tomorrow:
        text += " (tomorrow)"
    return text
