"""Token and context budget estimation.

Neither budget is measured directly. Window token usage is derived from the
bytes the desktop app wrote since the window opened, or from a linear usage
rate over the elapsed window time when no activity was seen. Context usage
is derived from the transcript file size.
"""

from __future__ import annotations

from .enums import TokenSource
from .models import InsideWindow, TokenEstimate, WindowStatus

DEFAULT_TOKEN_BUDGET = 200_000
DEFAULT_ACTIVITY_MULTIPLIER = 2
DEFAULT_FALLBACK_TOKENS_PER_HOUR = 15_000
DEFAULT_CONTEXT_BUDGET = 200_000
DEFAULT_BYTES_PER_TOKEN = 4

# Time-based estimate: 5% at window start, never more than 45%
FALLBACK_FLOOR_PERCENT = 5
FALLBACK_CAP_PERCENT = 45


def clamp_percentage(value: int) -> int:
    """Clamp a percentage to 0-100."""
    return max(0, min(100, value))


def percentage_of(tokens: int, budget: int) -> int:
    """Integer percentage of a budget, clamped to 0-100."""
    if budget <= 0:
        return 0
    return clamp_percentage(tokens * 100 // budget)


def estimate_token_usage(
    status: WindowStatus,
    activity_bytes: int | None = None,
    *,
    token_budget: int = DEFAULT_TOKEN_BUDGET,
    activity_multiplier: int = DEFAULT_ACTIVITY_MULTIPLIER,
    fallback_tokens_per_hour: int = DEFAULT_FALLBACK_TOKENS_PER_HOUR,
) -> TokenEstimate | None:
    """Estimate how much of the window token budget has been used.

    Args:
        status: Current window status
        activity_bytes: Bytes written by the desktop app since the window opened
        token_budget: Tokens available per window
        activity_multiplier: Tokens per byte of activity
        fallback_tokens_per_hour: Linear usage rate assumed without activity data

    Returns:
        TokenEstimate, or None when the clock is outside every window
    """
    if not isinstance(status, InsideWindow):
        return None

    if activity_bytes and activity_bytes > 0:
        tokens = activity_bytes * activity_multiplier
        return TokenEstimate(
            percentage=percentage_of(tokens, token_budget),
            estimated_tokens=tokens,
            source=TokenSource.ACTIVITY,
        )

    elapsed = max(0, status.elapsed_minutes)
    tokens = elapsed * fallback_tokens_per_hour // 60
    if elapsed > 0:
        percentage = min(percentage_of(tokens, token_budget), FALLBACK_CAP_PERCENT)
    else:
        percentage = FALLBACK_FLOOR_PERCENT
    return TokenEstimate(
        percentage=clamp_percentage(percentage),
        estimated_tokens=tokens,
        source=TokenSource.TIME,
    )


def estimate_context_usage(
    byte_length: int | None,
    *,
    context_budget: int = DEFAULT_CONTEXT_BUDGET,
    bytes_per_token: int = DEFAULT_BYTES_PER_TOKEN,
) -> int:
    """Estimate context window usage from the transcript size.

    Args:
        byte_length: Transcript size in bytes, None or 0 when unavailable
        context_budget: Context window size in tokens
        bytes_per_token: Average bytes per token

    Returns:
        Percentage of the context window in use
    """
    if not byte_length or byte_length <= 0 or bytes_per_token <= 0:
        return 0
    tokens = byte_length // bytes_per_token
    return percentage_of(tokens, context_budget)
