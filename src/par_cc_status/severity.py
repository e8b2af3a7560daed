"""Severity tiers and label decoration.

Budget percentages and window progress use separate tier vocabularies with
their own breakpoints. Both end up as a Severity, which is what gets drawn.
"""

from __future__ import annotations

from .enums import BudgetTier, DecorationMode, Severity, WindowTier

# Upper bounds (inclusive) for each tier; anything above the last bound is the top tier.
BUDGET_TIER_BREAKPOINTS: tuple[tuple[int, BudgetTier], ...] = (
    (60, BudgetTier.LOW),
    (80, BudgetTier.MEDIUM),
)
WINDOW_TIER_BREAKPOINTS: tuple[tuple[int, WindowTier], ...] = (
    (33, WindowTier.URGENT),
    (66, WindowTier.MIDWAY),
)

BUDGET_SEVERITY: dict[BudgetTier, Severity] = {
    BudgetTier.LOW: Severity.OK,
    BudgetTier.MEDIUM: Severity.WARN,
    BudgetTier.HIGH: Severity.CRIT,
}
WINDOW_SEVERITY: dict[WindowTier, Severity] = {
    WindowTier.URGENT: Severity.CRIT,
    WindowTier.MIDWAY: Severity.WARN,
    WindowTier.SAFE: Severity.OK,
}

SYMBOLIC_MARKERS: dict[Severity, str] = {
    Severity.OK: "🟢",
    Severity.WARN: "🟡",
    Severity.CRIT: "🔴",
}
PLAIN_MARKERS: dict[Severity, str] = {
    Severity.OK: "[OK]",
    Severity.WARN: "[WARN]",
    Severity.CRIT: "[CRIT]",
}


def budget_tier(percentage: int) -> BudgetTier:
    """Map a budget percentage to its tier."""
    for upper, tier in BUDGET_TIER_BREAKPOINTS:
        if percentage <= upper:
            return tier
    return BudgetTier.HIGH


def window_tier(progress: int) -> WindowTier:
    """Map window progress (percent of the window elapsed) to its tier."""
    for upper, tier in WINDOW_TIER_BREAKPOINTS:
        if progress <= upper:
            return tier
    return WindowTier.SAFE


def decorate(label: str, severity: Severity, mode: DecorationMode = DecorationMode.SYMBOLIC) -> str:
    """Append the severity marker for the given mode to a label."""
    markers = SYMBOLIC_MARKERS if mode == DecorationMode.SYMBOLIC else PLAIN_MARKERS
    return f"{label} {markers[severity]}"


def decorate_budget(label: str, percentage: int, mode: DecorationMode = DecorationMode.SYMBOLIC) -> str:
    """Decorate a label using the budget tier of a percentage."""
    return decorate(label, BUDGET_SEVERITY[budget_tier(percentage)], mode)


def decorate_window(label: str, progress: int, mode: DecorationMode = DecorationMode.SYMBOLIC) -> str:
    """Decorate a label using the window tier of a progress value."""
    return decorate(label, WINDOW_SEVERITY[window_tier(progress)], mode)
