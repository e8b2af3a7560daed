"""Enum types for PAR CC Status."""

from __future__ import annotations

from enum import Enum


class DecorationMode(str, Enum):
    """How severity markers are rendered next to a label."""

    SYMBOLIC = "symbolic"
    PLAIN = "plain"


class Severity(str, Enum):
    """Decoration level shared by every status component."""

    OK = "ok"
    WARN = "warn"
    CRIT = "crit"


class BudgetTier(str, Enum):
    """Consumption tier for token and context budgets.

    LOW means plenty of budget is left.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class WindowTier(str, Enum):
    """Progress tier inside a usage window.

    Early in a window the refresh is far away, so the tier is URGENT; near
    the end of a window the refresh is close, so the tier is SAFE.
    """

    URGENT = "urgent"
    MIDWAY = "midway"
    SAFE = "safe"


class ProjectType(str, Enum):
    """Project type tags detected from marker files."""

    PYTHON = "py"
    JAVASCRIPT = "js"
    JAVA = "java"
    RUST = "rust"
    GO = "go"


class TokenSource(str, Enum):
    """Where a token budget estimate came from."""

    ACTIVITY = "activity"
    TIME = "time"
