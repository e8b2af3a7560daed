"""PAR CC Status - single-line session status for Claude Code."""

from __future__ import annotations

__version__ = "0.1.0"
__application_title__ = "PAR CC Status"
__application_binary__ = "par-cc-status"
