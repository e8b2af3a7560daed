"""Status line generation for Claude Code integration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from .activity_scanner import scan_activity_bytes
from .config import Config
from .estimators import estimate_context_usage, estimate_token_usage
from .git_info import get_git_info
from .models import (
    ClockReading,
    GitInfo,
    InsideWindow,
    OutsideWindow,
    ProjectInfo,
    SessionInput,
    StatusComponent,
    WindowStatus,
)
from .project_info import get_project_info
from .session_input import read_session_input
from .severity import decorate_budget, decorate_window
from .utils import get_clock_reading, get_file_size
from .windows import calculate_window_status, describe_outside, format_minutes, window_start

logger = logging.getLogger(__name__)

ClockFn = Callable[[], ClockReading]
GitInspectorFn = Callable[[Path, float], GitInfo]
ActivityScannerFn = Callable[[Iterable[Path], datetime], int]


class StatusLineManager:
    """Builds the single-line status summary for Claude Code."""

    def __init__(
        self,
        config: Config,
        clock: ClockFn | None = None,
        git_inspector: GitInspectorFn | None = None,
        activity_scanner: ActivityScannerFn | None = None,
    ):
        """Initialize the status line manager.

        Args:
            config: Application configuration
            clock: Returns the clock reading for this render
            git_inspector: Returns branch and clean state for a directory
            activity_scanner: Returns bytes of desktop app activity since a moment
        """
        self.config = config
        self.clock = clock or (lambda: get_clock_reading(config.timezone))
        self.git_inspector = git_inspector or get_git_info
        self.activity_scanner = activity_scanner or scan_activity_bytes

    def _activity_since(self, since: datetime) -> int:
        """Bytes of desktop app activity since a moment, 0 on any failure."""
        try:
            return max(0, self.activity_scanner(self.config.activity_dirs, since))
        except Exception as e:
            logger.debug(f"Activity scan failed: {e}")
            return 0

    def _inspect_git(self, project: ProjectInfo) -> GitInfo:
        """Git state for the project directory, empty on any failure."""
        if project.path is None:
            return GitInfo()
        try:
            return self.git_inspector(project.path, self.config.git_timeout)
        except Exception as e:
            logger.debug(f"Git inspection failed: {e}")
            return GitInfo()

    def build_context_component(self, transcript_path: str | None) -> StatusComponent:
        """Context usage component, always present.

        Args:
            transcript_path: Path to the session transcript (optional)

        Returns:
            StatusComponent for the context percentage
        """
        size = get_file_size(transcript_path)
        percentage = estimate_context_usage(
            size,
            context_budget=self.config.context_budget,
            bytes_per_token=self.config.bytes_per_token,
        )
        logger.debug(f"Context: {size} transcript bytes -> {percentage}%")
        label = f"ctx: {percentage}%"
        return StatusComponent(label=label, text=decorate_budget(label, percentage, self.config.decoration_mode))

    def build_token_component(self, clock: ClockReading, status: WindowStatus) -> StatusComponent | None:
        """Window token usage component, absent outside every window.

        Args:
            clock: Clock reading for this render
            status: Window status for the reading

        Returns:
            StatusComponent for the token percentage or None
        """
        since = window_start(clock, status)
        if since is None:
            return None

        estimate = estimate_token_usage(
            status,
            self._activity_since(since),
            token_budget=self.config.token_budget,
            activity_multiplier=self.config.activity_multiplier,
            fallback_tokens_per_hour=self.config.fallback_tokens_per_hour,
        )
        if estimate is None:
            return None
        logger.debug(
            f"Tokens: ~{estimate.estimated_tokens} from {estimate.source.value} -> {estimate.percentage}%"
        )
        label = f"t: {estimate.percentage}%"
        return StatusComponent(
            label=label, text=decorate_budget(label, estimate.percentage, self.config.decoration_mode)
        )

    def build_window_component(self, status: WindowStatus) -> StatusComponent:
        """Window countdown component.

        Args:
            status: Window status for the clock reading

        Returns:
            StatusComponent describing time left or time until the next window
        """
        if isinstance(status, InsideWindow):
            label = f"s: {format_minutes(status.remaining_minutes)} left"
            return StatusComponent(
                label=label, text=decorate_window(label, status.progress, self.config.decoration_mode)
            )
        label = describe_outside(status)
        return StatusComponent(label=label, text=label)

    def format_project_label(self, project: ProjectInfo, git: GitInfo) -> str:
        """Format the project name with branch and dirty marker.

        Args:
            project: Project information
            git: Git state of the project directory

        Returns:
            "name", "name branch" or "name branch*"
        """
        name = project.name
        if self.config.show_project_type and project.project_type is not None:
            name = f"{name} ({project.project_type.value})"
        if not git.branch:
            return name
        if git.clean:
            return f"{name} {git.branch}"
        return f"{name} {git.branch}*"

    def format_status_line(
        self,
        project: str,
        context: StatusComponent | str | None = None,
        tokens: StatusComponent | str | None = None,
        window: StatusComponent | str | None = None,
        output_style: str | None = None,
    ) -> str:
        """Join the present components in display order.

        Args:
            project: Project and branch label
            context: Context usage component (optional)
            tokens: Token usage component (optional)
            window: Window countdown component (optional)
            output_style: Active output style, shown only when not the default

        Returns:
            Components joined by the configured separator
        """
        parts: list[str] = []
        for component in (context, tokens, window):
            if component is None:
                continue
            text = component.text if isinstance(component, StatusComponent) else component
            if text:
                parts.append(text)

        if project:
            parts.append(project)

        if output_style and output_style != self.config.default_output_style:
            parts.append(f"style:{output_style}")

        return self.config.separator.join(parts)

    def generate_status_line(self, session: SessionInput) -> str:
        """Generate the status line for a parsed session payload.

        Args:
            session: Fields read from the Claude Code JSON

        Returns:
            Formatted status line
        """
        clock = self.clock()
        logger.debug(f"Rendering for {session.model_name} in {session.current_dir} at minute {clock.minutes}")
        status = calculate_window_status(clock.minutes)
        if isinstance(status, OutsideWindow):
            logger.debug(f"Outside windows, next opens in {status.minutes_until_open}m")

        project = get_project_info(session.current_dir)
        git = self._inspect_git(project)

        return self.format_status_line(
            project=self.format_project_label(project, git),
            context=self.build_context_component(session.transcript_path),
            tokens=self.build_token_component(clock, status),
            window=self.build_window_component(status),
            output_style=session.output_style,
        )

    def get_status_line_for_request(self, raw_input: str) -> str:
        """Get the status line for a Claude Code request.

        Never raises; on an unexpected failure the project name alone is returned.

        Args:
            raw_input: JSON text Claude Code wrote to stdin

        Returns:
            The status line string
        """
        session = read_session_input(raw_input)
        try:
            return self.generate_status_line(session)
        except Exception as e:
            logger.debug(f"Status line generation failed: {e}", exc_info=True)
            return get_project_info(session.current_dir).name

    def describe_windows(self, clock: ClockReading | None = None) -> dict[str, Any]:
        """Window diagnostics for the current clock reading.

        Args:
            clock: Clock reading to describe (defaults to now)

        Returns:
            Dictionary with the clock, status and token estimate
        """
        clock = clock or self.clock()
        status = calculate_window_status(clock.minutes)
        since = window_start(clock, status)
        activity = self._activity_since(since) if since is not None else 0
        estimate = estimate_token_usage(
            status,
            activity,
            token_budget=self.config.token_budget,
            activity_multiplier=self.config.activity_multiplier,
            fallback_tokens_per_hour=self.config.fallback_tokens_per_hour,
        )
        return {
            "clock": clock,
            "status": status,
            "activity_bytes": activity,
            "estimate": estimate,
            "window": self.build_window_component(status),
        }
