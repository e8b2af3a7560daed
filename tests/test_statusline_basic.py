"""Basic tests for status line functionality."""

from __future__ import annotations

import json
import logging

from par_cc_status.models import ClockReading, GitInfo, OutsideWindow, ProjectInfo, StatusComponent
from par_cc_status.statusline_manager import StatusLineManager
from par_cc_status.windows import calculate_window_status
from tests.utils.mock_helpers import RecordingActivityScanner, fixed_activity, fixed_clock, fixed_git


def _payload(project_dir, transcript=None, style=None) -> str:
    data = {"workspace": {"current_dir": str(project_dir)}, "model": {"display_name": "Opus"}}
    if transcript is not None:
        data["transcript_path"] = str(transcript)
    if style is not None:
        data["output_style"] = {"name": style}
    return json.dumps(data)


class TestFormatStatusLine:
    """Test component ordering and joining."""

    def test_absent_components_skipped(self, mock_config):
        """Test absent components leave no empty separators."""
        manager = StatusLineManager(mock_config)

        result = manager.format_status_line(project="myrepo main", context=None, tokens="t: 20%", window=None)

        assert result == "t: 20% | myrepo main"

    def test_full_order(self, mock_config):
        """Test context, tokens, window, project then style."""
        manager = StatusLineManager(mock_config)

        result = manager.format_status_line(
            project="myrepo",
            context=StatusComponent(label="ctx: 1%", text="ctx: 1% 🟢"),
            tokens="t: 5%",
            window="s: 1h left",
            output_style="explanatory",
        )

        assert result == "ctx: 1% 🟢 | t: 5% | s: 1h left | myrepo | style:explanatory"
        assert " |  | " not in result

    def test_default_style_hidden(self, mock_config):
        """Test the default output style is not shown."""
        manager = StatusLineManager(mock_config)

        assert manager.format_status_line(project="myrepo", output_style="default") == "myrepo"
        assert manager.format_status_line(project="myrepo", output_style=None) == "myrepo"

    def test_everything_absent(self, mock_config):
        """Test an empty project and no components give an empty line."""
        manager = StatusLineManager(mock_config)

        assert manager.format_status_line(project="") == ""

    def test_custom_separator(self, mock_config):
        """Test separator from config."""
        config = mock_config.model_copy(update={"separator": " - "})
        manager = StatusLineManager(config)

        assert manager.format_status_line(project="p", tokens="t: 1%") == "t: 1% - p"


class TestProjectLabel:
    """Test project and branch labels."""

    def test_dirty_branch(self, mock_config):
        """Test a dirty tree appends '*'."""
        manager = StatusLineManager(mock_config)
        project = ProjectInfo(name="myrepo")

        assert manager.format_project_label(project, GitInfo(branch="main", clean=False)) == "myrepo main*"

    def test_clean_branch(self, mock_config):
        """Test a clean tree has no marker."""
        manager = StatusLineManager(mock_config)
        project = ProjectInfo(name="myrepo")

        assert manager.format_project_label(project, GitInfo(branch="main", clean=True)) == "myrepo main"

    def test_no_branch(self, mock_config):
        """Test the label degrades to the project name."""
        manager = StatusLineManager(mock_config)

        assert manager.format_project_label(ProjectInfo(name="myrepo"), GitInfo()) == "myrepo"

    def test_unknown_clean_state_is_marked(self, mock_config):
        """Test an undetermined status is shown as dirty."""
        manager = StatusLineManager(mock_config)

        assert manager.format_project_label(ProjectInfo(name="myrepo"), GitInfo(branch="main")) == "myrepo main*"

    def test_project_type_shown_when_enabled(self, mock_config):
        """Test the project type tag is opt-in."""
        from par_cc_status.enums import ProjectType

        project = ProjectInfo(name="myrepo", project_type=ProjectType.PYTHON)
        assert StatusLineManager(mock_config).format_project_label(project, GitInfo()) == "myrepo"

        config = mock_config.model_copy(update={"show_project_type": True})
        manager = StatusLineManager(config)
        assert manager.format_project_label(project, GitInfo(branch="dev", clean=True)) == "myrepo (py) dev"


class TestComponents:
    """Test individual component builders."""

    def test_context_component(self, mock_config, temp_dir):
        """Test context from transcript size."""
        transcript = temp_dir / "t.jsonl"
        transcript.write_bytes(b"x" * 800_000)
        manager = StatusLineManager(mock_config)

        component = manager.build_context_component(str(transcript))

        assert component.label == "ctx: 100%"
        assert component.text == "ctx: 100% 🔴"

    def test_context_component_without_transcript(self, plain_config):
        """Test context is 0% and present without a transcript."""
        manager = StatusLineManager(plain_config)

        assert manager.build_context_component(None).text == "ctx: 0% [OK]"

    def test_token_component_outside_window(self, mock_config):
        """Test no token component outside a window."""
        scanner = RecordingActivityScanner(1000)
        manager = StatusLineManager(mock_config, activity_scanner=scanner)
        clock = ClockReading.from_minutes(100)

        assert manager.build_token_component(clock, calculate_window_status(clock.minutes)) is None
        assert scanner.calls == []

    def test_token_component_scans_since_window_start(self, mock_config, temp_dir):
        """Test the activity scan starts at the window opening."""
        scanner = RecordingActivityScanner(70_000)
        manager = StatusLineManager(mock_config, activity_scanner=scanner)
        clock = ClockReading.from_minutes(900)

        component = manager.build_token_component(clock, calculate_window_status(clock.minutes))

        assert component.text == "t: 70% 🟡"
        dirs, since = scanner.calls[0]
        assert dirs == [temp_dir / "activity"]
        assert since == clock.at_minute(780)

    def test_token_component_scanner_failure(self, mock_config):
        """Test a failing scanner falls back to the time-based estimate."""

        def broken(dirs, since):
            raise PermissionError("denied")

        manager = StatusLineManager(mock_config, activity_scanner=broken)
        clock = ClockReading.from_minutes(540)

        component = manager.build_token_component(clock, calculate_window_status(clock.minutes))

        assert component.label == "t: 7%"

    def test_window_component_inside(self, mock_config):
        """Test early in a window is red."""
        manager = StatusLineManager(mock_config)

        component = manager.build_window_component(calculate_window_status(490))

        assert component.text == "s: 4h50m left 🔴"

    def test_window_component_late(self, plain_config):
        """Test late in a window is green."""
        manager = StatusLineManager(plain_config)

        component = manager.build_window_component(calculate_window_status(770))

        assert component.text == "s: 10m left [OK]"

    def test_window_component_outside(self, mock_config):
        """Test outside text is undecorated."""
        manager = StatusLineManager(mock_config)

        component = manager.build_window_component(OutsideWindow(minutes_until_open=510, is_tomorrow=True))

        assert component.text == "opens in 8h30m (tomorrow)"


class TestGenerateStatusLine:
    """Test the full render with fake collaborators."""

    def test_inside_window_dirty_repo(self, mock_config, project_dir, temp_dir):
        """Test a full line inside a window."""
        transcript = temp_dir / "transcript.jsonl"
        transcript.write_bytes(b"x" * 80_000)
        manager = StatusLineManager(
            mock_config,
            clock=fixed_clock(600),
            git_inspector=fixed_git("main", clean=False),
            activity_scanner=fixed_activity(0),
        )

        result = manager.get_status_line_for_request(_payload(project_dir, transcript))

        assert result == "ctx: 10% 🟢 | t: 15% 🟢 | s: 3h left 🟡 | myrepo main*"

    def test_outside_window(self, plain_config, project_dir):
        """Test no token component at 23:30."""
        manager = StatusLineManager(
            plain_config,
            clock=fixed_clock(1410),
            git_inspector=fixed_git(),
            activity_scanner=fixed_activity(10**6),
        )

        result = manager.get_status_line_for_request(_payload(project_dir, style="explanatory"))

        assert result == "ctx: 0% [OK] | opens in 8h30m (tomorrow) | myrepo | style:explanatory"

    def test_model_name_only_in_debug_output(self, plain_config, project_dir, caplog):
        """Test the model name is logged but not rendered."""
        caplog.set_level(logging.DEBUG, logger="par_cc_status.statusline_manager")
        manager = StatusLineManager(
            plain_config, clock=fixed_clock(1410), git_inspector=fixed_git(), activity_scanner=fixed_activity()
        )

        result = manager.get_status_line_for_request(_payload(project_dir))

        assert "Opus" not in result
        assert "Rendering for Opus" in caplog.text

    def test_git_inspector_receives_timeout(self, mock_config, project_dir):
        """Test the configured timeout is passed to git."""
        calls = []

        def inspector(path, timeout):
            calls.append((path, timeout))
            return GitInfo(branch="dev", clean=True)

        config = mock_config.model_copy(update={"git_timeout": 0.25})
        manager = StatusLineManager(
            config, clock=fixed_clock(100), git_inspector=inspector, activity_scanner=fixed_activity()
        )

        result = manager.get_status_line_for_request(_payload(project_dir))

        assert calls == [(project_dir, 0.25)]
        assert result.endswith("myrepo dev")

    def test_git_inspector_failure(self, mock_config, project_dir):
        """Test a raising inspector just drops the branch."""

        def inspector(path, timeout):
            raise OSError("boom")

        manager = StatusLineManager(
            mock_config, clock=fixed_clock(100), git_inspector=inspector, activity_scanner=fixed_activity()
        )

        assert manager.get_status_line_for_request(_payload(project_dir)).endswith("| myrepo")

    def test_missing_directory(self, mock_config, temp_dir):
        """Test an unknown working directory never calls git."""
        manager = StatusLineManager(
            mock_config,
            clock=fixed_clock(100),
            git_inspector=fixed_git("main", True),
            activity_scanner=fixed_activity(),
        )

        result = manager.get_status_line_for_request(_payload(temp_dir / "gone"))

        assert result == "ctx: 0% 🟢 | opens in 6h20m | unknown"

    def test_garbage_input(self, mock_config, monkeypatch, project_dir):
        """Test unparseable input still renders with defaults."""
        monkeypatch.chdir(project_dir)
        manager = StatusLineManager(
            mock_config, clock=fixed_clock(100), git_inspector=fixed_git(), activity_scanner=fixed_activity()
        )

        assert manager.get_status_line_for_request("not json") == "ctx: 0% 🟢 | opens in 6h20m | myrepo"

    def test_unexpected_failure_returns_project_name(self, mock_config, project_dir):
        """Test the render never raises."""

        def broken_clock():
            raise RuntimeError("clock")

        manager = StatusLineManager(mock_config, clock=broken_clock)

        assert manager.get_status_line_for_request(_payload(project_dir)) == "myrepo"


class TestDescribeWindows:
    """Test window diagnostics."""

    def test_describe_inside(self, mock_config):
        """Test diagnostics inside a window."""
        manager = StatusLineManager(mock_config, activity_scanner=fixed_activity(5_000))

        info = manager.describe_windows(ClockReading.from_minutes(1200))

        assert info["status"].elapsed_minutes == 120
        assert info["activity_bytes"] == 5_000
        assert info["estimate"].estimated_tokens == 10_000
        assert info["window"].label == "s: 3h left"

    def test_describe_outside(self, mock_config):
        """Test diagnostics outside every window."""
        manager = StatusLineManager(mock_config, activity_scanner=fixed_activity(5_000))

        info = manager.describe_windows(ClockReading.from_minutes(60))

        assert info["estimate"] is None
        assert info["activity_bytes"] == 0
