"""Git branch and working tree inspection with timeout protection."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .models import GitInfo

logger = logging.getLogger(__name__)

DEFAULT_GIT_TIMEOUT = 1.0


def _run_git(args: list[str], cwd: Path, timeout: float) -> subprocess.CompletedProcess[str] | None:
    """Run a git command, returning None if it could not complete."""
    try:
        return subprocess.run(
            ["git", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"git {' '.join(args)} timed out after {timeout}s")
    except (FileNotFoundError, OSError) as e:
        logger.debug(f"git {' '.join(args)} failed: {e}")
    return None


def get_git_info(project_path: Path | str, timeout: float = DEFAULT_GIT_TIMEOUT) -> GitInfo:
    """Get current git branch and clean/dirty state.

    Args:
        project_path: Directory to inspect
        timeout: Seconds allowed per git command

    Returns:
        GitInfo with branch None when not a repository or git is unavailable,
        and clean None when the state could not be determined
    """
    check_path = Path(project_path)
    if not check_path.is_dir():
        return GitInfo()

    logger.debug(f"Checking git status in: {check_path}")
    result = _run_git(["rev-parse", "--git-dir"], check_path, timeout)
    if result is None or result.returncode != 0:
        logger.debug("Not a git repository or git operation timed out")
        return GitInfo()

    branch = ""
    result = _run_git(["branch", "--show-current"], check_path, timeout)
    if result is not None and result.returncode == 0:
        branch = result.stdout.strip()
    if not branch:
        # Detached HEAD
        result = _run_git(["rev-parse", "--short", "HEAD"], check_path, timeout)
        if result is not None and result.returncode == 0 and result.stdout.strip():
            branch = result.stdout.strip()
        else:
            branch = "detached"
    logger.debug(f"Git branch detected: {branch}")

    unstaged = _run_git(["diff", "--quiet"], check_path, timeout)
    staged = _run_git(["diff", "--cached", "--quiet"], check_path, timeout)
    if unstaged is None or staged is None:
        clean = None
    else:
        clean = unstaged.returncode == 0 and staged.returncode == 0
    logger.debug(f"Git status: {'unknown' if clean is None else 'clean' if clean else 'dirty'}")

    return GitInfo(branch=branch, clean=clean)
