"""
Pytest configuration and shared fixtures for PAR CC Status tests.
"""

import os
import tempfile
from pathlib import Path

import pytest

from par_cc_status.config import LEGACY_ENV_VARS, Config


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all PAR_CC_STATUS and legacy environment variables."""
    env_vars = [k for k in os.environ if k.startswith("PAR_CC_STATUS_")]
    env_vars.extend(LEGACY_ENV_VARS)
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def mock_config(temp_dir):
    """Create a configuration that never touches real desktop app storage."""
    return Config(
        use_emoji=True,
        debug=False,
        git_timeout=1.0,
        timezone="UTC",
        activity_dirs=[temp_dir / "activity"],
    )


@pytest.fixture
def plain_config(temp_dir):
    """Configuration with plain-text severity markers."""
    return Config(use_emoji=False, timezone="UTC", activity_dirs=[temp_dir / "activity"])


@pytest.fixture
def project_dir(temp_dir):
    """A project directory named myrepo."""
    path = temp_dir / "myrepo"
    path.mkdir()
    return path
