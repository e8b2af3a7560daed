"""XDG Base Directory helpers for PAR CC Status."""

from __future__ import annotations

from pathlib import Path

from xdg_base_dirs import xdg_config_home

APP_NAME = "par_cc_status"


def get_config_dir() -> Path:
    """Get the XDG config directory for PAR CC Status.

    Returns:
        Path to $XDG_CONFIG_HOME/par_cc_status
    """
    return xdg_config_home() / APP_NAME


def get_config_file_path() -> Path:
    """Get the path of the YAML config file.

    Returns:
        Path to $XDG_CONFIG_HOME/par_cc_status/config.yaml
    """
    return get_config_dir() / "config.yaml"
