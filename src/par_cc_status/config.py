"""Configuration management for PAR CC Status."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .activity_scanner import default_activity_dirs
from .enums import DecorationMode
from .estimators import (
    DEFAULT_ACTIVITY_MULTIPLIER,
    DEFAULT_BYTES_PER_TOKEN,
    DEFAULT_CONTEXT_BUDGET,
    DEFAULT_FALLBACK_TOKENS_PER_HOUR,
    DEFAULT_TOKEN_BUDGET,
)
from .git_info import DEFAULT_GIT_TIMEOUT
from .utils import expand_path
from .xdg_dirs import get_config_file_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "PAR_CC_STATUS_"

# Unprefixed names understood for compatibility with the legacy shell statusline
LEGACY_ENV_VARS: dict[str, str] = {
    "USE_EMOJI": "use_emoji",
    "DEBUG_MODE": "debug",
    "FALLBACK_TIMEOUT": "git_timeout",
}

TRUTHY_VALUES = frozenset({"1", "true", "t", "yes", "y", "on"})

ENV_FIELDS: dict[str, str] = {
    "USE_EMOJI": "use_emoji",
    "DEBUG": "debug",
    "GIT_TIMEOUT": "git_timeout",
    "TIMEZONE": "timezone",
    "TOKEN_BUDGET": "token_budget",
    "CONTEXT_BUDGET": "context_budget",
    "ACTIVITY_MULTIPLIER": "activity_multiplier",
    "FALLBACK_TOKENS_PER_HOUR": "fallback_tokens_per_hour",
    "BYTES_PER_TOKEN": "bytes_per_token",
    "ACTIVITY_DIRS": "activity_dirs",
    "SHOW_PROJECT_TYPE": "show_project_type",
    "SEPARATOR": "separator",
}


class Config(BaseModel):
    """Main configuration model."""

    use_emoji: bool = Field(default=True, description="Use emoji severity markers instead of [OK]/[WARN]/[CRIT]")
    debug: bool = Field(default=False, description="Write diagnostic output to stderr")
    git_timeout: float = Field(default=DEFAULT_GIT_TIMEOUT, gt=0, description="Seconds allowed per git command")
    timezone: str = Field(default="auto", description="Timezone for window calculations ('auto' for system local)")
    token_budget: int = Field(default=DEFAULT_TOKEN_BUDGET, gt=0, description="Tokens available per usage window")
    activity_multiplier: int = Field(
        default=DEFAULT_ACTIVITY_MULTIPLIER, ge=0, description="Estimated tokens per byte of desktop app activity"
    )
    fallback_tokens_per_hour: int = Field(
        default=DEFAULT_FALLBACK_TOKENS_PER_HOUR, ge=0, description="Linear usage rate assumed without activity data"
    )
    context_budget: int = Field(default=DEFAULT_CONTEXT_BUDGET, gt=0, description="Context window size in tokens")
    bytes_per_token: int = Field(default=DEFAULT_BYTES_PER_TOKEN, gt=0, description="Transcript bytes per token")
    activity_dirs: list[Path] = Field(
        default_factory=default_activity_dirs, description="Desktop app storage directories to scan for activity"
    )
    separator: str = Field(default=" | ", description="Separator between status line components")
    default_output_style: str = Field(default="default", description="Output style that is not shown")
    show_project_type: bool = Field(default=False, description="Append the detected project type to the project name")

    @field_validator("activity_dirs", mode="before")
    @classmethod
    def _split_activity_dirs(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, list):
            return [expand_path(item) for item in value]
        return value

    @property
    def decoration_mode(self) -> DecorationMode:
        """Decoration mode derived from use_emoji."""
        return DecorationMode.SYMBOLIC if self.use_emoji else DecorationMode.PLAIN


def _read_yaml(config_file: Path) -> dict[str, Any]:
    """Read a YAML config file, returning an empty dict on any problem."""
    try:
        if not config_file.exists():
            return {}
        with open(config_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.debug(f"Ignoring unreadable config file {config_file}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.debug(f"Ignoring config file {config_file}: not a mapping")
        return {}
    return data


def _env_overrides() -> dict[str, str]:
    """Collect config overrides from the environment, prefixed names winning."""
    overrides: dict[str, str] = {}
    for env_name, field_name in LEGACY_ENV_VARS.items():
        value = os.getenv(env_name)
        if value is not None:
            overrides[field_name] = value
    for env_name, field_name in ENV_FIELDS.items():
        value = os.getenv(f"{ENV_PREFIX}{env_name}")
        if value is not None:
            overrides[field_name] = value
    return overrides


def debug_from_env() -> bool:
    """Whether the environment asks for debug output before any config is loaded."""
    value = os.getenv(f"{ENV_PREFIX}DEBUG")
    if value is None:
        value = os.getenv("DEBUG_MODE")
    return value is not None and value.strip().lower() in TRUTHY_VALUES


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from YAML file and environment variables.

    Invalid values are logged and ignored so rendering always gets a usable
    config.

    Args:
        config_file: Explicit config file path (defaults to the XDG location)

    Returns:
        Config instance
    """
    if config_file is None:
        config_file = get_config_file_path()

    data = _read_yaml(config_file)
    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Invalid config file {config_file}, using defaults: {e}")
        config = Config()

    for field_name, value in _env_overrides().items():
        try:
            config = Config.model_validate({**config.model_dump(), field_name: value})
        except ValidationError:
            logger.debug(f"Ignoring invalid environment value for {field_name}: {value!r}")

    return config


def config_to_yaml(config: Config) -> str:
    """Dump a config as YAML."""
    return yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False, allow_unicode=True)
