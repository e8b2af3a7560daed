"""Parsing of the JSON payload Claude Code sends to status line commands."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from .models import SessionInput

logger = logging.getLogger(__name__)


def parse_session_json(raw: str) -> dict[str, Any]:
    """Parse the stdin payload, returning an empty dict on any failure."""
    if not raw or not raw.strip():
        logger.debug("Empty status line input")
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.debug(f"Unparseable status line input: {e}")
        return {}
    if not isinstance(data, dict):
        logger.debug(f"Status line input is not an object: {type(data).__name__}")
        return {}
    return data


def get_json_value(data: dict[str, Any], key: str, default: str) -> str:
    """Extract a dotted key such as "workspace.current_dir" as a string.

    Missing keys, nulls, false and empty strings all yield the default.
    """
    logger.debug(f"Extracting JSON key: {key}")
    value: Any = data
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            logger.debug(f"JSON key {key} missing, using default: {default}")
            return default
        value = value[part]

    if value is None or value is False:
        return default
    if isinstance(value, dict | list):
        result = json.dumps(value)
    else:
        result = str(value)
    return result if result else default


def read_session_input(raw: str, cwd: str | None = None) -> SessionInput:
    """Build a SessionInput from the raw stdin payload.

    Args:
        raw: Raw JSON text read from stdin
        cwd: Fallback working directory (defaults to the process cwd)

    Returns:
        SessionInput with documented defaults for missing fields
    """
    data = parse_session_json(raw)
    fallback_dir = cwd if cwd is not None else os.getcwd()
    transcript = get_json_value(data, "transcript_path", "")
    return SessionInput(
        current_dir=get_json_value(data, "workspace.current_dir", fallback_dir),
        model_name=get_json_value(data, "model.display_name", "Claude"),
        output_style=get_json_value(data, "output_style.name", "default"),
        transcript_path=transcript or None,
    )
