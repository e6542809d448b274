"""User settings for the editor.

Settings live in a JSON file in the platform's config directory and may be
overridden from the environment. Anything unreadable falls back to the
defaults so a broken config file never keeps the editor from starting.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "OFF")


@dataclass(frozen=True)
class EditorSettings:
    diagnostic: bool = False  # Unsupported input and failed redraws raise
    log_level: str = "WARNING"  # "OFF" disables the log file
    show_welcome: bool = True


def config_dir() -> Path:
    return Path(platformdirs.user_config_dir(EditorConstants.APP_NAME, EditorConstants.APP_AUTHOR))


def log_dir() -> Path:
    return Path(platformdirs.user_log_dir(EditorConstants.APP_NAME, EditorConstants.APP_AUTHOR))


def _validated(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only known keys with values of the right type."""
    known = {f.name for f in fields(EditorSettings)}
    result: Dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            logger.warning(f"Unknown setting {key!r}, ignoring")
            continue
        if key == "log_level":
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                logger.warning(f"Invalid log_level {value!r}, ignoring")
                continue
            value = value.upper()
        elif not isinstance(value, bool):
            logger.warning(f"Setting {key!r} must be true or false, ignoring")
            continue
        result[key] = value
    return result


def _read_file(settings_file: Path) -> Dict[str, Any]:
    if not settings_file.exists():
        return {}
    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return {}
    return data


def _read_environment(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    if "GLYPHPAD_DIAGNOSTIC" in environ:
        values["diagnostic"] = environ["GLYPHPAD_DIAGNOSTIC"].strip().lower() in ("1", "true", "yes", "on")
    if "GLYPHPAD_LOG_LEVEL" in environ:
        values["log_level"] = environ["GLYPHPAD_LOG_LEVEL"]
    return values


def load_settings(settings_file: Optional[Path] = None,
                  environ: Optional[Mapping[str, str]] = None) -> EditorSettings:
    """Build settings from the config file, then the environment.

    Args:
        settings_file: JSON file to read; defaults to the user config dir.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        The effective EditorSettings.
    """
    if settings_file is None:
        settings_file = config_dir() / EditorConstants.SETTINGS_FILENAME
    if environ is None:
        environ = os.environ
    settings = replace(EditorSettings(), **_validated(_read_file(settings_file)))
    return replace(settings, **_validated(_read_environment(environ)))
