from __future__ import annotations

import importlib.metadata

from .constants import EditorConstants


def get_version_string() -> str:
    """Return the installed distribution version, or "unknown" from a checkout."""
    try:
        return importlib.metadata.version(EditorConstants.APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
