"""glyphpad CLI entry point.

Allows running via `python -m glyphpad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .constants import EditorConstants
from .settings import EditorSettings, load_settings, log_dir

USAGE = "usage: glyphpad [file]"


def configure_logging(settings: EditorSettings) -> None:
    """Send log records to a file; the terminal belongs to the editor."""
    root = logging.getLogger(EditorConstants.APP_NAME)
    if settings.log_level == "OFF":
        root.addHandler(logging.NullHandler())
        return
    directory = log_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(
            directory / EditorConstants.LOG_FILENAME, encoding='utf-8')
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(settings.log_level)


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1 or any(arg.startswith('-') for arg in args):
        print(USAGE, file=sys.stderr)
        return 2

    settings = load_settings()
    configure_logging(settings)

    # Lazy import keeps usage errors free of terminal setup
    from .editor import Editor
    editor = Editor(settings)
    if args:
        editor.load_file(args[0])
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
