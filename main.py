#!/usr/bin/env python3
"""glyphpad - A small grapheme-aware terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home, End, PgUp, PgDn: Navigate cursor
    Ctrl-S: Save file
    Ctrl-Q: Quit (press twice with unsaved changes)
    Type to insert text
    Backspace / Delete: Delete character before / under the cursor
    Enter: Break the line
"""

import sys
from glyphpad.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
