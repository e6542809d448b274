"""Constants and configuration for the glyphpad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Application identity
    APP_NAME = "glyphpad"
    APP_AUTHOR = "glyphpad"

    # Rendering glyphs
    EMPTY_ROW_GLYPH = "~"  # Rows below the end of the document
    PARTIAL_GLYPH = "~"  # Wide grapheme cut by the viewport edge
    CONTROL_GLYPH = "▯"  # Zero-width control character
    ZERO_WIDTH_GLYPH = "."  # Any other zero-width cluster
    BLANK_GLYPH = "_"  # Whitespace other than a plain space
    TAB_GLYPH = " "

    # Welcome banner shown on an empty document
    WELCOME_MESSAGE = "{name} editor -- version {version}"

    # Shown on the last row after Quit with unsaved edits
    UNSAVED_QUIT_MESSAGE = "Unsaved changes -- press Ctrl-Q again to quit"

    # Keyboard timing
    KEY_TIMEOUT = 0  # Never block inside curtsies

    # Self-pipe markers written by signal handlers
    RESIZE_PIPE_MARKER = b'R'
    INTERRUPT_PIPE_MARKER = b'C'

    # Settings
    SETTINGS_FILENAME = "settings.json"
    LOG_FILENAME = "glyphpad.log"
