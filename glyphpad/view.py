"""The editing view: document, caret and viewport kept consistent."""

from __future__ import annotations

import logging
from typing import Optional

from .buffer import Buffer
from .commands import (
    DeleteBackward, DeleteForward, Direction, EditorCommand, InsertChar,
    InsertNewline, MoveCursor, Quit, Resize, Save,
)
from .constants import EditorConstants
from .location import Location, Position, Size, clamp_to_buffer, text_to_screen
from .settings import EditorSettings
from .terminal import ClearLine, DrawOp, HideCaret, MoveCaret, Print, ShowCaret
from .version import get_version_string
from .viewport import Viewport

logger = logging.getLogger(__name__)


def build_welcome_message(width: int) -> str:
    """Return the banner row shown on an empty document, fitted to *width*."""
    if width == 0:
        return ""
    message = EditorConstants.WELCOME_MESSAGE.format(
        name=EditorConstants.APP_NAME, version=get_version_string())
    if width <= len(message):
        return EditorConstants.EMPTY_ROW_GLYPH
    padding = (width - len(message) - 1) // 2
    full_message = EditorConstants.EMPTY_ROW_GLYPH + " " * padding + message
    return full_message[:width]


class View:
    """Owns the buffer and the caret and turns commands into edits.

    The caret is kept as a text Location; its screen Position is derived
    on demand, and the viewport scrolls only to keep that Position visible.
    """

    def __init__(self, size: Size = Size(), settings: Optional[EditorSettings] = None):
        self.buffer = Buffer()
        self.text_location = Location()
        self.viewport = Viewport(size)
        self.settings = settings or EditorSettings()
        self.filename: Optional[str] = None
        self.message: Optional[str] = None

    @property
    def size(self) -> Size:
        return self.viewport.size

    @property
    def scroll_offset(self) -> Position:
        return self.viewport.offset

    @property
    def needs_redraw(self) -> bool:
        return self.viewport.needs_redraw

    # --- Commands ---

    def handle_command(self, command: EditorCommand) -> None:
        if isinstance(command, MoveCursor):
            self.move_text_location(command.direction)
        elif isinstance(command, Resize):
            self.resize(command.size)
        elif isinstance(command, InsertChar):
            self.insert_char(command.ch)
        elif isinstance(command, DeleteForward):
            self.delete_forward()
        elif isinstance(command, DeleteBackward):
            self.delete_backward()
        elif isinstance(command, InsertNewline):
            self.insert_newline()
        elif isinstance(command, Save):
            self.save()
        elif isinstance(command, Quit):
            pass  # The editor loop owns the quit flag

    def load(self, filename: str) -> bool:
        """Replace the document with the contents of *filename*.

        A file that cannot be read leaves the current document in place.

        Returns:
            True if the file was loaded
        """
        self.filename = filename
        try:
            buffer = Buffer.load(filename)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load {filename}: {e}")
            return False
        self.buffer = buffer
        self.text_location = Location()
        self.viewport.reset()
        return True

    def save(self) -> bool:
        """Write the document back to the file it came from.

        Returns:
            True if the document was written
        """
        if not self.filename:
            logger.info("No file name, nothing saved")
            return False
        try:
            self.buffer.save(self.filename)
        except OSError as e:
            logger.error(f"Could not save {self.filename}: {e}")
            return False
        return True

    def set_message(self, message: Optional[str]) -> None:
        """Show *message* on the last row, or clear it with None."""
        if message != self.message:
            self.message = message
            self.viewport.needs_redraw = True

    def resize(self, size: Size) -> None:
        self.viewport.resize(size)
        self.scroll_text_location_into_view()

    # --- Edits ---

    def _current_line_count(self) -> int:
        line = self.buffer.line(self.text_location.line_index)
        return line.grapheme_count() if line is not None else 0

    def _after_edit(self) -> None:
        self.text_location = clamp_to_buffer(self.text_location, self.buffer)
        self.scroll_text_location_into_view()
        self.viewport.needs_redraw = True

    def insert_char(self, ch: str) -> None:
        old_count = self._current_line_count()
        self.buffer.insert_char(ch, self.text_location)
        # A combining mark joins the cluster before it and adds no grapheme
        if self._current_line_count() > old_count:
            self.move_right()
        self._after_edit()

    def delete_forward(self) -> None:
        self.buffer.delete(self.text_location)
        self._after_edit()

    def delete_backward(self) -> None:
        if self.text_location == Location(0, 0):
            return
        self.move_left()
        self.delete_forward()

    def insert_newline(self) -> None:
        self.buffer.insert_newline(self.text_location)
        self.move_right()
        self._after_edit()

    # --- Rendering ---

    def caret_position(self) -> Position:
        """Caret cell relative to the top-left corner of the window."""
        return self.viewport.to_screen(self.text_location_to_position())

    def _row_text(self, row: int) -> str:
        width = self.size.width
        if self.message is not None and row == self.size.height - 1:
            return self.message[:width]
        line = self.buffer.line(row + self.scroll_offset.row)
        if line is not None:
            left = self.scroll_offset.col
            return line.get_visible_graphemes(left, left + width)
        if (self.settings.show_welcome and self.buffer.is_empty()
                and row == self.size.height // 3):
            return build_welcome_message(width)
        return EditorConstants.EMPTY_ROW_GLYPH

    def frame_ops(self) -> list[DrawOp]:
        """Draw operations for one frame; rows only when a redraw is due."""
        if self.size.is_empty():
            return []
        ops: list[DrawOp] = [HideCaret()]
        if self.needs_redraw:
            for row in range(self.size.height):
                ops.append(ClearLine(row))
                ops.append(Print(self._row_text(row)))
        caret = self.caret_position()
        ops.append(MoveCaret(caret.row, caret.col))
        ops.append(ShowCaret())
        return ops

    def render(self, terminal) -> bool:
        """Flush one frame to *terminal*.

        A zero-sized window draws nothing at all. A failed flush raises in
        diagnostic mode; otherwise it is logged and the rows are retried on
        the next frame.

        Returns:
            True if a frame was written
        """
        ops = self.frame_ops()
        if not ops:
            return False
        try:
            terminal.queue_and_flush(ops)
        except OSError as e:
            if self.settings.diagnostic:
                raise
            logger.error(f"Failed to render frame: {e}")
            return False
        self.viewport.mark_drawn()
        return True

    # --- Scrolling ---

    def text_location_to_position(self) -> Position:
        return text_to_screen(self.text_location, self.buffer)

    def scroll_text_location_into_view(self) -> None:
        self.viewport.scroll_to(self.text_location_to_position())

    # --- Movement ---

    def move_text_location(self, direction: Direction) -> None:
        step = max(self.size.height - 1, 0)
        if direction == Direction.UP:
            self.move_up(1)
        elif direction == Direction.DOWN:
            self.move_down(1)
        elif direction == Direction.LEFT:
            self.move_left()
        elif direction == Direction.RIGHT:
            self.move_right()
        elif direction == Direction.HOME:
            self.move_to_start_of_line()
        elif direction == Direction.END:
            self.move_to_end_of_line()
        elif direction == Direction.PAGE_UP:
            self.move_up(step)
        elif direction == Direction.PAGE_DOWN:
            self.move_down(step)
        self.text_location = clamp_to_buffer(self.text_location, self.buffer)
        self.scroll_text_location_into_view()

    def move_up(self, step: int) -> None:
        self.text_location.line_index = max(self.text_location.line_index - step, 0)
        self.text_location = clamp_to_buffer(self.text_location, self.buffer)

    def move_down(self, step: int) -> None:
        self.text_location.line_index += step
        self.text_location = clamp_to_buffer(self.text_location, self.buffer)

    def move_left(self) -> None:
        if self.text_location.grapheme_index > 0:
            self.text_location.grapheme_index -= 1
        elif self.text_location.line_index > 0:
            self.move_up(1)
            self.move_to_end_of_line()

    def move_right(self) -> None:
        if self.text_location.grapheme_index < self._current_line_count():
            self.text_location.grapheme_index += 1
        elif self.text_location.line_index + 1 < self.buffer.height():
            self.move_down(1)
            self.move_to_start_of_line()

    def move_to_start_of_line(self) -> None:
        self.text_location.grapheme_index = 0

    def move_to_end_of_line(self) -> None:
        self.text_location.grapheme_index = self._current_line_count()
