"""The document: an ordered list of grapheme lines."""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Optional

from .line import Line
from .location import Location

logger = logging.getLogger(__name__)


class Buffer:
    """Ordered lines of the document plus its unsaved-changes flag."""

    def __init__(self, lines: Optional[list[Line]] = None):
        self.lines: list[Line] = lines if lines is not None else [Line()]
        self.modified = False

    @classmethod
    def from_text(cls, text: str) -> "Buffer":
        """Split *text* on newlines only; a trailing CR on each line is dropped."""
        parts = text.split('\n')
        if parts[-1] == '':
            parts.pop()
        return cls([Line(part[:-1] if part.endswith('\r') else part) for part in parts])

    @classmethod
    def load(cls, filename: str) -> "Buffer":
        """Read *filename* as UTF-8, one line per input line.

        Raises:
            OSError: the file cannot be opened or read.
            UnicodeDecodeError: the file is not valid UTF-8.
        """
        with open(filename, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
        buffer = cls.from_text(content)
        logger.info(f"Loaded {buffer.height()} lines from {filename}")
        return buffer

    def is_empty(self) -> bool:
        """True when the document holds no text at all."""
        if not self.lines:
            return True
        return len(self.lines) == 1 and self.lines[0].grapheme_count() == 0

    def height(self) -> int:
        return len(self.lines)

    def line(self, line_index: int) -> Optional[Line]:
        if 0 <= line_index < len(self.lines):
            return self.lines[line_index]
        return None

    def insert_char(self, ch: str, at: Location) -> None:
        """Insert *ch* at *at*; one line past the end starts a new line."""
        if at.line_index > self.height():
            return
        if at.line_index == self.height():
            self.lines.append(Line(ch))
        else:
            self.lines[at.line_index].insert_char(ch, at.grapheme_index)
        self.modified = True

    def delete(self, at: Location) -> None:
        """Delete the grapheme at *at*.

        At the end of a line the following line is joined onto this one;
        at the end of the last line nothing happens.
        """
        line = self.line(at.line_index)
        if line is None:
            return
        if at.grapheme_index >= line.grapheme_count():
            following = self.line(at.line_index + 1)
            if following is None:
                return
            line.append(following)
            del self.lines[at.line_index + 1]
        else:
            line.delete(at.grapheme_index)
        self.modified = True

    def insert_newline(self, at: Location) -> None:
        """Break the line at *at*, or add an empty line past the end."""
        if at.line_index >= self.height():
            self.lines.append(Line())
        else:
            tail = self.lines[at.line_index].split(at.grapheme_index)
            self.lines.insert(at.line_index + 1, tail)
        self.modified = True

    def to_text(self) -> str:
        """The document as file contents, every line ending in a newline."""
        return ''.join(line.to_text() + '\n' for line in self.lines)

    def save(self, filename: str) -> None:
        """Write the document to *filename* atomically.

        The text goes to a temporary file in the same directory which then
        replaces the target, so a failed save never truncates the original.

        Raises:
            OSError: the file could not be written or replaced.
        """
        dir_name = os.path.dirname(filename) or '.'
        suffix = os.path.splitext(filename)[1]
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                             dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(self.to_text())
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, filename)
        except OSError:
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.warning(f"Could not remove temporary file {temp_filename}")
            raise
        self.modified = False
        logger.info(f"Saved {self.height()} lines to {filename}")
