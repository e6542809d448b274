"""Text-space and screen-space coordinates.

A Location addresses the document by line and grapheme; a Position
addresses terminal cells. Positions are always derived from Locations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .buffer import Buffer


@dataclass
class Location:
    line_index: int = 0
    grapheme_index: int = 0


@dataclass(frozen=True)
class Position:
    row: int = 0
    col: int = 0

    def saturating_sub(self, other: "Position") -> "Position":
        """Subtract component-wise, stopping at zero."""
        return Position(max(self.row - other.row, 0), max(self.col - other.col, 0))


@dataclass(frozen=True)
class Size:
    height: int = 0
    width: int = 0

    def is_empty(self) -> bool:
        return self.height == 0 or self.width == 0


def text_to_screen(location: Location, buffer: "Buffer") -> Position:
    """Map a text location to its absolute cell in the document grid."""
    row = location.line_index
    line = buffer.line(row)
    col = line.width_until(location.grapheme_index) if line is not None else 0
    return Position(row, col)


def clamp_to_buffer(location: Location, buffer: "Buffer") -> Location:
    """Return *location* pulled back inside the buffer's bounds."""
    line_index = min(max(location.line_index, 0), max(buffer.height() - 1, 0))
    line = buffer.line(line_index)
    count = line.grapheme_count() if line is not None else 0
    grapheme_index = min(max(location.grapheme_index, 0), count)
    return Location(line_index, grapheme_index)
