"""Scroll engine keeping the caret inside the visible window."""

from __future__ import annotations

from .location import Position, Size


def _scroll_axis(to: int, offset: int, extent: int) -> int:
    if extent == 0:
        return offset
    if to < offset:
        return to
    if to >= offset + extent:
        return to - extent + 1
    return offset


def scroll_into_view(position: Position, size: Size, offset: Position) -> Position:
    """Return the smallest offset change that shows *position*.

    An axis with zero extent has nothing to scroll and keeps its offset.
    """
    return Position(
        _scroll_axis(position.row, offset.row, size.height),
        _scroll_axis(position.col, offset.col, size.width),
    )


class Viewport:
    """Visible window over the document and its redraw bookkeeping."""

    def __init__(self, size: Size = Size()):
        self.size = size
        self.offset = Position()
        self.needs_redraw = True

    def scroll_to(self, position: Position) -> bool:
        """Scroll so *position* is visible; return True if the offset moved."""
        new_offset = scroll_into_view(position, self.size, self.offset)
        if new_offset == self.offset:
            return False
        self.offset = new_offset
        self.needs_redraw = True
        return True

    def resize(self, size: Size) -> None:
        self.size = size
        self.needs_redraw = True

    def reset(self) -> None:
        self.offset = Position()
        self.needs_redraw = True

    def mark_drawn(self) -> None:
        self.needs_redraw = False

    def to_screen(self, position: Position) -> Position:
        """Translate a document cell into a cell relative to the window."""
        return position.saturating_sub(self.offset)
