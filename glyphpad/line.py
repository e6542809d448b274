"""Grapheme-aware model of a single line of text.

A line is stored as a list of fragments, one per extended grapheme cluster.
Cursor columns index fragments, never code points, and each fragment knows
how many terminal cells it occupies.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import grapheme
import wcwidth

from .constants import EditorConstants


class GraphemeWidth(Enum):
    """Terminal cells taken by one fragment."""
    HALF = 1
    FULL = 2


@dataclass
class TextFragment:
    grapheme: str
    rendered_width: GraphemeWidth
    replacement: Optional[str] = None

    @property
    def display(self) -> str:
        return self.replacement if self.replacement is not None else self.grapheme


def _cluster_width(cluster: str) -> int:
    # wcswidth reports -1 for control characters
    return max(wcwidth.wcswidth(cluster), 0)


def _replacement_for(cluster: str, width: int) -> Optional[str]:
    """Return the glyph printed in place of *cluster*, if any.

    Plain spaces print as themselves and tabs collapse to one cell. Clusters
    that would draw nothing get a visible stand-in so the caret never sits
    on an invisible cell.
    """
    if cluster == " ":
        return None
    if cluster == "\t":
        return EditorConstants.TAB_GLYPH
    if width == 0:
        if len(cluster) == 1 and unicodedata.category(cluster) == "Cc":
            return EditorConstants.CONTROL_GLYPH
        return EditorConstants.ZERO_WIDTH_GLYPH
    if not cluster.strip():
        return EditorConstants.BLANK_GLYPH
    return None


def _build_fragments(text: str) -> list[TextFragment]:
    fragments = []
    for cluster in grapheme.graphemes(text):
        width = _cluster_width(cluster)
        replacement = _replacement_for(cluster, width)
        if replacement is not None or width < 2:
            rendered_width = GraphemeWidth.HALF
        else:
            rendered_width = GraphemeWidth.FULL
        fragments.append(TextFragment(cluster, rendered_width, replacement))
    return fragments


class Line:
    """One line of the document as a sequence of grapheme fragments."""

    def __init__(self, text: str = ""):
        self.fragments: list[TextFragment] = _build_fragments(text)

    def __repr__(self) -> str:
        return f"Line({self.to_text()!r})"

    def __str__(self) -> str:
        return self.to_text()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.to_text() == other.to_text()

    def _rebuild(self, text: str) -> None:
        # Cluster boundaries can move on any edit, so never patch in place
        self.fragments = _build_fragments(text)

    def grapheme_count(self) -> int:
        return len(self.fragments)

    def width_until(self, grapheme_index: int) -> int:
        """Total cells taken by the fragments before *grapheme_index*."""
        return sum(
            fragment.rendered_width.value
            for fragment in self.fragments[:max(grapheme_index, 0)]
        )

    def get_visible_graphemes(self, left: int, right: int) -> str:
        """Return what is printed for the columns ``[left, right)``.

        A fragment cut by either edge is shown as a single partial glyph so
        the row never gains or loses a cell.
        """
        if left >= right:
            return ""
        parts = []
        current = 0
        for fragment in self.fragments:
            if current >= right:
                break
            fragment_end = current + fragment.rendered_width.value
            if fragment_end > left:
                if fragment_end > right or current < left:
                    parts.append(EditorConstants.PARTIAL_GLYPH)
                else:
                    parts.append(fragment.display)
            current = fragment_end
        return "".join(parts)

    def insert_char(self, ch: str, grapheme_index: int) -> None:
        """Insert *ch* before the fragment at *grapheme_index*.

        An index at or past the end appends.
        """
        before = "".join(f.grapheme for f in self.fragments[:grapheme_index])
        after = "".join(f.grapheme for f in self.fragments[grapheme_index:])
        self._rebuild(before + ch + after)

    def delete(self, grapheme_index: int) -> None:
        """Remove the fragment at *grapheme_index*.

        Raises IndexError when there is no such fragment; joining lines is
        the buffer's job.
        """
        if not 0 <= grapheme_index < len(self.fragments):
            raise IndexError(f"grapheme index {grapheme_index} out of range")
        remaining = self.fragments[:grapheme_index] + self.fragments[grapheme_index + 1:]
        self._rebuild("".join(f.grapheme for f in remaining))

    def append(self, other: "Line") -> None:
        self._rebuild(self.to_text() + other.to_text())

    def split(self, grapheme_index: int) -> "Line":
        """Cut the line at *grapheme_index* and return the tail as a new line."""
        tail = Line("".join(f.grapheme for f in self.fragments[grapheme_index:]))
        self._rebuild("".join(f.grapheme for f in self.fragments[:grapheme_index]))
        return tail

    def to_text(self) -> str:
        return "".join(fragment.grapheme for fragment in self.fragments)
