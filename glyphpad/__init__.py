"""glyphpad - A small grapheme-aware terminal text editor."""

from .buffer import Buffer
from .line import Line
from .location import Location, Position, Size
from .view import View

__all__ = [
    'Buffer',
    'Line',
    'Location',
    'Position',
    'Size',
    'View',
]
