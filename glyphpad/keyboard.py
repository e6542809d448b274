"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional, Union
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"
    SHIFT_SPECIAL = "shift_special"  # Shift + arrow keys, etc.


class KeyKind(Enum):
    """Phase of a key event; terminals only ever report presses."""
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw token from curtsies
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    kind: KeyKind = KeyKind.PRESS


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal window changed size."""
    width: int
    height: int


@dataclass(frozen=True)
class OtherEvent:
    """Any input the editor has no name for (paste bursts, mouse, ...)."""
    raw: object


InputEvent = Union[KeyEvent, ResizeEvent, OtherEvent]

_SPECIALS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert',
}


class KeyboardHandler:
    """Turns curtsies key tokens into input events."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Read the next token from the terminal and parse it."""
        key = self.terminal.get_key(timeout)
        if key is None:
            return None
        if not isinstance(key, str):
            # curtsies reports paste and signal events as objects
            return OtherEvent(raw=key)
        return self.parse_key(key)

    def parse_key(self, key_str: str) -> InputEvent:
        """Parse a curtsies key name such as ``'<LEFT>'`` or ``'<Ctrl-q>'``.

        Args:
            key_str: Token produced by ``curtsies.Input(keynames='curtsies')``

        Returns:
            Parsed KeyEvent, or OtherEvent for an empty token
        """
        if not key_str:
            return OtherEvent(raw=key_str)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_named(key_str)

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if 1 <= o <= 26:
                ch = chr(ord('a') + o - 1)
                if ch in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                if ch == 'i':
                    return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)
            if o == 127:
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)

        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_named(self, key_str: str) -> KeyEvent:
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        name = key_str[1:-1].lower().replace('+', '-')
        parts = name.split('-') if len(name) > 1 else [name]
        base = parts[-1]
        mods = set(parts[:-1])
        if mods & {'meta', 'esc'}:
            mods.add('alt')

        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        if not mods:
            if base in ('space', 'spacebar', 'spc'):
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=key_str)
            if base == 'tab':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if base in ('esc', 'escape'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
        if 'ctrl' in mods and len(base) == 1:
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
        if 'alt' in mods and (base in _SPECIALS or len(base) == 1):
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
        if 'shift' in mods and base in _SPECIALS:
            return KeyEvent(key_type=KeyType.SHIFT_SPECIAL, value=base, raw=key_str, is_shift=True)
        # Unknown names stay SPECIAL; the dispatcher decides what is supported
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)
