"""Editor commands and the mapping from input events to commands.

Every input event maps to at most one command. Commands are plain frozen
dataclasses; the View decides what each one does.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .keyboard import InputEvent, KeyEvent, KeyKind, KeyType, ResizeEvent
from .location import Size


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Resize:
    size: Size


@dataclass(frozen=True)
class MoveCursor:
    direction: Direction


@dataclass(frozen=True)
class InsertChar:
    ch: str


@dataclass(frozen=True)
class DeleteForward:
    pass


@dataclass(frozen=True)
class DeleteBackward:
    pass


@dataclass(frozen=True)
class InsertNewline:
    pass


@dataclass(frozen=True)
class Save:
    pass


EditorCommand = Union[
    Quit, Resize, MoveCursor, InsertChar,
    DeleteForward, DeleteBackward, InsertNewline, Save,
]


class UnsupportedEventError(Exception):
    """An input event that maps to no editor command."""

    def __init__(self, event: InputEvent):
        super().__init__(f"Event not supported: {event!r}")
        self.event = event


_MOVEMENT_KEYS = {direction.value: direction for direction in Direction}

_CTRL_KEYS = {
    'q': Quit(),
    'c': Quit(),
    'd': DeleteForward(),
    'h': DeleteBackward(),
    's': Save(),
}

_SPECIAL_KEYS = {
    'delete': DeleteForward(),
    'backspace': DeleteBackward(),
    'enter': InsertNewline(),
}


def _is_insertable(value: str) -> bool:
    return value == '\t' or (len(value) > 0 and value.isprintable())


def command_from_key(event: KeyEvent) -> EditorCommand:
    if event.kind != KeyKind.PRESS:
        raise UnsupportedEventError(event)
    if event.key_type == KeyType.CTRL and event.value in _CTRL_KEYS:
        return _CTRL_KEYS[event.value]
    if event.key_type == KeyType.SPECIAL:
        if event.value in _MOVEMENT_KEYS:
            return MoveCursor(_MOVEMENT_KEYS[event.value])
        if event.value in _SPECIAL_KEYS:
            return _SPECIAL_KEYS[event.value]
    if event.key_type == KeyType.REGULAR and _is_insertable(event.value):
        return InsertChar(event.value)
    raise UnsupportedEventError(event)


def command_from_event(event: InputEvent) -> EditorCommand:
    """Translate one input event into an editor command.

    Raises:
        UnsupportedEventError: the event has no command; the caller decides
            whether that is fatal.
    """
    if isinstance(event, ResizeEvent):
        return Resize(Size(height=event.height, width=event.width))
    if isinstance(event, KeyEvent):
        return command_from_key(event)
    raise UnsupportedEventError(event)
