"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import sys
import termios
from dataclasses import dataclass
from typing import Iterable, Optional, Union

import blessed

from .location import Size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClearLine:
    """Move to the start of *row* and erase it."""
    row: int


@dataclass(frozen=True)
class MoveCaret:
    row: int
    col: int


@dataclass(frozen=True)
class ShowCaret:
    pass


@dataclass(frozen=True)
class HideCaret:
    pass


@dataclass(frozen=True)
class Print:
    text: str


DrawOp = Union[ClearLine, MoveCaret, ShowCaret, HideCaret, Print]


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Use as a context manager so the terminal is restored on every exit
    path, including exceptions raised from inside the editor loop.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, stream=None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.stream = stream or sys.stdout
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._saved_termios: Optional[list] = None

    def __enter__(self) -> "TerminalInterface":
        try:
            self.setup()
        except BaseException:
            self.cleanup()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def setup(self):
        """Enter fullscreen, switch input to raw mode and hide the caret.

        Raises:
            OSError: the terminal could not be configured.
        """
        from curtsies import Input

        self.queue_and_flush([HideCaret()], prefix=self.term.enter_fullscreen + self.term.clear)
        self.is_fullscreen = True
        self._curtsies_input = Input(keynames='curtsies')
        self._curtsies_input.__enter__()
        self._disable_flow_control()
        logger.debug("Terminal set up")

    def _disable_flow_control(self):
        # Let Ctrl-S and Ctrl-Q reach the editor instead of pausing output
        if not sys.stdin.isatty():
            return
        self._saved_termios = termios.tcgetattr(sys.stdin)
        new_settings = list(self._saved_termios)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)

    def cleanup(self):
        """Restore the terminal to the state it was in before setup().

        Best effort: a failure here is logged so it never hides the error
        that brought us here.
        """
        if self._saved_termios is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, self._saved_termios)
            except (termios.error, OSError) as e:
                logger.warning(f"Could not restore terminal settings: {e}")
            self._saved_termios = None
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except (termios.error, OSError) as e:
                logger.warning(f"Could not leave raw input mode: {e}")
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            try:
                self.queue_and_flush([ShowCaret()], prefix=self.term.exit_fullscreen)
            except OSError as e:
                logger.warning(f"Could not leave fullscreen: {e}")
            self.is_fullscreen = False
        logger.debug("Terminal restored")

    def size(self) -> Size:
        return Size(height=self.term.height, width=self.term.width)

    def _render_op(self, op: DrawOp) -> str:
        if isinstance(op, ClearLine):
            return self.term.move(op.row, 0) + self.term.clear_eol
        if isinstance(op, MoveCaret):
            return self.term.move(op.row, op.col)
        if isinstance(op, ShowCaret):
            return self.term.normal_cursor
        if isinstance(op, HideCaret):
            return self.term.hide_cursor
        if isinstance(op, Print):
            return op.text
        raise TypeError(f"Unknown draw operation: {op!r}")

    def queue_and_flush(self, ops: Iterable[DrawOp], prefix: str = "") -> None:
        """Write all *ops* as one chunk and flush.

        Raises:
            OSError: writing to the terminal failed.
        """
        out = prefix + ''.join(self._render_op(op) for op in ops)
        self.stream.write(out)
        self.stream.flush()

    def get_key(self, timeout=None):
        """Get a single input token from curtsies.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            A curtsies key name (str), a curtsies event object, or None when
            nothing arrived in time or input is not set up.
        """
        if self._curtsies_input is None:
            return None
        # send() serves bytes curtsies already buffered before waiting on stdin
        return self._curtsies_input.send(timeout)
