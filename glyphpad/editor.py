"""Main editor controller: one event in, one frame out."""

import logging
import os
import select
import signal
from typing import Optional

from .commands import Quit, Resize, UnsupportedEventError, command_from_event
from .constants import EditorConstants
from .keyboard import InputEvent, KeyboardHandler, KeyEvent, KeyType, ResizeEvent
from .settings import EditorSettings
from .terminal import TerminalInterface
from .view import View

logger = logging.getLogger(__name__)


class Editor:
    """Terminal editor application controller."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = View(self.terminal.size(), self.settings)
        self.should_quit = False
        self.quit_pending = False
        self._stdin_pending = False
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    def load_file(self, filename: str) -> None:
        """Load *filename*; an unreadable file leaves an empty document."""
        self.view.load(filename)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) by queueing it like any other key."""
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, EditorConstants.INTERRUPT_PIPE_MARKER)

    def run(self):
        """Run the main editor loop until a Quit command arrives.

        The terminal is restored and the signal handlers reinstated on
        every exit path before any error propagates.
        """
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)
        try:
            with self.terminal:
                self.view.resize(self.terminal.size())
                self.should_quit = False
                self.quit_pending = False
                self._stdin_pending = False
                while not self.should_quit:
                    self.refresh_screen()
                    event = self.read_event()
                    if event is not None:
                        self.evaluate_event(event)
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None

    def read_event(self) -> Optional[InputEvent]:
        """Block until stdin or the signal pipe has something for us.

        Resizes and Ctrl-C come through the pipe so they queue up behind
        keystrokes in a single stream. After a key, input curtsies has
        already buffered is read before blocking again.
        """
        if self._stdin_pending:
            event = self.keyboard.get_key_event(timeout=EditorConstants.KEY_TIMEOUT)
            if event is not None:
                return event
            self._stdin_pending = False
        ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
        if self._resize_pipe_r in ready:
            data = os.read(self._resize_pipe_r, 1024)
            if EditorConstants.INTERRUPT_PIPE_MARKER in data:
                return KeyEvent(key_type=KeyType.CTRL, value='c', raw='\x03', is_ctrl=True)
            size = self.terminal.size()
            return ResizeEvent(width=size.width, height=size.height)
        event = self.keyboard.get_key_event(timeout=EditorConstants.KEY_TIMEOUT)
        self._stdin_pending = event is not None
        return event

    def evaluate_event(self, event: InputEvent) -> None:
        """Apply one input event to the editor state."""
        try:
            command = command_from_event(event)
        except UnsupportedEventError as e:
            if self.settings.diagnostic:
                raise
            logger.debug(str(e))
            return
        if isinstance(command, Quit):
            self.request_quit()
            return
        if self.quit_pending and not isinstance(command, Resize):
            self.quit_pending = False
            self.view.set_message(None)
        self.view.handle_command(command)

    def request_quit(self) -> None:
        """Quit, asking for a second Quit first when there are unsaved edits."""
        if self.view.buffer.modified and not self.quit_pending:
            logger.warning("Quit requested with unsaved changes, waiting for confirmation")
            self.quit_pending = True
            self.view.set_message(EditorConstants.UNSAVED_QUIT_MESSAGE)
            return
        self.should_quit = True

    def refresh_screen(self) -> None:
        self.view.render(self.terminal)
