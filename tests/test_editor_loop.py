"""Test the editor's event loop with a simulated terminal."""

import io
import os

import pytest
from unittest.mock import MagicMock, patch
from glyphpad.commands import UnsupportedEventError
from glyphpad.editor import Editor
from glyphpad.keyboard import KeyEvent, KeyType, OtherEvent, ResizeEvent
from glyphpad.location import Location, Size
from glyphpad.settings import EditorSettings
from glyphpad.terminal import TerminalInterface


def create_editor(settings=None, height=24, width=80):
    term = MagicMock()
    term.move.side_effect = lambda y, x: f"[{y},{x}]"
    term.clear_eol = ""
    term.hide_cursor = ""
    term.normal_cursor = ""
    term.height = height
    term.width = width
    terminal = TerminalInterface(term, stream=io.StringIO())
    terminal.setup = MagicMock()
    terminal.cleanup = MagicMock()
    return Editor(settings, terminal)


def key(value):
    return KeyEvent(key_type=KeyType.REGULAR, value=value, raw=value)


QUIT = KeyEvent(key_type=KeyType.CTRL, value='q', raw='\x11', is_ctrl=True)


def test_typing_then_quit():
    editor = create_editor()
    with patch('glyphpad.editor.select.select', return_value=([0], [], [])):
        with patch.object(editor.keyboard, 'get_key_event',
                          side_effect=[key('h'), key('i'), QUIT, QUIT]):
            editor.run()
    assert editor.view.buffer.lines[0].to_text() == "hi"
    assert editor.view.text_location == Location(0, 2)
    assert editor.should_quit
    editor.terminal.setup.assert_called_once()
    editor.terminal.cleanup.assert_called_once()


def test_missing_key_is_skipped():
    editor = create_editor()
    with patch('glyphpad.editor.select.select', return_value=([0], [], [])):
        with patch.object(editor.keyboard, 'get_key_event',
                          side_effect=[None, key('x'), QUIT, QUIT]):
            editor.run()
    assert editor.view.buffer.lines[0].to_text() == "x"


def test_resize_signal_arrives_as_event():
    editor = create_editor(height=24, width=80)
    calls = []

    def fake_select(rlist, wlist, xlist):
        calls.append(rlist)
        if len(calls) == 1:
            editor.terminal.term.height = 10
            editor.terminal.term.width = 40
            os.write(editor._resize_pipe_w, b'R')
            return ([editor._resize_pipe_r], [], [])
        return ([0], [], [])

    with patch('glyphpad.editor.select.select', side_effect=fake_select):
        with patch.object(editor.keyboard, 'get_key_event', side_effect=[QUIT]):
            editor.run()
    assert editor.view.size == Size(height=10, width=40)


def test_interrupt_signal_quits():
    editor = create_editor()

    def fake_select(rlist, wlist, xlist):
        os.write(editor._resize_pipe_w, b'C')
        return ([editor._resize_pipe_r], [], [])

    with patch('glyphpad.editor.select.select', side_effect=fake_select):
        editor.run()
    assert editor.should_quit
    editor.terminal.cleanup.assert_called_once()


def test_pipes_closed_after_run():
    editor = create_editor()
    with patch('glyphpad.editor.select.select', return_value=([0], [], [])):
        with patch.object(editor.keyboard, 'get_key_event', side_effect=[QUIT]):
            editor.run()
    assert editor._resize_pipe_r is None
    assert editor._resize_pipe_w is None


def test_unsupported_event_is_dropped():
    editor = create_editor()
    editor.evaluate_event(OtherEvent(raw=object()))
    editor.evaluate_event(KeyEvent(key_type=KeyType.CTRL, value='x', raw='\x18', is_ctrl=True))
    assert not editor.should_quit
    assert editor.view.buffer.is_empty()


def test_unsupported_event_raises_in_diagnostic_mode():
    editor = create_editor(EditorSettings(diagnostic=True))
    with patch('glyphpad.editor.select.select', return_value=([0], [], [])):
        with patch.object(editor.keyboard, 'get_key_event',
                          side_effect=[OtherEvent(raw='mouse')]):
            with pytest.raises(UnsupportedEventError) as excinfo:
                editor.run()
    assert excinfo.value.event == OtherEvent(raw="mouse")
    editor.terminal.cleanup.assert_called_once()


def test_resize_event_updates_view():
    editor = create_editor()
    editor.evaluate_event(ResizeEvent(width=30, height=5))
    assert editor.view.size == Size(height=5, width=30)


def test_load_file_missing_keeps_default(tmp_path):
    editor = create_editor()
    editor.load_file(str(tmp_path / "missing.txt"))
    assert editor.view.buffer.height() == 1
    assert editor.view.filename == str(tmp_path / "missing.txt")


def test_buffered_keys_are_read_without_waiting():
    editor = create_editor()
    calls = []

    def fake_select(rlist, wlist, xlist):
        calls.append(rlist)
        return ([0], [], [])

    with patch('glyphpad.editor.select.select', side_effect=fake_select):
        with patch.object(editor.keyboard, 'get_key_event',
                          side_effect=[key('a'), key('b'), key('c'), None, QUIT, QUIT]):
            editor.run()
    assert editor.view.buffer.lines[0].to_text() == "abc"
    # One select for the burst, one more once curtsies ran dry
    assert len(calls) == 2
    assert editor.should_quit


def test_quit_with_unsaved_changes_needs_confirmation():
    editor = create_editor()
    editor.evaluate_event(key('x'))
    editor.evaluate_event(QUIT)
    assert not editor.should_quit
    assert editor.quit_pending
    assert editor.view.message is not None
    editor.evaluate_event(QUIT)
    assert editor.should_quit


def test_other_command_cancels_quit_confirmation():
    editor = create_editor()
    editor.evaluate_event(key('x'))
    editor.evaluate_event(QUIT)
    editor.evaluate_event(ResizeEvent(width=40, height=10))
    assert editor.quit_pending
    editor.evaluate_event(key('y'))
    assert not editor.quit_pending
    assert editor.view.message is None
    editor.evaluate_event(QUIT)
    assert not editor.should_quit


def test_quit_after_save_is_immediate(tmp_path):
    editor = create_editor()
    editor.load_file(str(tmp_path / "new.txt"))
    editor.evaluate_event(key('x'))
    editor.evaluate_event(KeyEvent(key_type=KeyType.CTRL, value='s', raw='\x13', is_ctrl=True))
    editor.evaluate_event(QUIT)
    assert editor.should_quit
    assert (tmp_path / "new.txt").read_text(encoding="utf-8") == "x\n"
