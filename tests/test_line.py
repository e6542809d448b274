"""Test the grapheme line model."""

import pytest
from glyphpad.line import Line, GraphemeWidth


def test_emoji_is_one_full_width_grapheme():
    """A wide emoji counts as one grapheme taking two columns."""
    line = Line("a😀b")
    assert line.grapheme_count() == 3
    assert line.fragments[1].rendered_width == GraphemeWidth.FULL
    assert line.width_until(3) == 4


def test_combining_sequence_is_single_grapheme():
    line = Line("e\u0301x")
    assert line.grapheme_count() == 2
    assert line.width_until(1) == 1


def test_cjk_characters_are_full_width():
    line = Line("中文")
    assert line.grapheme_count() == 2
    assert line.width_until(2) == 4


def test_width_until_zero_and_past_end():
    line = Line("abc")
    assert line.width_until(0) == 0
    assert line.width_until(2) == 2
    assert line.width_until(100) == 3


@pytest.mark.parametrize("text", ["", "hello", "a😀b", "中文 text", "e\u0301 naïve"])
def test_width_until_non_decreasing(text):
    line = Line(text)
    widths = [line.width_until(i) for i in range(line.grapheme_count() + 1)]
    assert widths == sorted(widths)
    total = sum(f.rendered_width.value for f in line.fragments)
    assert line.width_until(line.grapheme_count()) == total


@pytest.mark.parametrize("text", ["", "hello world", "a😀b", "中文", "e\u0301", "tab\there"])
def test_to_text_round_trips(text):
    assert Line(text).to_text() == text


def test_space_keeps_its_glyph():
    line = Line("a b")
    assert line.fragments[1].replacement is None
    assert line.get_visible_graphemes(0, 3) == "a b"


def test_tab_shows_as_single_space():
    line = Line("a\tb")
    assert line.fragments[1].replacement == " "
    assert line.fragments[1].rendered_width == GraphemeWidth.HALF
    assert line.get_visible_graphemes(0, 10) == "a b"
    assert line.to_text() == "a\tb"


def test_control_character_gets_placeholder():
    line = Line("a\x07b")
    assert line.grapheme_count() == 3
    assert line.fragments[1].replacement == "▯"
    assert line.width_until(3) == 3


def test_zero_width_cluster_shows_dot():
    line = Line("a\u200bb")
    assert line.fragments[1].replacement == "."
    assert line.fragments[1].rendered_width == GraphemeWidth.HALF


def test_other_whitespace_shows_underscore():
    line = Line("a\u00a0b")
    assert line.fragments[1].replacement == "_"
    # Ideographic space is wide, but its stand-in takes one column
    wide = Line("\u3000")
    assert wide.fragments[0].replacement == "_"
    assert wide.width_until(1) == 1


def test_visible_graphemes_empty_range():
    line = Line("hello")
    assert line.get_visible_graphemes(3, 3) == ""
    assert line.get_visible_graphemes(4, 1) == ""
    assert Line("").get_visible_graphemes(0, 10) == ""


def test_visible_graphemes_window():
    line = Line("hello world")
    assert line.get_visible_graphemes(0, 5) == "hello"
    assert line.get_visible_graphemes(6, 100) == "world"


def test_visible_graphemes_cut_wide_character():
    """A wide grapheme split by either edge shows as '~'."""
    line = Line("a😀b")
    assert line.get_visible_graphemes(0, 2) == "a~"
    assert line.get_visible_graphemes(2, 4) == "~b"
    assert line.get_visible_graphemes(1, 3) == "😀"


def test_insert_char_middle_and_end():
    line = Line("ac")
    line.insert_char("b", 1)
    assert line.to_text() == "abc"
    line.insert_char("d", 99)
    assert line.to_text() == "abcd"
    assert line.grapheme_count() == 4


def test_insert_combining_mark_merges_with_previous():
    line = Line("e")
    line.insert_char("\u0301", 1)
    assert line.grapheme_count() == 1
    assert line.to_text() == "e\u0301"


def test_insert_then_delete_restores_text():
    line = Line("a😀b")
    line.insert_char("x", 1)
    assert line.to_text() == "ax😀b"
    line.delete(1)
    assert line.to_text() == "a😀b"


def test_delete_removes_whole_grapheme():
    line = Line("a😀b")
    line.delete(1)
    assert line.to_text() == "ab"
    assert line.grapheme_count() == 2


def test_delete_out_of_range_raises():
    with pytest.raises(IndexError):
        Line("ab").delete(2)


def test_append_concatenates():
    line = Line("ab")
    line.append(Line("cd"))
    assert line.to_text() == "abcd"
    assert line.grapheme_count() == 4


def test_split_returns_tail():
    line = Line("hello world")
    tail = line.split(5)
    assert line.to_text() == "hello"
    assert tail.to_text() == " world"
