"""Tests for scrolling and the line-number gutter."""

from termrow import Document, Position, Row
from termrow.view import DocumentView


def make_view(lines, rows=5, columns=20):
    view = DocumentView(Document([Row(line) for line in lines], ""))
    view.num_rows = rows
    view.num_columns = columns
    return view


def test_render_pads_with_tildes():
    view = make_view(["one", "two"], rows=4)
    assert view.render() == ["one", "two", "~", "~"]


def test_render_truncates_to_width():
    view = make_view(["abcdefghij"], rows=1, columns=4)
    assert view.render() == ["abcd"]


def test_gutter_width_follows_last_line_number():
    view = make_view([str(i) for i in range(12)])
    assert view.gutter_width == 0
    view.show_line_numbers = True
    assert view.gutter_width == 2


def test_render_with_line_numbers():
    view = make_view(["a", "b"], rows=3, columns=10)
    view.show_line_numbers = True
    assert view.render() == ["1 a", "2 b", "~"]


def test_scroll_to_keeps_cursor_visible():
    view = make_view([str(i) for i in range(20)], rows=5)
    view.scroll_to(Position(y=7))
    assert view.row_offset == 3
    view.scroll_to(Position(y=1))
    assert view.row_offset == 1
    assert view.render()[0] == "1"


def test_screen_position_subtracts_scroll_and_adds_gutter():
    view = make_view([str(i) for i in range(20)], rows=5)
    view.show_line_numbers = True
    view.row_offset = 4
    assert view.screen_position(Position(x=1, y=6)) == Position(x=1, y=2, x_offset=2)


def test_document_position_clamps_to_rows_and_line_length():
    view = make_view(["abc", "de"], rows=5)
    assert view.document_position(Position(x=10, y=1)) == Position(x=2, y=1)
    assert view.document_position(Position(x=1, y=4)) == Position(x=1, y=1)
