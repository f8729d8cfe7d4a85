"""Tests for the document edit operations."""

import pytest
from termrow import Document, Position, Row


def make_doc(*lines):
    return Document([Row(line) for line in lines], "")


def test_default_document_has_one_empty_row():
    doc = Document.default()
    assert doc.lines() == [""]
    assert doc.filename == ""
    assert not doc.is_empty()


def test_new_empty_keeps_filename():
    doc = Document.new_empty("notes.txt")
    assert doc.num_rows() == 1
    assert doc.filename == "notes.txt"


def test_document_from_no_rows_is_empty():
    doc = Document([], "")
    assert doc.is_empty()
    assert doc.num_rows() == 0


def test_concrete_editing_scenario():
    """Insert, split, merge, and clear in sequence."""
    doc = make_doc("ab")
    doc.insert("c", 0, 0)
    assert doc.lines() == ["cab"]

    doc.insert_newline(1, 0)
    assert doc.lines() == ["c", "ab"]

    doc.delete(0, 1)
    assert doc.lines() == ["cab"]

    single = make_doc("x")
    single.delete_row(Position(y=0))
    assert single.lines() == [""]


# --- queries ---

def test_get_row_out_of_range():
    doc = make_doc("a", "b")
    assert str(doc.get_row(1)) == "b"
    assert doc.get_row(2) is None
    assert doc.get_row(-1) is None


def test_row_for_line_number_is_one_based():
    doc = make_doc("first", "second")
    assert str(doc.row_for_line_number(1)) == "first"
    assert str(doc.row_for_line_number(2)) == "second"
    assert doc.row_for_line_number(3) is None


def test_line_number_zero_maps_to_first_row():
    doc = make_doc("first", "second")
    assert str(doc.row_for_line_number(0)) == "first"


def test_last_line_number_and_word_count():
    doc = make_doc("one two", "", "three")
    assert doc.last_line_number() == 3
    assert doc.num_words() == 3


def test_iteration_yields_rows_in_order():
    doc = make_doc("a", "b", "c")
    assert [str(row) for row in doc] == ["a", "b", "c"]
    assert [str(row) for row in doc.iter()] == ["a", "b", "c"]
    assert len(doc) == 3


# --- insert ---

def test_insert_into_existing_row():
    doc = make_doc("ac")
    doc.insert("b", 1, 0)
    assert doc.lines() == ["abc"]


def test_insert_at_end_of_buffer_appends_new_row():
    doc = make_doc("abc")
    doc.insert("z", 7, 1)
    assert doc.lines() == ["abc", "z"]


def test_insert_far_past_end_still_appends_one_row():
    doc = make_doc("abc")
    doc.insert("z", 0, 10)
    assert doc.lines() == ["abc", "z"]


def test_insert_into_zero_row_document():
    doc = Document([], "")
    doc.insert("a", 0, 0)
    assert doc.lines() == ["a"]


# --- delete ---

def test_delete_removes_character_before_column():
    doc = make_doc("abc")
    doc.delete(2, 0)
    assert doc.lines() == ["ac"]


def test_delete_past_end_of_buffer_is_noop():
    doc = make_doc("abc")
    doc.delete(1, 1)
    doc.delete(0, 5)
    assert doc.lines() == ["abc"]


def test_delete_at_document_start_removes_first_character():
    doc = make_doc("abc", "def")
    doc.delete(0, 0)
    assert doc.lines() == ["bc", "def"]


def test_delete_at_start_of_empty_single_row_keeps_row():
    doc = make_doc("")
    doc.delete(0, 0)
    doc.delete(0, 0)
    assert doc.lines() == [""]
    assert doc.num_rows() == 1


def test_delete_at_line_start_merges_with_previous_row():
    doc = make_doc("one", "two", "three")
    chars_before = sum(len(row) for row in doc)
    doc.delete(0, 1)
    assert doc.lines() == ["onetwo", "three"]
    assert sum(len(row) for row in doc) == chars_before


def test_merge_of_empty_row():
    doc = make_doc("one", "")
    doc.delete(0, 1)
    assert doc.lines() == ["one"]


# --- insert_newline ---

def test_newline_splits_before_last_character():
    doc = make_doc("abcd")
    doc.insert_newline(2, 0)
    assert doc.lines() == ["ab", "cd"]


def test_newline_at_row_start_moves_whole_row_down():
    doc = make_doc("abc")
    doc.insert_newline(0, 0)
    assert doc.lines() == ["", "abc"]


def test_newline_at_last_character_adds_empty_row():
    """The split bound is len - 1, so the last character stays put."""
    doc = make_doc("abc")
    doc.insert_newline(2, 0)
    assert doc.lines() == ["abc", ""]


def test_newline_at_end_of_row_adds_empty_row():
    doc = make_doc("abc")
    doc.insert_newline(3, 0)
    assert doc.lines() == ["abc", ""]


def test_newline_in_middle_row_inserts_after_it():
    doc = make_doc("a", "bcd", "e")
    doc.insert_newline(3, 1)
    assert doc.lines() == ["a", "bcd", "", "e"]
    doc.insert_newline(1, 1)
    assert doc.lines() == ["a", "b", "cd", "", "e"]


def test_newline_on_empty_row():
    doc = make_doc("")
    doc.insert_newline(0, 0)
    assert doc.lines() == ["", ""]


@pytest.mark.parametrize("y", [2, 3, 10])
def test_newline_beyond_last_row_is_noop(y):
    doc = make_doc("a", "b")
    doc.insert_newline(0, y)
    assert doc.lines() == ["a", "b"]


def test_split_preserves_content():
    original = "split me here"
    doc = make_doc(original)
    doc.insert_newline(5, 0)
    assert doc.num_rows() == 2
    assert str(doc.get_row(0)) + str(doc.get_row(1)) == original


# --- delete_row ---

def test_delete_row_removes_middle_row():
    doc = make_doc("a", "b", "c")
    doc.delete_row(Position(x=0, y=1))
    assert doc.lines() == ["a", "c"]


def test_delete_row_clears_single_row():
    doc = make_doc("only")
    doc.delete_row(Position(x=3, y=0))
    assert doc.lines() == [""]


def test_delete_row_at_row_count_clears_single_row():
    """y equal to the row count passes the bounds check."""
    doc = make_doc("only")
    doc.delete_row(Position(y=1))
    assert doc.lines() == [""]


def test_delete_row_at_row_count_is_noop_with_several_rows():
    doc = make_doc("a", "b")
    doc.delete_row(Position(y=2))
    assert doc.lines() == ["a", "b"]


def test_delete_row_past_end_is_noop():
    doc = make_doc("a", "b")
    doc.delete_row(Position(y=5))
    assert doc.lines() == ["a", "b"]


def test_delete_row_on_zero_row_document_is_noop():
    doc = Document([], "")
    doc.delete_row(Position())
    assert doc.is_empty()


def test_edits_never_leave_zero_rows():
    doc = make_doc("ab", "cd")
    operations = [
        lambda: doc.delete_row(Position(y=0)),
        lambda: doc.delete(0, 0),
        lambda: doc.delete_row(Position(y=0)),
        lambda: doc.delete(0, 1),
        lambda: doc.delete_row(Position(y=0)),
        lambda: doc.insert_newline(0, 0),
        lambda: doc.delete(0, 1),
        lambda: doc.delete_row(Position(y=1)),
        lambda: doc.delete(0, 0),
    ]
    for operation in operations:
        operation()
        assert doc.num_rows() >= 1
