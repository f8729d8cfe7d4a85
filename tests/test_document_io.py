"""Tests for loading and saving documents."""

import os

import pytest
from termrow import Document, Row


def test_save_and_reopen_round_trip(tmp_path):
    path = tmp_path / "doc.txt"
    doc = Document([Row("a"), Row(""), Row("bc")], str(path))
    doc.save()

    assert path.read_bytes() == b"a\n\nbc\n"
    assert Document.open(str(path)).lines() == ["a", "", "bc"]


def test_open_keeps_filename(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("hello\nworld\n", encoding="utf-8")
    doc = Document.open(str(path))
    assert doc.filename == str(path)
    assert doc.lines() == ["hello", "world"]


def test_open_without_trailing_newline(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one\ntwo", encoding="utf-8")
    assert Document.open(str(path)).lines() == ["one", "two"]


def test_open_strips_crlf_terminators(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    assert Document.open(str(path)).lines() == ["one", "two"]


def test_open_keeps_lone_carriage_return(tmp_path):
    """Only a newline ends a line, so saving gives back the same bytes."""
    path = tmp_path / "doc.txt"
    path.write_bytes(b"a\rb\n")
    doc = Document.open(str(path))
    assert doc.lines() == ["a\rb"]
    doc.save()
    assert path.read_bytes() == b"a\rb\n"


def test_open_keeps_carriage_return_on_unterminated_last_line(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"one\r\ntwo\r")
    assert Document.open(str(path)).lines() == ["one", "two\r"]


def test_open_invalid_utf8_raises(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9\n")
    with pytest.raises(UnicodeDecodeError):
        Document.open(str(path))


def test_open_empty_file_gives_one_empty_row(tmp_path):
    """An empty file must not produce a document with zero rows."""
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    doc = Document.open(str(path))
    assert doc.num_rows() == 1
    assert doc.lines() == [""]
    assert not doc.is_empty()


def test_open_file_with_only_newline(tmp_path):
    path = tmp_path / "blank.txt"
    path.write_text("\n", encoding="utf-8")
    assert Document.open(str(path)).lines() == [""]


def test_open_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Document.open(str(tmp_path / "missing.txt"))


def test_save_overwrites_existing_file(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("old content that is longer\n", encoding="utf-8")
    Document([Row("new")], str(path)).save()
    assert path.read_text(encoding="utf-8") == "new\n"


def test_save_without_filename_writes_nothing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Document([Row("text")], "").save()
    assert os.listdir(tmp_path) == []


def test_save_failure_raises_and_keeps_rows(tmp_path):
    doc = Document([Row("keep")], str(tmp_path / "no_such_dir" / "doc.txt"))
    with pytest.raises(OSError):
        doc.save()
    assert doc.lines() == ["keep"]


def test_save_utf8(tmp_path):
    path = tmp_path / "doc.txt"
    Document([Row("Hello 世界"), Row("Café")], str(path)).save()
    assert path.read_text(encoding="utf-8") == "Hello 世界\nCafé\n"
    assert Document.open(str(path)).lines() == ["Hello 世界", "Café"]
