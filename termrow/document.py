"""Line-oriented document buffer and its edit operations."""

import logging
from typing import Iterator, Optional, Sequence

from .constants import EditorConstants
from .position import Position, saturating_sub
from .row import Row

logger = logging.getLogger(__name__)


class Document:
    """An ordered list of rows plus the file they are saved to.

    An empty filename means the document has no save target yet.
    Rows are only ever addressed by index for the duration of a single
    operation; callers should not keep references to them.
    """

    def __init__(self, rows: Optional[Sequence[Row]] = None, filename: str = ""):
        self.rows: list[Row] = list(rows) if rows is not None else []
        self.filename = filename

    def __repr__(self) -> str:
        return f"Document({self.filename!r}, rows={len(self.rows)})"

    @classmethod
    def new_empty(cls, filename: str = "") -> "Document":
        return cls([Row()], filename)

    @classmethod
    def default(cls) -> "Document":
        return cls.new_empty("")

    @classmethod
    def open(cls, filename: str) -> "Document":
        """Load a file, one row per line.

        An empty file yields a single empty row rather than no rows at all.

        Lines end at a newline, with or without a carriage return before it.
        A lone carriage return is ordinary text, and a trailing newline does
        not start an extra row.

        Raises:
            OSError: if the file cannot be read.
            UnicodeDecodeError: if the file is not valid UTF-8.
        """
        with open(filename, "r", encoding="utf-8", newline="") as f:
            content = f.read()
        *terminated, last = content.split("\n")
        lines = [line.removesuffix("\r") for line in terminated]
        # Text after the final terminator is a line of its own, kept as is
        if last:
            lines.append(last)
        rows = [Row.from_text(line) for line in lines]
        if not rows:
            rows = [Row()]
        logger.debug("Loaded %d rows from %s", len(rows), filename)
        return cls(rows, filename)

    def save(self) -> None:
        """Write every row followed by a newline.

        Does nothing when there is no filename.

        Raises:
            OSError: if the file cannot be created or written.
        """
        if not self.filename:
            return
        with open(self.filename, "wb") as f:
            for row in self.rows:
                f.write(row.as_bytes())
                f.write(EditorConstants.LINE_TERMINATOR)
        logger.debug("Saved %d rows to %s", len(self.rows), self.filename)

    # --- Queries ---

    def get_row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def is_empty(self) -> bool:
        return len(self.rows) == 0

    def num_rows(self) -> int:
        return len(self.rows)

    def num_words(self) -> int:
        return sum(row.num_words() for row in self.rows)

    def row_for_line_number(self, line_number: int) -> Optional[Row]:
        """Get the row for a 1-based line number (0 is treated as 1)."""
        return self.get_row(saturating_sub(line_number, 1))

    def last_line_number(self) -> int:
        return self.num_rows()

    def iter(self) -> Iterator[Row]:
        return iter(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return self.iter()

    def __len__(self) -> int:
        return self.num_rows()

    def lines(self) -> list[str]:
        """Plain text of every row."""
        return [str(row) for row in self.rows]

    # --- Edits ---

    def insert(self, c: str, x: int, y: int):
        """Insert c at column x of row y.

        At or past the end of the buffer, a new row holding only c is
        appended and x is ignored.
        """
        if y >= self.num_rows():
            row = Row()
            row.insert(0, c)
            self.rows.append(row)
        else:
            self.rows[y].insert(x, c)

    def delete(self, x: int, y: int):
        """Delete the character before column x of row y (backspace).

        At the start of any row but the first, the row is joined onto the
        previous one instead.
        """
        if y >= self.num_rows():
            return
        if x == 0 and y > 0:
            current_row = self.rows.pop(y)
            self.rows[y - 1].append(current_row)
        else:
            self.rows[y].delete(saturating_sub(x, 1))

    def insert_newline(self, x: int, y: int):
        """Split row y at column x.

        A split point at or after the last character adds an empty row
        below instead, leaving row y untouched.
        """
        if y > self.num_rows():
            return
        current_row = self.get_row(y)
        if current_row is None:
            return
        if x < saturating_sub(len(current_row), 1):
            tail = current_row.split(x)
            self.rows.insert(y + 1, tail)
        else:
            self.rows.insert(y + 1, Row())

    def delete_row(self, at: Position):
        """Remove the row at at.y; a lone row is cleared instead."""
        if at.y > self.num_rows():
            return
        if self.num_rows() == 1:
            self.rows[0].clear()
        elif self.get_row(at.y) is not None:
            del self.rows[at.y]
