"""Maps the document onto the visible text area.

Scrolling is vertical only. A row wider than the text area is cut off at
the right edge, and a cursor past that edge is drawn on the last column
(see `cursor_cell`).
"""

from typing import Optional

from .constants import EditorConstants
from .document import Document
from .position import Position, clamp, saturating_sub


class DocumentView:
    """Vertical scrolling and the optional line-number gutter.

    Document coordinates are translated to screen-relative logical
    positions here; the terminal turns those into cells.
    """

    def __init__(self, document: Optional[Document] = None):
        self.document = document or Document.default()
        self.row_offset = 0
        self.show_line_numbers = False
        self.num_rows = 0
        self.num_columns = 0

    @property
    def gutter_width(self) -> int:
        """Width of the line numbers, used as the x_offset of positions."""
        if not self.show_line_numbers:
            return 0
        return len(str(max(self.document.last_line_number(), 1)))

    @property
    def text_columns(self) -> int:
        used = self.gutter_width + EditorConstants.GUTTER_SEPARATOR_WIDTH if self.gutter_width else 0
        return saturating_sub(self.num_columns, used)

    def scroll_to(self, cursor: Position) -> None:
        """Move the viewport so the cursor row is visible."""
        if cursor.y < self.row_offset:
            self.row_offset = cursor.y
        elif self.num_rows > 0 and cursor.y >= self.row_offset + self.num_rows:
            self.row_offset = cursor.y - self.num_rows + 1

    def screen_position(self, cursor: Position) -> Position:
        return Position(
            x=cursor.x,
            y=saturating_sub(cursor.y, self.row_offset),
            x_offset=self.gutter_width,
        )

    def document_position(self, screen: Position) -> Position:
        """Translate a screen-relative position back onto an existing row."""
        last_row = saturating_sub(self.document.num_rows(), 1)
        y = clamp(screen.y + self.row_offset, last_row)
        row = self.document.get_row(y)
        x = clamp(screen.x, len(row) if row is not None else 0)
        return Position(x=x, y=y, x_offset=screen.x_offset)

    def render(self) -> list[str]:
        """Lines to draw in the text area, one per screen row."""
        lines = []
        width = self.gutter_width
        for screen_y in range(self.num_rows):
            index = self.row_offset + screen_y
            row = self.document.get_row(index)
            if row is None:
                lines.append("~")
                continue
            text = row.render(0, self.text_columns)
            if width:
                text = f"{index + 1:>{width}} {text}"
            lines.append(text)
        return lines
