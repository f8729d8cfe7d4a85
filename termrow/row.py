"""A single line of text in a document."""

from .position import clamp


class Row:
    """One physical line, indexed by character."""

    def __init__(self, string: str = ""):
        self.string = string

    @classmethod
    def from_text(cls, text: str) -> "Row":
        return cls(text)

    def __len__(self) -> int:
        return len(self.string)

    def __str__(self) -> str:
        return self.string

    def __repr__(self) -> str:
        return f"Row({self.string!r})"

    def __eq__(self, other):
        if not isinstance(other, Row):
            return NotImplemented
        return self.string == other.string

    def insert(self, index: int, char: str):
        """Insert char at index; an index past the end appends."""
        index = clamp(index, len(self.string))
        self.string = self.string[:index] + char + self.string[index:]

    def delete(self, index: int):
        """Remove the character at index. Out of range does nothing."""
        if index < 0 or index >= len(self.string):
            return
        self.string = self.string[:index] + self.string[index + 1:]

    def split(self, index: int) -> "Row":
        """Keep the head in place and return the tail as a new row."""
        index = clamp(index, len(self.string))
        tail = Row(self.string[index:])
        self.string = self.string[:index]
        return tail

    def append(self, other: "Row"):
        self.string += other.string

    def clear(self):
        self.string = ""

    def num_words(self) -> int:
        return len(self.string.split())

    def as_bytes(self) -> bytes:
        return self.string.encode("utf-8")

    def render(self, start: int, end: int) -> str:
        """Return the visible slice between two columns."""
        end = clamp(end, len(self.string))
        start = clamp(start, end)
        return self.string[start:end]
