"""Coordinate value types and clamped arithmetic helpers."""

from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants


def saturating_sub(a: int, b: int) -> int:
    """Subtract b from a, flooring at zero."""
    return max(a - b, 0)


def saturating_add(a: int, b: int, limit: Optional[int] = None) -> int:
    """Add a and b, capping at limit when one is given."""
    total = a + b
    if limit is not None:
        return clamp(total, limit)
    return total


def clamp(value: int, upper: int) -> int:
    """Restrict value to the range [0, upper]."""
    return max(0, min(value, upper))


@dataclass
class Position:
    """Logical cursor position.

    x and y are 0-based document coordinates; x_offset counts the columns
    reserved on the left edge (line-number gutter).
    """
    x: int = 0
    y: int = 0
    x_offset: int = 0

    @classmethod
    def top_left(cls) -> "Position":
        return cls(0, 0, 0)


@dataclass
class Size:
    """Usable terminal area."""
    height: int
    width: int

    @classmethod
    def from_terminal(cls, width: int, height: int) -> "Size":
        """Build from the reported terminal size, keeping room for the bars."""
        return cls(
            height=saturating_sub(height, EditorConstants.RESERVED_BAR_ROWS),
            width=width,
        )
