"""Mouse events reported by xterm-compatible terminals."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MouseEventKind(Enum):
    """Kinds of mouse events."""
    PRESS = "press"
    RELEASE = "release"
    HOLD = "hold"  # Motion with a button held down


class MouseButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event at 1-based terminal cell coordinates."""
    kind: MouseEventKind
    x: int
    y: int
    button: Optional[MouseButton] = None


_SGR_PATTERN = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")
_X10_PREFIX = "\x1b[M"

_BUTTONS = {
    0: MouseButton.LEFT,
    1: MouseButton.MIDDLE,
    2: MouseButton.RIGHT,
    64: MouseButton.WHEEL_UP,
    65: MouseButton.WHEEL_DOWN,
}


def _decode(code: int, x: int, y: int, released: bool) -> MouseEvent:
    """Turn a button code and coordinates into a MouseEvent.

    Bit 32 marks motion; bits 4, 8 and 16 carry modifiers and are ignored.
    """
    if released:
        return MouseEvent(MouseEventKind.RELEASE, x, y)
    if code & 32:
        return MouseEvent(MouseEventKind.HOLD, x, y)
    base = code & ~(4 | 8 | 16)
    # X10 encodes every release as button 3
    if base == 3:
        return MouseEvent(MouseEventKind.RELEASE, x, y)
    return MouseEvent(MouseEventKind.PRESS, x, y, _BUTTONS.get(base))


def parse_mouse_sequence(sequence: str) -> Optional[MouseEvent]:
    """Parse an SGR or X10 mouse report.

    Args:
        sequence: Raw input token read from the terminal

    Returns:
        The decoded MouseEvent, or None if the token is not a mouse report
    """
    match = _SGR_PATTERN.match(sequence)
    if match:
        code, x, y, final = match.groups()
        return _decode(int(code), int(x), int(y), released=(final == "m"))

    if sequence.startswith(_X10_PREFIX) and len(sequence) == len(_X10_PREFIX) + 3:
        code, x, y = (ord(ch) - 32 for ch in sequence[len(_X10_PREFIX):])
        if min(code, x, y) < 0:
            return None
        return _decode(code, x, y, released=False)

    return None


_PARTIAL_SGR = re.compile(r"^\x1b\[<[\d;]*[Mm]?$")


def is_partial_mouse_sequence(sequence: str) -> bool:
    """True if more input could still complete a mouse report.

    Also true for a finished report, so callers stop on their own terms.
    """
    if sequence in ("\x1b", "\x1b["):
        return True
    if sequence.startswith(_X10_PREFIX):
        return len(sequence) <= len(_X10_PREFIX) + 3
    return bool(_PARTIAL_SGR.match(sequence))


def is_complete_mouse_sequence(sequence: str) -> bool:
    """True once no further input belongs to the report."""
    if sequence.startswith(_X10_PREFIX):
        return len(sequence) == len(_X10_PREFIX) + 3
    return sequence.startswith("\x1b[<") and sequence[-1] in "Mm"
