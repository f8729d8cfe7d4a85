"""Terminal interface using Blessed for display and Curtsies for input.

Also holds the transform between logical positions and the 1-based,
clamped terminal cells the cursor is placed on.
"""

import logging
import sys
from typing import Optional, Union

import blessed
from curtsies.events import PasteEvent

from .constants import EditorConstants
from .keyboard import KeyEvent
from .mouse import MouseEvent, MouseEventKind
from .position import Position, Size, saturating_add, saturating_sub

logger = logging.getLogger(__name__)


def _offset_adjustment(x_offset: int) -> int:
    """Columns taken by a non-empty gutter, including its separator."""
    if x_offset > 0:
        return x_offset + EditorConstants.GUTTER_SEPARATOR_WIDTH
    return 0


def cursor_cell(position: Position, size: Size) -> tuple[int, int]:
    """Map a logical position to the 1-based terminal cell (x, y).

    Positions beyond the visible area are capped at its edge.
    """
    x = saturating_add(position.x, 1)
    x = saturating_add(x, _offset_adjustment(position.x_offset), limit=size.width)
    y = saturating_add(position.y, 1, limit=size.height)
    return x, y


def mouse_event_to_position(event: Union[MouseEvent, KeyEvent, None], x_offset: int) -> Position:
    """Map a mouse press back to a logical position.

    Anything other than a press gives the top-left position.
    """
    if not isinstance(event, MouseEvent) or event.kind is not MouseEventKind.PRESS:
        return Position.top_left()
    x = saturating_sub(saturating_sub(event.x, 1), _offset_adjustment(x_offset))
    y = saturating_sub(event.y, 1)
    return Position(x=x, y=y, x_offset=x_offset)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False
        self._pending: list[str] = []

    def __enter__(self) -> "TerminalInterface":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def setup(self):
        """Enter fullscreen raw mode with mouse reporting."""
        self._write(self.term.enter_fullscreen + EditorConstants.MOUSE_ENABLE + self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                self._curtsies_input = Input(keynames='curtsies', sigint_event=False)
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception as e:
                # curtsies needs a real tty; without one there is simply no input
                logger.warning("Could not enter raw input mode: %s", e)
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Restore the terminal to its normal state. Never raises."""
        if self.is_fullscreen:
            try:
                self._write(EditorConstants.MOUSE_DISABLE + self.term.normal_cursor + self.term.exit_fullscreen)
            except OSError as e:
                logger.warning("Could not restore screen: %s", e)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                logger.warning("Could not leave raw input mode: %s", e)
            finally:
                self._curtsies_input = None
                self._curtsies_active = False
        self._pending.clear()

    def _write(self, text: str) -> None:
        print(text, end='', flush=True)

    @property
    def has_input(self) -> bool:
        return self._curtsies_input is not None

    @property
    def size(self) -> Size:
        """Usable area below which the status and message bars sit."""
        return Size.from_terminal(self.term.width, self.term.height)

    @property
    def width(self) -> int:
        return self.term.width

    @property
    def height(self) -> int:
        """Full terminal height, bars included."""
        return self.term.height

    def set_cursor_position(self, position: Position) -> None:
        """Place the cursor on the cell for a logical position."""
        x, y = cursor_cell(position, self.size)
        # blessed addresses cells from 0
        print(self.term.move_xy(saturating_sub(x, 1), saturating_sub(y, 1)), end='')

    @staticmethod
    def mouse_event_to_position(event, x_offset: int) -> Position:
        return mouse_event_to_position(event, x_offset)

    def clear_screen(self):
        print(self.term.clear, end='')

    def clear_current_line(self):
        print(self.term.clear_eol, end='')

    def clear_all(self):
        print(self.term.home + self.term.clear, end='')

    def flush(self):
        """Flush stdout. OSError propagates."""
        sys.stdout.flush()

    def hide_cursor(self):
        print(self.term.hide_cursor, end='')

    def show_cursor(self):
        print(self.term.normal_cursor, end='')

    def set_bg_color(self, rgb: tuple[int, int, int]):
        print(self.term.on_color_rgb(*rgb), end='')

    def reset_bg_color(self):
        print(self.term.normal, end='')

    def set_fg_color(self, rgb: tuple[int, int, int]):
        print(self.term.color_rgb(*rgb), end='')

    def reset_fg_color(self):
        print(self.term.normal, end='')

    def to_alternate_screen(self):
        print(self.term.enter_fullscreen, end='')

    def to_main_screen(self):
        print(self.term.exit_fullscreen, end='')

    def draw_row(self, y: int, text: str):
        """Draw text on screen row y (0-based), clearing the rest of the line."""
        print(self.term.move_xy(0, y) + text[:self.width] + self.term.clear_eol, end='')

    def read_event(self, timeout: Optional[float] = None) -> Optional[str]:
        """Read the next input token.

        A paste event (several keys arriving in one read, which is also how
        a mouse report often shows up) is handed out one key at a time.

        Args:
            timeout: Seconds to wait (None blocks, 0 polls)

        Returns:
            The curtsies token as a string, or None on timeout or without input
        """
        if self._pending:
            return self._pending.pop(0)
        if self._curtsies_input is None:
            return None
        # send() also returns events curtsies has already buffered
        event = self._curtsies_input.send(timeout)  # type: ignore
        if event is None:
            return None
        if isinstance(event, PasteEvent):
            self._pending.extend(str(e) for e in event.events)
            return self._pending.pop(0) if self._pending else None
        return str(event)
