"""termrow - the editing core of a small terminal text editor."""

from .document import Document
from .row import Row
from .position import Position, Size
from .terminal import TerminalInterface, cursor_cell, mouse_event_to_position

__all__ = [
    'Document',
    'Row',
    'Position',
    'Size',
    'TerminalInterface',
    'cursor_cell',
    'mouse_event_to_position',
]
