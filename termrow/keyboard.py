"""Keyboard input handling using curtsies-style tokens.

curtsies has no notion of mouse reports, so a report reaches us split into
several tokens ('<ESC>', '[', '<', '0', ';', ...). KeyboardHandler glues
those back together before decoding them; anything that turns out not to be
a report is replayed as ordinary keys.
"""

from typing import Optional, Union
from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants
from .mouse import (
    MouseEvent,
    is_complete_mouse_sequence,
    is_partial_mouse_sequence,
    parse_mouse_sequence,
)


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw token from curtsies
    is_alt: bool = False
    is_ctrl: bool = False
    is_sequence: bool = False


InputEvent = Union[KeyEvent, MouseEvent]

# Key names as they appear inside '<...>' tokens, lowercased
_NAMED_KEYS = {
    'left': 'left',
    'right': 'right',
    'up': 'up',
    'down': 'down',
    'home': 'home',
    'end': 'end',
    'enter': 'enter',
    'return': 'enter',
    'backspace': 'backspace',
    'delete': 'delete',
    'insert': 'insert',
    'pageup': 'page_up',
    'page_up': 'page_up',
    'pagedown': 'page_down',
    'page_down': 'page_down',
    'esc': 'escape',
    'escape': 'escape',
}

# Named tokens that stand for a typed character
_TYPED_NAMES = {
    'space': ' ',
    'spacebar': ' ',
    'spc': ' ',
    'tab': '\t',
}

_ALT_MODIFIERS = {'alt', 'meta', 'esc'}

# Single control bytes with a meaning of their own
_CONTROL_BYTES = {
    '\x7f': 'backspace',
    '\x08': 'backspace',
    '\x1b': 'escape',
    '\r': 'enter',
    '\n': 'enter',
}

# Tokens whose text is not the token itself
_TOKEN_TEXT = {
    '<ESC>': '\x1b',
    '<SPACE>': ' ',
    '<Esc+[>': '\x1b[',
}


def _is_named(token: str) -> bool:
    return len(token) > 2 and token[0] == '<' and token[-1] == '>'


def _split_modifiers(name: str) -> tuple[set[str], str]:
    """Split 'Ctrl-Alt-x' or 'Esc+f' into ({'ctrl', 'alt'}, 'x')."""
    *mods, base = name.lower().replace('+', '-').split('-')
    if not base:
        # '<Ctrl-->' names the '-' key itself
        base = '-'
    return set(mods), base


def _token_text(token: str) -> Optional[str]:
    """The characters a token stands for, or None for key names."""
    if token in _TOKEN_TEXT:
        return _TOKEN_TEXT[token]
    if _is_named(token):
        return None
    return token


class KeyboardHandler:
    """Turns terminal input tokens into key and mouse events."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface
        self._replay: list[str] = []

    def _next_token(self, timeout: Optional[float]) -> Optional[str]:
        if self._replay:
            return self._replay.pop(0)
        token = self.terminal.read_event(timeout)
        return str(token) if token else None

    def get_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Get the next key or mouse event, or None if nothing arrived."""
        token = self._next_token(timeout)
        if token is None:
            return None
        text = _token_text(token)
        if text is not None and text.startswith('\x1b'):
            mouse_event = self._read_mouse_report(text)
            if mouse_event is not None:
                return mouse_event
        return self.parse_key(token)

    def _read_mouse_report(self, text: str) -> Optional[MouseEvent]:
        """Collect the rest of a mouse report that starts with `text`.

        On failure every token read here is queued for replay.
        """
        taken: list[str] = []
        while is_partial_mouse_sequence(text) and not is_complete_mouse_sequence(text):
            token = self._next_token(EditorConstants.ESCAPE_SEQUENCE_TIMEOUT)
            if token is None:
                break
            taken.append(token)
            more = _token_text(token)
            if more is None:
                break
            text += more
        event = parse_mouse_sequence(text)
        if event is None:
            self._replay[:0] = taken
        return event

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent.

        Args:
            key: curtsies token (e.g. '<Ctrl-s>', '<LEFT>', 'a')

        Returns:
            Parsed KeyEvent
        """
        token = str(key)
        if _is_named(token):
            return self._parse_named(token)
        return self._parse_text(token)

    def _parse_named(self, token: str) -> KeyEvent:
        mods, base = _split_modifiers(token[1:-1])
        if not mods and base in _TYPED_NAMES:
            char = _TYPED_NAMES[base]
            return KeyEvent(key_type=KeyType.REGULAR, value=char, raw=char)
        base = _NAMED_KEYS.get(base, base)
        if 'ctrl' in mods and len(base) == 1:
            return self._control_key(base, token)
        if mods & _ALT_MODIFIERS and (len(base) == 1 or base in _NAMED_KEYS.values()):
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=token, is_alt=True)
        if base == 'escape':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
        # Function keys and other names pass through by name
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=token, is_sequence=True)

    def _parse_text(self, token: str) -> KeyEvent:
        if token in _CONTROL_BYTES:
            value = _CONTROL_BYTES[token]
            raw = '\x1b' if value == 'escape' else token
            return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=raw)
        if len(token) == 1 and 1 <= ord(token) <= 26 and token != '\t':
            return self._control_key(chr(ord(token) + ord('a') - 1), token)
        return KeyEvent(key_type=KeyType.REGULAR, value=token, raw=token)

    @staticmethod
    def _control_key(letter: str, raw: str) -> KeyEvent:
        # Ctrl-J and Ctrl-M are line feed and carriage return
        if letter in ('j', 'm'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=raw, is_sequence=True)
        return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=raw, is_ctrl=True)
