"""Main editor controller: applies input events to the document."""

import logging
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .document import Document
from .keyboard import InputEvent, KeyboardHandler, KeyEvent, KeyType
from .mouse import MouseButton, MouseEvent, MouseEventKind
from .position import Position, clamp, saturating_sub
from .settings_persistence import (
    CURSOR_COLUMN,
    CURSOR_ROW,
    SHOW_LINE_NUMBERS,
    SettingsPersistence,
    get_persistence,
)
from .terminal import TerminalInterface, mouse_event_to_position
from .view import DocumentView

logger = logging.getLogger(__name__)


class Editor:
    """Main editor application controller.

    One event is applied per loop iteration: at most one edit to the
    document, then the cursor is placed again.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[SettingsPersistence] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or get_persistence()
        self.document = Document.default()
        self.view = DocumentView(self.document)
        self.cursor = Position()
        self.command_registry = CommandRegistry()
        self.running = False
        self.modified = False
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None  # 'save_filename', 'save_filename_quit', 'quit_confirm', 'goto_line'
        self.prompt_input = ""

    @property
    def filename(self) -> str:
        return self.document.filename

    def _set_document(self, document: Document):
        self.document = document
        self.view.document = document
        self.view.row_offset = 0
        self.cursor = Position()

    # --- Files ---

    def load_file(self, filename: str):
        """Load a file, or start a new document bound to it if it doesn't exist.

        Raises:
            OSError: if the file exists but cannot be read.
            UnicodeDecodeError: if the file is not valid UTF-8.
        """
        try:
            document = Document.open(filename)
        except FileNotFoundError:
            logger.debug("%s does not exist, starting a new document", filename)
            document = Document.new_empty(filename)
        self._set_document(document)
        self.modified = False
        self._restore_settings()

    def save_file(self, filename: Optional[str] = None) -> bool:
        """Save the document, optionally under a new name.

        Returns:
            True if the save succeeded. On failure the status message says
            why and the document keeps its previous filename.
        """
        previous = self.document.filename
        if filename:
            self.document.filename = filename
        try:
            self.document.save()
        except OSError as e:
            logger.warning("Could not save %s: %s", self.document.filename, e)
            self.status_message = EditorConstants.SAVE_ERROR_MESSAGE.format(self.document.filename)
            self.document.filename = previous
            return False
        self.modified = False
        self._store_settings()
        return True

    def _restore_settings(self):
        stored = self.settings.load_settings(self.filename)
        show = stored.get(SHOW_LINE_NUMBERS)
        if self.settings.validate_setting(SHOW_LINE_NUMBERS, show) and show is not None:
            self.view.show_line_numbers = show
        row = stored.get(CURSOR_ROW)
        column = stored.get(CURSOR_COLUMN)
        if (row is not None and column is not None
                and self.settings.validate_setting(CURSOR_ROW, row)
                and self.settings.validate_setting(CURSOR_COLUMN, column)):
            self.cursor = Position(x=column, y=row)
            self._clamp_cursor()

    def _store_settings(self):
        if not self.filename:
            return
        self.settings.save_settings(self.filename, {
            SHOW_LINE_NUMBERS: self.view.show_line_numbers,
            CURSOR_ROW: self.cursor.y,
            CURSOR_COLUMN: self.cursor.x,
        })

    # --- Main loop ---

    def run(self):
        """Run the main editor loop until quit."""
        self.running = True
        try:
            with self.terminal:
                if not self.terminal.has_input:
                    logger.warning("No terminal input available, exiting")
                    self.running = False
                while self.running:
                    self._draw()
                    event = self.keyboard.get_event()
                    if event is not None:
                        self.handle_event(event)
        except KeyboardInterrupt:
            pass
        finally:
            self.running = False
            self._store_settings()

    def _draw(self):
        """Draw rows, bars and the cursor."""
        size = self.terminal.size
        self.view.num_rows = size.height
        self.view.num_columns = size.width
        self.view.scroll_to(self.cursor)

        self.terminal.hide_cursor()
        for y, line in enumerate(self.view.render()):
            self.terminal.draw_row(y, line)
        self._draw_status_bar(size.height, size.width)
        self.terminal.draw_row(size.height + 1, self._message_text())
        self.terminal.set_cursor_position(self.view.screen_position(self.cursor))
        self.terminal.show_cursor()
        self.terminal.flush()

    def _draw_status_bar(self, y: int, width: int):
        name = self.filename or EditorConstants.NO_NAME
        modified = " (modified)" if self.modified else ""
        left = f"{name} - {self.document.num_rows()} lines{modified}"
        right = f"{self.cursor.y + 1}/{self.document.last_line_number()}"
        padding = saturating_sub(width, len(left) + len(right))
        self.terminal.set_bg_color(EditorConstants.STATUS_BG_COLOR)
        self.terminal.set_fg_color(EditorConstants.STATUS_FG_COLOR)
        self.terminal.draw_row(y, left + " " * padding + right)
        self.terminal.reset_fg_color()
        self.terminal.reset_bg_color()

    def _message_text(self) -> str:
        if self.prompt_mode in ('save_filename', 'save_filename_quit'):
            return f"File to save in: {self.prompt_input}"
        if self.prompt_mode == 'quit_confirm':
            return "Save file? (y, n)"
        if self.prompt_mode == 'goto_line':
            return f"Go to line: {self.prompt_input}"
        return self.status_message or EditorConstants.HELP_MESSAGE

    # --- Events ---

    def handle_event(self, event: InputEvent):
        if isinstance(event, MouseEvent):
            self._handle_mouse_event(event)
        else:
            self._handle_key_event(event)

    def _handle_mouse_event(self, event: MouseEvent):
        if event.kind is not MouseEventKind.PRESS:
            return
        if event.button is MouseButton.WHEEL_UP:
            self.move_up()
            return
        if event.button is MouseButton.WHEEL_DOWN:
            self.move_down()
            return
        screen = mouse_event_to_position(event, self.view.gutter_width)
        # Clicks on the bars land on the last visible row
        if self.view.num_rows > 0:
            screen.y = clamp(screen.y, self.view.num_rows - 1)
        target = self.view.document_position(screen)
        self.cursor = Position(x=target.x, y=target.y)

    def _handle_key_event(self, key_event: KeyEvent):
        # Clear status message on any keypress (except in prompt mode)
        if self.status_message and not self.prompt_mode:
            self.status_message = None

        if self._handle_prompt_mode(key_event):
            return

        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            return

        if self.command_registry.execute(self, key_event):
            self.modified = True

    def _handle_prompt_mode(self, key_event: KeyEvent) -> bool:
        """Handle input while a prompt is showing.

        Returns:
            True if in prompt mode and the event was consumed
        """
        if self.prompt_mode in ('save_filename', 'save_filename_quit', 'goto_line'):
            self._handle_text_prompt(key_event)
            return True
        if self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
            return True
        return False

    def _handle_text_prompt(self, key_event: KeyEvent):
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):
            self.prompt_mode = None
            self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                self._submit_prompt()
            self.prompt_mode = None
            self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR and ord(key_event.value[0]) >= 32:
            self.prompt_input += key_event.value

    def _submit_prompt(self):
        if self.prompt_mode == 'goto_line':
            self.goto_line(self.prompt_input)
            return
        if self.save_file(self.prompt_input):
            self.status_message = EditorConstants.SAVED_MESSAGE.format(self.prompt_input)
            if self.prompt_mode == 'save_filename_quit':
                self.running = False

    def _handle_quit_confirm(self, key_event: KeyEvent):
        if key_event.key_type != KeyType.REGULAR:
            return
        char = key_event.value.lower()
        if char == 'y':
            if self.filename:
                if self.save_file():
                    self.running = False
                self.prompt_mode = None
            else:
                self.prompt_mode = 'save_filename_quit'
                self.prompt_input = ""
        elif char == 'n':
            self.running = False
            self.prompt_mode = None
        else:
            self.prompt_mode = None

    def _handle_save(self):
        if self.filename:
            if self.save_file():
                self.status_message = EditorConstants.SAVED_MESSAGE.format(self.filename)
        else:
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""

    # --- Cursor movement ---

    def _current_row_len(self) -> int:
        row = self.document.get_row(self.cursor.y)
        return len(row) if row is not None else 0

    def _clamp_cursor(self):
        self.cursor.y = clamp(self.cursor.y, saturating_sub(self.document.num_rows(), 1))
        self.cursor.x = clamp(self.cursor.x, self._current_row_len())

    def move_left(self):
        if self.cursor.x > 0:
            self.cursor.x -= 1
        elif self.cursor.y > 0:
            self.cursor.y -= 1
            self.cursor.x = self._current_row_len()

    def move_right(self):
        if self.cursor.x < self._current_row_len():
            self.cursor.x += 1
        elif self.cursor.y + 1 < self.document.num_rows():
            self.cursor.y += 1
            self.cursor.x = 0

    def move_up(self):
        self.cursor.y = saturating_sub(self.cursor.y, 1)
        self._clamp_cursor()

    def move_down(self):
        self.cursor.y += 1
        self._clamp_cursor()

    def move_home(self):
        self.cursor.x = 0

    def move_end(self):
        """Move past the last character; on long rows the drawn cursor stops at the edge."""
        self.cursor.x = self._current_row_len()

    def page_up(self):
        self.cursor.y = saturating_sub(self.cursor.y, max(self.view.num_rows, 1))
        self._clamp_cursor()

    def page_down(self):
        self.cursor.y += max(self.view.num_rows, 1)
        self._clamp_cursor()

    def goto_line(self, text: str):
        """Move to the start of a 1-based line number."""
        try:
            line_number = int(text)
        except ValueError:
            self.status_message = EditorConstants.BAD_LINE_MESSAGE.format(text)
            return
        if line_number < 0 or self.document.row_for_line_number(line_number) is None:
            self.status_message = EditorConstants.BAD_LINE_MESSAGE.format(text)
            return
        self.cursor = Position(x=0, y=saturating_sub(line_number, 1))

    # --- Edits ---

    def insert_char(self, char: str):
        self.document.insert(char, self.cursor.x, self.cursor.y)
        self.cursor.x += 1

    def insert_newline(self):
        rows_before = self.document.num_rows()
        self.document.insert_newline(self.cursor.x, self.cursor.y)
        if self.document.num_rows() > rows_before:
            self.cursor = Position(x=0, y=self.cursor.y + 1)

    def backspace(self):
        """Delete before the cursor, joining lines at a line start."""
        if self.cursor.x == 0 and self.cursor.y == 0:
            return
        if self.cursor.x == 0:
            previous_len = len(self.document.get_row(self.cursor.y - 1))
            self.document.delete(0, self.cursor.y)
            self.cursor = Position(x=previous_len, y=self.cursor.y - 1)
        else:
            self.document.delete(self.cursor.x, self.cursor.y)
            self.cursor.x -= 1

    def delete_row(self):
        self.document.delete_row(self.cursor)
        self._clamp_cursor()

    # --- Misc ---

    def show_word_count(self):
        self.status_message = EditorConstants.WORD_COUNT_MESSAGE.format(self.document.num_words())

    def toggle_line_numbers(self):
        self.view.show_line_numbers = not self.view.show_line_numbers
