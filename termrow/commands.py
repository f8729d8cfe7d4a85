"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._move(editor, key_event)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""


class LeftCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.move_right()


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.move_down()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.move_home()


class EndOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.move_end()


class PageUpCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.page_up()


class PageDownCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.page_down()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._edit(editor, key_event)
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.backspace()


class DeleteRowCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.delete_row()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_newline()


class InsertTextCommand(EditorCommand):
    def execute(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if len(char) != 1 or (ord(char) < 32 and char != '\t'):
            return False
        editor.insert_char(char)
        return True


class SystemCommand(EditorCommand):
    """Base class for commands that leave the document alone."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        if editor.modified:
            editor.prompt_mode = 'quit_confirm'
        else:
            editor.running = False


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor._handle_save()


class WordCountCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.show_word_count()


class GotoLineCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.prompt_mode = 'goto_line'
        editor.prompt_input = ""


class ToggleLineNumbersCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.toggle_line_numbers()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())
        self.register((KeyType.CTRL, 'a'), BeginningOfLineCommand())
        self.register((KeyType.CTRL, 'e'), EndOfLineCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.CTRL, 'k'), DeleteRowCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'w'), WordCountCommand())
        self.register((KeyType.CTRL, 'l'), GotoLineCommand())
        self.register((KeyType.CTRL, 'n'), ToggleLineNumbersCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
