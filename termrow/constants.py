"""Constants and configuration for the termrow editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Screen layout
    RESERVED_BAR_ROWS = 2  # Status bar + message bar below the text area
    GUTTER_SEPARATOR_WIDTH = 1  # Blank column between line numbers and text

    # Input
    ESCAPE_SEQUENCE_TIMEOUT = 0.05  # Wait for the rest of a split mouse report (seconds)

    # Mouse reporting: X10 button events with SGR extended coordinates
    MOUSE_ENABLE = "\x1b[?1000h\x1b[?1006h"
    MOUSE_DISABLE = "\x1b[?1006l\x1b[?1000l"

    # Line terminator written after every row on save
    LINE_TERMINATOR = b"\n"

    # Colors (RGB) for the status bar
    STATUS_BG_COLOR = (63, 63, 63)
    STATUS_FG_COLOR = (239, 239, 239)

    # Environment variable naming a log file
    LOG_FILE_ENV = "TERMROW_LOG"

    # Status messages
    HELP_MESSAGE = "Ctrl-S save | Ctrl-Q quit | Ctrl-L go to line | Ctrl-N line numbers"
    NO_NAME = "[No Name]"
    SAVED_MESSAGE = "Saved to {}"
    SAVE_ERROR_MESSAGE = "Error: Cannot save to {}"
    WORD_COUNT_MESSAGE = "Word count: {}"
    BAD_LINE_MESSAGE = "No such line: {}"
