"""termrow CLI entry point.

Allows running via `python -m termrow` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import importlib.metadata
import logging
import os
import sys

from .constants import EditorConstants


def get_version_string() -> str:
    try:
        return importlib.metadata.version("termrow")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def _configure_logging() -> None:
    # The screen belongs to the editor, so logs only ever go to a file
    log_file = os.environ.get(EditorConstants.LOG_FILE_ENV)
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


def main(argv: list[str] | None = None) -> int:
    # Very small arg parsing: version flag and an optional filename
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0

    _configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if args:
        try:
            editor.load_file(args[0])
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error loading file: {e}", file=sys.stderr)
            return 1
    editor.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
