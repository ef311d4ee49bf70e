"""Where the ``query`` command reads its SQL from.

``-e`` text wins over a file argument, which wins over piped stdin.
A file argument of ``-`` reads stdin explicitly, even from a terminal.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from pg_relay.core.exceptions import InputError

STDIN_PATH = "-"


def stdin_is_terminal(stream: TextIO | None = None) -> bool:
    stream = sys.stdin if stream is None else stream
    try:
        return stream.isatty()
    except (ValueError, AttributeError):
        # closed or replaced streams count as piped
        return False


def read_query_text(
    execute: str | None,
    path: str | None,
    stdin: TextIO | None = None,
) -> str:
    """Return the SQL to run, or raise InputError when there is none."""
    stdin = sys.stdin if stdin is None else stdin
    if execute is not None:
        return execute
    if path == STDIN_PATH:
        return stdin.read()
    if path is not None:
        return _read_query_file(Path(path))
    if stdin_is_terminal(stdin):
        raise InputError("No query provided. Use -e, a file path, '-' or pipe to stdin.")
    return stdin.read()


def _read_query_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise InputError(f"Query file not found: {path}") from e
    except IsADirectoryError as e:
        raise InputError(f"Query path is a directory: {path}") from e
    except UnicodeDecodeError as e:
        raise InputError(f"Query file is not valid UTF-8: {path}") from e
    except OSError as e:
        raise InputError(f"Cannot read query file {path}: {e.strerror}") from e
