"""
Line-oriented INI reader with inih-compatible behaviour.

The daemon's config files are written for the inih C library, so this
reader keeps its rules rather than those of ``configparser``:

  - repeated keys are delivered one by one (``whitelist=`` lists rely on it)
  - ``;`` and ``#`` start whole-line comments, ``;`` after whitespace starts
    an inline comment
  - an indented line continues the previous key and is delivered again
    under that key's name
  - a bad line is remembered and parsing goes on; the number of the first
    bad line (1-based) is returned, 0 when every line was fine

Handlers are called as ``handler(section, name, value)`` and return a
truthy value on success; a falsy return marks the line as bad.
"""

from __future__ import annotations

import io
from typing import Callable, Iterable, Optional, TextIO

IniHandlerFn = Callable[[str, str, str], object]

_BOM = "\ufeff"
_INLINE_COMMENT_PREFIXES = ";"
_WHITESPACE = " \t\n\v\f\r"


def _find_chars_or_comment(text: str, chars: Optional[str]) -> int:
    """Index of the first char of ``chars`` or of an inline comment, else len(text)."""
    was_space = False
    for i, ch in enumerate(text):
        if chars and ch in chars:
            return i
        if was_space and ch in _INLINE_COMMENT_PREFIXES:
            return i
        was_space = ch in _WHITESPACE
    return len(text)


def parse_ini_lines(lines: Iterable[str], handler: IniHandlerFn) -> int:
    section = ""
    prev_name = ""
    error = 0

    for lineno, raw in enumerate(lines, start=1):
        line = raw
        if lineno == 1 and line.startswith(_BOM):
            line = line[len(_BOM):]

        stripped = line.rstrip(_WHITESPACE)
        start = stripped.lstrip(_WHITESPACE)
        indented = len(start) < len(stripped)

        if start.startswith((";", "#")):
            continue

        if prev_name and start and indented:
            # continuation of the previous value
            value = start[: _find_chars_or_comment(start, None)].rstrip(_WHITESPACE)
            if not handler(section, prev_name, value) and not error:
                error = lineno
        elif start.startswith("["):
            end = _find_chars_or_comment(start[1:], "]") + 1
            if end < len(start) and start[end] == "]":
                section = start[1:end]
                prev_name = ""
            elif not error:
                error = lineno
        elif start:
            end = _find_chars_or_comment(start, "=:")
            if end < len(start) and start[end] in "=:":
                name = start[:end].rstrip(_WHITESPACE)
                value = start[end + 1:]
                value = value[: _find_chars_or_comment(value, None)].strip(_WHITESPACE)
                prev_name = name
                if not handler(section, name, value) and not error:
                    error = lineno
            elif not error:
                error = lineno

    return error


def parse_ini_file(stream: TextIO, handler: IniHandlerFn) -> int:
    """Parse an open text stream; see module docstring for the rules."""
    return parse_ini_lines(stream, handler)


def parse_ini_string(text: str, handler: IniHandlerFn) -> int:
    # same newline handling as a file opened in text mode
    return parse_ini_lines(io.StringIO(text, newline=None), handler)


__all__ = ["parse_ini_file", "parse_ini_string", "parse_ini_lines", "IniHandlerFn"]
