"""``.properties`` adapter.

Purpose
-------
Parse the ``key=value`` text format used by ``java.util.Properties`` files into
a flat store. This is the canonical input format of the library: keys stay
exactly as written (dots and brackets included), values stay strings.

Contents
--------
* :class:`PropertiesFileLoader` – file adapter implementing ``StoreLoader``.
* :func:`parse_properties` – parser for in-memory text.
* Helpers (`_logical_lines`, `_split_pair`, `_unescape`) covering comments,
  line continuations, separators and escapes.

Format summary
--------------
* Lines whose first non-blank character is ``#`` or ``!`` are comments.
* The key ends at the first unescaped ``=``, ``:`` or whitespace; one
  separator plus surrounding whitespace is skipped before the value.
* A line ending in an odd number of backslashes continues on the next line;
  leading whitespace of the continuation is dropped.
* Escapes: ``\\t \\n \\r \\f \\uXXXX``; any other escaped character stands for
  itself. A later duplicate key replaces an earlier one.
"""

from __future__ import annotations

import re
from typing import Iterator

from ...domain.errors import InvalidFormat
from ...observability import log_debug, log_error
from ..file_loaders.structured import BaseFileLoader

_NEWLINE = re.compile(r"\r\n|\r|\n")
_BLANKS = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class PropertiesFileLoader(BaseFileLoader):
    """Load ``.properties`` files (UTF-8) into a flat ``dict[str, str]``."""

    def load(self, path: str) -> dict[str, object]:
        """Return the key/value pairs parsed from *path*.

        Raises
        ------
        NotFound
            When *path* is not an existing file.
        InvalidFormat
            When the file is not UTF-8 or holds a malformed ``\\u`` escape.

        Examples
        --------
        >>> from pathlib import Path
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8', suffix='.properties')
        >>> _ = tmp.write('a.b[0].c.d=foo\\n# comment\\nport: 8080\\n')
        >>> tmp.close()
        >>> PropertiesFileLoader().load(tmp.name)
        {'a.b[0].c.d': 'foo', 'port': '8080'}
        >>> Path(tmp.name).unlink()
        """

        try:
            text = self._read(path).decode("utf-8")
        except UnicodeDecodeError as exc:
            log_error("config_file_invalid", source="properties", path=path, error=str(exc))
            raise InvalidFormat(f"Invalid UTF-8 in {path}: {exc}") from exc
        data = parse_properties(text, source=path)
        log_debug("config_file_loaded", source="properties", path=path, keys=len(data))
        return dict(data)


def parse_properties(text: str, *, source: str = "<string>") -> dict[str, str]:
    """Parse properties *text* into a ``dict``.

    Examples
    --------
    >>> parse_properties("a=one, \\\\\\n   two, \\\\\\n   three,\\n")
    {'a': 'one, two, three,'}
    >>> parse_properties("key value\\nempty\\nescaped\\\\=key = v\\\\u00e9")
    {'key': 'value', 'empty': '', 'escaped=key': 'vé'}
    """

    result: dict[str, str] = {}
    for line_number, logical in _logical_lines(text):
        raw_key, raw_value = _split_pair(logical)
        key = _unescape(raw_key, source=source, line_number=line_number)
        result[key] = _unescape(raw_value, source=source, line_number=line_number)
    return result


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(first_line_number, logical_line)`` with comments and continuations resolved."""

    buffer: str | None = None
    start = 0
    for number, raw in enumerate(_NEWLINE.split(text), start=1):
        line = raw.lstrip(_BLANKS)
        if buffer is None:
            if not line or line[0] in "#!":
                continue
            buffer = ""
            start = number
        if _continues(line):
            buffer += line[:-1]
            continue
        yield start, buffer + line
        buffer = None
    if buffer is not None:
        yield start, buffer


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_pair(line: str) -> tuple[str, str]:
    """Split a logical line into raw (still escaped) key and value."""

    end = 0
    length = len(line)
    while end < length:
        char = line[end]
        if char == "\\":
            end += 2
            continue
        if char in _SEPARATORS or char in _BLANKS:
            break
        end += 1
    key = line[: min(end, length)]

    cursor = end
    while cursor < length and line[cursor] in _BLANKS:
        cursor += 1
    if cursor < length and line[cursor] in _SEPARATORS:
        cursor += 1
    while cursor < length and line[cursor] in _BLANKS:
        cursor += 1
    return key, line[cursor:]


def _unescape(raw: str, *, source: str, line_number: int) -> str:
    out: list[str] = []
    index = 0
    length = len(raw)
    while index < length:
        char = raw[index]
        if char != "\\":
            out.append(char)
            index += 1
            continue
        index += 1
        if index >= length:
            break
        char = raw[index]
        if char == "u":
            digits = raw[index + 1 : index + 5]
            if len(digits) != 4 or not set(digits) <= _HEX_DIGITS:
                log_error("properties_invalid_escape", source="properties", path=source, line=line_number)
                raise InvalidFormat(f"Malformed \\uxxxx encoding on line {line_number} in {source}")
            out.append(chr(int(digits, 16)))
            index += 5
            continue
        out.append(_ESCAPES.get(char, char))
        index += 1
    return "".join(out)
