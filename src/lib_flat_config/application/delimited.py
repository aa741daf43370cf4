"""Delimited collection parsing.

Purpose
-------
Turn a single stored string such as ``"1024, 80,,443,"`` into a typed list.
Splitting is literal (no regular expressions) and trailing empty pieces are
always absorbed, so a trailing delimiter never produces an empty element.

Contents
--------
* :func:`check_delimiter` – validates the caller-supplied delimiter.
* :func:`split_delimited` – literal split with trailing-empty suppression.
* :func:`parse_strings`, :func:`parse_ints`, :func:`parse_longs`,
  :func:`parse_doubles`, :func:`parse_bytes`, :func:`parse_ports` – typed
  element parsers.

System Role
-----------
Used by the ``get_delimited_*`` / ``consume_delimited_*`` accessors after the
raw value has been read with optional-string semantics.
"""

from __future__ import annotations

import re
from typing import Callable, TypeVar

from ..domain.errors import InvalidDelimiter, NumericParseError
from .coercion import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN, check_byte, check_port, parse_integral

T = TypeVar("T")

DEFAULT_DELIMITER = ","
# Decimal literal with optional exponent and float/double suffix, or the named specials.
_DECIMAL_TEXT = re.compile(r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)")


def check_delimiter(delim: str) -> None:
    """Reject blank delimiters and delimiters containing a decimal point.

    Examples
    --------
    >>> check_delimiter(";")
    >>> check_delimiter(".")
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.InvalidDelimiter: delim must not contain a decimal point
    """

    if not isinstance(delim, str) or not delim.strip():
        raise InvalidDelimiter("delim is required")
    if "." in delim:
        raise InvalidDelimiter("delim must not contain a decimal point")


def split_delimited(text: str | None, delim: str) -> list[str]:
    """Split *text* on the literal *delim*, drop trailing empty pieces, strip the rest.

    Leading and inner empty pieces survive (as empty strings); callers decide
    whether to drop blanks.

    Examples
    --------
    >>> split_delimited("a,b,", ",")
    ['a', 'b']
    >>> split_delimited(",foo, bar", ",")
    ['', 'foo', 'bar']
    >>> split_delimited("", ",")
    []
    """

    if not text:
        return []
    pieces = text.split(delim)
    while pieces and pieces[-1] == "":
        pieces.pop()
    return [piece.strip() for piece in pieces]


def parse_strings(text: str | None, delim: str = DEFAULT_DELIMITER, *, remove_blanks: bool = False) -> list[str]:
    """Return the stripped pieces of *text*, optionally without blank ones.

    Examples
    --------
    >>> parse_strings("foo,  bar,,quux,", remove_blanks=True)
    ['foo', 'bar', 'quux']
    >>> parse_strings("foo,  bar,,quux,")
    ['foo', 'bar', '', 'quux']
    """

    check_delimiter(delim)
    pieces = split_delimited(_non_blank(text), delim)
    if remove_blanks:
        return [piece for piece in pieces if piece]
    return pieces


def parse_ints(text: str | None, delim: str = DEFAULT_DELIMITER, *, key: str) -> list[int]:
    """Return 32-bit integers parsed from the non-blank pieces of *text*."""

    return _parse_each(
        text,
        delim,
        lambda piece: parse_integral(piece, key=key, target="int", low=INT_MIN, high=INT_MAX),
    )


def parse_longs(text: str | None, delim: str = DEFAULT_DELIMITER, *, key: str) -> list[int]:
    """Return 64-bit integers parsed from the non-blank pieces of *text*."""

    return _parse_each(
        text,
        delim,
        lambda piece: parse_integral(piece, key=key, target="long", low=LONG_MIN, high=LONG_MAX),
    )


def parse_doubles(text: str | None, delim: str = DEFAULT_DELIMITER, *, key: str) -> list[float]:
    """Return floats parsed from the non-blank pieces of *text*.

    Pieces must be plain decimal literals; ``NaN`` and ``Infinity`` are the only
    spelled-out values. Python extras such as ``1_0`` or ``inf`` are rejected.

    Examples
    --------
    >>> parse_doubles(",,1.1, ,,  2.2,", key="k")
    [1.1, 2.2]
    >>> parse_doubles("1e3,-Infinity,2.5d", key="k")
    [1000.0, -inf, 2.5]
    """

    def _to_float(piece: str) -> float:
        if not piece.isascii() or not _DECIMAL_TEXT.fullmatch(piece):
            raise NumericParseError(key, piece, "double")
        return float(piece.rstrip("fFdD"))

    return _parse_each(text, delim, _to_float)


def parse_bytes(text: str | None, delim: str = DEFAULT_DELIMITER, *, key: str, radix: int = 10) -> bytes:
    """Return unsigned bytes parsed in *radix*; every value must lie in ``[0, 255]``.

    Pieces are read as 64-bit numbers first so out-of-range values surface as
    :class:`RangeViolation` rather than as an overflow.

    Examples
    --------
    >>> list(parse_bytes("133,0, 44,67,255 ", key="k"))
    [133, 0, 44, 67, 255]
    >>> parse_bytes("ff,10", key="k", radix=16)
    b'\\xff\\x10'
    """

    numbers = _parse_each(
        text,
        delim,
        lambda piece: parse_integral(piece, key=key, target="byte", low=LONG_MIN, high=LONG_MAX, radix=radix),
    )
    return bytes(check_byte(number, key=key) for number in numbers)


def parse_ports(text: str | None, delim: str = DEFAULT_DELIMITER, *, key: str) -> list[int]:
    """Return de-duplicated ports in first-seen order, range-checked in that order.

    Examples
    --------
    >>> parse_ports("1024,80,80,80,, 8080,443,,,65535,,", key="k")
    [1024, 80, 8080, 443, 65535]
    """

    ports = parse_ints(text, delim, key=key)
    unique = list(dict.fromkeys(ports))
    return [check_port(port, key=key) for port in unique]


def _parse_each(text: str | None, delim: str, convert: Callable[[str], T]) -> list[T]:
    check_delimiter(delim)
    return [convert(piece) for piece in split_delimited(_non_blank(text), delim) if piece]


def _non_blank(text: str | None) -> str | None:
    if text is None or not text.strip():
        return None
    return text.strip()
