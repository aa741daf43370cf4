"""Lenient coercion of raw stored values into typed results.

Purpose
-------
Convert a value of unknown concrete type (``bool``, number, ``str``, ``None``
or an opaque object) into the type a caller asked for. Every function here is
pure: it receives the raw value plus the key it came from (for messages) and
either returns the converted value, returns the supplied default when the value
is absent, or raises a :mod:`lib_flat_config.domain.errors` exception.

Contents
--------
* :data:`TRUTHY_VALUES` – strings treated as boolean ``True``.
* :func:`is_absent` – presence rule shared by every coercion.
* :func:`coerce_bool`, :func:`coerce_int`, :func:`coerce_long`,
  :func:`coerce_str`, :func:`coerce_uri`, :func:`coerce_path`,
  :func:`coerce_port`, :func:`coerce_pattern` – one function per target type.
* :func:`parse_integral`, :func:`parse_uri`, :func:`parse_uuid`,
  :func:`compile_pattern`, :func:`check_port`, :func:`check_byte` – text and
  range helpers reused by the delimited collection parsers.

System Role
-----------
The accessor facade applies required/optional policy on top of these
functions; the delimited collection module reuses the text helpers.

Leniency rules kept on purpose
------------------------------
* Numbers coerce to booleans by ``int(value) == 1``; any other number is
  ``False`` rather than an error.
* The string path never rejects a type: non-``str`` values are rendered with
  ``str()``. The numeric and boolean paths reject unknown types. Tests pin
  this asymmetry.
"""

from __future__ import annotations

import math
import numbers
import os
import re
import uuid
from decimal import Decimal
from pathlib import Path
from typing import Final
from urllib.parse import SplitResult, urlsplit

from ..domain.errors import (
    CoercionTypeError,
    NumericOverflow,
    NumericParseError,
    PatternCompileError,
    RangeViolation,
    UriParseError,
    UuidParseError,
)

TRUTHY_VALUES: Final[frozenset[str]] = frozenset({"1", "on", "t", "true", "y", "yes"})
"""Lower-case strings that coerce to ``True``; everything else is ``False``."""

INT_MIN: Final[int] = -(2**31)
INT_MAX: Final[int] = 2**31 - 1
LONG_MIN: Final[int] = -(2**63)
LONG_MAX: Final[int] = 2**63 - 1

#: https://datatracker.ietf.org/doc/html/rfc1340
MAX_PORT: Final[int] = 0xFFFF
#: Zero lets the operating system pick a port.
MIN_PORT: Final[int] = 0

MIN_BYTE: Final[int] = 0
MAX_BYTE: Final[int] = 0xFF

_INTEGRAL_TEXT = re.compile(r"[+-]?[0-9A-Za-z]+")
_CANONICAL_UUID = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
# Characters RFC 3986 never allows unescaped.
_URI_FORBIDDEN = re.compile(r'[\s"<>\\^`{|}\x00-\x1f\x7f]')
_URI_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def is_absent(value: object) -> bool:
    """Return ``True`` for ``None`` and for strings that are blank after stripping.

    Examples
    --------
    >>> is_absent(None), is_absent("  "), is_absent(""), is_absent(0), is_absent("x")
    (True, True, True, False, False)
    """

    return value is None or (isinstance(value, str) and not value.strip())


def coerce_bool(value: object, *, key: str, default: bool | None = None) -> bool | None:
    """Interpret *value* as a boolean.

    ``bool`` passes through; real numbers are ``True`` only when ``int(value)``
    equals ``1``; strings are stripped, lower-cased and looked up in
    :data:`TRUTHY_VALUES`. Unrecognised strings are ``False``, never an error.

    Examples
    --------
    >>> coerce_bool(" YES ", key="k"), coerce_bool("false", key="k"), coerce_bool("garbage", key="k")
    (True, False, False)
    >>> coerce_bool(1, key="k"), coerce_bool(2, key="k"), coerce_bool(1.7, key="k")
    (True, False, True)
    >>> coerce_bool("", key="k", default=True)
    True
    """

    if is_absent(value):
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, numbers.Integral):
        return int(value) == 1
    if isinstance(value, (numbers.Real, Decimal)):
        if not math.isfinite(value):
            return False
        return int(value) == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_VALUES
    raise CoercionTypeError(key, value, "boolean")


def coerce_int(value: object, *, key: str, default: int | None = None) -> int | None:
    """Interpret *value* as a signed 32-bit integer.

    Examples
    --------
    >>> coerce_int(" 42 ", key="k"), coerce_int(7, key="k"), coerce_int(None, key="k", default=3)
    (42, 7, 3)
    >>> coerce_int(2**40, key="k")
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.NumericOverflow: value overflow for int: key='k', value=1099511627776
    """

    return _coerce_integral(value, key=key, default=default, target="int", low=INT_MIN, high=INT_MAX)


def coerce_long(value: object, *, key: str, default: int | None = None) -> int | None:
    """Interpret *value* as a signed 64-bit integer."""

    return _coerce_integral(value, key=key, default=default, target="long", low=LONG_MIN, high=LONG_MAX)


def _coerce_integral(
    value: object,
    *,
    key: str,
    default: int | None,
    target: str,
    low: int,
    high: int,
) -> int | None:
    if is_absent(value):
        return default
    # bool is an Integral subclass but never a number here
    if isinstance(value, bool):
        raise CoercionTypeError(key, value, target)
    if isinstance(value, numbers.Integral):
        return _check_width(int(value), key=key, target=target, low=low, high=high)
    if isinstance(value, str):
        return parse_integral(value, key=key, target=target, low=low, high=high)
    raise CoercionTypeError(key, value, target)


def parse_integral(
    text: str,
    *,
    key: str,
    target: str = "int",
    low: int = INT_MIN,
    high: int = INT_MAX,
    radix: int = 10,
) -> int:
    """Parse *text* as an integer literal in *radix* and check it fits ``[low, high]``.

    Only ASCII digits/letters with an optional sign are accepted; Python's
    extras (underscores, non-ASCII digits) are rejected.

    Examples
    --------
    >>> parse_integral("-12", key="k")
    -12
    >>> parse_integral("ff", key="k", radix=16)
    255
    >>> parse_integral("1_000", key="k")
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.NumericParseError: Failed to parse int: key='k', value='1_000'
    """

    stripped = text.strip()
    if not stripped.isascii() or not _INTEGRAL_TEXT.fullmatch(stripped):
        raise NumericParseError(key, stripped, target)
    try:
        number = int(stripped, radix)
    except ValueError as exc:
        raise NumericParseError(key, stripped, target) from exc
    return _check_width(number, key=key, target=target, low=low, high=high)


def _check_width(number: int, *, key: str, target: str, low: int, high: int) -> int:
    if number < low or number > high:
        raise NumericOverflow(key, number, target)
    return number


def coerce_str(value: object, *, key: str, default: str | None = None) -> str | None:
    """Return the stripped string, *default* when blank, or ``str(value)`` for other types.

    Examples
    --------
    >>> coerce_str("  padded  ", key="k")
    'padded'
    >>> coerce_str("   ", key="k", default="fallback")
    'fallback'
    >>> coerce_str(42, key="k")
    '42'
    """

    if value is None:
        return default
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else default
    return str(value)


def parse_uri(text: str, *, key: str) -> SplitResult:
    """Parse *text* into a :class:`urllib.parse.SplitResult`, rejecting malformed syntax.

    Examples
    --------
    >>> parse_uri("https://example.com:8443/a?b=c", key="k").port
    8443
    >>> parse_uri("http://bad host/", key="k")
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.UriParseError: malformed URI for key='k': 'http://bad host/'
    """

    if _URI_FORBIDDEN.search(text) or _URI_BAD_ESCAPE.search(text):
        raise UriParseError(f"malformed URI for key='{key}': {text!r}")
    try:
        parts = urlsplit(text)
        # port is parsed lazily; touching it validates the authority
        parts.port
    except ValueError as exc:
        raise UriParseError(f"malformed URI for key='{key}': {text!r}") from exc
    return parts


def coerce_uri(
    value: object,
    *,
    key: str,
    default: str | SplitResult | None = None,
) -> SplitResult | None:
    """Interpret *value* as a URI.

    A ``str`` *default* is parsed only when the stored value is absent; a blank
    or ``None`` default then yields ``None``. An already parsed default is
    returned unchanged.
    """

    if is_absent(value):
        if isinstance(default, str):
            stripped = default.strip()
            return parse_uri(stripped, key=key) if stripped else None
        return default
    if not isinstance(value, str):
        raise CoercionTypeError(key, value, "uri")
    return parse_uri(value.strip(), key=key)


def coerce_path(value: object, *, key: str, default: Path | None = None) -> Path | None:
    """Interpret *value* as an absolute, normalised filesystem path (existence not checked).

    Examples
    --------
    >>> coerce_path("/tmp/../var/./log", key="k").as_posix()
    '/var/log'
    """

    if isinstance(value, os.PathLike):
        value = os.fspath(value)
    if is_absent(value):
        return default
    if not isinstance(value, str):
        raise CoercionTypeError(key, value, "path")
    return Path(os.path.abspath(value.strip()))


def check_port(port: int, *, key: str) -> int:
    """Return *port* when inside ``[MIN_PORT, MAX_PORT]``, else raise :class:`RangeViolation`.

    Examples
    --------
    >>> check_port(8080, key="k")
    8080
    >>> check_port(65536, key="k")
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.RangeViolation: port too high: key='k', port=65536, max=65535
    """

    if port < MIN_PORT:
        raise RangeViolation(f"port too low: key='{key}', port={port}, min={MIN_PORT}")
    if port > MAX_PORT:
        raise RangeViolation(f"port too high: key='{key}', port={port}, max={MAX_PORT}")
    return port


def coerce_port(value: object, *, key: str, default: int | None = None) -> int | None:
    """Coerce like :func:`coerce_int`, then range-check the result (defaults included)."""

    port = coerce_int(value, key=key, default=default)
    if port is None:
        return None
    return check_port(port, key=key)


def check_byte(number: int, *, key: str) -> int:
    """Return *number* when it is an unsigned byte, else raise :class:`RangeViolation`."""

    if number < MIN_BYTE or number > MAX_BYTE:
        raise RangeViolation(f"Byte value out of range: key='{key}', value={number}, range=[{MIN_BYTE}, {MAX_BYTE}]")
    return number


def compile_pattern(text: str, *, key: str) -> re.Pattern[str]:
    """Compile *text*, wrapping :class:`re.error` in :class:`PatternCompileError`."""

    try:
        return re.compile(text)
    except re.error as exc:
        raise PatternCompileError(f"failed to compile regex pattern for key='{key}': {exc}") from exc


def coerce_pattern(value: object, *, key: str, default: re.Pattern[str] | None = None) -> re.Pattern[str] | None:
    """Compile the string form of *value*, returning *default* when absent."""

    text = coerce_str(value, key=key)
    if text is None:
        return default
    return compile_pattern(text, key=key)


def parse_uuid(text: str, *, key: str) -> uuid.UUID:
    """Parse the canonical ``8-4-4-4-12`` hexadecimal form of a UUID.

    Examples
    --------
    >>> parse_uuid("123e4567-e89b-12d3-a456-426614174000", key="k").version
    1
    """

    stripped = text.strip()
    if not _CANONICAL_UUID.fullmatch(stripped):
        raise UuidParseError(f"invalid UUID for key='{key}': {stripped!r}")
    return uuid.UUID(stripped)
