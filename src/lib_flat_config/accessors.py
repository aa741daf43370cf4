"""Typed accessors over a flat configuration store.

Purpose
-------
Give callers one function per ``(target type, policy)`` pair so reading a
configuration value is a single, validated call::

    port = get_required_port(store, "server.port")
    hosts = get_delimited_strings(store, "server.hosts", remove_blanks=True)
    workers = get_list(store, "queue.workers")

Contents
--------
* ``get_optional_*`` – return the coerced value, or the caller's default when
  the key is absent or blank. The default is returned as given.
* ``get_required_*`` – return the coerced value or raise
  :class:`MissingRequired`.
* ``get_delimited_*`` – split a single value into a typed list.
* :func:`get_list` – decode an indexed list (``prefix[i].suffix`` keys).
* ``consume_*`` – same as the matching getter, then remove the key from the
  store. Nothing is removed when the getter raises.
* :func:`require_fully_consumed` – fail when keys remain after consumption.

System Role
-----------
The facade applies presence policy; the conversions themselves live in
:mod:`lib_flat_config.application.coercion` and
:mod:`lib_flat_config.application.delimited`. Path kinds are checked through
the :class:`lib_flat_config.application.ports.PathValidator` port.
"""

from __future__ import annotations

import re
import uuid
from pathlib import Path
from typing import Final, Mapping, MutableMapping, TypeVar
from urllib.parse import SplitResult

from .adapters.filesystem.default import DefaultPathValidator
from .application import coercion, delimited
from .application.indexed_list import decode_list, decode_list_and_consume
from .application.ports import PathValidator
from .domain.entry import ConfigEntry
from .domain.errors import InvalidArgument, MissingRequired, UnconsumedKeys
from .observability import log_debug

T = TypeVar("T")

Store = Mapping[str, object]
MutableStore = MutableMapping[str, object]

_PATH_VALIDATOR: Final[PathValidator] = DefaultPathValidator()


# ---------------------------------------------------------------------------
# optional getters
# ---------------------------------------------------------------------------


def get_optional_boolean(store: Store, key: str, default: bool | None = None) -> bool | None:
    """Return the boolean stored under *key*, or *default* when absent.

    Examples
    --------
    >>> get_optional_boolean({"flag": " Yes "}, "flag")
    True
    >>> get_optional_boolean({"flag": "nope"}, "flag", True)
    False
    >>> get_optional_boolean({}, "flag", True)
    True
    """

    return coercion.coerce_bool(_lookup(store, key), key=key, default=default)


def get_optional_int(store: Store, key: str, default: int | None = None) -> int | None:
    """Return the 32-bit integer stored under *key*, or *default* when absent.

    Examples
    --------
    >>> get_optional_int({"retries": " 3 "}, "retries")
    3
    >>> get_optional_int({"retries": ""}, "retries", 5)
    5
    """

    return coercion.coerce_int(_lookup(store, key), key=key, default=default)


def get_optional_long(store: Store, key: str, default: int | None = None) -> int | None:
    """Return the 64-bit integer stored under *key*, or *default* when absent."""

    return coercion.coerce_long(_lookup(store, key), key=key, default=default)


def get_optional_string(store: Store, key: str, default: str | None = None) -> str | None:
    """Return the stripped string stored under *key*, or *default* when absent or blank.

    Non-string values are rendered with ``str()``.

    Examples
    --------
    >>> get_optional_string({"name": "  demo "}, "name")
    'demo'
    >>> get_optional_string({"name": 7}, "name")
    '7'
    >>> get_optional_string({"name": "   "}, "name", "fallback")
    'fallback'
    """

    return coercion.coerce_str(_lookup(store, key), key=key, default=default)


def get_optional_uri(
    store: Store,
    key: str,
    default: str | SplitResult | None = None,
) -> SplitResult | None:
    """Return the URI stored under *key*.

    A ``str`` *default* is only parsed when the stored value is absent.

    Examples
    --------
    >>> get_optional_uri({"url": "https://example.com/x"}, "url").netloc
    'example.com'
    >>> get_optional_uri({}, "url", "http://localhost:8080").port
    8080
    """

    return coercion.coerce_uri(_lookup(store, key), key=key, default=default)


def get_optional_port(store: Store, key: str, default: int | None = None) -> int | None:
    """Return the port stored under *key*, or *default*; both are range-checked."""

    return coercion.coerce_port(_lookup(store, key), key=key, default=default)


def get_optional_regex(store: Store, key: str, default: re.Pattern[str] | None = None) -> re.Pattern[str] | None:
    """Return the compiled pattern stored under *key*, or *default* when absent."""

    return coercion.coerce_pattern(_lookup(store, key), key=key, default=default)


# ---------------------------------------------------------------------------
# required getters
# ---------------------------------------------------------------------------


def get_required_boolean(store: Store, key: str) -> bool:
    """Return the boolean stored under *key*; raise :class:`MissingRequired` when absent."""

    return _require(get_optional_boolean(store, key), key)


def get_required_int(store: Store, key: str) -> int:
    """Return the 32-bit integer stored under *key*.

    Examples
    --------
    >>> get_required_int({"workers": "4"}, "workers")
    4
    >>> get_required_int({}, "workers")
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.MissingRequired: property required: 'workers'
    """

    return _require(get_optional_int(store, key), key)


def get_required_long(store: Store, key: str) -> int:
    """Return the 64-bit integer stored under *key*."""

    return _require(get_optional_long(store, key), key)


def get_required_string(store: Store, key: str) -> str:
    """Return the stripped, non-blank string stored under *key*."""

    return _require(get_optional_string(store, key), key)


def get_required_uri(store: Store, key: str) -> SplitResult:
    """Return the URI stored under *key*."""

    return _require(get_optional_uri(store, key), key)


def get_required_path(store: Store, key: str) -> Path:
    """Return the absolute, normalised path stored under *key* (existence not checked)."""

    return _require(coercion.coerce_path(_lookup(store, key), key=key), key)


def get_required_dir_path(store: Store, key: str) -> Path:
    """Return the path stored under *key*; if it exists it must be a directory."""

    return _PATH_VALIDATOR.require_dir_if_exists(get_required_path(store, key), key)


def get_required_file_path(store: Store, key: str) -> Path:
    """Return the path stored under *key*; if it exists it must be a regular file."""

    return _PATH_VALIDATOR.require_file_if_exists(get_required_path(store, key), key)


def get_required_existing_dir_path(store: Store, key: str) -> Path:
    """Return the path stored under *key*, which must be an existing directory."""

    return _PATH_VALIDATOR.require_existing_dir(get_required_path(store, key), key)


def get_required_existing_file_path(store: Store, key: str) -> Path:
    """Return the path stored under *key*, which must be an existing regular file."""

    return _PATH_VALIDATOR.require_existing_file(get_required_path(store, key), key)


def get_required_port(store: Store, key: str) -> int:
    """Return the port stored under *key*, range-checked to ``[0, 65535]``.

    Examples
    --------
    >>> get_required_port({"port": "65536"}, "port")
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.RangeViolation: port too high: key='port', port=65536, max=65535
    """

    return _require(get_optional_port(store, key), key)


def get_required_regex(store: Store, key: str) -> re.Pattern[str]:
    """Return the compiled pattern stored under *key*."""

    return coercion.compile_pattern(get_required_string(store, key), key=key)


def get_required_uuid(store: Store, key: str) -> uuid.UUID:
    """Return the UUID stored under *key* in canonical ``8-4-4-4-12`` form."""

    return coercion.parse_uuid(get_required_string(store, key), key=key)


# ---------------------------------------------------------------------------
# delimited getters
# ---------------------------------------------------------------------------


def get_delimited_strings(
    store: Store,
    key: str,
    delim: str = delimited.DEFAULT_DELIMITER,
    *,
    remove_blanks: bool = False,
) -> list[str]:
    """Return the stripped pieces of the value under *key*.

    Examples
    --------
    >>> get_delimited_strings({"hosts": "a, b,,c,"}, "hosts")
    ['a', 'b', '', 'c']
    >>> get_delimited_strings({"hosts": "a, b,,c,"}, "hosts", remove_blanks=True)
    ['a', 'b', 'c']
    >>> get_delimited_strings({}, "hosts")
    []
    """

    delimited.check_delimiter(delim)
    return delimited.parse_strings(get_optional_string(store, key), delim, remove_blanks=remove_blanks)


def get_delimited_ints(store: Store, key: str, delim: str = delimited.DEFAULT_DELIMITER) -> list[int]:
    """Return the 32-bit integers in the value under *key*, blanks skipped."""

    delimited.check_delimiter(delim)
    return delimited.parse_ints(get_optional_string(store, key), delim, key=key)


def get_delimited_longs(store: Store, key: str, delim: str = delimited.DEFAULT_DELIMITER) -> list[int]:
    """Return the 64-bit integers in the value under *key*, blanks skipped."""

    delimited.check_delimiter(delim)
    return delimited.parse_longs(get_optional_string(store, key), delim, key=key)


def get_delimited_doubles(store: Store, key: str, delim: str = delimited.DEFAULT_DELIMITER) -> list[float]:
    """Return the floats in the value under *key*, blanks skipped."""

    delimited.check_delimiter(delim)
    return delimited.parse_doubles(get_optional_string(store, key), delim, key=key)


def get_delimited_bytes(
    store: Store,
    key: str,
    delim: str = delimited.DEFAULT_DELIMITER,
    *,
    radix: int = 10,
) -> bytes:
    """Return the unsigned bytes in the value under *key*, parsed in *radix*."""

    delimited.check_delimiter(delim)
    return delimited.parse_bytes(get_optional_string(store, key), delim, key=key, radix=radix)


def get_delimited_ports(store: Store, key: str, delim: str = delimited.DEFAULT_DELIMITER) -> list[int]:
    """Return de-duplicated, range-checked ports in first-seen order.

    Examples
    --------
    >>> get_delimited_ports({"ports": "80, 443,80,"}, "ports")
    [80, 443]
    """

    delimited.check_delimiter(delim)
    return delimited.parse_ports(get_optional_string(store, key), delim, key=key)


def get_list(store: Store, key_prefix: str) -> list[ConfigEntry]:
    """Decode the indexed list stored under *key_prefix*.

    See :func:`lib_flat_config.application.indexed_list.decode_list`.
    """

    return decode_list(store, key_prefix)


# ---------------------------------------------------------------------------
# consuming variants
# ---------------------------------------------------------------------------


def consume_optional_boolean(store: MutableStore, key: str, default: bool | None = None) -> bool | None:
    return _consume(store, key, get_optional_boolean(store, key, default))


def consume_optional_int(store: MutableStore, key: str, default: int | None = None) -> int | None:
    return _consume(store, key, get_optional_int(store, key, default))


def consume_optional_long(store: MutableStore, key: str, default: int | None = None) -> int | None:
    return _consume(store, key, get_optional_long(store, key, default))


def consume_optional_string(store: MutableStore, key: str, default: str | None = None) -> str | None:
    """Read like :func:`get_optional_string`, then remove *key*.

    Examples
    --------
    >>> store = {"name": "demo", "other": "x"}
    >>> consume_optional_string(store, "name")
    'demo'
    >>> store
    {'other': 'x'}
    """

    return _consume(store, key, get_optional_string(store, key, default))


def consume_optional_uri(
    store: MutableStore,
    key: str,
    default: str | SplitResult | None = None,
) -> SplitResult | None:
    return _consume(store, key, get_optional_uri(store, key, default))


def consume_optional_port(store: MutableStore, key: str, default: int | None = None) -> int | None:
    return _consume(store, key, get_optional_port(store, key, default))


def consume_optional_regex(
    store: MutableStore,
    key: str,
    default: re.Pattern[str] | None = None,
) -> re.Pattern[str] | None:
    return _consume(store, key, get_optional_regex(store, key, default))


def consume_required_boolean(store: MutableStore, key: str) -> bool:
    return _consume(store, key, get_required_boolean(store, key))


def consume_required_int(store: MutableStore, key: str) -> int:
    return _consume(store, key, get_required_int(store, key))


def consume_required_long(store: MutableStore, key: str) -> int:
    return _consume(store, key, get_required_long(store, key))


def consume_required_string(store: MutableStore, key: str) -> str:
    return _consume(store, key, get_required_string(store, key))


def consume_required_uri(store: MutableStore, key: str) -> SplitResult:
    return _consume(store, key, get_required_uri(store, key))


def consume_required_path(store: MutableStore, key: str) -> Path:
    return _consume(store, key, get_required_path(store, key))


def consume_required_dir_path(store: MutableStore, key: str) -> Path:
    return _consume(store, key, get_required_dir_path(store, key))


def consume_required_file_path(store: MutableStore, key: str) -> Path:
    return _consume(store, key, get_required_file_path(store, key))


def consume_required_existing_dir_path(store: MutableStore, key: str) -> Path:
    return _consume(store, key, get_required_existing_dir_path(store, key))


def consume_required_existing_file_path(store: MutableStore, key: str) -> Path:
    return _consume(store, key, get_required_existing_file_path(store, key))


def consume_required_port(store: MutableStore, key: str) -> int:
    return _consume(store, key, get_required_port(store, key))


def consume_required_regex(store: MutableStore, key: str) -> re.Pattern[str]:
    return _consume(store, key, get_required_regex(store, key))


def consume_required_uuid(store: MutableStore, key: str) -> uuid.UUID:
    return _consume(store, key, get_required_uuid(store, key))


def consume_delimited_strings(
    store: MutableStore,
    key: str,
    delim: str = delimited.DEFAULT_DELIMITER,
    *,
    remove_blanks: bool = False,
) -> list[str]:
    return _consume(store, key, get_delimited_strings(store, key, delim, remove_blanks=remove_blanks))


def consume_delimited_ints(store: MutableStore, key: str, delim: str = delimited.DEFAULT_DELIMITER) -> list[int]:
    return _consume(store, key, get_delimited_ints(store, key, delim))


def consume_delimited_longs(store: MutableStore, key: str, delim: str = delimited.DEFAULT_DELIMITER) -> list[int]:
    return _consume(store, key, get_delimited_longs(store, key, delim))


def consume_delimited_doubles(
    store: MutableStore,
    key: str,
    delim: str = delimited.DEFAULT_DELIMITER,
) -> list[float]:
    return _consume(store, key, get_delimited_doubles(store, key, delim))


def consume_delimited_bytes(
    store: MutableStore,
    key: str,
    delim: str = delimited.DEFAULT_DELIMITER,
    *,
    radix: int = 10,
) -> bytes:
    return _consume(store, key, get_delimited_bytes(store, key, delim, radix=radix))


def consume_delimited_ports(store: MutableStore, key: str, delim: str = delimited.DEFAULT_DELIMITER) -> list[int]:
    return _consume(store, key, get_delimited_ports(store, key, delim))


def consume_list(store: MutableStore, key_prefix: str) -> list[ConfigEntry]:
    """Decode the list under *key_prefix*, then remove every key starting with it."""

    return decode_list_and_consume(store, key_prefix)


def require_fully_consumed(store: Store, target: type | str) -> None:
    """Raise :class:`UnconsumedKeys` when *store* still holds keys.

    Why
    ----
    Consuming every recognised key and then checking for leftovers turns
    misspelled or obsolete properties into loud failures instead of silently
    ignored settings.

    Parameters
    ----------
    target:
        The type being configured (its ``__name__`` is used) or a plain name.

    Examples
    --------
    >>> require_fully_consumed({}, "Server")
    >>> require_fully_consumed({"b": 1, "a": 2}, "Server")
    Traceback (most recent call last):
    ...
    lib_flat_config.domain.errors.UnconsumedKeys: Unrecognized/Extra properties for type: Server -> ['a', 'b']
    """

    name = target.__name__ if isinstance(target, type) else target
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgument("target is required")
    if store:
        raise UnconsumedKeys(name, sorted(store))


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _lookup(store: Store, key: str) -> object:
    if not isinstance(key, str) or not key.strip():
        raise InvalidArgument("key is required")
    return store.get(key)


def _require(value: T | None, key: str) -> T:
    if value is None:
        raise MissingRequired(key)
    return value


def _consume(store: MutableStore, key: str, value: T) -> T:
    removed = key in store
    store.pop(key, None)
    log_debug("key_consumed", key=key, removed=removed)
    return value
