"""Indexed list decoding over a flat key space.

Purpose
-------
Reconstruct ordered lists encoded as ``<prefix>[<index>]<.suffix>`` keys, for
example::

    queue.workers[0].host=10.0.0.1
    queue.workers[1].host=10.0.0.2

Contents
--------
* :func:`decode_list` – ordered :class:`ConfigEntry` list for a prefix.
* :func:`decode_list_by_index` – the same entries keyed by their index.
* :func:`decode_list_and_consume` – decode, then drop every key under the
  prefix from the store.
* :func:`filter_by_prefix` / :func:`build_entries_for_prefix` – plain prefix
  selections without index parsing.

System Role
-----------
Each call is a single stateless pass: filter by prefix, match the remainder,
reject duplicate indexes, sort, warn about gaps, return. Values are never
coerced; callers feed them through the accessor facade if needed.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping
from typing import Final

from ..domain.entry import ConfigEntry
from ..domain.errors import DuplicateListIndex, InvalidArgument, InvalidKeyPrefix
from ..observability import log_debug, log_warning

#: Remainder after the prefix: ``[digits]``, an optional dot, then anything.
AFTER_LIST_PREFIX: Final[re.Pattern[str]] = re.compile(r"\[([0-9]+)\](\.)?(.*)")


def decode_list(store: Mapping[str, object], key_prefix: str) -> list[ConfigEntry]:
    """Return the entries of the list stored under *key_prefix* in ascending index order.

    Why
    ----
    Flat stores (properties files, environment variables) cannot express
    arrays directly; the bracketed index convention does.

    What
    ----
    Keys starting with *key_prefix* whose remainder is not ``[n]`` optionally
    followed by ``.`` and a sub-path are skipped silently, so ``a.b=y`` does
    not interfere with decoding ``a.b[0]``.

    Raises
    ------
    InvalidKeyPrefix
        When *key_prefix* is blank, untrimmed, or ends with ``[`` or ``]``.
    DuplicateListIndex
        When two keys resolve to the same index.
    InvalidArgument
        When a matching store key carries trailing whitespace (``"a.b[0].c "``);
        the entry cannot end with its own trimmed short key.

    Examples
    --------
    >>> store = {"a.b[1].c.d": "bar", "a.b[0].c.d": "foo", "a.b": "y"}
    >>> [(e.short_key, e.value) for e in decode_list(store, "a.b")]
    [('c.d', 'foo'), ('c.d', 'bar')]
    """

    return list(decode_list_by_index(store, key_prefix).values())


def decode_list_by_index(store: Mapping[str, object], key_prefix: str) -> dict[int, ConfigEntry]:
    """Return ``{index: entry}`` in ascending index order.

    Gaps and a non-zero first index are logged as warnings
    (``list_index_not_zero_based`` / ``list_index_gap``) but do not fail.

    Examples
    --------
    >>> decoded = decode_list_by_index({"a.b[8]": "baz", "a.b[4]": "quux"}, "a.b")
    >>> [(index, entry.value) for index, entry in decoded.items()]
    [(4, 'quux'), (8, 'baz')]
    """

    _check_list_prefix(key_prefix)

    by_index: dict[int, ConfigEntry] = {}
    for key, value in store.items():
        if not key.startswith(key_prefix):
            continue
        match = AFTER_LIST_PREFIX.fullmatch(key[len(key_prefix) :])
        if match is None:
            continue

        index = int(match.group(1))
        if index in by_index:
            raise DuplicateListIndex(index, key_prefix)
        by_index[index] = ConfigEntry(full_key=key, short_key=match.group(3), value=value)

    if not by_index:
        return {}

    ordered = dict(sorted(by_index.items()))
    _warn_on_anomalies(ordered, key_prefix)
    return ordered


def decode_list_and_consume(store: MutableMapping[str, object], key_prefix: str) -> list[ConfigEntry]:
    """Decode like :func:`decode_list`, then remove every key starting with *key_prefix*.

    Side Effects
    ------------
    Mutates *store*. Removal is broader than the matched keys: leftovers such
    as ``a.b`` or ``a.b.c`` under prefix ``a.b`` are cleared too. Nothing is
    removed when decoding fails.

    Examples
    --------
    >>> store = {"a.b[0]": "x", "a.b": "y", "other": "z"}
    >>> [entry.value for entry in decode_list_and_consume(store, "a.b")]
    ['x']
    >>> store
    {'other': 'z'}
    """

    entries = decode_list(store, key_prefix)
    doomed = [key for key in store if key.startswith(key_prefix)]
    for key in doomed:
        del store[key]
    log_debug("list_consumed", prefix=key_prefix, entries=len(entries), removed=len(doomed))
    return entries


def filter_by_prefix(store: Mapping[str, object], key_prefix: str) -> dict[str, object]:
    """Copy every item whose key starts with *key_prefix* into a new ``dict``.

    Examples
    --------
    >>> filter_by_prefix({"a.b.c": 1, "a.bc": 2, "x": 3}, "a.b.")
    {'a.b.c': 1}
    """

    _check_trimmed_prefix(key_prefix, InvalidArgument)
    return {key: value for key, value in store.items() if key.startswith(key_prefix)}


def build_entries_for_prefix(store: Mapping[str, object], key_prefix: str) -> dict[str, ConfigEntry]:
    """Return entries under *key_prefix* keyed by their stripped short key.

    Examples
    --------
    >>> entries = build_entries_for_prefix({"a.b.c": "foo", "a.b.f.g": "quux", "hh": "aaa"}, "a.b.")
    >>> sorted(entries)
    ['c', 'f.g']
    >>> entries["f.g"].full_key
    'a.b.f.g'
    """

    _check_trimmed_prefix(key_prefix, InvalidArgument)
    out: dict[str, ConfigEntry] = {}
    for key, value in store.items():
        if not key.startswith(key_prefix):
            continue
        entry = ConfigEntry(full_key=key, short_key=key[len(key_prefix) :], value=value)
        out[entry.short_key] = entry
    return out


def _check_list_prefix(key_prefix: str) -> None:
    _check_trimmed_prefix(key_prefix, InvalidKeyPrefix)
    if key_prefix.endswith("]"):
        raise InvalidKeyPrefix("keyPrefix must not end with ']'")
    if key_prefix.endswith("["):
        raise InvalidKeyPrefix("keyPrefix must not end with '['")


def _check_trimmed_prefix(key_prefix: str, error_cls: type[InvalidArgument]) -> None:
    if not isinstance(key_prefix, str) or not key_prefix.strip():
        raise error_cls("keyPrefix is required")
    if key_prefix != key_prefix.strip():
        raise error_cls("keyPrefix must be trimmed")


def _warn_on_anomalies(ordered: Mapping[int, ConfigEntry], key_prefix: str) -> None:
    indexes = list(ordered)
    min_index, max_index = indexes[0], indexes[-1]
    if min_index != 0:
        log_warning("list_index_not_zero_based", prefix=key_prefix, min_index=min_index)
    if max_index != len(indexes) - 1:
        log_warning("list_index_gap", prefix=key_prefix, size=len(indexes), max_index=max_index)
