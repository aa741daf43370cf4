"""Indexed list decoder tests.

Covers ordering, sub-path extraction, duplicate detection, prefix validation,
warnings for gaps, and the consuming variant.
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_flat_config.application.indexed_list import (
    build_entries_for_prefix,
    decode_list,
    decode_list_and_consume,
    decode_list_by_index,
    filter_by_prefix,
)
from lib_flat_config.domain.entry import ConfigEntry
from lib_flat_config.domain.errors import DuplicateListIndex, InvalidArgument, InvalidKeyPrefix


def _warnings(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [record.getMessage() for record in caplog.records if record.levelno == logging.WARNING]


def test_decode_with_sub_paths() -> None:
    store = {"a.b[1].c.d": "bar", "a.b[0].c.d": "foo", "unrelated": "x"}
    assert decode_list(store, "a.b") == [
        ConfigEntry("a.b[0].c.d", "c.d", "foo"),
        ConfigEntry("a.b[1].c.d", "c.d", "bar"),
    ]


def test_decode_without_sub_path_sorts_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="lib_flat_config")
    store = {"a.b[8]": "baz", "a.b[4]": "quux"}
    decoded = decode_list_by_index(store, "a.b")
    assert list(decoded) == [4, 8]
    assert [(entry.short_key, entry.value) for entry in decoded.values()] == [("", "quux"), ("", "baz")]
    assert _warnings(caplog) == ["list_index_not_zero_based", "list_index_gap"]


def test_dense_zero_based_list_does_not_warn(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="lib_flat_config")
    decode_list({"x[0]": 1, "x[1]": 2, "x[2]": 3}, "x")
    assert _warnings(caplog) == []


def test_duplicate_index_is_rejected() -> None:
    store = {"b[15].c": "bar", "b[15].c.d": "quux"}
    with pytest.raises(DuplicateListIndex) as excinfo:
        decode_list(store, "b")
    assert excinfo.value.index == 15
    assert excinfo.value.key_prefix == "b"


def test_key_with_trailing_whitespace_fails_the_entry_invariant() -> None:
    store = {"a.b[0].c ": "x"}
    with pytest.raises(InvalidArgument, match="must end with"):
        decode_list(store, "a.b")
    with pytest.raises(InvalidArgument):
        decode_list_and_consume(store, "a.b")
    assert store == {"a.b[0].c ": "x"}


def test_non_matching_remainders_are_skipped() -> None:
    store = {"a.b": "y", "a.bc[0]": "z", "a.b.c": "w", "a.b[x]": "v", "a.b[0]": "ok"}
    assert [entry.value for entry in decode_list(store, "a.b")] == ["ok"]


def test_leading_zeros_share_an_index() -> None:
    with pytest.raises(DuplicateListIndex):
        decode_list({"a[1]": "x", "a[01]": "y"}, "a")


def test_empty_store_yields_empty_list() -> None:
    assert decode_list({}, "a.b") == []


@pytest.mark.parametrize("prefix", ["", "   ", " a.b", "a.b ", "a.b[", "a.b[0]"])
def test_invalid_prefixes(prefix: str) -> None:
    with pytest.raises(InvalidKeyPrefix):
        decode_list({"a.b[0]": 1}, prefix)


@given(st.dictionaries(st.integers(min_value=0, max_value=50), st.text(max_size=5), max_size=8))
def test_decode_is_pure_and_ordered(items: dict[int, str]) -> None:
    store = {f"p[{index}].v": value for index, value in items.items()}
    snapshot = dict(store)
    first = decode_list(store, "p")
    second = decode_list(store, "p")
    assert first == second
    assert store == snapshot
    assert [entry.full_key for entry in first] == [f"p[{index}].v" for index in sorted(items)]


def test_consume_removes_every_key_under_prefix() -> None:
    store = {"a.b[0]": "x", "a.b[1].c": "y", "a.b": "z", "a.bc": "w", "other": "o"}
    entries = decode_list_and_consume(store, "a.b")
    assert [entry.value for entry in entries] == ["x", "y"]
    assert store == {"other": "o"}
    assert decode_list(store, "a.b") == []


def test_consume_leaves_store_untouched_on_failure() -> None:
    store = {"b[1]": "x", "b[1].c": "y"}
    with pytest.raises(DuplicateListIndex):
        decode_list_and_consume(store, "b")
    assert store == {"b[1]": "x", "b[1].c": "y"}


def test_filter_by_prefix() -> None:
    store = {"a.b.c": 1, "a.bc": 2, "x": 3}
    assert filter_by_prefix(store, "a.b.") == {"a.b.c": 1}
    with pytest.raises(InvalidArgument):
        filter_by_prefix(store, " ")


def test_build_entries_for_prefix() -> None:
    store = {"a.b.c": "foo", "a.b.f.g": "quux", "hh": "aaa"}
    entries = build_entries_for_prefix(store, "a.b.")
    assert entries == {
        "c": ConfigEntry("a.b.c", "c", "foo"),
        "f.g": ConfigEntry("a.b.f.g", "f.g", "quux"),
    }
