"""Environment adapter tests clarifying namespace flattening and pretty printing.

The scenarios cover prefix naming, key flattening, randomised inputs, and the
diagnostic rendering of the environment.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_flat_config.adapters.env.default import (
    DefaultEnvLoader,
    default_env_prefix,
    flat_key,
    pretty_print_env_vars,
)
from lib_flat_config.domain.errors import InvalidArgument


def test_default_env_prefix() -> None:
    """Slug values should become upper snake-case prefixes."""

    assert default_env_prefix("lib-flat-config") == "LIB_FLAT_CONFIG"


def test_env_loader_flattens_keys() -> None:
    """Keep values as strings while ignoring out-of-scope keys."""

    environ = {
        "LIB_FLAT_CONFIG_DB__HOST": "db.example.com",
        "LIB_FLAT_CONFIG_DB__PORT": "5432",
        "LIB_FLAT_CONFIG_FEATURE__ENABLED": "true",
        "LIB_FLAT_CONFIG_": "ignored",
        "OTHER": "ignored",
    }
    loader = DefaultEnvLoader(environ=environ)
    data = loader.load("LIB_FLAT_CONFIG")
    assert data == {"db.host": "db.example.com", "db.port": "5432", "feature.enabled": "true"}


def test_env_loader_accepts_prefix_with_trailing_underscore() -> None:
    loader = DefaultEnvLoader(environ={"DEMO_A": "1", "DEMOX_B": "2"})
    assert loader.load("DEMO_") == {"a": "1"}


def test_env_loader_respects_empty_environ() -> None:
    assert DefaultEnvLoader(environ={}).load("DEMO") == {}


SCALAR_VALUES = st.sampled_from(["0", "1", "true", "false", "3.5", "", "debug"])
NAMESPACE_KEYS = st.sampled_from(["SERVICE__TIMEOUT", "SERVICE__ENDPOINT", "LOGGING__LEVEL", "PLAIN"])


@given(st.dictionaries(NAMESPACE_KEYS, SCALAR_VALUES, max_size=4))
def test_env_loader_handles_random_namespace(entries: dict[str, str]) -> None:
    """Randomised namespace inputs should map to dotted lower-case keys with raw values."""

    prefix = "DEMO"
    environ = {f"{prefix}_" + key: value for key, value in entries.items()}
    environ["IGNORED"] = "1"
    payload = DefaultEnvLoader(environ=environ).load(prefix)
    assert payload == {flat_key(key): value for key, value in entries.items()}
    assert all(key == key.lower() for key in payload)


def test_pretty_print_sorts_skips_secrets_and_abbreviates() -> None:
    environ = {
        "ZETA": "z",
        "ALPHA": "a" * 20,
        "DB_PASSWORD": "secret",
        "my_pass_phrase": "secret",
        "EMPTY": "",
    }
    rendered = pretty_print_env_vars(max_length=10, environ=environ)
    assert rendered == "ALPHA = aaaaaaa...\nEMPTY = <null>\nZETA = z\n"


def test_pretty_print_custom_delimiter() -> None:
    assert pretty_print_env_vars(" | ", environ={"B": "2", "A": "1"}) == "A = 1 | B = 2 | "


def test_pretty_print_without_delimiter_runs_entries_together() -> None:
    assert pretty_print_env_vars(None, environ={"B": "2", "A": "1"}) == "A = 1B = 2"


def test_pretty_print_of_empty_environment_is_empty() -> None:
    assert pretty_print_env_vars(environ={"DB_PASSWORD": "x"}) == ""


def test_pretty_print_value_at_limit_is_not_abbreviated() -> None:
    assert pretty_print_env_vars(max_length=3, environ={"K": "abc"}) == "K = abc\n"
    assert pretty_print_env_vars(max_length=3, environ={"K": "abcd"}) == "K = abc\n"


@pytest.mark.parametrize("max_length", [0, -5])
def test_pretty_print_rejects_non_positive_length(max_length: int) -> None:
    with pytest.raises(InvalidArgument):
        pretty_print_env_vars(max_length=max_length, environ={})
