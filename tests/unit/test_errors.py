from __future__ import annotations

import pytest

from lib_flat_config.core import StoreLoadError
from lib_flat_config.domain.errors import (
    CoercionTypeError,
    ConfigError,
    DuplicateListIndex,
    InvalidArgument,
    InvalidDelimiter,
    InvalidFormat,
    InvalidKeyPrefix,
    MissingRequired,
    NotFound,
    NumericOverflow,
    NumericParseError,
    PathKindMismatch,
    PatternCompileError,
    RangeViolation,
    UnconsumedKeys,
    UriParseError,
    UuidParseError,
)


def test_error_hierarchy() -> None:
    for error_cls in (
        InvalidArgument,
        InvalidKeyPrefix,
        InvalidDelimiter,
        MissingRequired,
        CoercionTypeError,
        NumericOverflow,
        NumericParseError,
        RangeViolation,
        PatternCompileError,
        UriParseError,
        UuidParseError,
        PathKindMismatch,
        DuplicateListIndex,
        UnconsumedKeys,
        InvalidFormat,
        NotFound,
        StoreLoadError,
    ):
        assert issubclass(error_cls, ConfigError)


@pytest.mark.parametrize(
    ("error_cls", "builtin"),
    [
        (MissingRequired, KeyError),
        (CoercionTypeError, TypeError),
        (NumericOverflow, ValueError),
        (NumericParseError, ValueError),
        (RangeViolation, ValueError),
        (PatternCompileError, ValueError),
        (UriParseError, ValueError),
        (UuidParseError, ValueError),
        (DuplicateListIndex, ValueError),
        (InvalidKeyPrefix, InvalidArgument),
        (InvalidDelimiter, InvalidArgument),
        (InvalidArgument, ValueError),
    ],
)
def test_value_shaped_errors_share_builtin_bases(error_cls: type, builtin: type) -> None:
    assert issubclass(error_cls, builtin)


def test_missing_required_renders_plain_message() -> None:
    error = MissingRequired("server.port")
    assert str(error) == "property required: 'server.port'"
    assert error.key == "server.port"


def test_coercion_type_error_names_runtime_type() -> None:
    error = CoercionTypeError("flag", object(), "boolean")
    assert str(error) == "Failed to coerce type to boolean: key='flag', type=object"


def test_duplicate_list_index_names_index_and_prefix() -> None:
    error = DuplicateListIndex(15, "b")
    assert error.index == 15
    assert "index=15" in str(error)
    assert "keyPrefix='b'" in str(error)


def test_unconsumed_keys_lists_keys() -> None:
    error = UnconsumedKeys("Server", ["a", "b"])
    assert str(error) == "Unrecognized/Extra properties for type: Server -> ['a', 'b']"
    assert error.keys == ["a", "b"]
