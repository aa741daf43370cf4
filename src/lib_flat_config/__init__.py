"""Public package surface for ``lib_flat_config``.

Typed accessors, the indexed list decoder and the store loaders are re-exported
here so callers can write::

    from lib_flat_config import load_store, get_required_port, get_list

Everything else (adapters, coercion helpers) stays importable from its module
but is not part of the stable surface.
"""

from __future__ import annotations

from .accessors import (
    consume_delimited_bytes,
    consume_delimited_doubles,
    consume_delimited_ints,
    consume_delimited_longs,
    consume_delimited_ports,
    consume_delimited_strings,
    consume_list,
    consume_optional_boolean,
    consume_optional_int,
    consume_optional_long,
    consume_optional_port,
    consume_optional_regex,
    consume_optional_string,
    consume_optional_uri,
    consume_required_boolean,
    consume_required_dir_path,
    consume_required_existing_dir_path,
    consume_required_existing_file_path,
    consume_required_file_path,
    consume_required_int,
    consume_required_long,
    consume_required_path,
    consume_required_port,
    consume_required_regex,
    consume_required_string,
    consume_required_uri,
    consume_required_uuid,
    get_delimited_bytes,
    get_delimited_doubles,
    get_delimited_ints,
    get_delimited_longs,
    get_delimited_ports,
    get_delimited_strings,
    get_list,
    get_optional_boolean,
    get_optional_int,
    get_optional_long,
    get_optional_port,
    get_optional_regex,
    get_optional_string,
    get_optional_uri,
    get_required_boolean,
    get_required_dir_path,
    get_required_existing_dir_path,
    get_required_existing_file_path,
    get_required_file_path,
    get_required_int,
    get_required_long,
    get_required_path,
    get_required_port,
    get_required_regex,
    get_required_string,
    get_required_uri,
    get_required_uuid,
    require_fully_consumed,
)
from .adapters.env.default import pretty_print_env_vars
from .application.coercion import MAX_PORT, MIN_PORT, TRUTHY_VALUES
from .application.indexed_list import (
    build_entries_for_prefix,
    decode_list,
    decode_list_and_consume,
    decode_list_by_index,
    filter_by_prefix,
)
from .core import StoreLoadError, default_env_prefix, load_store, read_env_store, read_store
from .domain.entry import ConfigEntry
from .domain.errors import (
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
from .observability import bind_trace_id, get_logger

__all__ = [
    # store loading
    "load_store",
    "read_store",
    "read_env_store",
    "default_env_prefix",
    "pretty_print_env_vars",
    # list decoding
    "ConfigEntry",
    "decode_list",
    "decode_list_by_index",
    "decode_list_and_consume",
    "filter_by_prefix",
    "build_entries_for_prefix",
    # constants
    "TRUTHY_VALUES",
    "MIN_PORT",
    "MAX_PORT",
    # accessors
    "get_optional_boolean",
    "get_optional_int",
    "get_optional_long",
    "get_optional_string",
    "get_optional_uri",
    "get_optional_port",
    "get_optional_regex",
    "get_required_boolean",
    "get_required_int",
    "get_required_long",
    "get_required_string",
    "get_required_uri",
    "get_required_path",
    "get_required_dir_path",
    "get_required_file_path",
    "get_required_existing_dir_path",
    "get_required_existing_file_path",
    "get_required_port",
    "get_required_regex",
    "get_required_uuid",
    "get_delimited_strings",
    "get_delimited_ints",
    "get_delimited_longs",
    "get_delimited_doubles",
    "get_delimited_bytes",
    "get_delimited_ports",
    "get_list",
    "consume_optional_boolean",
    "consume_optional_int",
    "consume_optional_long",
    "consume_optional_string",
    "consume_optional_uri",
    "consume_optional_port",
    "consume_optional_regex",
    "consume_required_boolean",
    "consume_required_int",
    "consume_required_long",
    "consume_required_string",
    "consume_required_uri",
    "consume_required_path",
    "consume_required_dir_path",
    "consume_required_file_path",
    "consume_required_existing_dir_path",
    "consume_required_existing_file_path",
    "consume_required_port",
    "consume_required_regex",
    "consume_required_uuid",
    "consume_delimited_strings",
    "consume_delimited_ints",
    "consume_delimited_longs",
    "consume_delimited_doubles",
    "consume_delimited_bytes",
    "consume_delimited_ports",
    "consume_list",
    "require_fully_consumed",
    # errors
    "ConfigError",
    "InvalidArgument",
    "InvalidKeyPrefix",
    "InvalidDelimiter",
    "MissingRequired",
    "CoercionTypeError",
    "NumericOverflow",
    "NumericParseError",
    "RangeViolation",
    "PatternCompileError",
    "UriParseError",
    "UuidParseError",
    "PathKindMismatch",
    "DuplicateListIndex",
    "UnconsumedKeys",
    "InvalidFormat",
    "NotFound",
    "StoreLoadError",
    # observability
    "bind_trace_id",
    "get_logger",
]
