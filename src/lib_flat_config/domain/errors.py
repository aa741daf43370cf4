"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the coercion engine, the indexed
list decoder, adapters, and consuming applications. The hierarchy lives in the
domain layer so every outer layer can raise and catch the same types.

Contents
--------
* :class:`ConfigError` – umbrella base class for all library failures.
* :class:`InvalidArgument` – caller passed a malformed argument (blank key,
  bad prefix, bad delimiter).
* :class:`MissingRequired` – a required key is absent or blank.
* Coercion failures: :class:`CoercionTypeError`, :class:`NumericOverflow`,
  :class:`NumericParseError`, :class:`RangeViolation`,
  :class:`PatternCompileError`, :class:`UriParseError`,
  :class:`UuidParseError`.
* List decoding: :class:`DuplicateListIndex`, :class:`InvalidKeyPrefix`.
* Collaborators: :class:`PathKindMismatch`, :class:`UnconsumedKeys`,
  :class:`InvalidFormat`, :class:`NotFound`.

System Role
-----------
Errors are raised at the point of detection and never recovered internally.
Value-shaped failures also inherit the matching builtin (``ValueError``,
``TypeError``, ``KeyError``) so callers may use idiomatic ``except`` clauses.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_flat_config``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidArgument(ConfigError, ValueError):
    """Raised when an argument supplied by the caller violates a precondition."""


class InvalidKeyPrefix(InvalidArgument):
    """Raised when a list key prefix is blank, untrimmed, or ends with a bracket."""


class InvalidDelimiter(InvalidArgument):
    """Raised when a collection delimiter is blank or contains a decimal point."""


class MissingRequired(ConfigError, KeyError):
    """Raised when a required key is absent or holds a blank value.

    ``KeyError`` renders its argument with ``repr``; the override keeps the
    human-readable message intact.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"property required: '{key}'")

    def __str__(self) -> str:
        return str(self.args[0])


class CoercionTypeError(ConfigError, TypeError):
    """Raised when the stored value's runtime type cannot become the target type."""

    def __init__(self, key: str, value: object, target: str) -> None:
        self.key = key
        self.value = value
        self.target = target
        super().__init__(f"Failed to coerce type to {target}: key='{key}', type={type(value).__name__}")


class NumericOverflow(ConfigError, ValueError):
    """Raised when an integral value does not fit the requested width."""

    def __init__(self, key: str, value: object, target: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"value overflow for {target}: key='{key}', value={value}")


class NumericParseError(ConfigError, ValueError):
    """Raised when text is not valid syntax for the requested numeric type."""

    def __init__(self, key: str, text: str, target: str) -> None:
        self.key = key
        self.text = text
        super().__init__(f"Failed to parse {target}: key='{key}', value={text!r}")


class RangeViolation(ConfigError, ValueError):
    """Raised when a number falls outside its domain (ports, bytes).

    The message always carries the offending value and the violated bound so
    operators can fix the configuration without a debugger.
    """


class PatternCompileError(ConfigError, ValueError):
    """Raised when a regular expression fails to compile; chains the ``re.error``."""


class UriParseError(ConfigError, ValueError):
    """Raised when text is not a syntactically valid URI."""


class UuidParseError(ConfigError, ValueError):
    """Raised when text is not a canonical UUID."""


class PathKindMismatch(ConfigError):
    """Raised when a path exists but is a file where a directory is expected, or vice versa."""


class DuplicateListIndex(ConfigError, ValueError):
    """Raised when two keys under one list prefix resolve to the same index.

    Why
    ----
    Keys such as ``b[15].c`` and ``b[15].c.d`` describe ambiguous structure for
    a single slot. Picking a winner would hide a half-edited configuration.
    """

    def __init__(self, index: int, key_prefix: str) -> None:
        self.index = index
        self.key_prefix = key_prefix
        super().__init__(f"duplicate index for list property: index={index}, keyPrefix='{key_prefix}'")


class UnconsumedKeys(ConfigError):
    """Raised when keys remain in a store that was expected to be fully consumed."""

    def __init__(self, target: str, keys: list[str]) -> None:
        self.target = target
        self.keys = keys
        super().__init__(f"Unrecognized/Extra properties for type: {target} -> {keys}")


class InvalidFormat(ConfigError):
    """Raised when an input artifact cannot be parsed into a flat store.

    Typical Sources
    ---------------
    The properties parser and the structured (TOML/JSON/YAML) loaders.
    """


class NotFound(ConfigError):
    """Represents a missing resource (configuration file, required directory or file)."""
