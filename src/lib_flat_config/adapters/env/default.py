"""Environment variable adapter.

Purpose
-------
Translate process environment variables into a flat store and render the
environment for diagnostics.

Key behaviours
--------------
* Enforces a configurable prefix (``default_env_prefix``) so only relevant keys
  are captured.
* Supports ``__`` as a nesting delimiter (``DEMO_DB__PORT`` becomes
  ``db.port``). Values stay strings; the accessors coerce them.
* :func:`pretty_print_env_vars` lists the environment with secrets skipped and
  long values abbreviated.
* Emits structured logging via :mod:`lib_flat_config.observability`.
"""

from __future__ import annotations

import os
from typing import Mapping

from ...domain.errors import InvalidArgument
from ...observability import log_debug

_NULL_MARKER = "<null>"
_ELLIPSIS = "..."


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Why
    ----
    Namespacing prevents unrelated environment variables from leaking into the
    store.

    Parameters
    ----------
    slug:
        Package/application slug (typically ``kebab-case``).

    Returns
    -------
    str
        Upper-case prefix with dashes converted to underscores.

    Examples
    --------
    >>> default_env_prefix('lib-flat-config')
    'LIB_FLAT_CONFIG'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to the configuration namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str) -> dict[str, object]:
        """Return a flat store containing variables with the supplied *prefix*.

        Parameters
        ----------
        prefix:
            Prefix filter (upper-case). The loader appends ``_`` if missing.

        Returns
        -------
        dict[str, object]
            Lower-case dotted keys mapped to the raw string values.

        Side Effects
        ------------
        Emits ``env_variables_loaded`` debug events with the sorted keys.

        Examples
        --------
        >>> env = {
        ...     'DEMO_SERVICE__ENABLED': 'true',
        ...     'DEMO_SERVICE__RETRIES': '3',
        ...     'OTHER': 'x',
        ... }
        >>> DefaultEnvLoader(environ=env).load('DEMO')
        {'service.enabled': 'true', 'service.retries': '3'}
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            collected[flat_key(stripped)] = value
        log_debug("env_variables_loaded", source="env", path=None, keys=sorted(collected))
        return collected


def flat_key(name: str) -> str:
    """Convert an environment variable suffix into a dotted store key.

    Examples
    --------
    >>> flat_key('SERVICE__TIMEOUT')
    'service.timeout'
    >>> flat_key('LOG_LEVEL')
    'log_level'
    """

    return ".".join(part.lower() for part in name.split("__"))


def pretty_print_env_vars(
    delim: str | None = "\n",
    max_length: int = 80,
    *,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Render ``KEY = value`` entries for the environment, sorted by key.

    Every entry, the last included, is followed by *delim*; ``None`` means no
    separator at all.

    Keys whose lower-case form contains ``pass`` are skipped entirely. Values
    longer than *max_length* are cut to ``max_length - 3`` characters followed
    by ``...``; empty values render as ``<null>``.

    Raises
    ------
    InvalidArgument
        When *max_length* is smaller than ``1``.

    Examples
    --------
    >>> env = {'B': 'x' * 12, 'A': '', 'DB_PASSWORD': 'secret'}
    >>> print(pretty_print_env_vars(max_length=10, environ=env), end="")
    A = <null>
    B = xxxxxxx...
    """

    if max_length < 1:
        raise InvalidArgument(f"max_length must be at least 1: {max_length}")
    source = os.environ if environ is None else environ
    separator = delim or ""
    return "".join(
        f"{key} = {_abbreviate(source[key], max_length)}{separator}"
        for key in sorted(source)
        if "pass" not in key.lower()
    )


def _abbreviate(value: str, max_length: int) -> str:
    if not value:
        return _NULL_MARKER
    if len(value) <= max_length:
        return value
    if max_length <= len(_ELLIPSIS):
        return value[:max_length]
    return value[: max_length - len(_ELLIPSIS)] + _ELLIPSIS
