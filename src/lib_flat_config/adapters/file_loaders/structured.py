"""Structured configuration file loaders.

Purpose
-------
Convert TOML, JSON and YAML documents into the flat store the accessors read
from. Nested tables become dotted keys and arrays become bracketed indexes, so
a document such as::

    [[servers]]
    host = "10.0.0.1"

yields ``{"servers[0].host": "10.0.0.1"}`` and decodes with
:func:`lib_flat_config.application.indexed_list.decode_list`.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`TOMLFileLoader`, :class:`JSONFileLoader`, :class:`YAMLFileLoader`.
* :func:`flatten` – nested mapping to flat store.

System Role
-----------
Invoked by :func:`lib_flat_config.core.load_store` for the matching suffixes.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[assignment]

import yaml

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by every file loader."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b"key = 'value'")
        >>> tmp.close()
        >>> BaseFileLoader()._read(tmp.name)[:3]
        b'key'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("config_file_read", path=path, source="file", size=len(payload))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileLoader._ensure_mapping(42, path="demo")
        Traceback (most recent call last):
        ...
        lib_flat_config.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser (``tomli`` before 3.11)."""

    def load(self, path: str) -> dict[str, object]:
        """Return the flattened store extracted from the TOML file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8', suffix='.toml')
        >>> _ = tmp.write('[db]\\nport = 5432\\n')
        >>> tmp.close()
        >>> TOMLFileLoader().load(tmp.name)
        {'db.port': 5432}
        >>> Path(tmp.name).unlink()
        """

        try:
            text = self._read(path).decode("utf-8")
            data = tomllib.loads(text)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            log_error("config_file_invalid", source="file", path=path, format="toml", error=str(exc))
            raise InvalidFormat(f"Invalid TOML in {path}: {exc}") from exc
        result = flatten(self._ensure_mapping(data, path=path))
        log_debug("config_file_loaded", source="file", path=path, format="toml", keys=len(result))
        return result


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    def load(self, path: str) -> dict[str, object]:
        """Return the flattened store extracted from the JSON file at *path*."""

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("config_file_invalid", source="file", path=path, format="json", error=str(exc))
            raise InvalidFormat(f"Invalid JSON in {path}: {exc}") from exc
        result = flatten(self._ensure_mapping(data, path=path))
        log_debug("config_file_loaded", source="file", path=path, format="json", keys=len(result))
        return result


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents with ``yaml.safe_load``."""

    def load(self, path: str) -> dict[str, object]:
        """Return the flattened store extracted from the YAML file at *path*.

        An empty document yields an empty store.
        """

        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            log_error("config_file_invalid", source="file", path=path, format="yaml", error=str(exc))
            raise InvalidFormat(f"Invalid YAML in {path}: {exc}") from exc
        if data is None:
            data = {}
        result = flatten(self._ensure_mapping(data, path=path))
        log_debug("config_file_loaded", source="file", path=path, format="yaml", keys=len(result))
        return result


def flatten(data: Mapping[str, object]) -> dict[str, object]:
    """Flatten nested mappings and sequences into dotted/bracketed keys.

    Empty tables and arrays contribute no keys.

    Examples
    --------
    >>> flatten({"a": {"b": [{"c": 1}, {"c": 2}], "d": "x"}})
    {'a.b[0].c': 1, 'a.b[1].c': 2, 'a.d': 'x'}
    >>> flatten({"ports": [80, 443]})
    {'ports[0]': 80, 'ports[1]': 443}
    """

    out: dict[str, object] = {}
    for key, value in data.items():
        _flatten_into(out, str(key), value)
    return out


def _flatten_into(out: dict[str, object], key: str, value: object) -> None:
    if isinstance(value, Mapping):
        for child, nested in value.items():
            _flatten_into(out, f"{key}.{child}", nested)
    elif isinstance(value, (list, tuple)):
        for index, nested in enumerate(value):
            _flatten_into(out, f"{key}[{index}]", nested)
    else:
        out[key] = value
