"""Composition root for ``lib_flat_config``.

Purpose
-------
Provide the entry points that turn a configuration file into a flat store:
pick a loader by suffix, discover the file when no path is given, and surface
adapter failures through the domain error taxonomy.

Contents
--------
* :data:`_LOADERS` – mapping of file suffixes to loader instances.
* :class:`StoreLoadError` – error raised when a file cannot be materialised.
* :func:`load_store` – load one explicit file.
* :func:`read_store` – discover and load the first existing candidate file.
* :func:`read_env_store` – flat store built from prefixed environment
  variables.

System Role
-----------
This module connects the file, environment and path adapters while emitting
structured observability signals. It is the canonical location for wiring new
formats.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from .adapters.env.default import DefaultEnvLoader, default_env_prefix
from .adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, YAMLFileLoader
from .adapters.path_resolvers.default import DefaultPathResolver
from .adapters.properties.default import PropertiesFileLoader
from .application.ports import StoreLoader
from .domain.errors import ConfigError, InvalidFormat, NotFound
from .observability import bind_trace_id, log_debug, log_error, log_info, make_event

# Supported loaders keyed by suffix.
_LOADERS: dict[str, StoreLoader] = {
    ".properties": PropertiesFileLoader(),
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}

SUPPORTED_SUFFIXES: tuple[str, ...] = tuple(_LOADERS)


class StoreLoadError(ConfigError):
    """Raised when a configuration file cannot be turned into a store.

    Why
    ----
    The composition root needs to surface adapter failures using the domain
    error taxonomy so callers can catch a single exception family.

    What
    -----
    Wraps :class:`InvalidFormat`, :class:`NotFound` or :class:`OSError` with the
    offending path. The original exception is chained as ``__cause__``.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to load configuration file {path}: {reason}")


def load_store(path: str | Path) -> dict[str, object]:
    """Load the file at *path* into a new, caller-owned flat store.

    Why
    ----
    Callers want a ``dict`` they can hand to the accessors (and consume from)
    without caring about the file format.

    What
    ----
    Selects a loader by the lower-cased suffix (see :data:`SUPPORTED_SUFFIXES`)
    and returns a fresh ``dict`` on every call.

    Raises
    ------
    StoreLoadError
        When the suffix is unsupported, the file is missing or unreadable, or
        its content is malformed.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "app.properties"
    >>> _ = target.write_text("server.port=8080\\n", encoding="utf-8")
    >>> load_store(target)
    {'server.port': '8080'}
    >>> tmp.cleanup()
    """

    path_str = str(path)
    suffix = Path(path_str).suffix.lower()
    loader = _LOADERS.get(suffix)
    if loader is None:
        log_error("store_unsupported_format", **make_event("file", path_str, {"suffix": suffix}))
        raise StoreLoadError(path_str, f"unsupported file suffix {suffix!r}")
    try:
        data = loader.load(path_str)
    except (InvalidFormat, NotFound, OSError) as exc:
        log_error("store_load_failed", **make_event("file", path_str, {"error": str(exc)}))
        raise StoreLoadError(path_str, str(exc)) from exc
    store = dict(data)
    log_info("store_loaded", **make_event(suffix.lstrip("."), path_str, {"keys": len(store)}))
    return store


def read_store(start_dir: str | Path | None = None, *, env: Mapping[str, str] | None = None) -> dict[str, object]:
    """Discover the configuration file and load it.

    What
    ----
    Asks :class:`DefaultPathResolver` for candidates below *start_dir* (or the
    current directory), honouring ``LIB_FLAT_CONFIG_FILE``, and loads the first
    existing one. Returns an empty store when nothing exists.

    Side Effects
    ------------
    Clears the active trace identifier via :func:`bind_trace_id`.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> read_store(tmp.name, env={"LIB_FLAT_CONFIG_FILE": ""})
    {}
    >>> _ = (Path(tmp.name) / "application.properties").write_text("a=1", encoding="utf-8")
    >>> read_store(tmp.name, env={"LIB_FLAT_CONFIG_FILE": ""})
    {'a': '1'}
    >>> tmp.cleanup()
    """

    bind_trace_id(None)
    resolver = DefaultPathResolver(cwd=Path(start_dir) if start_dir else None, env=env)
    found = resolver.first_existing(resolver.candidates())
    if found is None:
        log_info("store_empty", **make_event("discovery", None, {"cwd": str(resolver.cwd)}))
        return {}
    return load_store(found)


def read_env_store(slug: str, *, environ: Mapping[str, str] | None = None) -> dict[str, object]:
    """Return a flat store from environment variables prefixed for *slug*.

    Examples
    --------
    >>> read_env_store("demo-app", environ={"DEMO_APP_DB__PORT": "5432", "HOME": "/root"})
    {'db.port': '5432'}
    """

    prefix = default_env_prefix(slug)
    store = DefaultEnvLoader(environ=environ).load(prefix)
    log_debug("store_loaded", **make_event("env", None, {"prefix": prefix, "keys": len(store)}))
    return store


__all__ = [
    "StoreLoadError",
    "SUPPORTED_SUFFIXES",
    "default_env_prefix",
    "load_store",
    "read_env_store",
    "read_store",
]
