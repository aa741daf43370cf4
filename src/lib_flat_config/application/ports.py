"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts that adapters must satisfy so the accessor
facade and the composition root can orchestrate behaviour without depending on
concrete implementations.

Contents
--------
* :class:`StoreLoader` – parses a configuration artifact into a flat store.
* :class:`EnvLoader` – materialises process environment variables.
* :class:`PathResolver` – yields candidate configuration file paths.
* :class:`PathValidator` – checks existence and kind of path-valued keys.

System Role
-----------
These protocols enforce Dependency Inversion (DIP). Each adapter implements one
protocol so the application layer can request behaviour via abstraction and
tests can substitute fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Protocol, runtime_checkable


@runtime_checkable
class StoreLoader(Protocol):
    """Parse a configuration file into a flat ``key -> value`` mapping.

    Why
    ----
    Segregate parsing concerns (properties, TOML, JSON, YAML) from the typed
    accessors, which only ever see the flat mapping.
    """

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a flat mapping or raise ``InvalidFormat``/``NotFound``."""


@runtime_checkable
class EnvLoader(Protocol):
    """Translate process environment variables into a flat store."""

    def load(self, prefix: str) -> Mapping[str, object]:
        """Return variables that match *prefix* with dotted, lower-case keys."""


@runtime_checkable
class PathResolver(Protocol):
    """Discover candidate configuration files.

    Methods
    -------
    :meth:`candidates`
        Ordered, absolute candidate paths.
    :meth:`first_existing`
        First candidate that exists on disk, or ``None``.
    """

    def candidates(self) -> Iterable[str]:
        """Yield candidate configuration paths in search order."""

    def first_existing(self, candidates: Iterable[str]) -> str | None:
        """Return the first existing candidate, or ``None`` when none exists."""


@runtime_checkable
class PathValidator(Protocol):
    """Validate that a resolved path is of the kind a property promises."""

    def require_existing_dir(self, path: Path, key: str) -> Path:
        """Return *path* when it is an existing directory."""

    def require_existing_file(self, path: Path, key: str) -> Path:
        """Return *path* when it is an existing regular file."""

    def require_dir_if_exists(self, path: Path, key: str) -> Path:
        """Return *path* unless it exists and is not a directory."""

    def require_file_if_exists(self, path: Path, key: str) -> Path:
        """Return *path* unless it exists and is not a regular file."""
