"""Filesystem checks for path-valued configuration keys.

Purpose
-------
Implement the :class:`lib_flat_config.application.ports.PathValidator`
protocol. This adapter is the only place that touches the filesystem while
validating accessor results; the coercion engine only normalises paths.

Contents
--------
* :class:`DefaultPathValidator` – existence and kind checks that name the
  offending property key in their errors.
"""

from __future__ import annotations

from pathlib import Path

from ...domain.errors import NotFound, PathKindMismatch
from ...observability import log_debug


class DefaultPathValidator:
    """Validate resolved paths against the kind a property promises."""

    def require_existing_dir(self, path: Path, key: str) -> Path:
        """Return *path* when it is an existing directory.

        Raises
        ------
        NotFound
            When nothing exists at *path*.
        PathKindMismatch
            When *path* exists but is not a directory.
        """

        if not path.exists():
            raise NotFound(f"Directory must exist for property '{key}': {path}")
        return self.require_dir_if_exists(path, key)

    def require_existing_file(self, path: Path, key: str) -> Path:
        """Return *path* when it is an existing regular file."""

        if not path.exists():
            raise NotFound(f"File must exist for property '{key}': {path}")
        return self.require_file_if_exists(path, key)

    def require_dir_if_exists(self, path: Path, key: str) -> Path:
        """Return *path* unless it exists and is not a directory."""

        if path.exists() and not path.is_dir():
            raise PathKindMismatch(f"property '{key}' must be a directory: {path}")
        log_debug("path_validated", key=key, path=str(path), kind="directory")
        return path

    def require_file_if_exists(self, path: Path, key: str) -> Path:
        """Return *path* unless it exists and is not a regular file."""

        if path.exists() and not path.is_file():
            raise PathKindMismatch(f"property '{key}' must be a regular file: {path}")
        log_debug("path_validated", key=key, path=str(path), kind="file")
        return path
