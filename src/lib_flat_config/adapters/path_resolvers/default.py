"""Filesystem path resolution for configuration files.

Purpose
-------
Implement the :class:`lib_flat_config.application.ports.PathResolver`
protocol by encapsulating the search rules for ``application.properties``.
The adapter is the only component that knows where configuration files are
conventionally placed.

Contents
--------
* :data:`CONFIG_FILE_ENV` – environment variable naming an explicit file.
* :data:`CANDIDATE_LOCATIONS` – relative locations searched below ``cwd``.
* :class:`DefaultPathResolver` – resolves candidates and picks the first
  existing one.

System Role
-----------
Feeds deterministic path lists into :func:`lib_flat_config.core.read_store`.
It respects an environment override (for tests and custom deployments) while
emitting observability events about discovered paths.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping

from ...domain.errors import InvalidArgument
from ...observability import log_debug

CONFIG_FILE_ENV = "LIB_FLAT_CONFIG_FILE"

CANDIDATE_LOCATIONS: tuple[str, ...] = (
    "application.properties",
    os.path.join("config", "application.properties"),
    os.path.join("src", "main", "resources", "application.properties"),
)


class DefaultPathResolver:
    """Resolve candidate configuration file paths.

    Why
    ----
    Centralise path discovery so the composition root stays agnostic of
    filesystem conventions and easy to test.
    """

    def __init__(self, *, cwd: Path | None = None, env: Mapping[str, str] | None = None) -> None:
        """Store the context required to resolve filesystem locations.

        Parameters
        ----------
        cwd:
            Base directory for the relative candidate locations. Defaults to
            :func:`pathlib.Path.cwd`.
        env:
            Optional environment mapping that overrides ``os.environ`` values
            (useful for deterministic tests).
        """

        self.cwd = cwd or Path.cwd()
        self.env = {**os.environ, **(env or {})}

    def candidates(self) -> list[str]:
        """Return absolute, normalised, de-duplicated candidate paths in search order.

        When :data:`CONFIG_FILE_ENV` is set to a non-blank value, that path is
        the only candidate.

        Examples
        --------
        >>> resolver = DefaultPathResolver(cwd=Path("/srv/app"), env={CONFIG_FILE_ENV: ""})
        >>> [Path(p).relative_to("/srv/app").as_posix() for p in resolver.candidates()]
        ['application.properties', 'config/application.properties', 'src/main/resources/application.properties']
        """

        override = self.env.get(CONFIG_FILE_ENV, "").strip()
        if override:
            paths = [_normalise(self.cwd / override)]
            log_debug("path_candidates", source="env", path=paths[0], variable=CONFIG_FILE_ENV)
            return paths

        paths = list(dict.fromkeys(_normalise(self.cwd / location) for location in CANDIDATE_LOCATIONS))
        log_debug("path_candidates", source="cwd", path=str(self.cwd), count=len(paths))
        return paths

    def first_existing(self, candidates: Iterable[str]) -> str | None:
        """Return the first candidate that exists on disk, normalised, or ``None``.

        Raises
        ------
        InvalidArgument
            When *candidates* is empty.

        Examples
        --------
        >>> from tempfile import TemporaryDirectory
        >>> tmp = TemporaryDirectory()
        >>> present = Path(tmp.name) / "b.properties"
        >>> _ = present.write_text("a=1", encoding="utf-8")
        >>> resolver = DefaultPathResolver(cwd=Path(tmp.name))
        >>> resolver.first_existing([str(Path(tmp.name) / "a.properties"), str(present)]) == str(present.resolve())
        True
        >>> resolver.first_existing([str(Path(tmp.name) / "missing")]) is None
        True
        >>> tmp.cleanup()
        """

        candidate_list = list(candidates)
        if not candidate_list:
            raise InvalidArgument("candidates must not be empty")
        for candidate in candidate_list:
            path = Path(candidate)
            if path.exists():
                found = str(path.resolve())
                log_debug("path_selected", source="filesystem", path=found)
                return found
        log_debug("path_not_found", source="filesystem", path=None, checked=len(candidate_list))
        return None


def _normalise(path: Path) -> str:
    return os.path.normpath(os.path.abspath(path))
