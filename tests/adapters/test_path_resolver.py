"""Path resolver adapter tests exercising candidate discovery.

The scenarios mirror the documented search order below the working directory
and the ``LIB_FLAT_CONFIG_FILE`` override.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from lib_flat_config.adapters.path_resolvers.default import CONFIG_FILE_ENV, DefaultPathResolver
from lib_flat_config.domain.errors import InvalidArgument

NO_OVERRIDE = {CONFIG_FILE_ENV: ""}


def test_candidates_follow_documented_order(tmp_path: Path) -> None:
    resolver = DefaultPathResolver(cwd=tmp_path, env=NO_OVERRIDE)
    candidates = [Path(path) for path in resolver.candidates()]
    assert candidates == [
        tmp_path / "application.properties",
        tmp_path / "config" / "application.properties",
        tmp_path / "src" / "main" / "resources" / "application.properties",
    ]
    assert all(path.is_absolute() for path in candidates)


def test_env_override_is_the_only_candidate(tmp_path: Path) -> None:
    target = tmp_path / "custom" / "settings.toml"
    resolver = DefaultPathResolver(cwd=tmp_path, env={CONFIG_FILE_ENV: str(target)})
    assert resolver.candidates() == [str(target)]


def test_relative_override_resolves_against_cwd(tmp_path: Path) -> None:
    resolver = DefaultPathResolver(cwd=tmp_path, env={CONFIG_FILE_ENV: "conf/../app.yaml"})
    assert resolver.candidates() == [str(tmp_path / "app.yaml")]


def test_first_existing_skips_missing(tmp_path: Path) -> None:
    (tmp_path / "config").mkdir()
    present = tmp_path / "config" / "application.properties"
    present.write_text("a=1", encoding="utf-8")
    resolver = DefaultPathResolver(cwd=tmp_path, env=NO_OVERRIDE)
    assert resolver.first_existing(resolver.candidates()) == str(present.resolve())


def test_first_existing_returns_none_when_nothing_exists(tmp_path: Path) -> None:
    resolver = DefaultPathResolver(cwd=tmp_path, env=NO_OVERRIDE)
    assert resolver.first_existing(resolver.candidates()) is None


def test_first_existing_rejects_empty_candidates(tmp_path: Path) -> None:
    with pytest.raises(InvalidArgument):
        DefaultPathResolver(cwd=tmp_path).first_existing([])
