from __future__ import annotations

from pathlib import Path

import pytest

from lib_flat_config.adapters.filesystem.default import DefaultPathValidator
from lib_flat_config.domain.errors import NotFound, PathKindMismatch


@pytest.fixture()
def validator() -> DefaultPathValidator:
    return DefaultPathValidator()


@pytest.fixture()
def layout(tmp_path: Path) -> dict[str, Path]:
    directory = tmp_path / "data"
    directory.mkdir()
    regular = tmp_path / "app.properties"
    regular.write_text("a=1", encoding="utf-8")
    return {"dir": directory, "file": regular, "missing": tmp_path / "missing"}


def test_existing_dir(validator: DefaultPathValidator, layout: dict[str, Path]) -> None:
    assert validator.require_existing_dir(layout["dir"], "data.dir") == layout["dir"]
    with pytest.raises(NotFound, match="data.dir"):
        validator.require_existing_dir(layout["missing"], "data.dir")
    with pytest.raises(PathKindMismatch, match="must be a directory"):
        validator.require_existing_dir(layout["file"], "data.dir")


def test_existing_file(validator: DefaultPathValidator, layout: dict[str, Path]) -> None:
    assert validator.require_existing_file(layout["file"], "cfg") == layout["file"]
    with pytest.raises(NotFound, match="cfg"):
        validator.require_existing_file(layout["missing"], "cfg")
    with pytest.raises(PathKindMismatch, match="must be a regular file"):
        validator.require_existing_file(layout["dir"], "cfg")


def test_kind_checks_allow_missing_paths(validator: DefaultPathValidator, layout: dict[str, Path]) -> None:
    assert validator.require_dir_if_exists(layout["missing"], "k") == layout["missing"]
    assert validator.require_file_if_exists(layout["missing"], "k") == layout["missing"]
    with pytest.raises(PathKindMismatch):
        validator.require_dir_if_exists(layout["file"], "k")
    with pytest.raises(PathKindMismatch):
        validator.require_file_if_exists(layout["dir"], "k")
