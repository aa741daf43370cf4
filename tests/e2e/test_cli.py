"""End-to-end CLI coverage for the public commands exposed by lib_flat_config.

These tests exercise the documented CLI workflows (read, get, list, env,
metadata lookups) against real files in a temporary directory.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

import lib_cli_exit_tools

from lib_flat_config import cli
from lib_flat_config.adapters.path_resolvers.default import CONFIG_FILE_ENV
from lib_flat_config.domain.errors import DuplicateListIndex, MissingRequired

PROPERTIES = """\
# service settings
server.host = localhost
server.port = 8080
server.tls = yes
server.url = https://example.com:8443/api
queue.workers[1].host = 10.0.0.2
queue.workers[0].host = 10.0.0.1
"""


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


@pytest.fixture()
def properties_file(tmp_path: Path) -> Path:
    path = tmp_path / "application.properties"
    path.write_text(PROPERTIES, encoding="utf-8")
    return path


def test_cli_read_outputs_sorted_json(properties_file: Path) -> None:
    """`cli read` should emit the flat store as JSON honouring the indent option."""

    result = _runner().invoke(cli.cli, ["read", "--file", str(properties_file), "--indent", "2"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["server.port"] == "8080"
    assert list(payload) == sorted(payload)


def test_cli_read_discovers_file_in_cwd(properties_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(properties_file.parent)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    result = _runner().invoke(cli.cli, ["read"])
    assert result.exit_code == 0
    assert json.loads(result.output)["server.host"] == "localhost"


def test_cli_read_structured_file(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("[server]\nport = 9090\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["read", "--file", str(path)])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"server.port": 9090}


@pytest.mark.parametrize(
    ("key", "value_type", "expected"),
    [
        ("server.host", "string", "localhost"),
        ("server.port", "port", "8080"),
        ("server.port", "int", "8080"),
        ("server.tls", "bool", "true"),
        ("server.url", "uri", "https://example.com:8443/api"),
    ],
)
def test_cli_get_typed_values(properties_file: Path, key: str, value_type: str, expected: str) -> None:
    result = _runner().invoke(cli.cli, ["get", "--file", str(properties_file), "--type", value_type, key])
    assert result.exit_code == 0
    assert result.output.strip() == expected


def test_cli_get_default_is_coerced(properties_file: Path) -> None:
    result = _runner().invoke(
        cli.cli,
        ["get", "--file", str(properties_file), "--type", "port", "--default", "9000", "missing.port"],
    )
    assert result.exit_code == 0
    assert result.output.strip() == "9000"


def test_cli_get_missing_required_fails(properties_file: Path) -> None:
    result = _runner().invoke(cli.cli, ["get", "--file", str(properties_file), "missing.key"])
    assert result.exit_code != 0
    assert isinstance(result.exception, MissingRequired)


def test_cli_list_decodes_indexed_entries(properties_file: Path) -> None:
    result = _runner().invoke(cli.cli, ["list", "--file", str(properties_file), "queue.workers"])
    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"index": 0, "full_key": "queue.workers[0].host", "short_key": "host", "value": "10.0.0.1"},
        {"index": 1, "full_key": "queue.workers[1].host", "short_key": "host", "value": "10.0.0.2"},
    ]


def test_cli_list_duplicate_index_fails(tmp_path: Path) -> None:
    path = tmp_path / "dup.properties"
    path.write_text("b[15].c=bar\nb[15].c.d=quux\n", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["list", "--file", str(path), "b"])
    assert result.exit_code != 0
    assert isinstance(result.exception, DuplicateListIndex)


def test_cli_env_hides_passwords() -> None:
    result = _runner().invoke(
        cli.cli,
        ["env", "--max-length", "5"],
        env={"LFC_TEST_VALUE": "abcdefghij", "LFC_TEST_PASSWORD": "secret"},
    )
    assert result.exit_code == 0
    assert "LFC_TEST_VALUE = ab...\n" in result.output
    assert "LFC_TEST_PASSWORD" not in result.output


def test_cli_env_rejects_zero_length() -> None:
    result = _runner().invoke(cli.cli, ["env", "--max-length", "0"])
    assert result.exit_code != 0


def test_cli_env_prefix_command() -> None:
    """`cli env-prefix` should echo the canonical uppercase prefix for a slug."""

    result = _runner().invoke(cli.cli, ["env-prefix", "config-kit"])
    assert result.exit_code == 0
    assert result.output.strip() == "CONFIG_KIT"


def test_cli_info_handles_missing_metadata(monkeypatch: pytest.MonkeyPatch) -> None:
    """`cli info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag(properties_file: Path) -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    exit_code = cli.main(["--traceback", "read", "--file", str(properties_file)], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback


def test_cli_main_reports_failure_exit_code(properties_file: Path) -> None:
    exit_code = cli.main(["get", "--file", str(properties_file), "missing.key"])
    assert exit_code != 0
