"""CLI adapter for ``lib_flat_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose store loading and the typed accessors via a command line interface so
operators can check how a configuration file will be read without writing
Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_read` – prints the loaded flat store as JSON.
* :func:`cli_get` – prints one typed value.
* :func:`cli_list` – prints a decoded indexed list as JSON.
* :func:`cli_env` – pretty-prints the process environment.
* :func:`cli_env_prefix` – helper exposing :func:`lib_flat_config.core.default_env_prefix`.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It invokes the composition root and the
accessor facade and never reaches into adapter details directly.
``lib_cli_exit_tools`` centralises the exit code strategy so all commands
behave consistently across shells and CI.
"""

from __future__ import annotations

import json
import re
import sys
from importlib import metadata
from pathlib import Path
from typing import Callable, Final, Optional, Sequence
from urllib.parse import SplitResult

import lib_cli_exit_tools
import rich_click as click

from . import accessors
from .adapters.env.default import pretty_print_env_vars
from .application.coercion import is_absent
from .application.indexed_list import decode_list_by_index
from .core import default_env_prefix as _default_env_prefix
from .core import load_store, read_store

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

_DIST_NAME: Final[str] = "lib_flat_config"

_TYPED_GETTERS: Final[dict[str, Callable[[dict[str, object], str], object]]] = {
    "string": accessors.get_required_string,
    "int": accessors.get_required_int,
    "long": accessors.get_required_long,
    "bool": accessors.get_required_boolean,
    "uri": accessors.get_required_uri,
    "path": accessors.get_required_path,
    "port": accessors.get_required_port,
    "uuid": accessors.get_required_uuid,
    "regex": accessors.get_required_regex,
}


def _resolve_version() -> str:
    """Return the installed package version with sensible fallbacks.

    Why
        ``click.version_option`` requires a string at decoration time. Fetching
        metadata lazily avoids hard-coding the version and keeps editable installs
        working without additional wiring.
    """

    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Typed accessors for flat key=value configuration stores",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DIST_NAME,
    message="lib_flat_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DIST_NAME)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DIST_NAME} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DIST_NAME)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")
    for entry in meta.get_all("Project-URL") or []:
        click.echo(f"  {entry}")


_FILE_OPTION = click.option(
    "--file",
    "file_path",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    default=None,
    help="Configuration file to load (defaults to discovery below the CWD)",
)
_INDENT_OPTION = click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)


@cli.command("read", context_settings=CLICK_CONTEXT_SETTINGS)
@_FILE_OPTION
@_INDENT_OPTION
def cli_read(file_path: Optional[Path], indent: Optional[int]) -> None:
    """Load a configuration file and print the flat store as JSON (keys sorted)."""

    store = _load(file_path)
    click.echo(json.dumps(store, indent=indent, sort_keys=True, default=str))


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@_FILE_OPTION
@click.option(
    "--type",
    "value_type",
    type=click.Choice(tuple(_TYPED_GETTERS), case_sensitive=False),
    default="string",
    show_default=True,
    help="Target type the value is coerced to",
)
@click.option("--default", "default", default=None, help="Raw value used when KEY is absent or blank")
@click.argument("key")
def cli_get(file_path: Optional[Path], value_type: str, default: Optional[str], key: str) -> None:
    """Print the value of KEY coerced to ``--type``.

    A missing key without ``--default`` fails with a non-zero exit code. The
    default is coerced exactly like a stored value.
    """

    store = _load(file_path)
    if default is not None and is_absent(store.get(key)):
        store[key] = default
    getter = _TYPED_GETTERS[value_type.lower()]
    click.echo(_render(getter(store, key)))


@cli.command("list", context_settings=CLICK_CONTEXT_SETTINGS)
@_FILE_OPTION
@_INDENT_OPTION
@click.argument("prefix")
def cli_list(file_path: Optional[Path], indent: Optional[int], prefix: str) -> None:
    """Decode the indexed list stored under PREFIX and print it as JSON."""

    store = _load(file_path)
    entries = [
        {"index": index, "full_key": entry.full_key, "short_key": entry.short_key, "value": entry.value}
        for index, entry in decode_list_by_index(store, prefix).items()
    ]
    click.echo(json.dumps(entries, indent=indent, default=str))


@cli.command("env", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--max-length",
    type=click.IntRange(min=1),
    default=80,
    show_default=True,
    help="Abbreviate longer values with '...'",
)
def cli_env(max_length: int) -> None:
    """Print environment variables sorted by name; keys containing ``pass`` are skipped."""

    click.echo(pretty_print_env_vars(max_length=max_length), nl=False)


@cli.command("env-prefix", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("slug")
def cli_env_prefix(slug: str) -> None:
    """Compute the canonical environment prefix for *slug*.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> runner = CliRunner()
    >>> result = runner.invoke(cli, ["env-prefix", "config-kit"])
    >>> result.output.strip()
    'CONFIG_KIT'
    """

    click.echo(_default_env_prefix(slug))


def _load(file_path: Optional[Path]) -> dict[str, object]:
    """Load *file_path* when given, otherwise discover the configuration file."""

    if file_path is not None:
        return load_store(file_path)
    return read_store()


def _render(value: object) -> str:
    """Render accessor results the way they would be written in a properties file."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, SplitResult):
        return value.geturl()
    if isinstance(value, re.Pattern):
        return value.pattern
    return str(value)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DIST_NAME,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
