from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from mono.core.errors import ErrorCode
from mono.core.result import Err
from mono.output.console import ConsoleProtocol, RichConsole, Style
from mono.services.release import ReleaseError
from mono.services.release import release as run_release
from mono.services.release.sync import validate_version


_USER_ERRORS = frozenset({"invalid_version", "no_modules_found", "invalid_input"})


def build_console(*, debug: bool) -> ConsoleProtocol:
    return RichConsole(debug=debug)


def exit_code_for(error: ReleaseError) -> ErrorCode:
    if error.kind in _USER_ERRORS:
        return ErrorCode.USER_ERROR
    if error.kind == "io_error":
        return ErrorCode.IO_ERROR
    return ErrorCode.RELEASE_ERROR


def _exit(console: ConsoleProtocol, error: ReleaseError) -> NoReturn:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(exit_code_for(error)))


def release(
    version: str = typer.Argument(..., help="Target version, e.g. v0.1.0-alpha.1"),
    context: Path = typer.Option(
        Path("."),
        "--context",
        envvar="MONO_CONTEXT",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Monorepo root holding one subdirectory per module.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Skip writing any file."),
    debug: bool = typer.Option(False, "--debug", help="Print debug messages."),
) -> None:
    """Bump every module, its sibling requirements and lock files to VERSION."""
    console = build_console(debug=debug)

    valid = validate_version(version)
    if isinstance(valid, Err):
        _exit(console, valid.error)

    console.debug(f"command config: context={context} version={version} dry_run={dry_run}")
    result = run_release(root=context, version=version, dry_run=dry_run, console=console)
    if isinstance(result, Err):
        _exit(console, result.error)
