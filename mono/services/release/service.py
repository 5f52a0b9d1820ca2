from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mono.core.config import CONFIG_FILE, load_config_or_default
from mono.core.result import Err, Ok, Result
from mono.output.console import ConsoleProtocol, Style
from mono.services.release.discovery import discover_modules
from mono.services.release.errors import ReleaseError
from mono.services.release.graph import build_graph, sort_modules
from mono.services.release.hashes import update_module
from mono.services.release.sync import sync_versions


@dataclass(frozen=True, slots=True)
class ReleasedModule:
    path: str
    directory: Path
    dir_hash: str
    manifest_hash: str


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    """Outcome of a release, modules listed in processing order."""

    version: str
    dry_run: bool
    modules: tuple[ReleasedModule, ...]


def release(
    *,
    root: Path,
    version: str,
    dry_run: bool,
    console: ConsoleProtocol,
) -> Result[ReleaseSummary, ReleaseError]:
    """Release every module under ``root`` at ``version``.

    Stops at the first failure. Modules already written in this run are
    not rolled back.
    """
    config = load_config_or_default(root / CONFIG_FILE)
    if isinstance(config, Err):
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"failed to load {CONFIG_FILE}: {config.error.message}",
                hint=str(config.error.path) if config.error.path else None,
            )
        )

    modules = discover_modules(root=root, console=console, exclude=config.value.release.exclude)
    if isinstance(modules, Err):
        return Err(modules.error.wrap("failed to fetch monorepo modules"))
    if not modules.value:
        return Err(
            ReleaseError(
                kind="no_modules_found",
                message=f"no modules found at {str(root)!r}",
                hint="each module lives in its own subdirectory with a module.toml",
            )
        )

    graph = build_graph(modules.value, console=console)
    order = sort_modules(graph)
    if isinstance(order, Err):
        return Err(order.error.wrap("failed to calculate monorepo interdependencies"))

    synced = sync_versions(graph, version=version, console=console)
    if isinstance(synced, Err):
        return Err(synced.error.wrap("failed to update modules to new version"))

    released: list[ReleasedModule] = []
    for module in order.value:
        updated = update_module(module, graph, dry_run=dry_run, console=console)
        if isinstance(updated, Err):
            return updated
        assert module.dir_hash is not None and module.manifest_hash is not None
        released.append(
            ReleasedModule(
                path=module.path,
                directory=module.directory,
                dir_hash=module.dir_hash,
                manifest_hash=module.manifest_hash,
            )
        )
        console.print(
            f"module updated: {module.path} (manifest {module.manifest_hash}, dir {module.dir_hash})",
            Style.DIM,
        )

    console.success("all modules updated" + (" (dry run, no files written)" if dry_run else ""))
    return Ok(ReleaseSummary(version=version, dry_run=dry_run, modules=tuple(released)))
