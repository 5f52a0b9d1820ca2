from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

from mono.core.result import Err, Ok, Result
from mono.output.console import ConsoleProtocol
from mono.platform.files import read_text_if_exists
from mono.services.release.errors import ReleaseError
from mono.services.release.lockfile import read_lock
from mono.services.release.manifest import parse_manifest
from mono.services.release.model import MANIFEST_FILE, Module


def discover_modules(
    *,
    root: Path,
    console: ConsoleProtocol,
    exclude: Collection[str] = (),
) -> Result[list[Module], ReleaseError]:
    """Load every module living in an immediate subdirectory of ``root``.

    Hidden, excluded and symlinked directories are skipped, as are directories
    without a manifest. A manifest that cannot be parsed stops discovery: the
    release cannot go on with a module whose shape is unknown.
    """
    try:
        entries = sorted(p for p in root.iterdir() if p.is_dir() and not p.is_symlink())
    except OSError as e:
        return Err(ReleaseError(kind="io_error", message=f"failed to list {root}: {e}", hint=str(root)))

    modules: list[Module] = []
    owners: dict[str, Path] = {}
    for directory in entries:
        if directory.name.startswith(".") or directory.name in exclude:
            continue

        manifest_path = directory / MANIFEST_FILE
        try:
            text = read_text_if_exists(manifest_path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                ReleaseError(
                    kind="manifest_parse",
                    message=f"failed to read {manifest_path}: {e}",
                    hint=str(manifest_path),
                )
            )
        if text is None:
            continue

        manifest = parse_manifest(text, source=manifest_path)
        if isinstance(manifest, Err):
            return manifest

        owner = owners.get(manifest.value.path)
        if owner is not None:
            return Err(
                ReleaseError(
                    kind="duplicate_module",
                    message=f"module {manifest.value.path} is declared by both {owner} and {directory}",
                    hint=manifest.value.path,
                )
            )
        owners[manifest.value.path] = directory

        module = Module(directory=directory, manifest=manifest.value)
        locks = read_lock(module.lock_path)
        if isinstance(locks, Err):
            return locks
        module.locks = locks.value

        modules.append(module)
        console.debug(f"{module.path}: found monorepo module at {directory}")

    return Ok(modules)
