"""Hash consistency updater.

Modules are processed strictly in dependency order. By the time a module is
updated, each of its dependencies has been persisted and hashed, so its lock
entries can be repointed at the dependency's fresh hashes.
"""

from __future__ import annotations

from mono.core.result import Err, Ok, Result
from mono.output.console import ConsoleProtocol
from mono.platform.dirhash import hash_dir
from mono.platform.files import atomic_write_text
from mono.services.release.errors import ReleaseError
from mono.services.release.lockfile import format_lock
from mono.services.release.manifest import format_manifest, manifest_hash
from mono.services.release.model import (
    LOCK_FILE,
    MANIFEST_FILE,
    MANIFEST_SUFFIX,
    LockKey,
    Module,
    ModuleGraph,
)


def update_module(
    module: Module,
    graph: ModuleGraph,
    *,
    dry_run: bool,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    manifest = update_manifest(module, dry_run=dry_run, console=console)
    if isinstance(manifest, Err):
        return Err(manifest.error.wrap(f"failed to update {module.name}/{MANIFEST_FILE}"))

    lock = update_lock(module, graph, manifest=manifest.value, dry_run=dry_run, console=console)
    if isinstance(lock, Err):
        return Err(lock.error.wrap(f"failed to update {module.name}/{LOCK_FILE}"))
    return Ok(None)


def update_manifest(
    module: Module,
    *,
    dry_run: bool,
    console: ConsoleProtocol,
) -> Result[bytes, ReleaseError]:
    """Persist the canonical manifest and record its hash.

    The hash is computed from the canonical bytes in memory, so it is the
    same whether or not the file gets written. Returns those bytes.
    """
    text = format_manifest(module.manifest)
    data = text.encode("utf-8")
    module.manifest_hash = manifest_hash(data)

    written = _write(module, name=MANIFEST_FILE, text=text, dry_run=dry_run, console=console)
    if isinstance(written, Err):
        return written
    return Ok(data)


def update_lock(
    module: Module,
    graph: ModuleGraph,
    *,
    manifest: bytes,
    dry_run: bool,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Repoint lock entries at fresh dependency hashes, persist, then hash.

    Args:
        module: Module being updated; its manifest must already be final.
        graph: Graph holding the module's dependencies, already processed.
        manifest: Canonical manifest bytes returned by ``update_manifest``.
        dry_run: Skip writing. The directory hash is then computed over the
            on-disk tree overlaid with the in-memory manifest and lock, so it
            matches what a real run would produce.
        console: Event sink.
    """
    for e in graph.deps_of(module.path):
        dep = graph.modules[e.dependency]
        for suffix, digest in (("", dep.dir_hash), (MANIFEST_SUFFIX, dep.manifest_hash)):
            replaced = _replace_entry(
                module,
                dep,
                old_version=e.version,
                suffix=suffix,
                digest=digest,
                console=console,
            )
            if isinstance(replaced, Err):
                what = "manifest hash" if suffix else "dir hash"
                return Err(replaced.error.wrap(f"inconsistent dependencies: failed to update {what}"))

    text = format_lock(module.locks)
    written = _write(module, name=LOCK_FILE, text=text, dry_run=dry_run, console=console)
    if isinstance(written, Err):
        return written

    overlay = {MANIFEST_FILE: manifest, LOCK_FILE: text.encode("utf-8")} if dry_run else None
    try:
        module.dir_hash = hash_dir(module.directory, f"{module.path}@{module.version}", overlay=overlay)
    except (OSError, ValueError) as e:
        return Err(
            ReleaseError(
                kind="io_error",
                message=f"failed to hash {module.directory}: {e}",
                hint=str(module.directory),
            )
        )
    return Ok(None)


def _replace_entry(
    module: Module,
    dep: Module,
    *,
    old_version: str,
    suffix: str,
    digest: str | None,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    if not digest:
        return Err(
            ReleaseError(
                kind="lock_inconsistency",
                message=f"empty hash for module {dep.path}",
                hint="dependencies must be updated before their dependents",
            )
        )

    old = LockKey(dep.path, old_version + suffix)
    previous = module.locks.pop(old, None)
    if previous is None:
        return Err(
            ReleaseError(
                kind="lock_inconsistency",
                message=f"missing lock entry for {old.path} {old.version}",
                hint=dep.path,
            )
        )

    new = LockKey(dep.path, dep.version + suffix)
    module.locks[new] = [digest]
    console.debug(f"{module.path}: changed dep {dep.path}{suffix} {' '.join(previous)} --> {digest}")
    return Ok(None)


def _write(
    module: Module,
    *,
    name: str,
    text: str,
    dry_run: bool,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    path = module.directory / name
    if dry_run:
        console.debug(f"{module.path}: [skipped] writing file {path}")
        return Ok(None)

    console.debug(f"{module.path}: writing file {path}")
    try:
        atomic_write_text(path, text)
    except OSError as e:
        return Err(ReleaseError(kind="io_error", message=f"failed to write {path}: {e}", hint=str(path)))
    return Ok(None)
