from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple


MANIFEST_FILE = "module.toml"
LOCK_FILE = "module.lock"

# Lock entries pinning a dependency's manifest (rather than its whole
# directory) carry this suffix after the version.
MANIFEST_SUFFIX = "/" + MANIFEST_FILE


@dataclass(slots=True)
class Requirement:
    """A declared ``(path, version)`` dependency inside a manifest."""

    path: str
    version: str


@dataclass(slots=True)
class Manifest:
    path: str
    version: str
    requires: list[Requirement] = field(default_factory=list)

    def requirement(self, path: str) -> Requirement | None:
        for r in self.requires:
            if r.path == path:
                return r
        return None


class LockKey(NamedTuple):
    """Key of a lock table row.

    ``version`` is the dependency version, optionally followed by
    ``MANIFEST_SUFFIX`` for manifest-content hashes.
    """

    path: str
    version: str

    @property
    def base_version(self) -> str:
        base, _, _ = self.version.partition("/")
        return base

    @property
    def suffix(self) -> str:
        _, sep, rest = self.version.partition("/")
        return sep + rest


LockTable = dict[LockKey, list[str]]


@dataclass(slots=True)
class Module:
    """A monorepo module loaded from disk.

    ``dir_hash`` and ``manifest_hash`` stay None until the module has been
    processed by the hash updater.
    """

    directory: Path
    manifest: Manifest
    locks: LockTable = field(default_factory=dict)
    dir_hash: str | None = None
    manifest_hash: str | None = None

    @property
    def path(self) -> str:
        return self.manifest.path

    @property
    def version(self) -> str:
        return self.manifest.version

    @property
    def manifest_path(self) -> Path:
        return self.directory / MANIFEST_FILE

    @property
    def lock_path(self) -> Path:
        return self.directory / LOCK_FILE

    @property
    def name(self) -> str:
        """Directory name under the repository root."""
        return self.directory.name


@dataclass(frozen=True, slots=True)
class DependencyEdge:
    """``dependent`` requires ``dependency`` at ``version``.

    ``version`` is the requirement as declared before the release rewrote it;
    it locates the lock entries being replaced.
    """

    dependent: str
    dependency: str
    version: str


@dataclass(slots=True)
class ModuleGraph:
    """Arena of modules indexed by identity plus the edges between them."""

    modules: dict[str, Module]
    edges: tuple[DependencyEdge, ...] = ()

    def deps_of(self, path: str) -> list[DependencyEdge]:
        """Edges leaving ``path``, in manifest declaration order."""
        return [e for e in self.edges if e.dependent == path]

    def dependents_of(self, path: str) -> list[DependencyEdge]:
        return [e for e in self.edges if e.dependency == path]
