from __future__ import annotations

from mono.core.result import Err, Ok, Result
from mono.output.console import ConsoleProtocol
from mono.services.release import semver
from mono.services.release.errors import ReleaseError
from mono.services.release.model import ModuleGraph, Requirement


def validate_version(version: str) -> Result[str, ReleaseError]:
    if not semver.is_valid(version):
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"invalid version {version!r}",
                hint="Expected vMAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]",
            )
        )
    return Ok(version)


def sync_versions(
    graph: ModuleGraph,
    *,
    version: str,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Bump every module and every sibling requirement to ``version``.

    Only the in-memory manifests change. An invalid version is rejected
    before any module is touched.
    """
    ok = validate_version(version)
    if isinstance(ok, Err):
        return ok

    for module in graph.modules.values():
        module.manifest.version = version
        for e in graph.deps_of(module.path):
            req = module.manifest.requirement(e.dependency)
            if req is None:
                module.manifest.requires.append(Requirement(path=e.dependency, version=version))
            else:
                req.version = version
            console.debug(f"{module.path}: require {e.dependency} {e.version} -> {version}")
    return Ok(None)
