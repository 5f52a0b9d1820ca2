"""Coordinated monorepo release.

discovery -> graph (build + sort) -> sync (versions) -> hashes (manifest and
lock rewrite, in dependency order).
"""

from mono.services.release.errors import ReleaseError
from mono.services.release.service import ReleasedModule, ReleaseSummary, release

__all__ = [
    "ReleaseError",
    "ReleaseSummary",
    "ReleasedModule",
    "release",
]
