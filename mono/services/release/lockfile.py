"""Lock file (``module.lock``) codec.

One ``path version hash`` line per pinned hash. A dependency version may be
pinned twice: the bare version pins the dependency's directory content, the
version followed by ``/module.toml`` pins its manifest.
"""

from __future__ import annotations

import functools
from pathlib import Path

from mono.core.result import Err, Ok, Result
from mono.platform.files import read_text_if_exists
from mono.services.release import semver
from mono.services.release.errors import ReleaseError
from mono.services.release.model import LockKey, LockTable


# Hash of a one-file tree holding an empty module.toml. Old releases pinned it
# for directories that were not modules; it is dropped on read and therefore
# never written back.
LEGACY_PLACEHOLDER_HASH = "h1:pBQ6CljZOi5cutD/oaEDvLrCFa5syHp6NtaVz4jNJlQ="


def parse_lock(text: str, dst: LockTable | None = None) -> LockTable:
    """Parse lock file text into ``dst`` (or a new table).

    Blank lines, lines without exactly three fields and lines pinning the
    legacy placeholder hash are skipped.
    """
    table: LockTable = {} if dst is None else dst
    for line in text.split("\n"):
        fields = line.split()
        if len(fields) != 3:
            continue
        path, version, digest = fields
        if digest == LEGACY_PLACEHOLDER_HASH:
            continue
        table.setdefault(LockKey(path, version), []).append(digest)
    return table


def format_lock(table: LockTable) -> str:
    """Render a lock table, one line per stored hash, in canonical order."""
    keys = sorted(table, key=functools.cmp_to_key(compare_keys))
    lines: list[str] = []
    for key in keys:
        for digest in table[key]:
            if digest == LEGACY_PLACEHOLDER_HASH:
                continue
            lines.append(f"{key.path} {key.version} {digest}\n")
    return "".join(lines)


def compare_keys(a: LockKey, b: LockKey) -> int:
    """Order by path, then version precedence, then suffix (bare first)."""
    if a.path != b.path:
        return -1 if a.path < b.path else 1
    if a.base_version != b.base_version:
        return semver.compare(a.base_version, b.base_version)
    if a.suffix != b.suffix:
        return -1 if a.suffix < b.suffix else 1
    return 0


def read_lock(path: Path) -> Result[LockTable, ReleaseError]:
    """Read a lock file; a missing file is an empty table."""
    try:
        text = read_text_if_exists(path)
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ReleaseError(
                kind="io_error",
                message=f"failed to read {path}: {e}",
                hint=str(path),
            )
        )
    if text is None:
        return Ok({})
    return Ok(parse_lock(text))
