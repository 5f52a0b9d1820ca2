"""Content hashes over file trees ("h1" hashes).

An h1 hash summarises a sorted list of named files. For every file the
summary holds one ``"<sha256 hex>  <name>\\n"`` line; the hash is ``h1:``
followed by the base64 of the SHA-256 of that summary. Names include a
caller-chosen prefix (``<module path>@<version>``) so the same bytes released
under another identity hash differently.
"""

from __future__ import annotations

import base64
import hashlib
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

__all__ = ["HASH_PREFIX", "dir_files", "hash_dir", "hash_files", "hash_single_file"]

HASH_PREFIX = "h1:"


def hash_files(files: Iterable[str], read: Callable[[str], bytes]) -> str:
    """Hash a set of named files.

    Args:
        files: Slash-separated file names (order does not matter).
        read: Returns the content of a file given its name.

    Raises:
        ValueError: A file name contains a newline.
    """
    summary = hashlib.sha256()
    for name in sorted(files):
        if "\n" in name:
            raise ValueError(f"filenames with newlines are not supported: {name!r}")
        digest = hashlib.sha256(read(name)).hexdigest()
        summary.update(f"{digest}  {name}\n".encode("utf-8"))
    return HASH_PREFIX + base64.b64encode(summary.digest()).decode("ascii")


def hash_single_file(name: str, data: bytes) -> str:
    """Hash a one-file tree without touching disk."""
    return hash_files([name], lambda _: data)


def dir_files(directory: Path, prefix: str) -> dict[str, Path]:
    """Map prefixed names to the regular files under ``directory``.

    Symlinks and other non-regular entries are skipped.
    """
    out: dict[str, Path] = {}
    for path in sorted(directory.rglob("*")):
        if path.is_symlink() or not path.is_file():
            continue
        rel = path.relative_to(directory).as_posix()
        out[f"{prefix}/{rel}"] = path
    return out


def hash_dir(
    directory: Path,
    prefix: str,
    *,
    overlay: Mapping[str, bytes] | None = None,
) -> str:
    """Hash every regular file under ``directory``.

    Args:
        directory: Tree root.
        prefix: Name prefix, usually ``<module path>@<version>``.
        overlay: Relative (slash-separated) names whose content replaces, or
            adds to, what is on disk. Nothing is written.

    Raises:
        OSError: A file cannot be read.
        ValueError: A file name contains a newline.
    """
    files = dir_files(directory, prefix)
    contents: dict[str, bytes] = {}
    for rel, data in (overlay or {}).items():
        contents[f"{prefix}/{rel}"] = data

    def read(name: str) -> bytes:
        if name in contents:
            return contents[name]
        return files[name].read_bytes()

    return hash_files(set(files) | set(contents), read)
