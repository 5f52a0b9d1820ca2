from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest


TESTDATA = Path(__file__).resolve().parent / "testdata"

WriteModule = Callable[..., Path]


@pytest.fixture
def testdata() -> Path:
    return TESTDATA


@pytest.fixture
def copy_fixture(tmp_path: Path) -> Callable[[str], Path]:
    """Copy a tree from testdata/ into a fresh temp dir and return its root."""

    def copy(name: str) -> Path:
        dst = tmp_path / name
        shutil.copytree(TESTDATA / name, dst)
        return dst

    return copy


@pytest.fixture
def write_module(tmp_path: Path) -> WriteModule:
    """Create ``<tmp_path>/<name>/module.toml`` (and optionally a lock file).

    ``requires`` is a list of ``(path, version)`` pairs; ``lock`` is the raw
    lock file text, or None to leave the lock file out.
    """

    def write(
        name: str,
        path: str,
        version: str = "v0.1.0",
        *,
        requires: list[tuple[str, str]] | None = None,
        lock: str | None = None,
    ) -> Path:
        directory = tmp_path / name
        directory.mkdir(parents=True, exist_ok=True)
        lines = ["[module]", f'path = "{path}"', f'version = "{version}"']
        for req_path, req_version in requires or []:
            lines += ["", "[[require]]", f'path = "{req_path}"', f'version = "{req_version}"']
        (directory / "module.toml").write_text("\n".join(lines) + "\n", encoding="utf-8")
        if lock is not None:
            (directory / "module.lock").write_text(lock, encoding="utf-8")
        return directory

    return write


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()
    }


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes]]:
    """Map every file under a root (relative posix path) to its bytes."""
    return _snapshot
