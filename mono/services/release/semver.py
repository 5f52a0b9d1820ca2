"""Semantic versions with a leading ``v`` (``v1.2.0``, ``v1.0.0-rc.1``)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


_SEMVER_RE = re.compile(
    r"^v(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)"
    r"(?:-((?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*))*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()


def parse(version: str) -> SemVer | None:
    m = _SEMVER_RE.fullmatch(version)
    if m is None:
        return None
    pre = tuple(m.group(4).split(".")) if m.group(4) else ()
    build = tuple(m.group(5).split(".")) if m.group(5) else ()
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), pre, build)


def is_valid(version: str) -> bool:
    return parse(version) is not None


def compare(a: str, b: str) -> int:
    """Compare two versions by semver precedence.

    Returns -1, 0 or 1. Build metadata is ignored. An invalid version is
    lower than every valid one and equal to any other invalid one.
    """
    va = parse(a)
    vb = parse(b)
    if va is None or vb is None:
        return _cmp(va is not None, vb is not None)

    core = _cmp((va.major, va.minor, va.patch), (vb.major, vb.minor, vb.patch))
    if core != 0:
        return core
    return _compare_prerelease(va.prerelease, vb.prerelease)


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    # A release outranks any of its pre-releases.
    if not a or not b:
        return _cmp(not a, not b)

    for x, y in zip(a, b):
        if x == y:
            continue
        x_num = x.isdigit()
        y_num = y.isdigit()
        if x_num and y_num:
            return _cmp(int(x), int(y))
        if x_num != y_num:
            return -1 if x_num else 1
        return _cmp(x, y)
    return _cmp(len(a), len(b))


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)
