"""Module manifest (``module.toml``) codec.

The schema is closed: a ``[module]`` table with ``path`` and ``version`` and an
ordered ``[[require]]`` array whose tables hold ``path`` and ``version``. The
release rewrites the whole file in canonical form, so anything the schema does
not know about is rejected instead of being dropped on the next write.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path

from mono.core.result import Err, Ok, Result
from mono.core.structured import StrDict, as_obj_list, as_str_dict
from mono.platform.dirhash import hash_single_file
from mono.services.release.errors import ReleaseError
from mono.services.release.model import MANIFEST_FILE, Manifest, Requirement


_ROOT_KEYS = frozenset({"module", "require"})
_ENTRY_KEYS = frozenset({"path", "version"})


def parse_manifest(text: str, *, source: Path) -> Result[Manifest, ReleaseError]:
    try:
        data_obj: object = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        return _invalid(source, f"invalid TOML: {e}")

    data = as_str_dict(data_obj)
    if data is None:
        return _invalid(source, "manifest root must be a TOML table")

    unknown = sorted(set(data) - _ROOT_KEYS)
    if unknown:
        return _invalid(source, f"unknown key(s): {', '.join(unknown)}")

    module = as_str_dict(data.get("module"))
    if module is None:
        return _invalid(source, "missing [module] table")
    head = _entry(module, where="[module]")
    if isinstance(head, Err):
        return _invalid(source, head.error)
    path, version = head.value

    requires: list[Requirement] = []
    seen: set[str] = set()
    raw_requires = data.get("require", [])
    items = as_obj_list(raw_requires)
    if items is None:
        return _invalid(source, "require must be an array of tables ([[require]])")
    for i, item in enumerate(items):
        table = as_str_dict(item)
        if table is None:
            return _invalid(source, f"require[{i}] must be a table")
        entry = _entry(table, where=f"require[{i}]")
        if isinstance(entry, Err):
            return _invalid(source, entry.error)
        req_path, req_version = entry.value
        if req_path in seen:
            return _invalid(source, f"duplicate requirement {req_path}")
        seen.add(req_path)
        requires.append(Requirement(path=req_path, version=req_version))

    return Ok(Manifest(path=path, version=version, requires=requires))


def format_manifest(manifest: Manifest) -> str:
    """Render the canonical manifest text."""
    lines = [
        "[module]",
        f"path = {_quote(manifest.path)}",
        f"version = {_quote(manifest.version)}",
    ]
    for r in manifest.requires:
        lines += [
            "",
            "[[require]]",
            f"path = {_quote(r.path)}",
            f"version = {_quote(r.version)}",
        ]
    return "\n".join(lines) + "\n"


def manifest_hash(data: bytes) -> str:
    """Hash canonical manifest bytes as a one-file tree named ``module.toml``."""
    return hash_single_file(MANIFEST_FILE, data)


def _entry(table: StrDict, *, where: str) -> Result[tuple[str, str], str]:
    unknown = sorted(set(table) - _ENTRY_KEYS)
    if unknown:
        return Err(f"unknown key(s) in {where}: {', '.join(unknown)}")

    values: list[str] = []
    for key in ("path", "version"):
        value = table.get(key)
        if not isinstance(value, str) or not value:
            return Err(f"missing {where}.{key}")
        if any(ch.isspace() for ch in value):
            return Err(f"{where}.{key} must not contain whitespace: {value!r}")
        if any(ch < " " or ch == "\x7f" for ch in value):
            return Err(f"{where}.{key} must not contain control characters: {value!r}")
        values.append(value)
    return Ok((values[0], values[1]))


def _quote(value: str) -> str:
    # JSON string escapes are a subset of TOML basic string escapes.
    return json.dumps(value, ensure_ascii=False)


def _invalid(source: Path, message: str) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="manifest_parse",
            message=f"failed to parse {source}: {message}",
            hint=str(source),
        )
    )
