"""Result type for explicit error handling.

Release steps never raise for expected failures (a malformed manifest, a
missing lock entry, an unwritable file). They return ``Ok`` or ``Err`` and
the caller decides whether to stop.

Usage:
    def read_version(path: Path) -> Result[str, ReleaseError]:
        if not path.exists():
            return Err(ReleaseError(kind="io_error", message=f"missing {path}"))
        return Ok(path.read_text(encoding="utf-8").strip())

    match read_version(path):
        case Ok(value):
            print(f"version: {value}")
        case Err(error):
            print(f"error: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
