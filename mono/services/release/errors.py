from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ReleaseErrorKind = Literal[
    "no_modules_found",
    "manifest_parse",
    "duplicate_module",
    "graph_cycle",
    "invalid_version",
    "lock_inconsistency",
    "io_error",
    "invalid_input",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``message`` reads as a chain from the outermost step to the root cause
    ("failed to update core/module.lock: inconsistent dependencies: ...").
    ``hint`` names the offending path or module when one is known.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def wrap(self, context: str) -> ReleaseError:
        """Return the same error with ``context`` prepended to the message."""
        return ReleaseError(kind=self.kind, message=f"{context}: {self.message}", hint=self.hint)
