"""Error codes for CLI exit status.

The numeric values are process exit codes and should remain stable:
- 0: Success
- 1: User error (bad version, nothing to release, bad arguments)
- 3: Release error (inconsistent lock files, dependency cycles, bad manifests)
- 5: I/O error (file not readable or writable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    RELEASE_ERROR = 3
    IO_ERROR = 5
