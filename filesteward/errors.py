"""Error taxonomy raised at the steward and bulk-runner boundary.

Every failure surfaced to callers is a ``FileStewardError``. The concrete
subclass (and its ``kind``) tells callers why the call was refused.
"""

from __future__ import annotations

import enum
from pathlib import Path


class ErrorKind(enum.Enum):
    """Reason a steward call was refused or failed."""

    INVALID_ARGUMENT = "invalid-argument"
    JURISDICTION = "jurisdiction-violation"
    NOT_FOUND = "not-found"
    ALREADY_EXISTS = "already-exists"
    OPERATION_FAILED = "operation-failed"


class FileStewardError(Exception):
    """Base error carrying the offending paths and optional bulk position."""

    kind: ErrorKind = ErrorKind.OPERATION_FAILED

    def __init__(self, message: str, *paths: Path | str, index: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.paths: tuple[Path, ...] = tuple(Path(path) for path in paths)
        self.index = index

    def at_index(self, index: int) -> FileStewardError:
        """Return a copy of this error annotated with a bulk task position."""
        base = self.message.strip()
        if base.endswith("."):
            base = base[:-1].rstrip()
        return type(self)(f"{base} (at tasks[{index}]).", *self.paths, index=index)


class InvalidArgumentError(FileStewardError):
    kind = ErrorKind.INVALID_ARGUMENT


class JurisdictionError(FileStewardError):
    kind = ErrorKind.JURISDICTION


class NotFoundError(FileStewardError):
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(FileStewardError):
    kind = ErrorKind.ALREADY_EXISTS


class OperationFailedError(FileStewardError):
    kind = ErrorKind.OPERATION_FAILED


__all__ = [
    "ErrorKind",
    "FileStewardError",
    "InvalidArgumentError",
    "JurisdictionError",
    "NotFoundError",
    "AlreadyExistsError",
    "OperationFailedError",
]
