"""Explicit success/failure results returned by storage primitives."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageResult:
    """Outcome of one storage call.

    ``cause`` holds the low-level exception for failures so callers can chain
    it instead of re-deriving error text from a bare boolean.
    """

    ok: bool
    paths: tuple[Path, ...]
    cause: Exception | None = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, *paths: Path) -> StorageResult:
        return cls(ok=True, paths=tuple(paths))

    @classmethod
    def failure(cls, cause: Exception, *paths: Path) -> StorageResult:
        logger.warning("storage call failed for %s: %s", ", ".join(str(path) for path in paths), cause)
        return cls(ok=False, paths=tuple(paths), cause=cause)


def attempt(action: Callable[[], object], *paths: Path) -> StorageResult:
    """Run ``action`` and fold any ``OSError`` into a failed result."""
    try:
        action()
    except OSError as exc:
        return StorageResult.failure(exc, *paths)
    return StorageResult.success(*paths)


__all__ = [
    "StorageResult",
    "attempt",
]
