"""Jurisdiction checks for paths handled by a steward.

Resolution here is purely lexical: candidate paths are joined onto the root
and normalized without consulting storage, so every decision can be made
before any mutation is attempted. Only ``is_present`` probes the filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path

from .errors import InvalidArgumentError, JurisdictionError


def coerce_path(value: object, name: str = "path") -> str:
    """Return ``value`` as a filesystem string or raise ``InvalidArgumentError``."""
    if isinstance(value, (bytes, bytearray)) or not isinstance(value, (str, os.PathLike)):
        raise InvalidArgumentError(f'The "{name}" argument must be a str or os.PathLike, not {type(value).__name__}.')
    raw = os.fspath(value)
    if not isinstance(raw, str):
        raise InvalidArgumentError(f'The "{name}" argument must be a text path.')
    if "\x00" in raw:
        raise InvalidArgumentError(f'The "{name}" argument must not contain a null byte.')
    return raw


def resolve_path(root: Path, value: object, name: str = "path") -> Path:
    """Resolve ``value`` against ``root`` into a normalized absolute path."""
    raw = coerce_path(value, name)
    return Path(os.path.normpath(os.path.join(root, raw)))


def is_within(path: Path, root: Path) -> bool:
    """Return whether ``path`` is ``root`` or lies under it."""
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


def is_included(root: Path, value: object) -> bool:
    """Return whether ``value`` resolves to ``root`` or one of its descendants."""
    return is_within(resolve_path(root, value), root)


def require_included(root: Path, value: object, name: str = "path") -> Path:
    """Resolve ``value`` and raise ``JurisdictionError`` when it escapes ``root``."""
    resolved = resolve_path(root, value, name)
    if not is_within(resolved, root):
        raise JurisdictionError(f'The path "{resolved}" is beyond the steward\'s jurisdiction.', resolved)
    return resolved


def is_present(root: Path, value: object) -> bool:
    """Return whether an in-jurisdiction path exists (dangling symlinks count)."""
    return os.path.lexists(require_included(root, value))


def shares_parent(first: Path, second: Path) -> bool:
    """Return whether two resolved paths live in the same directory."""
    return first.parent == second.parent


__all__ = [
    "coerce_path",
    "resolve_path",
    "is_within",
    "is_included",
    "require_included",
    "is_present",
    "shares_parent",
]
