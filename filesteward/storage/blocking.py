"""Blocking storage primitives.

Each call performs one single-purpose filesystem action and reports the
outcome as a ``StorageResult``; none of them know about jurisdiction.
"""

from __future__ import annotations

import os
import shutil
import stat as stat_module
from pathlib import Path

from .results import StorageResult, attempt


def make_directory(path: Path, recursive: bool = True) -> StorageResult:
    """Create ``path``; an existing directory counts as success."""

    def create() -> None:
        if recursive:
            os.makedirs(path, exist_ok=True)
            return
        try:
            os.mkdir(path)
        except FileExistsError:
            if not os.path.isdir(path) or os.path.islink(path):
                raise

    return attempt(create, path)


def clear_link(path: Path) -> None:
    """Unlink ``path`` when it is a symlink so a write replaces the link itself."""
    if os.path.islink(path):
        os.unlink(path)


def write_bytes(path: Path, data: bytes) -> StorageResult:
    """Write ``data`` to ``path``, truncating any existing content."""

    def write() -> None:
        clear_link(path)
        with open(path, "wb") as handle:
            handle.write(data)

    return attempt(write, path)


def copy_file(src: Path, dest: Path) -> StorageResult:
    """Copy file content and permission bits, overwriting ``dest``."""

    def copy() -> None:
        clear_link(dest)
        shutil.copyfile(src, dest)
        shutil.copymode(src, dest)

    return attempt(copy, src, dest)


def scan_children(directory: Path) -> list[tuple[Path, int]]:
    """Return ``(path, st_mode)`` for each child of ``directory`` without following symlinks."""
    with os.scandir(directory) as entries:
        return [(Path(child.path), child.stat(follow_symlinks=False).st_mode) for child in entries]


def copy_tree(src: Path, dest: Path) -> StorageResult:
    """Replicate a directory tree, one regular file at a time.

    Entries that are neither directories nor regular files are skipped.
    Stops at the first failing step and returns its result.
    """
    created = make_directory(dest)
    if not created:
        return created
    try:
        children = scan_children(src)
    except OSError as exc:
        return StorageResult.failure(exc, src)
    for child, mode in children:
        target = dest / child.name
        if stat_module.S_ISDIR(mode):
            result = copy_tree(child, target)
        elif stat_module.S_ISREG(mode):
            result = copy_file(child, target)
        else:
            continue
        if not result:
            return result
    return StorageResult.success(src, dest)


def remove_file(path: Path) -> StorageResult:
    return attempt(lambda: os.unlink(path), path)


def remove_tree(path: Path) -> StorageResult:
    return attempt(lambda: shutil.rmtree(path), path)


def rename(old: Path, new: Path) -> StorageResult:
    """Native rename; fails rather than copying across devices."""
    return attempt(lambda: os.rename(old, new), old, new)


__all__ = [
    "make_directory",
    "clear_link",
    "write_bytes",
    "copy_file",
    "scan_children",
    "copy_tree",
    "remove_file",
    "remove_tree",
    "rename",
]
