"""Entry classification and directory traversal.

Blocking and non-blocking traversal share ``_scan_directory``; the async
variant only offloads each directory scan to a worker thread and still walks
children one at a time.
"""

from __future__ import annotations

import asyncio
import os
import stat as stat_module
from dataclasses import dataclass
from pathlib import Path

from .types import Entry, EntryKind

_MODE_KINDS = (
    (stat_module.S_ISBLK, EntryKind.BLOCK_DEVICE),
    (stat_module.S_ISCHR, EntryKind.CHAR_DEVICE),
    (stat_module.S_ISDIR, EntryKind.DIRECTORY),
    (stat_module.S_ISFIFO, EntryKind.FIFO),
    (stat_module.S_ISREG, EntryKind.FILE),
    (stat_module.S_ISSOCK, EntryKind.SOCKET),
    (stat_module.S_ISLNK, EntryKind.SYMLINK),
)


def classify_mode(mode: int) -> EntryKind:
    """Map an ``st_mode`` value onto its ``EntryKind``."""
    for predicate, kind in _MODE_KINDS:
        if predicate(mode):
            return kind
    return EntryKind.UNKNOWN


def lstat_kind(path: Path) -> EntryKind | None:
    """Return the kind of ``path`` without following a final symlink.

    Returns ``None`` when the path does not exist or cannot be stat'ed.
    """
    try:
        return classify_mode(os.lstat(path).st_mode)
    except OSError:
        return None


@dataclass(frozen=True)
class TraversalContext:
    """Settings carried down one traversal."""

    root: Path
    relative: bool = True
    recursive: bool = False

    def display_path(self, path: Path) -> Path:
        if not self.relative:
            return path
        return Path(os.path.relpath(path, self.root))


def _scan_directory(directory: Path) -> list[tuple[Path, os.stat_result, EntryKind]]:
    """List one directory level as ``(path, lstat, kind)`` rows in display order."""
    rows: list[tuple[Path, os.stat_result, EntryKind]] = []
    with os.scandir(directory) as entries:
        for child in entries:
            child_stat = child.stat(follow_symlinks=False)
            rows.append((Path(child.path), child_stat, classify_mode(child_stat.st_mode)))
    rows.sort(key=lambda row: (row[2] is not EntryKind.DIRECTORY, row[0].name.lower(), row[0].name))
    return rows


def list_entries(context: TraversalContext, directory: Path) -> tuple[Entry, ...]:
    """Return classified children of ``directory``, nested when recursive."""
    nodes: list[Entry] = []
    for path, child_stat, kind in _scan_directory(directory):
        children = None
        if kind is EntryKind.DIRECTORY and context.recursive:
            children = list_entries(context, path)
        nodes.append(Entry(path=context.display_path(path), kind=kind, stat=child_stat, children=children))
    return tuple(nodes)


async def list_entries_async(context: TraversalContext, directory: Path) -> tuple[Entry, ...]:
    """Async ``list_entries``: one directory scan in flight at a time."""
    rows = await asyncio.to_thread(_scan_directory, directory)
    nodes: list[Entry] = []
    for path, child_stat, kind in rows:
        children = None
        if kind is EntryKind.DIRECTORY and context.recursive:
            children = await list_entries_async(context, path)
        nodes.append(Entry(path=context.display_path(path), kind=kind, stat=child_stat, children=children))
    return tuple(nodes)


def build_entry(context: TraversalContext, path: Path, expand_children: bool = False) -> Entry:
    """Return one entry for ``path``, expanding directory children on request."""
    path_stat = os.lstat(path)
    kind = classify_mode(path_stat.st_mode)
    children = None
    if kind is EntryKind.DIRECTORY and expand_children:
        children = list_entries(context, path)
    return Entry(path=context.display_path(path), kind=kind, stat=path_stat, children=children)


async def build_entry_async(context: TraversalContext, path: Path, expand_children: bool = False) -> Entry:
    """Async ``build_entry``."""
    path_stat = await asyncio.to_thread(os.lstat, path)
    kind = classify_mode(path_stat.st_mode)
    children = None
    if kind is EntryKind.DIRECTORY and expand_children:
        children = await list_entries_async(context, path)
    return Entry(path=context.display_path(path), kind=kind, stat=path_stat, children=children)


def iter_entries(entries: tuple[Entry, ...]):
    """Yield entries depth-first, parents before their children."""
    for entry in entries:
        yield entry
        if entry.children:
            yield from iter_entries(entry.children)


__all__ = [
    "classify_mode",
    "lstat_kind",
    "TraversalContext",
    "list_entries",
    "list_entries_async",
    "build_entry",
    "build_entry_async",
    "iter_entries",
]
