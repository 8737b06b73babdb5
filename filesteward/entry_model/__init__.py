"""Domain model for classified filesystem entries.

This package contains the non-mutating tree primitives:
- entry datatypes with optional nested children
- ``lstat`` classification into seven node kinds
- blocking and asyncio traversal sharing one directory scan
"""

from __future__ import annotations

from .types import Entry, EntryKind
from .fs import (
    TraversalContext,
    build_entry,
    build_entry_async,
    classify_mode,
    iter_entries,
    list_entries,
    list_entries_async,
    lstat_kind,
)

__all__ = [
    "Entry",
    "EntryKind",
    "TraversalContext",
    "classify_mode",
    "lstat_kind",
    "list_entries",
    "list_entries_async",
    "build_entry",
    "build_entry_async",
    "iter_entries",
]
