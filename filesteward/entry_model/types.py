"""Domain datatypes for classified filesystem entries."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path


class EntryKind(enum.Enum):
    """Mutually exclusive node kinds reported by ``lstat``."""

    BLOCK_DEVICE = "block-device"
    CHAR_DEVICE = "char-device"
    DIRECTORY = "directory"
    FIFO = "fifo"
    FILE = "file"
    SOCKET = "socket"
    SYMLINK = "symlink"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Entry:
    """One classified node plus its raw metadata.

    ``children`` is ``None`` unless expansion was requested for a directory,
    in which case it holds the ordered child entries (nested when recursive).
    """

    path: Path
    kind: EntryKind
    stat: os.stat_result
    children: tuple["Entry", ...] | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def size(self) -> int:
        return int(self.stat.st_size)

    @property
    def mtime_ns(self) -> int:
        return int(self.stat.st_mtime_ns)

    @property
    def mode(self) -> int:
        return int(self.stat.st_mode)


__all__ = [
    "EntryKind",
    "Entry",
]
