"""Public package surface for filesteward.

Exports the root-bound ``FileSteward`` façade, the entry and task models,
and the error taxonomy. ``main`` lazily imports the CLI entrypoint.
"""

from __future__ import annotations

from .bulk import CopyTask, CreateTask, CutTask, Op, RemoveTask, RenameTask, Task
from .entry_model import Entry, EntryKind
from .errors import (
    AlreadyExistsError,
    ErrorKind,
    FileStewardError,
    InvalidArgumentError,
    JurisdictionError,
    NotFoundError,
    OperationFailedError,
)
from .steward import FileSteward


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "FileSteward",
    "Entry",
    "EntryKind",
    "Op",
    "Task",
    "CreateTask",
    "CopyTask",
    "CutTask",
    "RemoveTask",
    "RenameTask",
    "ErrorKind",
    "FileStewardError",
    "InvalidArgumentError",
    "JurisdictionError",
    "NotFoundError",
    "AlreadyExistsError",
    "OperationFailedError",
    "main",
]
