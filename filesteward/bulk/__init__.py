"""Ordered bulk execution of heterogeneous steward tasks."""

from __future__ import annotations

from .runner import run_sequential, run_sequential_async
from .tasks import (
    CopyTask,
    CreateTask,
    CutTask,
    Op,
    RemoveTask,
    RenameTask,
    Task,
    parse_kind,
    parse_op,
    task_from_mapping,
    validate_task,
)

__all__ = [
    "Op",
    "CreateTask",
    "CopyTask",
    "CutTask",
    "RemoveTask",
    "RenameTask",
    "Task",
    "parse_op",
    "parse_kind",
    "task_from_mapping",
    "validate_task",
    "run_sequential",
    "run_sequential_async",
]
