"""Sequential, fail-fast execution of bulk task lists.

Tasks run strictly in list order through the steward's public methods. The
first failure stops the run and is re-raised annotated with the failing
task's index; work already applied by earlier tasks is left in place.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..entry_model import EntryKind
from ..errors import FileStewardError, InvalidArgumentError
from .tasks import CopyTask, CreateTask, CutTask, RemoveTask, Task, validate_task

if TYPE_CHECKING:
    from ..steward import FileSteward

logger = logging.getLogger(__name__)


def _require_sequence(tasks: object) -> Sequence[object]:
    if isinstance(tasks, (str, bytes, bytearray)) or not isinstance(tasks, Sequence):
        raise InvalidArgumentError('The "tasks" argument must be a sequence of tasks.')
    return tasks


def _execute(steward: FileSteward, task: Task) -> None:
    if isinstance(task, CreateTask):
        if task.kind is EntryKind.DIRECTORY:
            steward.create_directory(task.path, **task.options)
        else:
            steward.create_file(task.path, task.data, **task.options)
    elif isinstance(task, CopyTask):
        # blocking copies are always buffered
        steward.copy(task.src_path, task.dest_path)
    elif isinstance(task, CutTask):
        steward.cut(task.src_path, task.dest_path)
    elif isinstance(task, RemoveTask):
        steward.remove(task.path, **task.options)
    else:
        steward.rename(task.old_path, task.new_path)


async def _execute_async(steward: FileSteward, task: Task) -> None:
    if isinstance(task, CreateTask):
        if task.kind is EntryKind.DIRECTORY:
            await steward.create_directory_async(task.path, **task.options)
        else:
            await steward.create_file_async(task.path, task.data, **task.options)
    elif isinstance(task, CopyTask):
        await steward.copy_async(task.src_path, task.dest_path, **task.options)
    elif isinstance(task, CutTask):
        await steward.cut_async(task.src_path, task.dest_path, **task.options)
    elif isinstance(task, RemoveTask):
        await steward.remove_async(task.path, **task.options)
    else:
        await steward.rename_async(task.old_path, task.new_path)


def run_sequential(steward: FileSteward, tasks: object) -> None:
    """Run ``tasks`` one by one with blocking steward calls."""
    items = _require_sequence(tasks)
    for index, item in enumerate(items):
        try:
            task = validate_task(item, steward.bulk_ops)
            logger.debug("bulk task %d: %s", index, task.op.value)
            _execute(steward, task)
        except FileStewardError as exc:
            raise exc.at_index(index) from exc


async def run_sequential_async(steward: FileSteward, tasks: object) -> None:
    """Run ``tasks`` one by one, awaiting each before starting the next."""
    items = _require_sequence(tasks)
    for index, item in enumerate(items):
        try:
            task = validate_task(item, steward.bulk_ops)
            logger.debug("bulk task %d: %s", index, task.op.value)
            await _execute_async(steward, task)
        except FileStewardError as exc:
            raise exc.at_index(index) from exc


__all__ = [
    "run_sequential",
    "run_sequential_async",
]
