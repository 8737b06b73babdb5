"""Task descriptors consumed by the bulk runner.

Callers either build task dataclasses directly or hand over plain mappings
(as decoded from a JSON plan); both are validated by ``validate_task`` right
before the task runs.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar

from ..entry_model import EntryKind
from ..errors import InvalidArgumentError


class Op(enum.Enum):
    """Operation tag of a bulk task."""

    CREATE = "create"
    COPY = "copy"
    REMOVE = "remove"
    CUT = "cut"
    RENAME = "rename"


@dataclass(frozen=True)
class CreateTask:
    path: object
    kind: EntryKind
    data: object = None
    options: Mapping[str, object] = field(default_factory=dict)
    op: ClassVar[Op] = Op.CREATE


@dataclass(frozen=True)
class CopyTask:
    src_path: object
    dest_path: object
    options: Mapping[str, object] = field(default_factory=dict)
    op: ClassVar[Op] = Op.COPY


@dataclass(frozen=True)
class CutTask:
    src_path: object
    dest_path: object
    options: Mapping[str, object] = field(default_factory=dict)
    op: ClassVar[Op] = Op.CUT


@dataclass(frozen=True)
class RemoveTask:
    path: object
    options: Mapping[str, object] = field(default_factory=dict)
    op: ClassVar[Op] = Op.REMOVE


@dataclass(frozen=True)
class RenameTask:
    old_path: object
    new_path: object
    op: ClassVar[Op] = Op.RENAME


Task = CreateTask | CopyTask | CutTask | RemoveTask | RenameTask

_TASK_TYPES = (CreateTask, CopyTask, CutTask, RemoveTask, RenameTask)
_CREATABLE_KINDS = (EntryKind.DIRECTORY, EntryKind.FILE)
_CREATE_OPTIONS = {EntryKind.DIRECTORY: frozenset({"recursive"}), EntryKind.FILE: frozenset({"cover"})}
_TRANSFER_OPTIONS = frozenset({"stream"})
_REMOVE_OPTIONS = frozenset({"force"})


def _missing_key(name: str) -> InvalidArgumentError:
    return InvalidArgumentError(f'The "{name}" key must be given.')


def parse_op(value: object) -> Op:
    """Accept an ``Op`` member or its case-insensitive name."""
    if isinstance(value, Op):
        return value
    if isinstance(value, str):
        try:
            return Op(value.strip().lower())
        except ValueError:
            pass
    raise InvalidArgumentError(f"Unknown operation {value!r}.")


def parse_kind(value: object) -> EntryKind:
    """Accept a creatable ``EntryKind`` member or its case-insensitive name."""
    kind = value
    if isinstance(value, str):
        try:
            kind = EntryKind(value.strip().lower())
        except ValueError:
            kind = None
    if kind not in _CREATABLE_KINDS:
        raise InvalidArgumentError(f"Can not create entries of kind {value!r}; use 'file' or 'directory'.")
    return kind


def _check_options(options: object, allowed: frozenset[str]) -> dict[str, bool]:
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        raise InvalidArgumentError('The "options" key must map option names to booleans.')
    checked: dict[str, bool] = {}
    for name, value in options.items():
        if name not in allowed:
            raise InvalidArgumentError(f"Unknown option {name!r}.")
        if not isinstance(value, bool):
            raise InvalidArgumentError(f'The option "{name}" must be a boolean.')
        checked[name] = value
    return checked


def task_from_mapping(raw: Mapping[str, object]) -> Task:
    """Build a task from a mapping with an ``op`` key and per-op fields."""
    op_value = raw.get("op")
    if op_value is None:
        raise _missing_key("op")
    op = parse_op(op_value)

    def require(name: str) -> object:
        value = raw.get(name)
        if value is None:
            raise _missing_key(name)
        return value

    if op is Op.CREATE:
        path = require("path")
        kind_value = raw.get("kind", raw.get("type"))
        if kind_value is None:
            raise _missing_key("kind")
        return CreateTask(path=path, kind=parse_kind(kind_value), data=raw.get("data"), options=raw.get("options") or {})
    if op is Op.COPY:
        return CopyTask(src_path=require("src_path"), dest_path=require("dest_path"), options=raw.get("options") or {})
    if op is Op.CUT:
        return CutTask(src_path=require("src_path"), dest_path=require("dest_path"), options=raw.get("options") or {})
    if op is Op.REMOVE:
        return RemoveTask(path=require("path"), options=raw.get("options") or {})
    return RenameTask(old_path=require("old_path"), new_path=require("new_path"))


def validate_task(item: object, enabled_ops: frozenset[str] | None = None) -> Task:
    """Return a well-formed task for ``item`` or raise ``InvalidArgumentError``.

    ``enabled_ops`` restricts which op names may run; ``None`` allows all.
    """
    if isinstance(item, Mapping):
        task = task_from_mapping(item)
    elif isinstance(item, _TASK_TYPES):
        task = item
    else:
        raise InvalidArgumentError(f"The item must be a task or a mapping, not {type(item).__name__}.")

    if enabled_ops is not None and task.op.value not in enabled_ops:
        raise InvalidArgumentError(f'The "{task.op.value}" operation is not enabled for bulk plans.')

    if isinstance(task, CreateTask):
        if task.path is None:
            raise _missing_key("path")
        kind = parse_kind(task.kind)
        if kind is EntryKind.FILE and task.data is None:
            raise _missing_key("data")
        options = _check_options(task.options, _CREATE_OPTIONS[kind])
        return CreateTask(path=task.path, kind=kind, data=task.data, options=options)
    if isinstance(task, (CopyTask, CutTask)):
        if task.src_path is None:
            raise _missing_key("src_path")
        if task.dest_path is None:
            raise _missing_key("dest_path")
        options = _check_options(task.options, _TRANSFER_OPTIONS)
        return type(task)(src_path=task.src_path, dest_path=task.dest_path, options=options)
    if isinstance(task, RemoveTask):
        if task.path is None:
            raise _missing_key("path")
        return RemoveTask(path=task.path, options=_check_options(task.options, _REMOVE_OPTIONS))
    if task.old_path is None:
        raise _missing_key("old_path")
    if task.new_path is None:
        raise _missing_key("new_path")
    return task


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
]
