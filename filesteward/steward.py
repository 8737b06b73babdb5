"""Root-bound façade for every filesystem mutation and inspection.

A ``FileSteward`` owns exactly one absolute root directory. Each public
method resolves its path arguments against that root, runs the jurisdiction
and existence checks, then delegates to the storage primitives. Blocking
methods and their ``*_async`` counterparts share the same ``_prepare_*``
validation so the guard logic exists once; the async methods run it in a
worker thread because it probes storage.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from . import bulk, config
from .entry_model import (
    Entry,
    EntryKind,
    TraversalContext,
    build_entry,
    build_entry_async,
    list_entries,
    list_entries_async,
    lstat_kind,
)
from .errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    NotFoundError,
    OperationFailedError,
)
from .guard import coerce_path, is_included, is_present, is_within, require_included, resolve_path, shares_parent
from .storage import StorageResult, blocking, nonblocking

logger = logging.getLogger(__name__)

_PAYLOAD_TYPES = (bytes, bytearray, memoryview, str)


def _require(result: StorageResult, message: str) -> None:
    """Raise ``OperationFailedError`` chained to the cause of a failed result."""
    if not result:
        raise OperationFailedError(message, *result.paths) from result.cause


def _payload_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _same_entry(src: Path, dest: Path) -> bool:
    """Whether both paths name the same inode, without following symlinks."""
    try:
        return os.path.samestat(os.lstat(src), os.lstat(dest))
    except OSError:
        return False


def _missing(path: Path) -> NotFoundError:
    return NotFoundError(f'The file/directory pointed by the path "{path}" does not exist.', path)


class FileSteward:
    """Confine create/copy/cut/remove/rename calls to one root directory.

    ``stream``, ``chunk_size`` and ``bulk_ops`` default to the persisted
    config values (see ``filesteward.config``).
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        *,
        stream: bool | None = None,
        chunk_size: int | None = None,
        bulk_ops: Iterable[str] | None = None,
    ) -> None:
        raw_root = coerce_path(root, "root")
        if not os.path.isabs(raw_root):
            raise InvalidArgumentError("The constructor must be given an absolute path as the root to manage.", raw_root)
        resolved = Path(os.path.normpath(raw_root))
        if os.path.lexists(resolved):
            if lstat_kind(resolved) is not EntryKind.DIRECTORY:
                raise InvalidArgumentError(f'The root path "{resolved}" must point to a directory.', resolved)
        else:
            _require(
                blocking.make_directory(resolved),
                f'The directory pointed by the path "{resolved}" could not be created.',
            )
        if chunk_size is not None and (isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0):
            raise InvalidArgumentError('The "chunk_size" argument must be a positive integer.')

        self._root = resolved
        self._stream = config.load_stream() if stream is None else bool(stream)
        self._chunk_size = config.load_chunk_size() if chunk_size is None else chunk_size
        self._bulk_ops = config.load_bulk_ops() if bulk_ops is None else frozenset(
            str(name).strip().lower() for name in bulk_ops
        )

    def __repr__(self) -> str:
        return f"FileSteward({str(self._root)!r})"

    @property
    def root(self) -> Path:
        return self._root

    @property
    def bulk_ops(self) -> frozenset[str]:
        return self._bulk_ops

    # Path guard

    def is_included(self, path: str | os.PathLike[str]) -> bool:
        """Whether ``path`` resolves to the root or a descendant of it."""
        return is_included(self._root, path)

    def is_present(self, path: str | os.PathLike[str]) -> bool:
        """Whether an in-jurisdiction ``path`` exists; raises when out of jurisdiction."""
        return is_present(self._root, path)

    def _require_mutable(self, path: Path, verb: str) -> None:
        if path == self._root:
            raise InvalidArgumentError(f"The steward's root \"{path}\" can not be {verb}.", path)

    # Validation shared by both execution modes

    def _prepare_create_directory(self, path: object, recursive: bool) -> Path:
        target = require_included(self._root, path)
        if not recursive:
            parent = target.parent
            if target != self._root and parent != self._root and not os.path.lexists(parent):
                raise NotFoundError(f'The parent directory of the path "{target}" does not exist.', target)
        return target

    def _prepare_create_file(self, path: object, data: object, cover: bool, allow_source: bool) -> Path:
        target = require_included(self._root, path)
        if not isinstance(data, _PAYLOAD_TYPES):
            if not allow_source or not nonblocking.is_byte_source(data):
                accepted = "bytes, str, or a readable byte source" if allow_source else "bytes or str"
                raise InvalidArgumentError(f'The "data" argument must be {accepted}, not {type(data).__name__}.', target)
        if not cover and os.path.lexists(target):
            raise AlreadyExistsError(f'The file pointed by the path "{target}" already exists.', target)
        return target

    def _prepare_transfer(self, src_path: object, dest_path: object, verb: str) -> tuple[Path, Path, EntryKind]:
        """Resolve and validate a copy/cut pair.

        ``copy`` may read from outside the root; ``cut`` removes its source, so
        both ends must be in jurisdiction.
        """
        dest = require_included(self._root, dest_path, "dest_path")
        if verb == "cut":
            src = require_included(self._root, src_path, "src_path")
            self._require_mutable(src, "cut")
        else:
            src = resolve_path(self._root, src_path, "src_path")

        kind = lstat_kind(src)
        if kind is None:
            raise _missing(src)
        if kind is EntryKind.DIRECTORY:
            if is_within(dest, src):
                raise InvalidArgumentError(f'Can not {verb} "{src}" to a subdirectory of self.', src, dest)
        elif kind is not EntryKind.FILE:
            raise OperationFailedError(f'Can not {verb} "{src}": {kind.value} entries are not supported.', src)
        elif _same_entry(src, dest):
            raise OperationFailedError(f'Can not {verb} "{src}" onto itself.', src, dest)
        return src, dest, kind

    def _prepare_remove(self, path: object, force: bool) -> tuple[Path, EntryKind | None]:
        target = require_included(self._root, path)
        self._require_mutable(target, "removed")
        kind = lstat_kind(target)
        if kind is None:
            if not force:
                raise _missing(target)
        elif kind not in (EntryKind.DIRECTORY, EntryKind.FILE):
            raise OperationFailedError(f'Can not remove "{target}": {kind.value} entries are not supported.', target)
        return target, kind

    def _prepare_rename(self, old_path: object, new_path: object) -> tuple[Path, Path]:
        old = require_included(self._root, old_path, "old_path")
        new = require_included(self._root, new_path, "new_path")
        self._require_mutable(old, "renamed")
        if not os.path.lexists(old):
            raise _missing(old)
        if not shares_parent(old, new):
            raise InvalidArgumentError(f'The parent paths between "{old}" and "{new}" do not match.', old, new)
        return old, new

    def _prepare_inspect(self, path: object | None) -> Path:
        if path is None:
            return self._root
        target = require_included(self._root, path)
        if target != self._root and not os.path.lexists(target):
            raise _missing(target)
        return target

    def _prepare_list(self, path: object | None) -> Path:
        target = self._prepare_inspect(path)
        if lstat_kind(target) is not EntryKind.DIRECTORY:
            raise InvalidArgumentError(f'The path "{target}" is not a directory.', target)
        return target

    # Blocking operations

    def create_directory(self, path: str | os.PathLike[str], *, recursive: bool = True) -> None:
        """Create a directory; an existing directory is left as is."""
        target = self._prepare_create_directory(path, recursive)
        logger.debug("create directory %s (recursive=%s)", target, recursive)
        _require(blocking.make_directory(target, recursive), f'Failed to create the directory "{target}".')

    def create_file(self, path: str | os.PathLike[str], data: bytes | str, *, cover: bool = True) -> None:
        """Write ``data`` to ``path``, creating parent directories as needed.

        Live byte sources are only accepted by ``create_file_async``.
        """
        target = self._prepare_create_file(path, data, cover, allow_source=False)
        logger.debug("create file %s (cover=%s)", target, cover)
        _require(blocking.make_directory(target.parent), f'Failed to create the file "{target}".')
        _require(blocking.write_bytes(target, _payload_bytes(data)), f'Failed to create the file "{target}".')

    def copy(self, src_path: str | os.PathLike[str], dest_path: str | os.PathLike[str]) -> None:
        """Copy a file or directory tree to ``dest_path``, overwriting files."""
        src, dest, kind = self._prepare_transfer(src_path, dest_path, "copy")
        logger.debug("copy %s -> %s", src, dest)
        if kind is EntryKind.DIRECTORY:
            _require(blocking.copy_tree(src, dest), f'Failed to copy directory "{src}" to "{dest}".')
            return
        _require(
            blocking.make_directory(dest.parent),
            f'Failed to create the parent directory "{dest.parent}" of the path "{dest}".',
        )
        _require(blocking.copy_file(src, dest), f'Failed to copy file "{src}" to "{dest}".')

    def cut(self, src_path: str | os.PathLike[str], dest_path: str | os.PathLike[str]) -> None:
        """Move by copying to ``dest_path`` and then removing the source."""
        src, dest, kind = self._prepare_transfer(src_path, dest_path, "cut")
        logger.debug("cut %s -> %s", src, dest)
        if kind is EntryKind.DIRECTORY:
            _require(blocking.copy_tree(src, dest), f'Failed to cut directory "{src}" to "{dest}".')
            _require(blocking.remove_tree(src), f'Failed to cut directory "{src}" to "{dest}".')
            return
        _require(
            blocking.make_directory(dest.parent),
            f'Failed to create the parent directory "{dest.parent}" of the path "{dest}".',
        )
        _require(blocking.copy_file(src, dest), f'Failed to cut file "{src}" to "{dest}".')
        _require(blocking.remove_file(src), f'Failed to cut file "{src}" to "{dest}".')

    def remove(self, path: str | os.PathLike[str], *, force: bool = True) -> None:
        """Remove a file or directory tree; absent paths are fine when ``force``."""
        target, kind = self._prepare_remove(path, force)
        if kind is None:
            return
        logger.debug("remove %s", target)
        if kind is EntryKind.DIRECTORY:
            _require(blocking.remove_tree(target), f'Failed to remove the directory "{target}".')
        else:
            _require(blocking.remove_file(target), f'Failed to remove the file "{target}".')

    def rename(self, old_path: str | os.PathLike[str], new_path: str | os.PathLike[str]) -> None:
        """Relabel an entry within its own directory."""
        old, new = self._prepare_rename(old_path, new_path)
        logger.debug("rename %s -> %s", old, new)
        _require(blocking.rename(old, new), f'Failed to rename "{old}" to "{new}".')

    def inspect(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        relative: bool = True,
        children: bool = False,
        recursive: bool = False,
    ) -> Entry:
        """Return the entry for ``path`` (default: the root)."""
        target = self._prepare_inspect(path)
        context = TraversalContext(root=self._root, relative=relative, recursive=recursive)
        try:
            return build_entry(context, target, expand_children=children)
        except OSError as exc:
            raise OperationFailedError(f'Failed to inspect "{target}".', target) from exc

    def list_directory(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        relative: bool = True,
        recursive: bool = False,
    ) -> tuple[Entry, ...]:
        """Return the child entries of a directory (default: the root)."""
        target = self._prepare_list(path)
        context = TraversalContext(root=self._root, relative=relative, recursive=recursive)
        try:
            return list_entries(context, target)
        except OSError as exc:
            raise OperationFailedError(f'Failed to list "{target}".', target) from exc

    def run_sequential(self, tasks: object) -> None:
        """Apply a task list in order, stopping at the first failure."""
        bulk.run_sequential(self, tasks)

    # Non-blocking operations

    async def create_directory_async(self, path: str | os.PathLike[str], *, recursive: bool = True) -> None:
        target = await asyncio.to_thread(self._prepare_create_directory, path, recursive)
        logger.debug("create directory %s (recursive=%s)", target, recursive)
        _require(await nonblocking.make_directory(target, recursive), f'Failed to create the directory "{target}".')

    async def create_file_async(self, path: str | os.PathLike[str], data: object, *, cover: bool = True) -> None:
        """Write ``data`` to ``path``.

        ``data`` may also be a binary readable object or an async iterable of
        bytes; those are piped to disk one chunk at a time.
        """
        target = await asyncio.to_thread(self._prepare_create_file, path, data, cover, allow_source=True)
        logger.debug("create file %s (cover=%s)", target, cover)
        _require(await nonblocking.make_directory(target.parent), f'Failed to create the file "{target}".')
        if isinstance(data, _PAYLOAD_TYPES):
            result = await nonblocking.write_bytes(target, _payload_bytes(data))
        else:
            result = await nonblocking.write_stream(target, data, self._chunk_size)
        _require(result, f'Failed to create the file "{target}".')

    async def copy_async(
        self,
        src_path: str | os.PathLike[str],
        dest_path: str | os.PathLike[str],
        *,
        stream: bool | None = None,
    ) -> None:
        src, dest, kind = await asyncio.to_thread(self._prepare_transfer, src_path, dest_path, "copy")
        stream = self._stream if stream is None else stream
        logger.debug("copy %s -> %s (stream=%s)", src, dest, stream)
        if kind is EntryKind.DIRECTORY:
            result = await nonblocking.copy_tree(src, dest, stream, self._chunk_size)
            _require(result, f'Failed to copy directory "{src}" to "{dest}".')
            return
        _require(
            await nonblocking.make_directory(dest.parent),
            f'Failed to create the parent directory "{dest.parent}" of the path "{dest}".',
        )
        result = await nonblocking.copy_file(src, dest, stream, self._chunk_size)
        _require(result, f'Failed to copy file "{src}" to "{dest}".')

    async def cut_async(
        self,
        src_path: str | os.PathLike[str],
        dest_path: str | os.PathLike[str],
        *,
        stream: bool | None = None,
    ) -> None:
        """Async ``cut``; the source is removed only after a confirmed transfer."""
        src, dest, kind = await asyncio.to_thread(self._prepare_transfer, src_path, dest_path, "cut")
        stream = self._stream if stream is None else stream
        logger.debug("cut %s -> %s (stream=%s)", src, dest, stream)
        if kind is EntryKind.DIRECTORY:
            result = await nonblocking.copy_tree(src, dest, stream, self._chunk_size)
            _require(result, f'Failed to cut directory "{src}" to "{dest}".')
            _require(await nonblocking.remove_tree(src), f'Failed to cut directory "{src}" to "{dest}".')
            return
        _require(
            await nonblocking.make_directory(dest.parent),
            f'Failed to create the parent directory "{dest.parent}" of the path "{dest}".',
        )
        result = await nonblocking.copy_file(src, dest, stream, self._chunk_size)
        _require(result, f'Failed to cut file "{src}" to "{dest}".')
        _require(await nonblocking.remove_file(src), f'Failed to cut file "{src}" to "{dest}".')

    async def remove_async(self, path: str | os.PathLike[str], *, force: bool = True) -> None:
        target, kind = await asyncio.to_thread(self._prepare_remove, path, force)
        if kind is None:
            return
        logger.debug("remove %s", target)
        if kind is EntryKind.DIRECTORY:
            _require(await nonblocking.remove_tree(target), f'Failed to remove the directory "{target}".')
        else:
            _require(await nonblocking.remove_file(target), f'Failed to remove the file "{target}".')

    async def rename_async(self, old_path: str | os.PathLike[str], new_path: str | os.PathLike[str]) -> None:
        old, new = await asyncio.to_thread(self._prepare_rename, old_path, new_path)
        logger.debug("rename %s -> %s", old, new)
        _require(await nonblocking.rename(old, new), f'Failed to rename "{old}" to "{new}".')

    async def inspect_async(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        relative: bool = True,
        children: bool = False,
        recursive: bool = False,
    ) -> Entry:
        target = await asyncio.to_thread(self._prepare_inspect, path)
        context = TraversalContext(root=self._root, relative=relative, recursive=recursive)
        try:
            return await build_entry_async(context, target, expand_children=children)
        except OSError as exc:
            raise OperationFailedError(f'Failed to inspect "{target}".', target) from exc

    async def list_directory_async(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        relative: bool = True,
        recursive: bool = False,
    ) -> tuple[Entry, ...]:
        target = await asyncio.to_thread(self._prepare_list, path)
        context = TraversalContext(root=self._root, relative=relative, recursive=recursive)
        try:
            return await list_entries_async(context, target)
        except OSError as exc:
            raise OperationFailedError(f'Failed to list "{target}".', target) from exc

    async def run_sequential_async(self, tasks: object) -> None:
        """Async ``run_sequential``; each task completes before the next starts."""
        await bulk.run_sequential_async(self, tasks)


__all__ = [
    "FileSteward",
]
