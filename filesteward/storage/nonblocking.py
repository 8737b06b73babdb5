"""Asyncio storage primitives.

Single calls are offloaded to a worker thread with ``asyncio.to_thread``.
Streaming transfers move one chunk per await, and recursive copies handle
children strictly one after another.
"""

from __future__ import annotations

import asyncio
import shutil
import stat as stat_module
from collections.abc import AsyncIterator
from pathlib import Path

from . import blocking
from .results import StorageResult

DEFAULT_CHUNK_SIZE = 64 * 1024


async def make_directory(path: Path, recursive: bool = True) -> StorageResult:
    return await asyncio.to_thread(blocking.make_directory, path, recursive)


async def write_bytes(path: Path, data: bytes) -> StorageResult:
    return await asyncio.to_thread(blocking.write_bytes, path, data)


async def remove_file(path: Path) -> StorageResult:
    return await asyncio.to_thread(blocking.remove_file, path)


async def remove_tree(path: Path) -> StorageResult:
    return await asyncio.to_thread(blocking.remove_tree, path)


async def rename(old: Path, new: Path) -> StorageResult:
    return await asyncio.to_thread(blocking.rename, old, new)


def is_byte_source(data: object) -> bool:
    """Return whether ``data`` is a live source rather than an in-memory payload."""
    return hasattr(data, "__aiter__") or callable(getattr(data, "read", None))


async def _iter_chunks(source: object, chunk_size: int) -> AsyncIterator[bytes]:
    if hasattr(source, "__aiter__"):
        async for chunk in source:
            yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        return
    while True:
        chunk = await asyncio.to_thread(source.read, chunk_size)
        if not chunk:
            return
        yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk


async def write_stream(path: Path, source: object, chunk_size: int = DEFAULT_CHUNK_SIZE) -> StorageResult:
    """Pipe ``source`` into ``path`` chunk by chunk.

    A failed transfer may leave a partially written file behind.
    """
    try:
        await asyncio.to_thread(blocking.clear_link, path)
        handle = await asyncio.to_thread(open, path, "wb")
        try:
            async for chunk in _iter_chunks(source, chunk_size):
                await asyncio.to_thread(handle.write, chunk)
        finally:
            await asyncio.to_thread(handle.close)
    except (OSError, TypeError) as exc:
        return StorageResult.failure(exc, path)
    return StorageResult.success(path)


async def stream_copy_file(src: Path, dest: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> StorageResult:
    try:
        source = await asyncio.to_thread(open, src, "rb")
    except OSError as exc:
        return StorageResult.failure(exc, src, dest)
    try:
        result = await write_stream(dest, source, chunk_size)
    finally:
        await asyncio.to_thread(source.close)
    if not result:
        return StorageResult.failure(result.cause, src, dest)
    try:
        await asyncio.to_thread(shutil.copymode, src, dest)
    except OSError as exc:
        return StorageResult.failure(exc, src, dest)
    return StorageResult.success(src, dest)


async def copy_file(src: Path, dest: Path, stream: bool = True, chunk_size: int = DEFAULT_CHUNK_SIZE) -> StorageResult:
    """Copy one file, either buffered in one call or streamed in chunks."""
    if stream:
        return await stream_copy_file(src, dest, chunk_size)
    return await asyncio.to_thread(blocking.copy_file, src, dest)


async def copy_tree(src: Path, dest: Path, stream: bool = True, chunk_size: int = DEFAULT_CHUNK_SIZE) -> StorageResult:
    """Async ``blocking.copy_tree`` with per-file streaming support."""
    created = await make_directory(dest)
    if not created:
        return created
    try:
        children = await asyncio.to_thread(blocking.scan_children, src)
    except OSError as exc:
        return StorageResult.failure(exc, src)
    for child, mode in children:
        target = dest / child.name
        if stat_module.S_ISDIR(mode):
            result = await copy_tree(child, target, stream, chunk_size)
        elif stat_module.S_ISREG(mode):
            result = await copy_file(child, target, stream, chunk_size)
        else:
            continue
        if not result:
            return result
    return StorageResult.success(src, dest)


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "make_directory",
    "write_bytes",
    "remove_file",
    "remove_tree",
    "rename",
    "is_byte_source",
    "write_stream",
    "stream_copy_file",
    "copy_file",
    "copy_tree",
]
