"""Filesystem access used by the parser and the serializer.

The parser never touches the disk directly. It calls through a ``FileSystem``
object so callers can substitute an in-memory or sandboxed implementation.
"""

from __future__ import annotations

import asyncio
import glob as _glob
import os
from typing import Iterator, Protocol

from a2conf.config import A2CONF_ENCODING


class FileSystem(Protocol):
    """Capabilities the parser needs from the host."""

    def exists(self, path: str) -> bool: ...

    def is_dir(self, path: str) -> bool: ...

    def glob(self, pattern: str) -> list[str]: ...

    def read_lines(self, path: str, encoding: str = A2CONF_ENCODING) -> Iterator[str]: ...

    def write_text(self, path: str, content: str, encoding: str = A2CONF_ENCODING) -> None: ...


class LocalFileSystem:
    """``FileSystem`` backed by the local disk."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def glob(self, pattern: str) -> list[str]:
        """Expand a shell-style pattern into a sorted list of paths.

        ``glob.glob`` returns matches in directory order, which differs
        between filesystems, so the result is sorted.
        """
        return sorted(_glob.glob(pattern))

    def read_lines(self, path: str, encoding: str = A2CONF_ENCODING) -> Iterator[str]:
        """Open ``path`` and return a lazy iterator over its lines.

        The file is opened before returning so a missing or unreadable file
        raises ``OSError`` at the call site rather than on first iteration.
        """
        handle = open(path, encoding=encoding)
        return _iter_handle(handle)

    def write_text(self, path: str, content: str, encoding: str = A2CONF_ENCODING) -> None:
        with open(path, "w", encoding=encoding) as handle:
            handle.write(content)


def _iter_handle(handle) -> Iterator[str]:
    with handle:
        for line in handle:
            yield line.rstrip("\r\n")


def iter_text_lines(text: str) -> Iterator[str]:
    """Split an in-memory string into lines by newline."""
    yield from text.split("\n")


async def read_lines_async(
    fs: FileSystem, path: str, encoding: str = A2CONF_ENCODING
) -> list[str]:
    """Read every line of a file in a worker thread.

    Args:
        fs: Filesystem to read through.
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The lines of the file without line terminators.
    """
    return await asyncio.to_thread(lambda: list(fs.read_lines(path, encoding)))


async def is_dir_async(fs: FileSystem, path: str) -> bool:
    """Check in a worker thread whether ``path`` is an existing directory."""
    return await asyncio.to_thread(lambda: fs.exists(path) and fs.is_dir(path))


async def glob_async(fs: FileSystem, pattern: str) -> list[str]:
    """Expand a glob pattern in a worker thread."""
    return await asyncio.to_thread(fs.glob, pattern)


async def write_text_async(
    fs: FileSystem, path: str, content: str, encoding: str = A2CONF_ENCODING
) -> None:
    """Write text to a file asynchronously using a thread pool.

    Args:
        fs: Filesystem to write through.
        path: Path to the file to write.
        content: Text content to write.
        encoding: Text encoding to use.
    """
    await asyncio.to_thread(fs.write_text, path, content, encoding)
