"""Line-oriented parser for Apache-style configuration text and files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from a2conf.config import (
    A2CONF_ENCODING,
    A2CONF_INCLUDES,
    A2CONF_MAX_INCLUDE_DEPTH,
    INCLUDE_DIRECTIVES,
)
from a2conf.exceptions import A2confError, IncludeError
from a2conf.fs_utils import (
    FileSystem,
    LocalFileSystem,
    glob_async,
    is_dir_async,
    iter_text_lines,
    read_lines_async,
)
from a2conf.node import Node

logger = logging.getLogger(__name__)


@dataclass
class ParseOptions:
    """Options for building a configuration tree.

    Attributes:
        includes: If True, resolve Include/IncludeOptional directives and
            splice the referenced files into the tree.
        encoding: Text encoding of configuration files.
        max_include_depth: Longest chain of nested includes that is followed.
        fs: Filesystem used for reading files and expanding globs.
    """

    includes: bool = A2CONF_INCLUDES
    encoding: str = A2CONF_ENCODING
    max_include_depth: int = A2CONF_MAX_INCLUDE_DEPTH
    fs: FileSystem = field(default_factory=LocalFileSystem)


async def from_text(text: str, options: ParseOptions | None = None) -> Node:
    """Parse configuration text into a tree.

    Include paths are used as written, relative to the working directory.

    Args:
        text: Configuration text.
        options: Parse options. Uses defaults if None.

    Returns:
        The root node of the tree.

    Raises:
        ParseError: If a line cannot be tokenized.
    """
    opts = options or ParseOptions()
    root = Node(includes=opts.includes)
    await _TreeBuilder(root, opts).feed(iter_text_lines(text))
    return root


async def from_file(path: str | Path, options: ParseOptions | None = None) -> Node:
    """Parse a configuration file into a tree.

    Relative include paths are resolved against the directory of ``path``.

    Args:
        path: Configuration file to read.
        options: Parse options. Uses defaults if None.

    Returns:
        The root node of the tree.

    Raises:
        ParseError: If a line of ``path`` cannot be tokenized.
        OSError: If ``path`` cannot be read.
    """
    opts = options or ParseOptions()
    filename = str(path)
    root = Node(path=filename, includes=opts.includes)
    lines = await read_lines_async(opts.fs, filename, opts.encoding)
    builder = _TreeBuilder(root, opts, path=filename, chain=(Path(filename).resolve(),))
    await builder.feed(lines)
    return root


class _TreeBuilder:
    """Feeds lines into a tree, tracking the innermost open section."""

    def __init__(
        self,
        root: Node,
        options: ParseOptions,
        *,
        path: str | None = None,
        chain: tuple[Path, ...] = (),
    ) -> None:
        self.root = root
        self.options = options
        self.path = path
        # resolved paths of the files currently being parsed, outermost first
        self.chain = chain

    async def feed(self, lines: Iterable[str]) -> None:
        parent = self.root
        for lineno, line in enumerate(lines, start=1):
            text = line.strip()
            if not text:
                continue

            node = Node(
                text,
                path=self.path,
                line=lineno,
                includes=self.root.includes,
            )

            if node.is_open():
                parent.add(node)
                parent = node
            elif node.is_close():
                # do not add closing tags; extra closes stay at the root
                if parent.parent is not None:
                    parent = parent.parent
            else:
                parent.add(node)

            if self.root.includes and node.name.lower() in INCLUDE_DIRECTIVES:
                await self._include(node, text)

    async def _include(self, node: Node, text: str) -> None:
        pattern = _unquote(node.args)
        if not pattern:
            logger.warning("Empty include directive ignored (%s)", text)
            return

        target = Path(pattern)
        if self.path is not None:
            target = Path(self.path).parent / target

        fs = self.options.fs
        if await is_dir_async(fs, str(target)):
            target = target / "*"
        pattern = str(target)

        matches = await glob_async(fs, pattern)
        logger.debug("%s expanded to %d file(s)", text, len(matches))
        if not matches and node.name.lower() == "include":
            logger.warning("Include pattern %s matched no files (%s)", pattern, text)

        for match in matches:
            try:
                sub = await self._parse_included(match)
            except (OSError, UnicodeDecodeError, A2confError) as exc:
                logger.warning("failed to import %s (%s): %s", match, text, exc)
                continue
            self.root.extend(sub)

    async def _parse_included(self, filename: str) -> Node:
        key = Path(filename).resolve()
        if key in self.chain:
            raise IncludeError(f"Include cycle through {filename}")
        if len(self.chain) >= self.options.max_include_depth:
            raise IncludeError(
                f"Include depth limit of {self.options.max_include_depth} reached at {filename}"
            )

        sub = Node(path=filename, includes=self.root.includes)
        lines = await read_lines_async(self.options.fs, filename, self.options.encoding)
        builder = _TreeBuilder(sub, self.options, path=filename, chain=(*self.chain, key))
        await builder.feed(lines)
        return sub


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1].strip()
    return value
