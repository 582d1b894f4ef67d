"""Mutable document tree for Apache-style configuration files."""

from __future__ import annotations

import itertools
import re
from pathlib import Path
from typing import Iterable, Union

from a2conf.config import A2CONF_ENCODING, A2CONF_INDENT
from a2conf.exceptions import ParseError
from a2conf.fs_utils import FileSystem, LocalFileSystem, write_text_async
from a2conf.schemas import ConfigNode

ROOT_NAME = "#root"

_SUFFIX_RE = re.compile(r"#.*$")
_OPEN_RE = re.compile(r"^[ \t]*<(?!/)")
_CLOSE_RE = re.compile(r"^[ \t]*</")
_OPEN_TAG_RE = re.compile(r"[ \t]*<([^ \t>]+)([^>]*)")
_CLOSE_TAG_RE = re.compile(r"[ \t]*<(/[^ \t>]+)([^>]*)")
_COMMAND_RE = re.compile(r"[ \t]*([^ \t]+)[ \t]*([^#]*)")

# Process-wide identity source; never reset.
_node_ids = itertools.count()

AfterSpec = Union["Node", str]


class Node:
    """One line of configuration, or the synthetic root of a tree.

    The variant is determined by which fields are populated: ``section`` for
    ``<Section>`` blocks, ``cmd`` for directives, neither for comments and the
    root. ``parent`` is a back-reference only; ``content`` owns the children.
    """

    def __init__(
        self,
        raw: str | None = None,
        *,
        parent: Node | None = None,
        name: str | None = None,
        path: str | None = None,
        line: int | None = None,
        includes: bool = True,
        prefix: str | None = None,
    ) -> None:
        self.id = next(_node_ids)
        self.raw = raw
        self.parent = parent
        self.content: list[Node] = []
        self.prefix = prefix if prefix is not None else " " * A2CONF_INDENT
        self.section: str | None = None
        self.cmd: str | None = None
        self.args = ""
        self.suffix: str | None = None
        self.last_child: Node | None = None
        self.includes = includes
        self.path = path
        self.line = line

        if raw:
            match = _SUFFIX_RE.search(raw)
            self.suffix = match.group(0) if match else ""

        if name:
            self.name = name
        elif raw and raw.strip():
            # ServerName, or <VirtualHost> for "<VirtualHost *:80>"
            self.name = raw.split()[0]
            if self.name.startswith("<") and not self.name.endswith(">"):
                self.name += ">"
        else:
            self.name = ROOT_NAME

        if raw:
            self._parse_raw(raw)

    def _parse_raw(self, raw: str) -> None:
        if self.is_open():
            match = _OPEN_TAG_RE.match(raw)
            if not match:
                raise ParseError(raw.strip(), path=self.path, lineno=self.line)
            self.section = match.group(1)
            self.args = match.group(2).strip()
        elif self.is_close():
            # Close tags only end a scope; the name is never checked.
            match = _CLOSE_TAG_RE.match(raw)
            if match:
                self.section = match.group(1)
        else:
            cmdline = raw.split("#")[0].strip()
            if cmdline:
                match = _COMMAND_RE.match(cmdline)
                if not match:
                    raise ParseError(cmdline, path=self.path, lineno=self.line)
                self.cmd = match.group(1)
                self.args = match.group(2).strip()

    def __str__(self) -> str:
        return self.name or self.raw or ""

    def __repr__(self) -> str:
        if self.raw is None:
            return f"Node({self.name!r})"
        return f"Node({self.raw!r})"

    def is_open(self) -> bool:
        """Return True if this node opens a section, e.g. <VirtualHost>."""
        return bool(self.raw and _OPEN_RE.match(self.raw))

    def is_close(self) -> bool:
        """Return True if this node closes a section."""
        return bool(self.raw and _CLOSE_RE.match(self.raw))

    def is_root(self) -> bool:
        return self.raw is None and self.parent is None

    def _adopt(self, child: Node) -> None:
        if child.parent is self:
            # re-adding an attached child moves it
            self.content = [c for c in self.content if c.id != child.id]
        elif child.parent is not None:
            child.delete()
        child.parent = self

    def _line_child(self, raw: str) -> Node:
        line = raw.strip()
        if not line:
            raise ValueError("Configuration line must not be blank")
        return Node(line, includes=self.includes, prefix=self.prefix)

    def add(self, child: Node) -> None:
        """Append a child node.

        Raises:
            TypeError: If ``child`` is not a ``Node``.
        """
        if not isinstance(child, Node):
            raise TypeError("Child must be an instance of Node")
        self._adopt(child)
        self.content.append(child)
        self.last_child = child

    def add_raw(self, raw: str) -> Node:
        """Parse a single line and append it as a child.

        Raises:
            ValueError: If ``raw`` is blank.
        """
        child = self._line_child(raw)
        self.add(child)
        return child

    def insert(
        self,
        child: Node | str,
        after: AfterSpec | Iterable[AfterSpec] | None = None,
    ) -> Node:
        """Insert a child, optionally right after an existing one.

        Args:
            child: A node, or a raw configuration line to parse into one.
            after: A node, a directive/section name, or a sequence of them.
                Candidates are tried from last to first; the first one that
                matches places ``child`` right after the last matching
                sibling. Names compare case-insensitively, nodes by identity.

        Returns:
            The inserted node. It is appended when no candidate matches.

        Raises:
            TypeError: If ``child`` is neither a node nor a string.
            ValueError: If ``child`` is a blank string.
        """
        if isinstance(child, str):
            node = self._line_child(child)
        elif isinstance(child, Node):
            node = child
        else:
            raise TypeError("Child must be a Node or a configuration line")

        if after is None:
            candidates: list[AfterSpec] = []
        elif isinstance(after, (str, Node)):
            candidates = [after]
        else:
            candidates = list(after)

        self._adopt(node)
        for candidate in reversed(candidates):
            index = self._index_after(candidate)
            if index is not None:
                self.content.insert(index, node)
                return node

        self.content.append(node)
        return node

    def _index_after(self, after: AfterSpec) -> int | None:
        index = None
        for i, c in enumerate(self.content):
            if isinstance(after, Node):
                if c.id == after.id:
                    index = i + 1
            elif c.name.lower() == after.lower():
                index = i + 1
        return index

    def set(self, name: str, value: str) -> None:
        """Set ``name`` to ``value`` on every matching child, or add it."""
        properties = self.children(name)
        if not properties:
            self.insert(f"{name} {value}")
            return
        for prop in properties:
            prop.args = value

    def get_open_tag(self) -> str:
        if self.args:
            return f"<{self.section} {self.args}>"
        return f"<{self.section}>"

    def get_close_tag(self) -> str:
        return f"</{self.section}>"

    def filter(self, pattern: str | re.Pattern[str]) -> None:
        """Remove children whose raw line matches ``pattern``.

        Matching is a case-insensitive regular expression search. Sections
        are filtered recursively before the current level is checked.
        """
        if isinstance(pattern, re.Pattern):
            regex = re.compile(pattern.pattern, pattern.flags | re.IGNORECASE)
        else:
            regex = re.compile(pattern, re.IGNORECASE)

        kept: list[Node] = []
        for c in self.content:
            if c.section:
                c.filter(regex)
            if c.raw is not None and regex.search(c.raw):
                c.parent = None
                continue
            kept.append(c)
        self.content = kept

    def children(self, name: str | None = None, *, recursive: bool = False) -> list[Node]:
        """Return child nodes, optionally filtered by name.

        Args:
            name: Directive or section name, e.g. ``ServerName`` or
                ``<VirtualHost>``. Compared case-insensitively. ``None``
                selects every child.
            recursive: Also descend into sections. Each match is followed by
                the matches found beneath it (depth-first pre-order).

        Returns:
            A new list of matching nodes.
        """
        wanted = name.lower() if name else None
        nodes: list[Node] = []
        for c in self.content:
            if wanted is None or c.name.lower() == wanted:
                nodes.append(c)
            if recursive and c.content:
                nodes.extend(c.children(name, recursive=True))
        return nodes

    def first(self, name: str | None = None, *, recursive: bool = False) -> Node | None:
        """Wrapper for children to get only the first element or None."""
        found = self.children(name, recursive=recursive)
        return found[0] if found else None

    def extend(self, other: Node) -> None:
        """Move every child of ``other`` to the end of this node."""
        moved = other.content
        other.content = []
        for c in moved:
            c.parent = self
        self.content.extend(moved)

    def delete(self) -> None:
        """Delete myself from parent content."""
        if self.parent is None:
            return
        self.parent.content = [c for c in self.parent.content if c.id != self.id]
        self.parent = None

    def server_names(self) -> list[str]:
        """Host names served by this section: ServerName, then ServerAlias."""
        names: list[str] = []
        server_name = self.first("ServerName")
        if server_name is not None and server_name.args:
            names.append(server_name.args)
        for alias in self.children("ServerAlias"):
            names.extend(alias.args.split())
        return names

    def find_vhost(self, hostname: str, arg: str | None = None) -> Node | None:
        """Find a direct <VirtualHost> child serving ``hostname``.

        Args:
            hostname: Exact ServerName or ServerAlias to look for.
            arg: If given, must be a substring of the section arguments,
                e.g. ``*:443``.

        Returns:
            The first matching section, or None.
        """
        for vhost in self.children("<VirtualHost>"):
            if arg and arg not in vhost.args:
                continue
            if hostname in vhost.server_names():
                return vhost
        return None

    def dump(self, depth: int = 0) -> str:
        """Serialize this node and its sub-tree to configuration text."""
        output: list[str] = []
        padded_suffix = f" {self.suffix}" if self.suffix else ""
        indent = self.prefix * max(depth, 0)

        if self.cmd:
            cmdline = f"{self.cmd} {self.args}" if self.args else self.cmd
            output.append(f"{indent}{cmdline}{padded_suffix}\n")
        elif self.section:
            closing = self.section.startswith("/")
            # a stray close node sits on its section's indentation level
            line_depth = depth - 1 if closing else depth
            lead = self.prefix * max(line_depth, 0)
            if closing:
                output.append(f"{lead}<{self.section}>{padded_suffix}\n")
            else:
                output.append(f"{lead}{self.get_open_tag()}{padded_suffix}\n")
                for c in self.content:
                    output.append(c.dump(depth + 1))
                output.append(f"{lead}{self.get_close_tag()}\n")
        else:
            if self.suffix:
                output.append(f"{indent}{self.suffix}\n")
            elif self.raw:
                output.append("\n")
            # only the root has neither cmd nor section and carries children
            for c in self.content:
                output.append(c.dump(depth))

        return "".join(output)

    def vdump(self, depth: int = 0) -> str:
        """Outline of the tree: section tags and directive names only."""
        lines: list[str] = []
        indent = self.prefix * depth
        for c in self.content:
            if c.is_open():
                lines.append(f"{indent}{c.get_open_tag()}\n")
                lines.append(c.vdump(depth + 1))
                lines.append(f"{indent}{c.get_close_tag()}\n")
            else:
                lines.append(f"{indent}{c}\n")
        return "".join(lines)

    async def write_file(
        self,
        path: str | Path,
        *,
        fs: FileSystem | None = None,
        encoding: str = A2CONF_ENCODING,
    ) -> None:
        """Write ``dump()`` output to ``path``, replacing its content."""
        await write_text_async(fs or LocalFileSystem(), str(path), self.dump(), encoding)

    def to_model(self) -> ConfigNode:
        """Export this sub-tree as a pydantic model."""
        return ConfigNode(
            name=self.name,
            section=self.section,
            cmd=self.cmd,
            args=self.args,
            suffix=self.suffix,
            path=self.path,
            line=self.line,
            children=[c.to_model() for c in self.content],
        )
