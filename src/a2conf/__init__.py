"""a2conf: parse, query and edit Apache-style configuration files."""

from a2conf.exceptions import A2confError, IncludeError, ParseError
from a2conf.fs_utils import FileSystem, LocalFileSystem
from a2conf.node import Node
from a2conf.parser import ParseOptions, from_file, from_text
from a2conf.schemas import ConfigNode

__all__ = [
    "A2confError",
    "ConfigNode",
    "FileSystem",
    "IncludeError",
    "LocalFileSystem",
    "Node",
    "ParseError",
    "ParseOptions",
    "from_file",
    "from_text",
]
