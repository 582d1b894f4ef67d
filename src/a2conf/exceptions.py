"""Custom exceptions for a2conf."""

from __future__ import annotations

from pathlib import Path


class A2confError(Exception):
    """Base exception for a2conf operations."""


class ParseError(A2confError):
    """A configuration line could not be tokenized.

    Attributes:
        line_text: The offending line, stripped.
        path: Source file of the line, if parsed from a file.
        lineno: 1-based line number within the source.
    """

    def __init__(
        self,
        line_text: str,
        *,
        path: str | Path | None = None,
        lineno: int | None = None,
    ) -> None:
        self.line_text = line_text
        self.path = str(path) if path is not None else None
        self.lineno = lineno
        location = ""
        if self.path and lineno is not None:
            location = f" ({self.path}:{lineno})"
        elif lineno is not None:
            location = f" (line {lineno})"
        super().__init__(f"Cannot parse: {line_text}{location}")


class IncludeError(A2confError):
    """An included file cannot be spliced into the tree."""
