"""Local configuration for a2conf."""

from __future__ import annotations

import os


DEFAULT_INDENT = 4
DEFAULT_ENCODING = "utf-8"
DEFAULT_INCLUDES = "true"
DEFAULT_MAX_INCLUDE_DEPTH = 32
DEFAULT_LOG_LEVEL = "WARNING"

# Directive names that pull other files into the tree (compared lowercased).
INCLUDE_DIRECTIVES = frozenset({"include", "includeoptional"})

A2CONF_INDENT = int(os.getenv("A2CONF_INDENT", str(DEFAULT_INDENT)))
A2CONF_ENCODING = os.getenv("A2CONF_ENCODING", DEFAULT_ENCODING)
A2CONF_INCLUDES = os.getenv("A2CONF_INCLUDES", DEFAULT_INCLUDES).lower() in ("1", "true", "yes", "on")
A2CONF_MAX_INCLUDE_DEPTH = int(os.getenv("A2CONF_MAX_INCLUDE_DEPTH", str(DEFAULT_MAX_INCLUDE_DEPTH)))
A2CONF_LOG_LEVEL = os.getenv("A2CONF_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
