"""Shared schemas for a2conf."""

from a2conf.schemas.config_node import ConfigNode

__all__ = ["ConfigNode"]
