"""Structured export model for configuration trees."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConfigNode(BaseModel):
    """A configuration node detached from the live tree."""

    name: str
    section: str | None = None
    cmd: str | None = None
    args: str = ""
    suffix: str | None = None
    path: str | None = None
    line: int | None = Field(default=None, ge=1)
    children: list["ConfigNode"] = Field(default_factory=list)
