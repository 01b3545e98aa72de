"""
Group models — what the configuration resolves into.

A Group is a named bundle of discovered input files sharing one
option set. Options are kept as the raw YAML values; translation into
generator arguments happens per file at invocation time.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

# Group-config keys that are consumed by the runner and never passed on
NON_OPTION_KEYS: frozenset[str] = frozenset(
    {"input", "inputs", "input_files", "folder", "pattern"}
)

DirMode = Literal["plain", "create-dir", "create-dir-recursive"]

# Longest prefix first so "create-dir-recursive:" is not read as "create-dir:"
_MODE_PREFIXES: tuple[tuple[str, DirMode], ...] = (
    ("create-dir-recursive:", "create-dir-recursive"),
    ("create-dir:", "create-dir"),
)


class OptionKey(BaseModel):
    """A group option key split into generator flag and directory mode."""

    flag: str
    mode: DirMode = "plain"

    @property
    def creates_directory(self) -> bool:
        return self.mode != "plain"


def parse_option_key(key: str) -> OptionKey:
    """Split an option key into its flag name and directory-creation modifier.

    Examples:
        "dart_out"                         → flag="dart_out", mode="plain"
        "create-dir:swift_out"             → flag="swift_out", mode="create-dir"
        "create-dir-recursive:dart_out"    → flag="dart_out", mode="create-dir-recursive"
    """
    for prefix, mode in _MODE_PREFIXES:
        if key.startswith(prefix):
            return OptionKey(flag=key[len(prefix):], mode=mode)
    return OptionKey(flag=key)


class DiscoveredFile(BaseModel):
    """A concrete input file plus the input specification that found it."""

    path: Path
    spec: str

    @property
    def resolved(self) -> Path:
        """Canonical, symlink-resolved path handed to the generator."""
        return self.path.resolve()

    def __str__(self) -> str:
        return str(self.path)


class Group(BaseModel):
    """A named set of input files sharing one generator option set."""

    name: str
    inputs: list[str] = Field(default_factory=list)
    files: list[DiscoveredFile] = Field(default_factory=list)
    options: dict[str, Any] = Field(default_factory=dict)

    @property
    def file_count(self) -> int:
        return len(self.files)
