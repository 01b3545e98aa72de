"""
Input discovery — turn one input specification into concrete files.

Three kinds of specification are recognised:

    pigeons/messages.dart   → that single file
    pigeons/                → regular files directly inside, filtered by
                              source extension (NOT recursive)
    pigeons/**/*.dart       → every file at any depth under ``pigeons``
                              whose name matches ``*.dart``

The recursive/non-recursive asymmetry is the contract: a directory
means "this folder only", a wildcard means "everything under this tree".
Missing paths never raise; they log a warning and contribute nothing.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pigeon_runner.core.models.settings import DEFAULT_SOURCE_EXTENSION
from pigeon_runner.core.services.matching import has_wildcard, matches

logger = logging.getLogger(__name__)


def discover(spec: str, source_extension: str = DEFAULT_SOURCE_EXTENSION) -> list[Path]:
    """Resolve an input specification to an ordered list of files.

    Args:
        spec: File path, directory path, or wildcard pattern.
        source_extension: Suffix required of files found in a plain
            directory listing. Not applied to wildcard results.

    Returns:
        Matching files, sorted by path. Empty when nothing matched.
    """
    if has_wildcard(spec):
        return find_by_wildcard(spec)

    target = Path(spec)
    if target.is_dir():
        return find_in_directory(target, source_extension)
    if target.is_file():
        return [target]

    logger.warning("Input not found: %s", spec)
    return []


def split_wildcard(spec: str) -> tuple[Path, str]:
    """Split a wildcard spec into the directory to walk and a filename pattern.

    The directory is everything before the first segment that carries a
    wildcard, so ``lib/**/*.dart`` walks ``lib``. An empty directory part
    means the current working directory.
    """
    path = Path(spec)
    base_parts: list[str] = []
    for part in path.parent.parts:
        if has_wildcard(part):
            break
        base_parts.append(part)

    base = Path(*base_parts) if base_parts else Path(".")
    if base == Path("."):
        base = Path.cwd()
    return base, path.name


def find_by_wildcard(spec: str) -> list[Path]:
    """Recursively collect files under the spec's base directory matching its pattern.

    Symlinked directories are followed; each real directory is walked once
    so link cycles terminate.
    """
    base, pattern = split_wildcard(spec)

    if not base.is_dir():
        logger.warning("Directory not found: %s", base)
        return []

    def _on_error(e: OSError) -> None:
        logger.warning("Error processing wildcard pattern %s: %s", spec, e)

    found: list[Path] = []
    visited: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(base, onerror=_on_error, followlinks=True):
        visited.add(os.path.realpath(dirpath))
        dirnames[:] = [
            d for d in dirnames
            if os.path.realpath(os.path.join(dirpath, d)) not in visited
        ]
        for name in filenames:
            entry = Path(dirpath, name)
            if matches(name, pattern) and entry.is_file():
                found.append(entry)

    logger.debug("Wildcard %s matched %d file(s) under %s", spec, len(found), base)
    return sorted(found)


def find_in_directory(directory: Path, source_extension: str = DEFAULT_SOURCE_EXTENSION) -> list[Path]:
    """List the immediate regular-file children of a directory with the given suffix."""
    if not directory.is_dir():
        logger.warning("Directory not found: %s", directory)
        return []

    try:
        found = [
            entry
            for entry in directory.iterdir()
            if entry.is_file() and entry.name.endswith(source_extension)
        ]
    except OSError as e:
        logger.warning("Error reading directory %s: %s", directory, e)
        return []

    return sorted(found)
