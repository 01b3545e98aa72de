"""
Output path resolution for directory-creating options.

An option key prefixed with ``create-dir:`` treats its value as an
output directory; ``create-dir-recursive:`` treats it as an output file
template and mirrors the input's directory structure below the source
root marker:

    input  pigeons/auth/v2/session.dart
    value  lib/generated/messages.g.dart
    result lib/generated/auth/v2/session.dart

Directory creation failures are logged and ignored; the generator run
that follows reports the real error if the path is unusable.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pigeon_runner.core.models.group import DirMode
from pigeon_runner.core.models.settings import DEFAULT_SOURCE_ROOT

logger = logging.getLogger(__name__)


def relative_structure(input_file: Path, source_root: str = DEFAULT_SOURCE_ROOT) -> tuple[str, ...]:
    """Directory components of ``input_file`` to reproduce under the output base.

    Components after the last ``source_root`` segment when present,
    otherwise the last two components when there are at least two,
    otherwise none.
    """
    dirs = input_file.parent.parts
    if input_file.parent.anchor:
        dirs = dirs[1:]

    if source_root in dirs:
        last = len(dirs) - 1 - dirs[::-1].index(source_root)
        relative = dirs[last + 1:]
    elif len(dirs) >= 2:
        relative = dirs[-2:]
    else:
        relative = ()

    return tuple(part for part in relative if part not in ("", ".", ".."))


def resolve_recursive_output(
    output_base: str | Path,
    input_file: Path,
    source_root: str = DEFAULT_SOURCE_ROOT,
) -> Path:
    """Output path that mirrors the input's structure below the source root.

    The file name is the input's stem with the output base's extension.
    """
    base = Path(output_base)
    name = input_file.stem + base.suffix
    return base.parent.joinpath(*relative_structure(input_file, source_root), name)


def resolve_flat_output(output_dir: str | Path, input_file: Path) -> Path:
    """Output path inside ``output_dir`` named after the input file."""
    return Path(output_dir) / input_file.name


def ensure_directory(directory: Path) -> bool:
    """Create ``directory`` and its parents if missing.

    Returns:
        True if the directory exists afterwards. Failures are logged as
        warnings, never raised.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create directory %s: %s", directory, e)
        return False
    return True


def resolve_output_option(
    value: str,
    mode: DirMode,
    input_file: Path,
    source_root: str = DEFAULT_SOURCE_ROOT,
    create_dirs: bool = True,
) -> str:
    """Rewrite an option value according to its directory-creation mode.

    Ensures the destination directory exists before returning, unless
    ``create_dirs`` is False (dry runs only compute the path).
    """
    if mode == "create-dir-recursive":
        target = resolve_recursive_output(value, input_file, source_root)
        directory = target.parent
    elif mode == "create-dir":
        target = resolve_flat_output(value, input_file)
        directory = Path(value)
    else:
        return value

    if create_dirs:
        ensure_directory(directory)
    logger.debug("Resolved %s output %s → %s", mode, value, target)
    return str(target)
