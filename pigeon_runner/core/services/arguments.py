"""
Option translation — group options to generator command-line arguments.

Rules, per option (runner-only keys skipped):

    True          → --flag
    False / None  → omitted
    "value"       → --flag value   (rewritten first for create-dir keys)
    ""            → omitted
    [a, b]        → --flag a --flag b
    anything else → OptionValueError
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pigeon_runner.core.models.group import NON_OPTION_KEYS, parse_option_key
from pigeon_runner.core.models.settings import DEFAULT_SOURCE_ROOT
from pigeon_runner.core.services.output_paths import resolve_output_option


class OptionValueError(ValueError):
    """Raised when an option value cannot be expressed as generator arguments."""


def build_arguments(
    input_file: Path,
    options: dict[str, Any],
    source_root: str = DEFAULT_SOURCE_ROOT,
    create_dirs: bool = True,
) -> list[str]:
    """Build the generator arguments for one input file.

    Args:
        input_file: The discovered input file. Passed to the generator
            symlink-resolved; output paths mirror it as discovered.
        options: Raw group options.
        source_root: Marker segment for structure-preserving output paths.
        create_dirs: Create output directories for create-dir options.
            False computes the rewritten paths without touching disk.

    Returns:
        ``["--input", <path>, ...]`` in option declaration order.

    Raises:
        OptionValueError: If a value has an unsupported type.
    """
    args = ["--input", str(input_file.resolve())]

    for key, value in options.items():
        key = str(key)
        if key in NON_OPTION_KEYS:
            continue

        option = parse_option_key(key)
        flag = f"--{option.flag}"

        if isinstance(value, bool):
            if value:
                args.append(flag)
        elif value is None:
            continue
        elif isinstance(value, str):
            if not value:
                continue
            if option.creates_directory:
                value = resolve_output_option(
                    value, option.mode, input_file, source_root, create_dirs
                )
            args.extend([flag, value])
        elif isinstance(value, list):
            for item in value:
                if not isinstance(item, str):
                    raise OptionValueError(
                        f"Option '{key}' has a non-string list item: {item!r}"
                    )
                args.extend([flag, item])
        else:
            raise OptionValueError(
                f"Option '{key}' has unsupported value type "
                f"{type(value).__name__}: {value!r}"
            )

    return args
