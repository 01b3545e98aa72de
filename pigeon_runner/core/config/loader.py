"""
Configuration loader — reads pigeon_build.yaml into a plain mapping.

Only structural problems are checked here (missing file, bad YAML,
wrong shapes). Option values are left untouched; they are validated
per file when translated into generator arguments.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from pigeon_runner.core.models.settings import DEFAULT_CONFIG_FILE

logger = logging.getLogger(__name__)

# Keys that declare input specifications, in expansion order
INPUT_KEYS = ("input", "inputs", "input_files")


class ConfigError(Exception):
    """Raised when the runner configuration is invalid or missing."""


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load and structurally validate a runner configuration document.

    Args:
        path: Path to the YAML document (default: pigeon_build.yaml in cwd).

    Returns:
        The parsed top-level mapping.

    Raises:
        ConfigError: If the file is missing, unreadable, or malformed.
    """
    if path is None:
        path = Path(DEFAULT_CONFIG_FILE)

    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    logger.debug("Loading runner config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    validate_config(data)
    return data


def validate_config(data: dict[str, Any]) -> None:
    """Check the shape of ``groups`` and of every input declaration."""
    _validate_inputs(data, "top level")

    if "groups" not in data or data["groups"] is None:
        return

    groups = data["groups"]
    if not isinstance(groups, dict):
        raise ConfigError(f"'groups' must be a mapping, got {type(groups).__name__}")

    for name, group_config in groups.items():
        if not isinstance(group_config, dict):
            raise ConfigError(
                f"Group '{name}' must be a mapping, got {type(group_config).__name__}"
            )
        _validate_inputs(group_config, f"group '{name}'")


def _validate_inputs(config: dict[str, Any], where: str) -> None:
    for key in INPUT_KEYS:
        value = config.get(key)
        items = value if isinstance(value, list) else [value]
        for item in items:
            if isinstance(item, (dict, list)):
                raise ConfigError(f"Invalid '{key}' entry in {where}: {item!r}")


def collect_input_specs(config: dict[str, Any]) -> list[str]:
    """Gather input specifications from a group-config, in declaration order.

    ``input`` holds one spec; ``inputs`` and ``input_files`` hold a list
    (a single scalar is accepted too). Empty entries are ignored.
    """
    specs: list[str] = []
    for key in INPUT_KEYS:
        value = config.get(key)
        if value is None:
            continue
        items = value if isinstance(value, list) else [value]
        specs.extend(str(item) for item in items if item is not None and str(item))
    return specs
