"""
Group resolution — configuration document to ordered list of Groups.

Two document shapes are supported:

    groups:                      # one Group per entry
      api:
        inputs: [pigeons/api]
        dart_out: lib/api.g.dart

    inputs: [pigeons/]           # legacy flat form → single "default" group
    dart_out: lib/messages.g.dart

Groups whose inputs discover no files are dropped. If no explicit group
survives, the top level is tried as the "default" group.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pigeon_runner.core.config.loader import collect_input_specs
from pigeon_runner.core.models.group import NON_OPTION_KEYS, DiscoveredFile, Group
from pigeon_runner.core.models.settings import DEFAULT_SOURCE_EXTENSION
from pigeon_runner.core.services.discovery import discover

logger = logging.getLogger(__name__)

DEFAULT_GROUP_NAME = "default"


def discover_inputs(
    specs: list[str],
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
) -> list[DiscoveredFile]:
    """Expand input specs into discovered files, keeping first occurrences only.

    Files are compared by resolved path, so ``pigeons/api.dart`` and an
    absolute wildcard hit on the same file count once.
    """
    files: list[DiscoveredFile] = []
    seen: set[Path] = set()
    for spec in specs:
        for path in discover(spec, source_extension):
            key = path.resolve()
            if key in seen:
                continue
            seen.add(key)
            files.append(DiscoveredFile(path=path, spec=spec))
    return files


def build_group(
    name: str,
    config: dict[str, Any],
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
    exclude: frozenset[str] = frozenset(),
) -> Group:
    """Build one Group from a group-config mapping."""
    specs = collect_input_specs(config)
    options = {
        str(key): value
        for key, value in config.items()
        if str(key) not in NON_OPTION_KEYS and str(key) not in exclude
    }
    return Group(
        name=name,
        inputs=specs,
        files=discover_inputs(specs, source_extension),
        options=options,
    )


def resolve_groups(
    config: dict[str, Any],
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
) -> list[Group]:
    """Resolve a configuration document into the groups to process.

    Args:
        config: Parsed configuration document.
        source_extension: Suffix filter for directory inputs.

    Returns:
        Groups with at least one discovered file, in document order.
    """
    groups: list[Group] = []

    for name, group_config in (config.get("groups") or {}).items():
        group = build_group(str(name), group_config, source_extension)
        if not group.files:
            logger.debug("Group '%s' has no input files, skipping", name)
            continue
        groups.append(group)

    if not groups:
        default = build_group(
            DEFAULT_GROUP_NAME,
            config,
            source_extension,
            exclude=frozenset({"groups"}),
        )
        if default.files:
            groups.append(default)

    logger.info("Resolved %d group(s)", len(groups))
    return groups
