"""
Domain models — Pydantic types for the runner.

All models are re-exported here for convenient access:

    from pigeon_runner.core.models import Group, DiscoveredFile, Action, Receipt
"""

from pigeon_runner.core.models.action import Action, Receipt
from pigeon_runner.core.models.group import (
    NON_OPTION_KEYS,
    DiscoveredFile,
    Group,
    OptionKey,
    parse_option_key,
)
from pigeon_runner.core.models.settings import RunnerSettings

__all__ = [
    # action.py
    "Action",
    # group.py
    "DiscoveredFile",
    "Group",
    "NON_OPTION_KEYS",
    "OptionKey",
    "Receipt",
    # settings.py
    "RunnerSettings",
    "parse_option_key",
]
