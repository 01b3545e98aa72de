"""Adapters — tool bindings for the external generator.

Public re-exports for convenient access.
"""

from pigeon_runner.adapters.base import Adapter, ExecutionContext
from pigeon_runner.adapters.mock import MockAdapter
from pigeon_runner.adapters.shell.generator import GeneratorAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "GeneratorAdapter",
    "MockAdapter",
]
