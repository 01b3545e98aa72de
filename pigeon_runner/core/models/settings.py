"""
Runner settings — explicit runtime configuration for the batch driver.

Built once by the CLI from flags and environment variables, then
passed down. Nothing below the CLI reads process-wide toggles.
"""

from __future__ import annotations

import shlex

from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_FILE = "pigeon_build.yaml"
DEFAULT_GENERATOR = "dart run pigeon"
DEFAULT_SOURCE_ROOT = "pigeons"
DEFAULT_SOURCE_EXTENSION = ".dart"


class RunnerSettings(BaseModel):
    """How the generator is invoked and how progress is reported."""

    generator_command: list[str] = Field(
        default_factory=lambda: shlex.split(DEFAULT_GENERATOR)
    )
    source_root: str = DEFAULT_SOURCE_ROOT
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    working_dir: str = "."
    verbose: bool = False
    color: bool = True
    dry_run: bool = False

    @field_validator("generator_command", mode="before")
    @classmethod
    def _split_command(cls, value: object) -> object:
        if isinstance(value, str):
            return shlex.split(value)
        return value

    @field_validator("generator_command")
    @classmethod
    def _non_empty_command(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("generator command must not be empty")
        return value
