"""
Run use case — execute the generator across every configured group.

This is the top-level orchestrator: it loads config, resolves groups,
drives the batch, and returns everything the CLI needs to report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pigeon_runner.adapters.base import Adapter
from pigeon_runner.core.config.groups import resolve_groups
from pigeon_runner.core.config.loader import ConfigError, load_config
from pigeon_runner.core.engine.executor import BatchDriver, BatchReport, ProgressReporter
from pigeon_runner.core.models.group import Group
from pigeon_runner.core.models.settings import RunnerSettings

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of a batch run."""

    report: BatchReport | None = None
    groups: list[Group] | None = None
    error: str | None = None

    @property
    def exit_code(self) -> int:
        if self.error:
            return 1
        if self.report is None:
            return 0
        return self.report.exit_code


def run_batch(
    config_path: Path,
    settings: RunnerSettings | None = None,
    adapter: Adapter | None = None,
    reporter: ProgressReporter | None = None,
) -> RunResult:
    """Load a configuration document and run the generator over it.

    Args:
        config_path: Path to the YAML configuration.
        settings: Runtime settings (default: RunnerSettings()).
        adapter: Optional adapter; defaults to the real generator.
        reporter: Optional progress reporter.

    Returns:
        RunResult. ``error`` is set only for configuration errors;
        per-file failures are in the report.
    """
    settings = settings or RunnerSettings()
    result = RunResult()

    # ── Load config ──────────────────────────────────────────────
    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    # ── Resolve groups ───────────────────────────────────────────
    groups = resolve_groups(config, settings.source_extension)
    result.groups = groups
    if not groups:
        logger.info("No groups with input files in %s", config_path)
        return result

    # ── Set up adapter ───────────────────────────────────────────
    if adapter is None:
        from pigeon_runner.adapters.shell.generator import GeneratorAdapter

        adapter = GeneratorAdapter(executable=settings.generator_command[0])

    if not settings.dry_run and not adapter.is_available():
        logger.warning("Generator executable not found: %s", settings.generator_command[0])

    # ── Execute ──────────────────────────────────────────────────
    driver = BatchDriver(settings=settings, adapter=adapter, reporter=reporter)
    result.report = driver.run(groups)
    return result
