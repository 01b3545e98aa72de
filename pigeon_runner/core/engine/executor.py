"""
Batch driver — the central orchestration loop.

Takes resolved groups, builds one generator action per discovered
file, executes it through the adapter, and tallies receipts per group
and overall. A failing file never stops the batch.

Flow:
    groups → per file: build arguments → action → execute → receipt → tally
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from typing import Protocol

from pigeon_runner.adapters.base import Adapter, ExecutionContext
from pigeon_runner.core.models.action import Action, Receipt
from pigeon_runner.core.models.group import DiscoveredFile, Group
from pigeon_runner.core.models.settings import RunnerSettings
from pigeon_runner.core.services.arguments import build_arguments

logger = logging.getLogger(__name__)


@dataclass
class GroupReport:
    """Receipts for one group, in file order."""

    name: str
    receipts: list[Receipt] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.skipped)


@dataclass
class BatchReport:
    """Result of running every group."""

    groups: list[GroupReport] = field(default_factory=list)
    total_succeeded: int = 0
    total_failed: int = 0
    total_skipped: int = 0

    @property
    def total(self) -> int:
        return self.total_succeeded + self.total_failed + self.total_skipped

    @property
    def all_ok(self) -> bool:
        return self.total_failed == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.all_ok else 1


class ProgressReporter(Protocol):
    """Receives ordered progress events from the driver."""

    def groups_resolved(self, groups: list[Group]) -> None: ...

    def group_started(self, group: Group) -> None: ...

    def file_started(self, group: Group, file: DiscoveredFile, action: Action | None) -> None: ...

    def file_finished(self, group: Group, file: DiscoveredFile, receipt: Receipt) -> None: ...

    def group_finished(self, report: GroupReport) -> None: ...

    def batch_finished(self, report: BatchReport) -> None: ...


def action_id(group: Group, file: DiscoveredFile) -> str:
    """Stable identifier for one group/file invocation."""
    return f"{group.name}:{file.path}"


def build_action(group: Group, file: DiscoveredFile, settings: RunnerSettings) -> Action:
    """Build the generator action for one file.

    Raises:
        OptionValueError: If a group option cannot be translated.
    """
    args = build_arguments(
        file.path,
        group.options,
        settings.source_root,
        create_dirs=not settings.dry_run,
    )
    return Action(
        id=action_id(group, file),
        group=group.name,
        params={
            "argv": [*settings.generator_command, *args],
            "input": str(file.path),
            "spec": file.spec,
        },
    )


class BatchDriver:
    """Runs the generator over every file of every group, sequentially."""

    def __init__(
        self,
        settings: RunnerSettings,
        adapter: Adapter,
        reporter: ProgressReporter | None = None,
    ):
        self._settings = settings
        self._adapter = adapter
        self._reporter = reporter

    def run(self, groups: list[Group]) -> BatchReport:
        """Process all groups in order and return the aggregate report."""
        report = BatchReport()
        if self._reporter:
            self._reporter.groups_resolved(groups)

        for group in groups:
            group_report = self.run_group(group)
            report.groups.append(group_report)
            report.total_succeeded += group_report.succeeded
            report.total_failed += group_report.failed
            report.total_skipped += group_report.skipped

        logger.info(
            "Batch finished: %d succeeded, %d failed, %d skipped",
            report.total_succeeded,
            report.total_failed,
            report.total_skipped,
        )
        if self._reporter:
            self._reporter.batch_finished(report)
        return report

    def run_group(self, group: Group) -> GroupReport:
        """Process every file of one group."""
        group_report = GroupReport(name=group.name)
        if self._reporter:
            self._reporter.group_started(group)

        for file in group.files:
            receipt = self.run_file(group, file)
            group_report.receipts.append(receipt)

            status_marker = "✓" if receipt.ok else "✗" if receipt.failed else "⊘"
            logger.info("%s %s:%s → %s", status_marker, group.name, file.path, receipt.status)

        if self._reporter:
            self._reporter.group_finished(group_report)
        return group_report

    def run_file(self, group: Group, file: DiscoveredFile) -> Receipt:
        """Invoke the generator for one file. Never raises."""
        try:
            action = build_action(group, file, self._settings)
        except Exception as e:
            logger.debug("Could not prepare %s: %s", action_id(group, file), e)
            if self._reporter:
                self._reporter.file_started(group, file, None)
            receipt = Receipt.failure(
                adapter=self._adapter.name,
                action_id=action_id(group, file),
                error=str(e),
            )
            if self._reporter:
                self._reporter.file_finished(group, file, receipt)
            return receipt

        if self._reporter:
            self._reporter.file_started(group, file, action)

        receipt = self._execute(action)
        if self._reporter:
            self._reporter.file_finished(group, file, receipt)
        return receipt

    def _execute(self, action: Action) -> Receipt:
        context = ExecutionContext(
            action=action,
            working_dir=self._settings.working_dir,
            dry_run=self._settings.dry_run,
        )

        try:
            is_valid, error_msg = self._adapter.validate(context)
        except Exception as e:
            return Receipt.failure(
                adapter=self._adapter.name,
                action_id=action.id,
                error=f"Validation error: {e}",
            )
        if not is_valid:
            return Receipt.failure(
                adapter=self._adapter.name,
                action_id=action.id,
                error=f"Validation failed: {error_msg}",
            )

        if self._settings.dry_run:
            return Receipt.skip(
                adapter=self._adapter.name,
                action_id=action.id,
                reason=f"[dry-run] {shlex.join(action.argv)}",
                metadata={"dry_run": True},
            )

        try:
            return self._adapter.execute(context)
        except Exception as e:
            # Adapters should never raise
            logger.error("Adapter %s raised during execution: %s", self._adapter.name, e)
            return Receipt.failure(
                adapter=self._adapter.name,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )
