"""
Progress transcript — human-readable batch output on stdout.

Implements the driver's ProgressReporter protocol with click. Colour
and verbosity come from RunnerSettings; nothing here is global.
"""

from __future__ import annotations

import shlex

import click

from pigeon_runner.core.engine.executor import BatchReport, GroupReport
from pigeon_runner.core.models.action import Action, Receipt
from pigeon_runner.core.models.group import DiscoveredFile, Group
from pigeon_runner.core.models.settings import RunnerSettings

# Lines of generator output/error echoed per file
_MAX_OUTPUT_LINES = 10
_MAX_ERROR_LINES = 5


class ClickReporter:
    """Print the per-group transcript and the final summary."""

    def __init__(self, verbose: bool = False, color: bool = True):
        self._verbose = verbose
        self._color = color

    @classmethod
    def from_settings(cls, settings: RunnerSettings) -> ClickReporter:
        return cls(verbose=settings.verbose, color=settings.color)

    def _echo(self, message: str = "", **style) -> None:
        if self._color and style:
            click.secho(message, color=True, **style)
        else:
            click.echo(message, color=self._color)

    def groups_resolved(self, groups: list[Group]) -> None:
        self._echo(f"Found {len(groups)} pigeon group(s):", fg="cyan", bold=True)
        for group in groups:
            self._echo(f"  - {group.name}: {group.file_count} file(s)")
        self._echo()

    def group_started(self, group: Group) -> None:
        self._echo(f"=== Processing Group: {group.name} ===", fg="cyan", bold=True)

    def file_started(self, group: Group, file: DiscoveredFile, action: Action | None) -> None:
        self._echo(f"Processing: {file.path}")
        if self._verbose and action is not None:
            self._echo(f"  $ {shlex.join(action.argv)}", dim=True)

    def file_finished(self, group: Group, file: DiscoveredFile, receipt: Receipt) -> None:
        if receipt.ok:
            timing = f" ({receipt.duration_ms}ms)" if receipt.duration_ms else ""
            self._echo(f"  ✓ Generated successfully{timing}", fg="green")
            if self._verbose and receipt.output:
                for line in receipt.output.split("\n")[:_MAX_OUTPUT_LINES]:
                    self._echo(f"    │ {line}")
        elif receipt.failed:
            lines = (receipt.error or "unknown error").split("\n")
            self._echo(f"  ✗ Error: {lines[0]}", fg="red")
            for line in lines[1:_MAX_ERROR_LINES + 1]:
                self._echo(f"    │ {line}")
        else:
            self._echo(f"  ⊘ {receipt.output}", fg="yellow")

    def group_finished(self, report: GroupReport) -> None:
        line = f"Group {report.name}: {report.succeeded} successful, {report.failed} errors"
        if report.skipped:
            line += f", {report.skipped} skipped"
        self._echo(line, bold=True)
        self._echo()

    def batch_finished(self, report: BatchReport) -> None:
        color = "green" if report.all_ok else "red"
        self._echo("=== Final Summary ===", fg="cyan", bold=True)
        self._echo(f"Total successful: {report.total_succeeded} files", fg="green")
        self._echo(f"Total errors: {report.total_failed} files", fg=color)
        if report.total_skipped:
            self._echo(f"Total skipped: {report.total_skipped} files", fg="yellow")
        self._echo(f"Total processed: {report.total} files", bold=True)
