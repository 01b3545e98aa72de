"""
Tests for the batch driver — action building, execution, tallies.
"""

from pathlib import Path

from pigeon_runner.adapters.base import Adapter, ExecutionContext
from pigeon_runner.adapters.mock import MockAdapter
from pigeon_runner.core.engine.executor import (
    BatchDriver,
    BatchReport,
    GroupReport,
    action_id,
    build_action,
)
from pigeon_runner.core.models.action import Receipt
from pigeon_runner.core.models.group import DiscoveredFile, Group
from pigeon_runner.core.models.settings import RunnerSettings


def _group(name: str, *paths: str, **options) -> Group:
    return Group(
        name=name,
        inputs=list(paths),
        files=[DiscoveredFile(path=Path(p), spec=p) for p in paths],
        options=options,
    )


class RecordingReporter:
    """Collects driver events in order."""

    def __init__(self):
        self.events: list[tuple] = []

    def groups_resolved(self, groups):
        self.events.append(("groups", [g.name for g in groups]))

    def group_started(self, group):
        self.events.append(("group_started", group.name))

    def file_started(self, group, file, action):
        self.events.append(("file_started", file.path.name, action is not None))

    def file_finished(self, group, file, receipt):
        self.events.append(("file_finished", file.path.name, receipt.status))

    def group_finished(self, report):
        self.events.append(("group_finished", report.name, report.succeeded, report.failed))

    def batch_finished(self, report):
        self.events.append(("batch", report.total_succeeded, report.total_failed))


class RaisingAdapter(MockAdapter):
    def execute(self, context: ExecutionContext) -> Receipt:
        raise RuntimeError("adapter blew up")


class TestBuildAction:
    def test_argv(self, pigeon_tree: Path):
        group = _group("api", "pigeons/api.dart", dart_out="lib/api.g.dart")
        settings = RunnerSettings(generator_command="dart run pigeon")
        action = build_action(group, group.files[0], settings)
        assert action.id == action_id(group, group.files[0])
        assert action.group == "api"
        assert action.argv == [
            "dart",
            "run",
            "pigeon",
            "--input",
            str((pigeon_tree / "pigeons" / "api.dart").resolve()),
            "--dart_out",
            "lib/api.g.dart",
        ]
        assert action.params["spec"] == "pigeons/api.dart"


class TestBatchDriver:
    def test_all_succeed(self, pigeon_tree: Path):
        mock = MockAdapter()
        driver = BatchDriver(RunnerSettings(), mock)
        report = driver.run([
            _group("api", "pigeons/api.dart"),
            _group("auth", "pigeons/auth/session.dart"),
        ])
        assert report.total_succeeded == 2
        assert report.total_failed == 0
        assert report.exit_code == 0
        assert mock.call_count == 2

    def test_failure_does_not_stop_batch(self, pigeon_tree: Path):
        mock = MockAdapter()
        mock.fail_file("api.dart")
        driver = BatchDriver(RunnerSettings(), mock)
        report = driver.run([
            _group("first", "pigeons/api.dart", "pigeons/auth/session.dart"),
            _group("second", "pigeons/auth/v2/token.dart"),
        ])
        first, second = report.groups
        assert (first.name, first.failed, first.succeeded) == ("first", 1, 1)
        assert (second.name, second.succeeded) == ("second", 1)
        assert report.total_failed == 1
        assert report.exit_code == 1
        assert mock.call_count == 3

    def test_bad_option_is_file_failure(self, pigeon_tree: Path):
        mock = MockAdapter()
        driver = BatchDriver(RunnerSettings(), mock)
        report = driver.run([
            _group("bad", "pigeons/api.dart", line_length=80),
            _group("good", "pigeons/auth/session.dart"),
        ])
        bad, good = report.groups
        assert bad.failed == 1
        assert "unsupported value type" in bad.receipts[0].error
        assert good.succeeded == 1
        assert mock.call_count == 1

    def test_adapter_exception_is_captured(self, pigeon_tree: Path):
        driver = BatchDriver(RunnerSettings(), RaisingAdapter())
        report = driver.run([_group("api", "pigeons/api.dart")])
        assert report.total_failed == 1
        assert "adapter blew up" in report.groups[0].receipts[0].error

    def test_validation_failure(self, pigeon_tree: Path):
        class Invalid(MockAdapter):
            def validate(self, context):
                return False, "nope"

        report = BatchDriver(RunnerSettings(), Invalid()).run([_group("api", "pigeons/api.dart")])
        assert report.groups[0].receipts[0].error == "Validation failed: nope"

    def test_dry_run_skips_execution(self, pigeon_tree: Path):
        mock = MockAdapter()
        driver = BatchDriver(RunnerSettings(dry_run=True), mock)
        report = driver.run([_group("api", "pigeons/api.dart", one_language=True)])
        assert mock.call_count == 0
        assert report.total_skipped == 1
        assert report.exit_code == 0
        receipt = report.groups[0].receipts[0]
        assert receipt.skipped
        assert receipt.output.startswith("[dry-run] dart run pigeon --input ")
        assert receipt.output.endswith("--one_language")

    def test_dry_run_creates_no_directories(self, pigeon_tree: Path):
        mock = MockAdapter()
        driver = BatchDriver(RunnerSettings(dry_run=True), mock)
        report = driver.run([
            _group(
                "api",
                "pigeons/auth/session.dart",
                **{
                    "create-dir-recursive:dart_out": "lib/gen/m.g.dart",
                    "create-dir:swift_out": "ios/gen",
                },
            )
        ])
        assert report.total_skipped == 1
        assert not (pigeon_tree / "lib").exists()
        assert not (pigeon_tree / "ios").exists()
        output = report.groups[0].receipts[0].output
        assert f"--dart_out {Path('lib/gen/auth/session.dart')}" in output
        assert f"--swift_out {Path('ios/gen/session.dart')}" in output

    def test_real_run_creates_directories(self, pigeon_tree: Path):
        driver = BatchDriver(RunnerSettings(), MockAdapter())
        driver.run([
            _group(
                "api",
                "pigeons/auth/session.dart",
                **{"create-dir-recursive:dart_out": "lib/gen/m.g.dart"},
            )
        ])
        assert (pigeon_tree / "lib" / "gen" / "auth").is_dir()

    def test_unexpected_preparation_error_is_file_failure(self, pigeon_tree: Path, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("preparation exploded")

        monkeypatch.setattr("pigeon_runner.core.engine.executor.build_arguments", explode)
        mock = MockAdapter()
        report = BatchDriver(RunnerSettings(), mock).run([
            _group("api", "pigeons/api.dart"),
            _group("auth", "pigeons/auth/session.dart"),
        ])
        assert report.total_failed == 2
        assert report.groups[0].receipts[0].error == "preparation exploded"
        assert mock.call_count == 0

    def test_working_dir_passed(self, pigeon_tree: Path):
        mock = MockAdapter()
        BatchDriver(RunnerSettings(working_dir=str(pigeon_tree)), mock).run(
            [_group("api", "pigeons/api.dart")]
        )
        assert mock.call_log[0].working_dir == str(pigeon_tree)

    def test_reporter_event_order(self, pigeon_tree: Path):
        mock = MockAdapter()
        mock.fail_file("session.dart")
        reporter = RecordingReporter()
        BatchDriver(RunnerSettings(), mock, reporter).run([
            _group("api", "pigeons/api.dart"),
            _group("auth", "pigeons/auth/session.dart"),
        ])
        assert reporter.events == [
            ("groups", ["api", "auth"]),
            ("group_started", "api"),
            ("file_started", "api.dart", True),
            ("file_finished", "api.dart", "ok"),
            ("group_finished", "api", 1, 0),
            ("group_started", "auth"),
            ("file_started", "session.dart", True),
            ("file_finished", "session.dart", "failed"),
            ("group_finished", "auth", 0, 1),
            ("batch", 1, 1),
        ]

    def test_reporter_sees_preparation_failure(self, pigeon_tree: Path):
        reporter = RecordingReporter()
        BatchDriver(RunnerSettings(), MockAdapter(), reporter).run(
            [_group("bad", "pigeons/api.dart", opts={"a": 1})]
        )
        assert ("file_started", "api.dart", False) in reporter.events
        assert ("file_finished", "api.dart", "failed") in reporter.events

    def test_empty_run(self):
        report = BatchDriver(RunnerSettings(), MockAdapter()).run([])
        assert report.total == 0
        assert report.all_ok


class TestReports:
    def test_group_report_counts(self):
        report = GroupReport(
            name="g",
            receipts=[
                Receipt.success(adapter="x", action_id="1"),
                Receipt.failure(adapter="x", action_id="2", error="e"),
                Receipt.skip(adapter="x", action_id="3"),
            ],
        )
        assert (report.total, report.succeeded, report.failed, report.skipped) == (3, 1, 1, 1)

    def test_batch_report_totals(self):
        report = BatchReport(total_succeeded=2, total_failed=1, total_skipped=1)
        assert report.total == 4
        assert not report.all_ok
        assert report.exit_code == 1


def test_adapter_protocol_is_abstract():
    assert Adapter.__abstractmethods__ == {"name", "is_available", "validate", "execute"}
