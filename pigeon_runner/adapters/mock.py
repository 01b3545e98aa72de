"""
Mock adapter — test double for the generator.

Simulates generator runs without spawning processes. Returns success
by default; failures or custom receipts can be configured per action
ID or per input file name.
"""

from __future__ import annotations

from pathlib import Path

from pigeon_runner.adapters.base import Adapter, ExecutionContext
from pigeon_runner.core.models.action import Receipt


class MockAdapter(Adapter):
    """Mock generator adapter for testing."""

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] generated",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._failing_names: dict[str, str] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def inputs(self) -> list[str]:
        """The ``input`` param of every executed action, in call order."""
        return [ctx.action.params.get("input", "") for ctx in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific action ID."""
        self._responses[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific action to fail."""
        self._responses[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
        )

    def fail_file(self, file_name: str, error: str = "Mock failure") -> None:
        """Configure every action whose input file has this base name to fail."""
        self._failing_names[file_name] = error

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if context.action.id in self._responses:
            return self._responses[context.action.id]

        input_name = Path(context.action.params.get("input", "")).name
        if input_name in self._failing_names:
            return Receipt.failure(
                adapter=self._name,
                action_id=context.action.id,
                error=self._failing_names[input_name],
            )

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and configured responses."""
        self._call_log.clear()
        self._responses.clear()
        self._failing_names.clear()
