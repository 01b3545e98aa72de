"""
Generator adapter — run the code generator once for one input file.

The command line comes fully built in ``action.params["argv"]``; this
adapter only spawns it, waits, and turns the outcome into a Receipt.
No shell is involved, so paths with spaces need no quoting.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import time
from pathlib import Path

from pigeon_runner.adapters.base import Adapter, ExecutionContext
from pigeon_runner.core.models.action import Receipt

logger = logging.getLogger(__name__)


class GeneratorAdapter(Adapter):
    """Execute generator command lines and capture output.

    Action params:
        argv (list[str]): Full command line, generator tokens first.
        input (str): The input file, for reporting.
    """

    def __init__(self, executable: str | None = None):
        self._executable = executable

    @property
    def name(self) -> str:
        return "generator"

    def is_available(self) -> bool:
        if not self._executable:
            return True
        return shutil.which(self._executable) is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.argv:
            return False, "Missing required param: 'argv'"

        if not Path(context.working_dir).is_dir():
            return False, f"Working directory does not exist: {context.working_dir}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        argv = context.argv
        command = shlex.join(argv)

        logger.debug("Executing: %s (cwd=%s)", command, context.working_dir)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=context.working_dir,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Could not start generator: {e}",
                metadata={"command": command},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                action_id=context.action.id,
                output=output,
                duration_ms=elapsed_ms,
                metadata={
                    "command": command,
                    "return_code": result.returncode,
                    "stderr": stderr,
                },
            )

        error = f"Generator failed with exit code {result.returncode}"
        if stderr:
            error = f"{error}\nstderr: {stderr}"
        return Receipt.failure(
            adapter=self.name,
            action_id=context.action.id,
            error=error,
            duration_ms=elapsed_ms,
            metadata={
                "command": command,
                "return_code": result.returncode,
                "stdout": output,
            },
        )
