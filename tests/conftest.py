"""
Shared test fixtures and configuration.
"""

import logging
import shlex
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() calls made by a test (the CLI makes one per run)."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def touch(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that creates files (and parents) under tmp_path."""

    def _touch(*relative: str, content: str = "") -> Path:
        path = tmp_path
        for rel in relative:
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return path

    return _touch


@pytest.fixture
def pigeon_tree(tmp_path: Path, touch, monkeypatch) -> Path:
    """A small Pigeon project, with cwd set to its root.

    pigeons/
        api.dart
        notes.txt
        auth/
            session.dart
            v2/
                token.dart
    """
    touch(
        "pigeons/api.dart",
        "pigeons/notes.txt",
        "pigeons/auth/session.dart",
        "pigeons/auth/v2/token.dart",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes a dedented pigeon_build.yaml."""

    def _write(content: str, name: str = "pigeon_build.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def fake_generator(tmp_path: Path) -> tuple[str, Path]:
    """A stand-in generator script.

    Appends its arguments to a log file, one invocation per line, and
    exits 3 with a message on stderr when the input file name contains
    "broken".

    Returns:
        (command line, log path)
    """
    log = tmp_path / "generator.log"
    script = tmp_path / "fake_pigeon.py"
    script.write_text(textwrap.dedent(f"""\
        import pathlib
        import sys

        args = sys.argv[1:]
        with open({str(log)!r}, "a", encoding="utf-8") as fh:
            fh.write("\\t".join(args) + "\\n")

        source = args[args.index("--input") + 1]
        if "broken" in pathlib.Path(source).name:
            sys.stderr.write("cannot parse " + source)
            sys.exit(3)
        print("generated " + source)
    """))
    command = f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"
    return command, log


@pytest.fixture
def invocations(fake_generator) -> Callable[[], list[list[str]]]:
    """Return a helper that parses the fake generator's log, one argument list per run."""
    _, log = fake_generator

    def _read() -> list[list[str]]:
        if not log.exists():
            return []
        return [line.split("\t") for line in log.read_text(encoding="utf-8").splitlines()]

    return _read
