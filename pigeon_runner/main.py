"""
Pigeon Runner — CLI entrypoint.

Usage:
    pigeon-runner                      # reads pigeon_build.yaml
    pigeon-runner path/to/config.yaml
    python -m pigeon_runner.main --dry-run
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pigeon_runner import __version__
from pigeon_runner.core.models.settings import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_GENERATOR,
    DEFAULT_SOURCE_EXTENSION,
    DEFAULT_SOURCE_ROOT,
    RunnerSettings,
)
from pigeon_runner.core.observability.logging_config import (
    level_from_flags,
    setup_logging_from_env,
)


@click.command()
@click.version_option(version=__version__, prog_name="pigeon-runner")
@click.argument(
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    required=False,
)
@click.option(
    "--generator",
    "generator",
    envvar="PIGEON_RUNNER_GENERATOR",
    default=DEFAULT_GENERATOR,
    show_default=True,
    help="Generator command line; the input and options are appended.",
)
@click.option(
    "--source-root",
    default=DEFAULT_SOURCE_ROOT,
    show_default=True,
    help="Directory name marking the root of the input tree.",
)
@click.option(
    "--extension",
    "source_extension",
    default=DEFAULT_SOURCE_EXTENSION,
    show_default=True,
    help="Suffix of input files picked up from directory inputs.",
)
@click.option("--dry-run", is_flag=True, help="Print generator commands without running them.")
@click.option("--color/--no-color", default=True, help="Colorize the transcript.")
@click.option("--verbose", "-v", is_flag=True, help="Echo commands and generator output.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    config_path: Path,
    generator: str,
    source_root: str,
    source_extension: str,
    dry_run: bool,
    color: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Run the Pigeon generator for every input file of every configured group."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging_from_env(level_from_flags(debug=debug, verbose=verbose, quiet=quiet))

    try:
        settings = RunnerSettings(
            generator_command=generator,
            source_root=source_root,
            source_extension=source_extension,
            verbose=verbose,
            color=color,
            dry_run=dry_run,
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--generator") from e

    from pigeon_runner.core.use_cases.run import run_batch
    from pigeon_runner.ui.cli.progress import ClickReporter

    result = run_batch(
        config_path=config_path,
        settings=settings,
        reporter=ClickReporter.from_settings(settings),
    )

    if result.error:
        message = f"Error: {result.error}"
        click.echo(click.style(message, fg="red") if color else message)
        sys.exit(1)

    if not result.groups:
        click.echo("No pigeon groups found in configuration")
        return

    sys.exit(result.exit_code)


if __name__ == "__main__":
    cli()
