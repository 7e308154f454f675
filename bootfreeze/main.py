"""
bootfreeze — CLI entrypoint.

Usage:
    bootfreeze                 # check, install, build, print PATH help
    bootfreeze --script app.py
    bootfreeze status [--json]
    python -m bootfreeze.main --help
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from bootfreeze import __version__
from bootfreeze.adapters.base import CommandRunner
from bootfreeze.adapters.console import ConsolePrompter, StatusPrinter
from bootfreeze.adapters.shell.command import SubprocessRunner
from bootfreeze.core.config.loader import ConfigError, load_config
from bootfreeze.core.observability.logging_config import setup_logging


def _make_runner() -> CommandRunner:
    """The runner for real runs; PATH is captured once, here."""
    return SubprocessRunner(path=os.environ.get("PATH"))


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bootfreeze")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to bootfreeze.yml (default: auto-detect).",
)
@click.option(
    "--script",
    "script_name",
    default=None,
    help="Script to freeze (default: BTP2-extract.py).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    script_name: str | None,
) -> None:
    """bootfreeze — install what a script needs and freeze it into one executable.

    Run without a command to check for Python, pip, the required
    packages and PyInstaller (offering to install whatever is missing),
    then build the script with ``--onefile``.
    """
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("BOOTFREEZE_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("BOOTFREEZE_LOG_FILE"),
        log_file_level=os.environ.get("BOOTFREEZE_LOG_FILE_LEVEL"),
    )

    printer = StatusPrinter(quiet=quiet)
    try:
        config = load_config(
            working_dir=Path.cwd(),
            environ=dict(os.environ),
            config_path=Path(config_path) if config_path else None,
            script_name=script_name,
        )
    except ConfigError as e:
        printer.error(str(e))
        sys.exit(1)

    ctx.obj["config"] = config
    ctx.obj["printer"] = printer

    if ctx.invoked_subcommand is None:
        _run_pipeline(ctx)


def _run_pipeline(ctx: click.Context) -> None:
    from bootfreeze.core.context import BootstrapContext
    from bootfreeze.core.errors import BootstrapError
    from bootfreeze.core.use_cases.bootstrap import run_bootstrap

    printer: StatusPrinter = ctx.obj["printer"]
    run_ctx = BootstrapContext(
        config=ctx.obj["config"],
        runner=_make_runner(),
        prompter=ConsolePrompter(printer),
        printer=printer,
    )

    try:
        run_bootstrap(run_ctx)
    except BootstrapError as e:
        printer.error(e.message)
        sys.exit(e.exit_code)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show what a run would find, without installing anything."""
    from bootfreeze.core.use_cases.status import get_status

    result = get_status(ctx.obj["config"], _make_runner())

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    def _line(ok: bool, label: str, detail: str = "") -> None:
        click.secho("   ✓ " if ok else "   ✗ ", fg="green" if ok else "red", nl=False)
        click.echo(f"{label}{detail}")

    click.secho("\n🔍 bootfreeze status", fg="cyan", bold=True)
    _line(result.runtime is not None, "Python", f" ({result.runtime})" if result.runtime else "")
    _line(result.pip_available, "pip")
    if result.missing_packages:
        _line(False, "Packages", f" — missing: {', '.join(result.missing_packages)}")
    else:
        _line(True, "Packages")
    _line(result.bundler_installed, "PyInstaller")
    _line(result.script_found, "Script", f" {result.script_name}")
    _line(result.artifact_found, "Executable", f" {result.artifact_path}")

    click.echo()
    click.echo(f"   Package manager: {result.package_manager.value}")
    click.echo(f"   Environment:     {result.environment_mode.value}")
    click.echo()
    if result.ready:
        click.secho("   Ready to build.", fg="green", bold=True)
    else:
        click.secho("   A run will prompt to install what is missing.", fg="yellow")
    click.echo()


if __name__ == "__main__":
    cli()
