"""
Bootstrap use case — the whole pipeline, one forward pass.

    runtime → package manager → environment → pip → pip upgrade
        → required packages → PyInstaller → build → PATH guidance

Every stage either succeeds, records what it did and hands over to the
next, or raises a ``BootstrapError`` that ends the run. Nothing is
retried and no earlier stage is revisited.
"""

from __future__ import annotations

import logging

from bootfreeze.adapters.shell.download import download_file
from bootfreeze.core.context import BootstrapContext
from bootfreeze.core.models.result import BootstrapResult
from bootfreeze.core.services import build_ops, detection, pip_ops

logger = logging.getLogger(__name__)


def run_bootstrap(
    ctx: BootstrapContext,
    *,
    fetch: pip_ops.Fetcher = download_file,
) -> BootstrapResult:
    """Prepare the machine and build the executable.

    Args:
        ctx: Run context.
        fetch: Downloader for the pip bootstrap script.

    Returns:
        The completed run record.

    Raises:
        BootstrapError: The first fatal stage failure.
    """
    printer = ctx.printer
    result = BootstrapResult()

    # ── 1. Interpreter ──────────────────────────────────────────
    result.package_manager = detection.discover_package_manager(ctx.runner)
    result.runtime = detection.discover_runtime(ctx, result.package_manager)
    result.record("runtime", message=result.runtime)
    printer.rule()

    # ── 2. pip ──────────────────────────────────────────────────
    installed = pip_ops.ensure_installer(ctx, result.runtime, fetch=fetch)
    result.record("installer", installed=installed)
    printer.rule()

    # ── 3. Environment mode ─────────────────────────────────────
    mode = detection.classify_environment(ctx.config)
    result.environment_mode = mode
    if mode.is_isolated:
        printer.info(f"Conda environment detected: {ctx.config.isolated_env_value}")
    result.record("environment", message=mode.value)

    # ── 4. pip self-upgrade (soft) ──────────────────────────────
    status = pip_ops.upgrade_installer(ctx, result.runtime, mode)
    result.record("upgrade", status=status)
    printer.rule()

    # ── 5. Required packages ────────────────────────────────────
    required = list(ctx.config.required_packages)
    printer.info(f"Checking for required Python packages: {' '.join(required)}...")
    result.missing_packages = pip_ops.resolve_missing(ctx.runner, result.runtime, required)
    installed = pip_ops.install_missing(ctx, result.runtime, result.missing_packages, mode)
    result.record("packages", installed=installed)
    printer.rule()

    # ── 6. Bundler ──────────────────────────────────────────────
    installed = pip_ops.ensure_bundler(ctx, result.runtime, mode)
    result.record("bundler", installed=installed)
    printer.rule()

    # ── 7. Build ────────────────────────────────────────────────
    artifact = build_ops.build_executable(ctx, result.runtime)
    result.artifact_path = str(artifact)
    result.record("build", message=str(artifact))
    printer.rule()

    # ── 8. Guidance ─────────────────────────────────────────────
    build_ops.emit_path_guidance(printer, artifact)
    result.record("guidance")
    printer.rule()

    logger.info(
        "Bootstrap complete: runtime=%s installs=%d artifact=%s",
        result.runtime,
        result.install_count,
        result.artifact_path,
    )
    return result
