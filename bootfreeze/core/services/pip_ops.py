"""
pip operations — installer presence, self-upgrade, package presence, installs.

pip is always driven through the discovered interpreter
(``<runtime> -m pip``) so packages land in the same environment the
bundler will later freeze from.

In an ISOLATED environment every install gets the override flag and
the pip self-upgrade is skipped.
"""

from __future__ import annotations

import http.client
import logging
import os
import tempfile
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from bootfreeze.adapters.base import CommandRunner
from bootfreeze.adapters.shell.download import download_file
from bootfreeze.core.config.loader import BootstrapConfig
from bootfreeze.core.context import BootstrapContext
from bootfreeze.core.errors import (
    BundlerUnavailable,
    DependencyInstallFailed,
    InstallerUnavailable,
)
from bootfreeze.core.models.environment import EnvironmentMode

logger = logging.getLogger(__name__)

Fetcher = Callable[..., None]


# ── Command building ────────────────────────────────────────────


def pip_command(runtime: str) -> list[str]:
    return [runtime, "-m", "pip"]


def install_flags(config: BootstrapConfig, mode: EnvironmentMode) -> list[str]:
    """Extra ``pip install`` flags for the environment mode."""
    if mode.is_isolated:
        return [config.override_flag]
    return []


def install_command(
    runtime: str,
    packages: Sequence[str],
    config: BootstrapConfig,
    mode: EnvironmentMode,
    *,
    upgrade: bool = False,
) -> list[str]:
    """``<pip> install [--upgrade] [override] <names...>``."""
    cmd = pip_command(runtime) + ["install"]
    if upgrade:
        cmd.append("--upgrade")
    cmd += install_flags(config, mode)
    cmd += list(packages)
    return cmd


# ── Probes ──────────────────────────────────────────────────────


def pip_available(runner: CommandRunner, runtime: str) -> bool:
    return runner.run(pip_command(runtime) + ["--version"]).ok


def is_installed(runner: CommandRunner, runtime: str, package: str) -> bool:
    """``pip show`` exits non-zero for a package that is not installed."""
    return runner.run(pip_command(runtime) + ["show", package]).ok


def resolve_missing(
    runner: CommandRunner,
    runtime: str,
    required: Sequence[str],
) -> list[str]:
    """Required packages that are not installed, in their original order."""
    missing = [pkg for pkg in required if not is_installed(runner, runtime, pkg)]
    logger.debug("Missing packages: %s", missing or "none")
    return missing


# ── Installer bootstrap ─────────────────────────────────────────


@contextmanager
def downloaded_script(
    url: str,
    directory: Path,
    *,
    fetch: Fetcher = download_file,
    timeout: int = 60,
) -> Iterator[Path]:
    """Download ``url`` to a temp file that is removed on every exit path."""
    fd, name = tempfile.mkstemp(prefix="get-pip-", suffix=".py", dir=directory)
    os.close(fd)
    path = Path(name)
    try:
        fetch(url, path, timeout=timeout)
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug("Removed %s", path)


def ensure_installer(
    ctx: BootstrapContext,
    runtime: str,
    *,
    fetch: Fetcher = download_file,
) -> list[str]:
    """Make sure ``<runtime> -m pip`` works, bootstrapping it if needed.

    Returns:
        ``["pip"]`` if pip was installed, else an empty list.

    Raises:
        InstallerUnavailable: Declined, download failed or get-pip failed.
    """
    printer = ctx.printer
    config = ctx.config
    printer.info("Checking for pip installation...")

    if pip_available(ctx.runner, runtime):
        printer.success("pip is available.")
        return []

    printer.warning("pip is not installed.")
    if not ctx.ask("Do you want to install pip?"):
        raise InstallerUnavailable("pip is required. Please install pip before continuing.")

    printer.info("Downloading get-pip.py...")
    try:
        with downloaded_script(
            config.bootstrap_url,
            config.working_dir,
            fetch=fetch,
            timeout=config.download_timeout,
        ) as script:
            printer.info("Installing pip...")
            result = ctx.runner.run([runtime, str(script)], capture=False)
    except (OSError, ValueError, http.client.HTTPException) as e:
        raise InstallerUnavailable(f"Failed to download get-pip.py: {e}") from e

    # The temp file is already gone here, whichever way the install went.
    if result.failed:
        raise InstallerUnavailable("pip installation failed.")

    printer.success("pip installed successfully.")
    return ["pip"]


def upgrade_installer(ctx: BootstrapContext, runtime: str, mode: EnvironmentMode) -> str:
    """Upgrade pip once. Never raises.

    Returns:
        ``"skipped"`` (isolated), ``"ok"`` or ``"warning"`` (upgrade failed).
    """
    printer = ctx.printer
    if mode.is_isolated:
        printer.warning(
            "Conda environment detected. Skipping pip upgrade to avoid "
            "externally-managed-environment issues."
        )
        return "skipped"

    printer.info("Upgrading pip...")
    cmd = install_command(runtime, ["pip"], ctx.config, mode, upgrade=True)
    if ctx.runner.run(cmd, capture=False).ok:
        printer.success("pip upgraded successfully.")
        return "ok"

    printer.warning("pip upgrade failed. Continuing with existing pip version.")
    return "warning"


# ── Installs ────────────────────────────────────────────────────


def install_missing(
    ctx: BootstrapContext,
    runtime: str,
    missing: Sequence[str],
    mode: EnvironmentMode,
) -> list[str]:
    """Install every missing package in one batched pip call.

    Returns:
        The packages installed (empty when nothing was missing).

    Raises:
        DependencyInstallFailed: Declined or the pip call failed.
    """
    printer = ctx.printer
    if not missing:
        printer.success("All required Python packages are already installed.")
        return []

    printer.warning(f"The following packages are missing: {' '.join(missing)}")
    if not ctx.ask("Do you want to install the missing packages?"):
        raise DependencyInstallFailed(
            "Cannot proceed without installing the required Python packages."
        )

    printer.info("Installing missing packages...")
    cmd = install_command(runtime, missing, ctx.config, mode)
    if ctx.runner.run(cmd, capture=False).failed:
        raise DependencyInstallFailed(
            "Failed to install some packages. Please check the errors above."
        )

    printer.success("Missing packages installed successfully.")
    return list(missing)


def ensure_bundler(ctx: BootstrapContext, runtime: str, mode: EnvironmentMode) -> list[str]:
    """Make sure PyInstaller is installed.

    Raises:
        BundlerUnavailable: Declined or the install failed.
    """
    printer = ctx.printer
    package = ctx.config.bundler_package
    printer.info("Checking for PyInstaller installation...")

    if is_installed(ctx.runner, runtime, package):
        printer.success("PyInstaller is already installed.")
        return []

    printer.warning("PyInstaller is not installed.")
    if not ctx.ask("Do you want to install PyInstaller?"):
        raise BundlerUnavailable(
            "PyInstaller is required to create the executable. "
            "Please install it before continuing."
        )

    printer.info("Installing PyInstaller...")
    cmd = install_command(runtime, [package], ctx.config, mode)
    if ctx.runner.run(cmd, capture=False).failed:
        raise BundlerUnavailable("PyInstaller installation failed.")

    printer.success("PyInstaller installed successfully.")
    return [package]
