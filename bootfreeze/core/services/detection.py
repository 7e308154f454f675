"""
Host detection — interpreter, system package manager, environment mode.

``discover_package_manager`` and ``classify_environment`` are pure
probes. ``discover_runtime`` may, with the operator's consent, install
Python through the system package manager.
"""

from __future__ import annotations

import logging

from bootfreeze.adapters.base import CommandRunner
from bootfreeze.core.config.loader import BootstrapConfig
from bootfreeze.core.context import BootstrapContext
from bootfreeze.core.errors import PackageManagerUnsupported, RuntimeNotFound
from bootfreeze.core.models.environment import (
    PACKAGE_MANAGER_PRIORITY,
    EnvironmentMode,
    PackageManagerKind,
)

logger = logging.getLogger(__name__)


# ── Pure probes ─────────────────────────────────────────────────


def discover_package_manager(runner: CommandRunner) -> PackageManagerKind:
    """Return the first package manager on PATH, in priority order."""
    for kind in PACKAGE_MANAGER_PRIORITY:
        if runner.which(kind.command):
            logger.debug("Package manager: %s", kind.value)
            return kind
    logger.debug("No supported package manager found")
    return PackageManagerKind.UNKNOWN


def classify_environment(config: BootstrapConfig) -> EnvironmentMode:
    """ISOLATED iff the conda marker variable was set and non-empty."""
    if config.isolated_env_value:
        return EnvironmentMode.ISOLATED
    return EnvironmentMode.NORMAL


def find_runtime(config: BootstrapConfig, runner: CommandRunner) -> str | None:
    """First interpreter command on PATH (``python3`` before ``python``)."""
    for candidate in config.runtime_candidates:
        if runner.which(candidate):
            return candidate
    return None


# ── Runtime discovery (may install) ─────────────────────────────


def discover_runtime(ctx: BootstrapContext, package_manager: PackageManagerKind) -> str:
    """Locate a Python interpreter, offering one install attempt if absent.

    Returns:
        The interpreter command name.

    Raises:
        RuntimeNotFound: Declined, or installed but still not found.
        PackageManagerUnsupported: No apt-get or brew to install with.
    """
    printer = ctx.printer
    printer.info("Checking for Python installation...")

    runtime = find_runtime(ctx.config, ctx.runner)
    if runtime:
        label = "Python3" if runtime == "python3" else "Python"
        printer.success(f"{label} is already installed.")
        return runtime

    printer.warning("Python is not installed.")
    if not ctx.ask("Do you want to install Python?"):
        raise RuntimeNotFound("Python is required. Please install Python before continuing.")

    if package_manager is PackageManagerKind.APT:
        _install_with_apt(ctx)
        suffix = ""
    elif package_manager is PackageManagerKind.BREW:
        _install_with_brew(ctx)
        suffix = " via Homebrew"
    else:
        raise PackageManagerUnsupported(
            "Unsupported package manager. Please install Python manually."
        )

    # Both installers provide python3; the bare name is not checked here.
    if ctx.runner.which("python3"):
        printer.success(f"Python installed successfully{suffix}.")
        return "python3"

    raise RuntimeNotFound(f"Python installation failed{suffix}.")


def _install_with_apt(ctx: BootstrapContext) -> None:
    ctx.printer.info("Updating package list...")
    ctx.runner.run(["sudo", "apt-get", "update"], capture=False)
    ctx.printer.info("Installing Python3...")
    result = ctx.runner.run(["sudo", "apt-get", "install", "-y", "python3"], capture=False)
    logger.debug("apt-get install python3 exited %d", result.returncode)


def _install_with_brew(ctx: BootstrapContext) -> None:
    ctx.printer.info("Installing Python using Homebrew...")
    result = ctx.runner.run(["brew", "install", "python"], capture=False)
    logger.debug("brew install python exited %d", result.returncode)
