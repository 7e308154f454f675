"""
Fatal bootstrap failures.

Stages raise one of these to halt the pipeline. Only the CLI catches
them: it prints the message as an error line and exits with
``exit_code``. The installer self-upgrade is the one stage that never
raises; its failure is reported as a warning.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base class for every failure that stops the pipeline."""

    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RuntimeNotFound(BootstrapError):
    """No Python interpreter is available and none could be installed."""


class PackageManagerUnsupported(BootstrapError):
    """The interpreter is missing and no known system package manager exists."""


class InstallerUnavailable(BootstrapError):
    """pip is missing and could not be bootstrapped."""


class DependencyInstallFailed(BootstrapError):
    """Required packages were refused or failed to install."""


class BundlerUnavailable(BootstrapError):
    """PyInstaller is missing and could not be installed."""


class BuildTargetNotFound(BootstrapError):
    """The script to freeze does not exist in the working directory."""


class BuildFailed(BootstrapError):
    """The bundler exited with a non-zero status."""


class ArtifactNotFound(BootstrapError):
    """The bundler reported success but produced no executable."""
