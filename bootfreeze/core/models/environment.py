"""
Environment model — what detection found about the host.

These values are computed once at the start of a run and never change
afterwards.
"""

from __future__ import annotations

from enum import Enum


class PackageManagerKind(str, Enum):
    """System package manager used to install the interpreter."""

    APT = "apt-get"
    BREW = "brew"
    UNKNOWN = "unknown"

    @property
    def command(self) -> str | None:
        """The executable probed for this kind (None for UNKNOWN)."""
        if self is PackageManagerKind.UNKNOWN:
            return None
        return self.value


# Probe order; the first command found on PATH wins.
PACKAGE_MANAGER_PRIORITY: tuple[PackageManagerKind, ...] = (
    PackageManagerKind.APT,
    PackageManagerKind.BREW,
)


class EnvironmentMode(str, Enum):
    """Whether the interpreter lives in an externally managed environment.

    ISOLATED environments (conda and friends) refuse direct pip installs
    unless an override flag is passed, and must not have their pip
    upgraded underneath them.
    """

    ISOLATED = "isolated"
    NORMAL = "normal"

    @property
    def is_isolated(self) -> bool:
        return self is EnvironmentMode.ISOLATED
