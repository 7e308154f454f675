"""
Domain models — Pydantic types for the bootstrapper.

    from bootfreeze.core.models import CommandResult, BootstrapResult
"""

from bootfreeze.core.models.command import EXIT_NOT_FOUND, CommandResult
from bootfreeze.core.models.environment import (
    PACKAGE_MANAGER_PRIORITY,
    EnvironmentMode,
    PackageManagerKind,
)
from bootfreeze.core.models.result import BootstrapResult, StageRecord

__all__ = [
    # command.py
    "CommandResult",
    "EXIT_NOT_FOUND",
    # environment.py
    "EnvironmentMode",
    "PACKAGE_MANAGER_PRIORITY",
    "PackageManagerKind",
    # result.py
    "BootstrapResult",
    "StageRecord",
]
