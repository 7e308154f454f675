"""Adapters — bindings to the host machine and the operator.

Public re-exports for convenient access.
"""

from bootfreeze.adapters.base import CommandRunner, Prompter
from bootfreeze.adapters.console import ConsolePrompter, StatusPrinter
from bootfreeze.adapters.mock import MockRunner, ScriptedPrompter
from bootfreeze.adapters.shell.command import SubprocessRunner

__all__ = [
    "CommandRunner",
    "ConsolePrompter",
    "MockRunner",
    "Prompter",
    "ScriptedPrompter",
    "StatusPrinter",
    "SubprocessRunner",
]
