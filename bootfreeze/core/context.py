"""
Run context — the single object every pipeline stage receives.

Built ONCE by the entry point (CLI or test) and never mutated:

    - CLI:    main.py   → SubprocessRunner + ConsolePrompter
    - Tests:  conftest  → MockRunner + ScriptedPrompter
"""

from __future__ import annotations

from dataclasses import dataclass

from bootfreeze.adapters.base import CommandRunner, Prompter
from bootfreeze.adapters.console import StatusPrinter
from bootfreeze.core.config.loader import BootstrapConfig


@dataclass(frozen=True)
class BootstrapContext:
    """Configuration plus the host capabilities a stage may use."""

    config: BootstrapConfig
    runner: CommandRunner
    prompter: Prompter
    printer: StatusPrinter

    def ask(self, question: str) -> bool:
        """Ask the operator a yes/no question."""
        return self.prompter.confirm(question)
