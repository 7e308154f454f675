"""
Adapter base — the contracts between the pipeline and the outside world.

The bootstrapper touches the host through exactly two capabilities:

    CommandRunner   look up executables, run commands
    Prompter        ask the operator a yes/no question

Stages only talk to these interfaces, never to ``subprocess`` or
``input()`` directly, so tests can swap in the doubles from
``bootfreeze.adapters.mock``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from bootfreeze.core.models.command import CommandResult


class CommandRunner(ABC):
    """Run external commands and report their outcome as values.

    Implementations NEVER raise for a failing command. A non-zero
    exit, a missing executable or an OS error all come back as a
    ``CommandResult`` with a non-zero ``returncode``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'subprocess', 'mock')."""

    @abstractmethod
    def which(self, command: str) -> str | None:
        """Resolve ``command`` on PATH, or None if it is not there."""

    @abstractmethod
    def run(
        self,
        argv: Sequence[str],
        *,
        capture: bool = True,
        cwd: Path | None = None,
    ) -> CommandResult:
        """Run a command to completion.

        Args:
            argv: Command and arguments.
            capture: Capture stdout/stderr. When False the command
                writes straight to the terminal (long installs, builds).
            cwd: Working directory for the command.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class Prompter(ABC):
    """Ask the operator yes/no questions."""

    @abstractmethod
    def confirm(self, question: str) -> bool:
        """Block until the operator answers; True means yes."""
