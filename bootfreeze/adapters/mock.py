"""
Mock adapters — test doubles for the runner and the prompter.

``MockRunner`` pretends to be the host: a table of executables on
PATH plus canned results keyed by argv prefix. By default every
command succeeds. ``ScriptedPrompter`` answers prompts from a list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from bootfreeze.adapters.base import CommandRunner, Prompter
from bootfreeze.core.models.command import CommandResult

SideEffect = Callable[[list[str], Path | None], None]


class MockRunner(CommandRunner):
    """Scriptable command runner for tests.

    Responses are matched on the longest argv prefix. A response may
    carry a side effect, e.g. creating the PyInstaller artifact or
    making ``python3`` appear on PATH after ``apt-get install``.
    """

    def __init__(self, available: Iterable[str] = ()):
        self._available: set[str] = set(available)
        self._responses: dict[tuple[str, ...], tuple[int, str, SideEffect | None]] = {}
        self._call_log: list[list[str]] = []
        self._cwd_log: list[Path | None] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[list[str]]:
        """Every argv this mock has run, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_available(self, *commands: str) -> None:
        """Put commands on the fake PATH."""
        self._available.update(commands)

    def set_unavailable(self, *commands: str) -> None:
        self._available.difference_update(commands)

    def set_response(
        self,
        prefix: Sequence[str],
        returncode: int = 0,
        stdout: str = "",
        side_effect: SideEffect | None = None,
    ) -> None:
        """Answer every argv starting with ``prefix`` this way."""
        self._responses[tuple(prefix)] = (returncode, stdout, side_effect)

    def set_failure(self, prefix: Sequence[str], returncode: int = 1) -> None:
        """Configure every argv starting with ``prefix`` to fail."""
        self.set_response(prefix, returncode=returncode)

    def calls_matching(self, prefix: Sequence[str]) -> list[list[str]]:
        """Recorded argvs that start with ``prefix``."""
        n = len(prefix)
        return [argv for argv in self._call_log if tuple(argv[:n]) == tuple(prefix)]

    def which(self, command: str) -> str | None:
        if command in self._available:
            return f"/usr/bin/{command}"
        return None

    def run(
        self,
        argv: Sequence[str],
        *,
        capture: bool = True,
        cwd: Path | None = None,
    ) -> CommandResult:
        argv = [str(a) for a in argv]
        self._call_log.append(argv)
        self._cwd_log.append(cwd)

        match = self._lookup(argv)
        if match is None:
            return CommandResult.success(argv, stdout="[mock] executed")

        returncode, stdout, side_effect = match
        if side_effect is not None:
            side_effect(argv, cwd)
        if returncode == 0:
            return CommandResult.success(argv, stdout=stdout)
        return CommandResult.failure(argv, returncode=returncode, stderr="[mock] failed")

    def reset(self) -> None:
        """Clear the call log; keep PATH and responses."""
        self._call_log.clear()
        self._cwd_log.clear()

    def _lookup(self, argv: list[str]) -> tuple[int, str, SideEffect | None] | None:
        for size in range(len(argv), 0, -1):
            hit = self._responses.get(tuple(argv[:size]))
            if hit is not None:
                return hit
        return None


class ScriptedPrompter(Prompter):
    """Answer prompts from a fixed list, recording each question."""

    def __init__(self, answers: Iterable[bool] = ()):
        self._answers = list(answers)
        self.questions: list[str] = []

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {question!r}")
        return self._answers.pop(0)

    @property
    def remaining(self) -> int:
        """Answers not yet consumed."""
        return len(self._answers)
