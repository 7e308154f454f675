"""
Command result model — the runner's output contract.

Every external command the bootstrapper launches (interpreter probes,
pip, apt-get, brew, PyInstaller) comes back as a ``CommandResult``.
A non-zero exit is a value, never an exception.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Exit status reported when the executable itself cannot be found,
# matching what a POSIX shell returns for an unknown command.
EXIT_NOT_FOUND = 127


class CommandResult(BaseModel):
    """Outcome of one external command."""

    argv: list[str] = Field(default_factory=list)
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def failed(self) -> bool:
        return self.returncode != 0

    @property
    def command_line(self) -> str:
        """The argv joined for display."""
        return " ".join(self.argv)

    @classmethod
    def success(cls, argv: list[str], stdout: str = "", **kwargs) -> CommandResult:
        """Create a zero-exit result."""
        return cls(argv=list(argv), returncode=0, stdout=stdout, **kwargs)

    @classmethod
    def failure(
        cls,
        argv: list[str],
        returncode: int = 1,
        stderr: str = "",
        **kwargs,
    ) -> CommandResult:
        """Create a non-zero-exit result."""
        return cls(argv=list(argv), returncode=returncode, stderr=stderr, **kwargs)
