"""
Subprocess runner — the SINGLE PLACE where ``subprocess.run`` is called.

Probes (``pip show``, ``--version``) run with captured output so they
stay silent; installs and builds stream to the terminal so the operator
sees pip and PyInstaller progress as it happens.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from collections.abc import Sequence
from pathlib import Path

from bootfreeze.adapters.base import CommandRunner
from bootfreeze.core.models.command import EXIT_NOT_FOUND, CommandResult

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Run commands on the local machine."""

    def __init__(self, path: str | None = None):
        # PATH captured at startup; None means the inherited PATH.
        self._path = path

    @property
    def name(self) -> str:
        return "subprocess"

    def which(self, command: str) -> str | None:
        return shutil.which(command, path=self._path)

    def run(
        self,
        argv: Sequence[str],
        *,
        capture: bool = True,
        cwd: Path | None = None,
    ) -> CommandResult:
        argv = [str(a) for a in argv]
        logger.debug("Executing: %s (cwd=%s, capture=%s)", " ".join(argv), cwd, capture)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError:
            logger.debug("Executable not found: %s", argv[0])
            return CommandResult.failure(
                argv,
                returncode=EXIT_NOT_FOUND,
                stderr=f"{argv[0]}: command not found",
            )
        except OSError as e:
            logger.warning("Cannot execute %s: %s", argv[0], e)
            return CommandResult.failure(argv, stderr=f"Command execution error: {e}")

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Exit %d after %dms: %s", result.returncode, elapsed_ms, argv[0])

        return CommandResult(
            argv=argv,
            returncode=result.returncode,
            stdout=(result.stdout or "").strip(),
            stderr=(result.stderr or "").strip(),
            duration_ms=elapsed_ms,
        )
