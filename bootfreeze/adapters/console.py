"""
Console adapter — colour-coded status lines and the yes/no prompt.

Status lines are what the operator reads; they are separate from
``logging`` (which goes to stderr and is silent by default).
"""

from __future__ import annotations

import logging

import click

from bootfreeze.adapters.base import Prompter

logger = logging.getLogger(__name__)

_RULE = "-" * 40


class StatusPrinter:
    """Print ``[INFO]`` / ``[SUCCESS]`` / ``[WARNING]`` / ``[ERROR]`` lines."""

    def __init__(self, quiet: bool = False):
        # quiet drops info lines only; warnings and errors always print
        self.quiet = quiet

    def info(self, message: str) -> None:
        logger.debug(message)
        if not self.quiet:
            self._tagged("INFO", "blue", message)

    def success(self, message: str) -> None:
        logger.debug(message)
        self._tagged("SUCCESS", "green", message)

    def warning(self, message: str) -> None:
        logger.debug("warning: %s", message)
        self._tagged("WARNING", "yellow", message)

    def error(self, message: str) -> None:
        logger.debug("error: %s", message)
        self._tagged("ERROR", "red", message)

    def command(self, text: str) -> None:
        """A line the operator is meant to copy and paste."""
        click.secho(text, fg="cyan")

    def blank(self) -> None:
        click.echo()

    def rule(self) -> None:
        click.secho(_RULE, fg="yellow", bold=True)

    @staticmethod
    def _tagged(tag: str, color: str, message: str) -> None:
        click.secho(f"[{tag}]", fg=color, nl=False)
        click.echo(f" {message}")


class ConsolePrompter(Prompter):
    """Ask on the terminal until the answer starts with y or n.

    Any other answer (including an empty one) warns and asks again.
    End of input raises ``click.Abort``.
    """

    def __init__(self, printer: StatusPrinter):
        self._printer = printer

    def confirm(self, question: str) -> bool:
        while True:
            answer = click.prompt(
                click.style(f"{question} [y/n]", fg="cyan"),
                default="",
                show_default=False,
                prompt_suffix=": ",
            )
            answer = answer.strip().lower()
            if answer.startswith("y"):
                logger.debug("Confirmed: %s", question)
                return True
            if answer.startswith("n"):
                logger.debug("Declined: %s", question)
                return False
            self._printer.warning("Please answer yes or no.")
