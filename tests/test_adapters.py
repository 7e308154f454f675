"""
Tests for adapters — subprocess runner, download, mock doubles, console.
"""

import logging
import sys
import urllib.error
from pathlib import Path

import click
import pytest

from bootfreeze.adapters.console import ConsolePrompter, StatusPrinter
from bootfreeze.adapters.mock import MockRunner, ScriptedPrompter
from bootfreeze.adapters.shell.command import SubprocessRunner
from bootfreeze.adapters.shell.download import download_file

# ── Subprocess Runner ────────────────────────────────────────────────


class TestSubprocessRunner:
    def test_success_captured(self):
        runner = SubprocessRunner()
        result = runner.run([sys.executable, "-c", "print('hello')"])
        assert result.ok
        assert result.stdout == "hello"
        assert result.argv[0] == sys.executable

    def test_exit_code_propagated(self):
        runner = SubprocessRunner()
        result = runner.run([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert result.failed
        assert result.returncode == 3

    def test_missing_executable(self):
        runner = SubprocessRunner()
        result = runner.run(["definitely-not-a-real-command-xyz", "--version"])
        assert result.returncode == 127
        assert "command not found" in result.stderr

    def test_cwd(self, tmp_path: Path):
        runner = SubprocessRunner()
        result = runner.run(
            [sys.executable, "-c", "import os; print(os.getcwd())"],
            cwd=tmp_path,
        )
        assert Path(result.stdout).resolve() == tmp_path.resolve()

    def test_which(self, tmp_path: Path):
        tool = tmp_path / "mytool"
        tool.write_text("#!/bin/sh\n")
        tool.chmod(0o755)
        runner = SubprocessRunner(path=str(tmp_path))
        assert runner.which("mytool") == str(tool)
        assert runner.which("definitely-not-a-real-command-xyz") is None

    def test_name(self):
        assert SubprocessRunner().name == "subprocess"


# ── Download ─────────────────────────────────────────────────────────


class TestDownload:
    def test_file_url(self, tmp_path: Path):
        src = tmp_path / "get-pip-source.py"
        src.write_text("print('bootstrap')\n")
        dest = tmp_path / "out.py"
        download_file(src.as_uri(), dest)
        assert dest.read_text() == "print('bootstrap')\n"

    def test_missing_source_raises_oserror(self, tmp_path: Path):
        with pytest.raises(OSError):
            download_file((tmp_path / "absent.py").as_uri(), tmp_path / "out.py")

    def test_url_without_scheme(self, tmp_path: Path):
        with pytest.raises(ValueError, match="unknown url type"):
            download_file("bootstrap.pypa.io/get-pip.py", tmp_path / "out.py")

    def test_urlerror_is_oserror(self):
        assert issubclass(urllib.error.URLError, OSError)


# ── Mock Runner ──────────────────────────────────────────────────────


class TestMockRunner:
    def test_default_success(self):
        mock = MockRunner()
        result = mock.run(["anything", "at", "all"])
        assert result.ok
        assert mock.call_count == 1

    def test_which(self):
        mock = MockRunner(available=["python3"])
        assert mock.which("python3") == "/usr/bin/python3"
        assert mock.which("brew") is None
        mock.set_available("brew")
        mock.set_unavailable("python3")
        assert mock.which("brew")
        assert mock.which("python3") is None

    def test_longest_prefix_wins(self):
        mock = MockRunner()
        mock.set_failure(["python3", "-m", "pip", "show"])
        mock.set_response(["python3", "-m", "pip", "show", "numpy"], returncode=0)
        assert mock.run(["python3", "-m", "pip", "show", "numpy"]).ok
        assert mock.run(["python3", "-m", "pip", "show", "pandas"]).failed
        assert mock.run(["python3", "-m", "pip", "--version"]).ok

    def test_side_effect(self, tmp_path: Path):
        seen = []
        mock = MockRunner()
        mock.set_response(["build"], side_effect=lambda argv, cwd: seen.append((argv, cwd)))
        mock.run(["build", "x"], cwd=tmp_path)
        assert seen == [(["build", "x"], tmp_path)]

    def test_calls_matching_and_reset(self):
        mock = MockRunner()
        mock.run(["pip", "show", "a"])
        mock.run(["pip", "install", "a"])
        mock.run(["pip", "show", "b"])
        assert mock.calls_matching(["pip", "show"]) == [["pip", "show", "a"], ["pip", "show", "b"]]
        mock.reset()
        assert mock.call_count == 0


class TestScriptedPrompter:
    def test_answers_in_order(self):
        prompter = ScriptedPrompter([True, False])
        assert prompter.confirm("first?") is True
        assert prompter.confirm("second?") is False
        assert prompter.questions == ["first?", "second?"]
        assert prompter.remaining == 0

    def test_unexpected_prompt(self):
        prompter = ScriptedPrompter()
        with pytest.raises(AssertionError, match="Unexpected prompt"):
            prompter.confirm("surprise?")


# ── Console ──────────────────────────────────────────────────────────


class TestStatusPrinter:
    def test_tags(self, capsys):
        printer = StatusPrinter()
        printer.info("checking")
        printer.success("done")
        printer.warning("careful")
        printer.error("broken")
        out = capsys.readouterr().out
        assert "[INFO] checking" in out
        assert "[SUCCESS] done" in out
        assert "[WARNING] careful" in out
        assert "[ERROR] broken" in out

    def test_quiet_drops_info_only(self, capsys):
        printer = StatusPrinter(quiet=True)
        printer.info("checking")
        printer.warning("careful")
        out = capsys.readouterr().out
        assert "checking" not in out
        assert "careful" in out

    def test_status_lines_logged_at_debug_only(self, caplog):
        printer = StatusPrinter()
        with caplog.at_level(logging.INFO, logger="bootfreeze.adapters.console"):
            printer.info("checking")
            printer.success("done")
            printer.warning("careful")
            printer.error("broken")
        assert caplog.records == []

        with caplog.at_level(logging.DEBUG, logger="bootfreeze.adapters.console"):
            printer.success("done")
        assert [r.levelno for r in caplog.records] == [logging.DEBUG]


class TestConsolePrompter:
    def _answers(self, monkeypatch, answers):
        queue = list(answers)
        monkeypatch.setattr(click, "prompt", lambda *a, **kw: queue.pop(0))
        return queue

    @pytest.mark.parametrize("answer", ["y", "Y", "yes", " Yes please"])
    def test_yes(self, monkeypatch, answer):
        self._answers(monkeypatch, [answer])
        assert ConsolePrompter(StatusPrinter()).confirm("Install?") is True

    @pytest.mark.parametrize("answer", ["n", "N", "no", "nope"])
    def test_no(self, monkeypatch, answer):
        self._answers(monkeypatch, [answer])
        assert ConsolePrompter(StatusPrinter()).confirm("Install?") is False

    def test_reprompts_on_invalid(self, monkeypatch, capsys):
        queue = self._answers(monkeypatch, ["maybe", "", "y"])
        assert ConsolePrompter(StatusPrinter()).confirm("Install?") is True
        assert queue == []
        out = capsys.readouterr().out
        assert out.count("Please answer yes or no.") == 2
