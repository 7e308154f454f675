"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from bootfreeze.adapters.console import StatusPrinter
from bootfreeze.adapters.mock import MockRunner, ScriptedPrompter
from bootfreeze.core.config.loader import BootstrapConfig
from bootfreeze.core.context import BootstrapContext

SCRIPT = "BTP2-extract.py"


def write_artifact(argv: list[str], cwd: Path | None) -> None:
    """Side effect standing in for a successful PyInstaller --onefile run."""
    script = Path(argv[-1])
    dist = (cwd or Path.cwd()) / "dist"
    if "--distpath" in argv:
        dist = Path(argv[argv.index("--distpath") + 1])
    dist.mkdir(parents=True, exist_ok=True)
    (dist / script.stem).write_text("#!frozen\n")


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """A working directory containing the script to freeze."""
    (tmp_path / SCRIPT).write_text("print('hello')\n")
    return tmp_path


@pytest.fixture
def config(workdir: Path) -> BootstrapConfig:
    return BootstrapConfig(working_dir=workdir)


@pytest.fixture
def isolated_config(workdir: Path) -> BootstrapConfig:
    return BootstrapConfig(working_dir=workdir, isolated_env_value="base")


@pytest.fixture
def runner() -> MockRunner:
    """A host with python3 and apt-get where every command succeeds."""
    mock = MockRunner(available=["python3", "apt-get"])
    mock.set_response(["python3", "-m", "PyInstaller"], side_effect=write_artifact)
    return mock


@pytest.fixture
def printer() -> StatusPrinter:
    return StatusPrinter()


@pytest.fixture
def make_ctx(printer: StatusPrinter):
    """Factory: ``make_ctx(config, runner, answers=[...])``."""

    def _make(config: BootstrapConfig, runner: MockRunner, answers=()) -> BootstrapContext:
        return BootstrapContext(
            config=config,
            runner=runner,
            prompter=ScriptedPrompter(answers),
            printer=printer,
        )

    return _make
