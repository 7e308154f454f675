"""
Tests for the bootstrap pipeline — end-to-end runs against mock adapters.
"""

from pathlib import Path

import pytest

from bootfreeze.adapters.mock import MockRunner
from bootfreeze.core.config.loader import BootstrapConfig
from bootfreeze.core.errors import (
    BuildTargetNotFound,
    DependencyInstallFailed,
    RuntimeNotFound,
)
from bootfreeze.core.models.environment import EnvironmentMode, PackageManagerKind
from bootfreeze.core.use_cases.bootstrap import run_bootstrap

PIP = ["python3", "-m", "pip"]
PYINSTALLER = ["python3", "-m", "PyInstaller"]
FLAG = "--break-system-packages"


def _no_fetch(url, dest, *, timeout=60):
    raise AssertionError("pip bootstrap download was not expected")


def _package_installs(runner: MockRunner) -> list[list[str]]:
    """pip install calls other than the self-upgrade."""
    return [c for c in runner.calls_matching(PIP + ["install"]) if "--upgrade" not in c]


class TestFullRun:
    def test_all_missing_operator_accepts(self, config, runner, make_ctx, capsys):
        runner.set_failure(PIP + ["show"])
        ctx = make_ctx(config, runner, answers=[True, True])

        result = run_bootstrap(ctx, fetch=_no_fetch)

        assert _package_installs(runner) == [
            PIP + ["install", "pandas", "matplotlib", "seaborn", "numpy"],
            PIP + ["install", "pyinstaller"],
        ]
        assert result.missing_packages == ["pandas", "matplotlib", "seaborn", "numpy"]
        assert result.installed == ["pandas", "matplotlib", "seaborn", "numpy", "pyinstaller"]
        assert result.artifact_path.endswith("/dist/BTP2-extract")
        assert ctx.prompter.questions == [
            "Do you want to install the missing packages?",
            "Do you want to install PyInstaller?",
        ]

        # batched install → bundler check → build, in that order
        log = runner.call_log
        batch = log.index(PIP + ["install", "pandas", "matplotlib", "seaborn", "numpy"])
        bundler_check = log.index(PIP + ["show", "pyinstaller"])
        build = log.index(PYINSTALLER + ["--onefile", "BTP2-extract.py"])
        assert batch < bundler_check < build

        out = capsys.readouterr().out
        assert f"Executable is located at: {result.artifact_path}" in out

    def test_stage_records(self, config, runner, make_ctx):
        result = run_bootstrap(make_ctx(config, runner), fetch=_no_fetch)
        assert [s.stage for s in result.stages] == [
            "runtime", "installer", "environment", "upgrade",
            "packages", "bundler", "build", "guidance",
        ]
        assert result.runtime == "python3"
        assert result.package_manager is PackageManagerKind.APT
        assert result.environment_mode is EnvironmentMode.NORMAL


class TestIdempotence:
    def test_two_runs_no_installs_no_prompts(self, config, runner, make_ctx):
        # everything present, artifact already built
        config.dist_dir.mkdir()
        config.artifact_path.write_text("#!old\n")

        for _ in range(2):
            ctx = make_ctx(config, runner)  # no answers: any prompt fails the test
            result = run_bootstrap(ctx, fetch=_no_fetch)
            assert result.install_count == 0
            assert result.installed == []
            assert ctx.prompter.questions == []

        assert _package_installs(runner) == []


class TestRejection:
    def test_declined_packages_stop_pipeline(self, config, runner, make_ctx):
        runner.set_failure(PIP + ["show", "seaborn"])
        ctx = make_ctx(config, runner, answers=[False])

        with pytest.raises(DependencyInstallFailed) as exc:
            run_bootstrap(ctx, fetch=_no_fetch)

        assert exc.value.exit_code == 1
        assert runner.calls_matching(PIP + ["show", "pyinstaller"]) == []
        assert runner.calls_matching(PYINSTALLER) == []
        assert _package_installs(runner) == []

    def test_declined_python(self, config, make_ctx):
        mock = MockRunner(available=["apt-get"])
        ctx = make_ctx(config, mock, answers=[False])
        with pytest.raises(RuntimeNotFound):
            run_bootstrap(ctx, fetch=_no_fetch)
        assert mock.call_count == 0


class TestBuildTarget:
    def test_missing_target_before_bundler(self, tmp_path: Path, runner, make_ctx):
        config = BootstrapConfig(working_dir=tmp_path)
        with pytest.raises(BuildTargetNotFound):
            run_bootstrap(make_ctx(config, runner), fetch=_no_fetch)
        assert runner.calls_matching(PYINSTALLER) == []

    def test_custom_script(self, tmp_path: Path, runner, make_ctx):
        (tmp_path / "tool.py").write_text("pass\n")
        config = BootstrapConfig(working_dir=tmp_path, script_name="tool.py")
        result = run_bootstrap(make_ctx(config, runner), fetch=_no_fetch)
        assert result.artifact_path == str(tmp_path / "dist" / "tool")


class TestEnvironmentModes:
    def test_isolated(self, isolated_config, runner, make_ctx, capsys):
        runner.set_failure(PIP + ["show", "numpy"])
        ctx = make_ctx(isolated_config, runner, answers=[True])

        result = run_bootstrap(ctx, fetch=_no_fetch)

        assert result.environment_mode is EnvironmentMode.ISOLATED
        assert runner.calls_matching(PIP + ["install", "--upgrade"]) == []
        assert _package_installs(runner) == [PIP + ["install", FLAG, "numpy"]]
        assert result.stages[3].status == "skipped"
        assert "Conda environment detected: base" in capsys.readouterr().out

    def test_normal(self, config, runner, make_ctx):
        runner.set_failure(PIP + ["show", "numpy"])
        ctx = make_ctx(config, runner, answers=[True])

        run_bootstrap(ctx, fetch=_no_fetch)

        assert runner.calls_matching(PIP + ["install", "--upgrade"]) == [
            PIP + ["install", "--upgrade", "pip"],
        ]
        assert _package_installs(runner) == [PIP + ["install", "numpy"]]

    def test_upgrade_failure_continues(self, config, runner, make_ctx):
        runner.set_failure(PIP + ["install", "--upgrade"])
        result = run_bootstrap(make_ctx(config, runner), fetch=_no_fetch)
        assert result.stages[3].status == "warning"
        assert result.artifact_path is not None
