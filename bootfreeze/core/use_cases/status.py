"""
Status use case — what a bootstrap run would find, without changing anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bootfreeze.adapters.base import CommandRunner
from bootfreeze.core.config.loader import BootstrapConfig
from bootfreeze.core.models.environment import EnvironmentMode, PackageManagerKind
from bootfreeze.core.services import detection, pip_ops


@dataclass
class StatusResult:
    """Read-only snapshot of the host."""

    runtime: str | None = None
    package_manager: PackageManagerKind = PackageManagerKind.UNKNOWN
    environment_mode: EnvironmentMode = EnvironmentMode.NORMAL
    pip_available: bool = False
    missing_packages: list[str] = field(default_factory=list)
    bundler_installed: bool = False
    script_name: str = ""
    script_found: bool = False
    artifact_path: str = ""
    artifact_found: bool = False

    @property
    def ready(self) -> bool:
        """Whether a run would build without installing anything."""
        return (
            self.runtime is not None
            and self.pip_available
            and not self.missing_packages
            and self.bundler_installed
            and self.script_found
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "runtime": self.runtime,
            "package_manager": self.package_manager.value,
            "environment_mode": self.environment_mode.value,
            "pip_available": self.pip_available,
            "missing_packages": list(self.missing_packages),
            "bundler_installed": self.bundler_installed,
            "script": {"name": self.script_name, "found": self.script_found},
            "artifact": {"path": self.artifact_path, "found": self.artifact_found},
            "ready": self.ready,
        }


def get_status(config: BootstrapConfig, runner: CommandRunner) -> StatusResult:
    """Probe the host the same way the pipeline does, minus every action."""
    result = StatusResult(
        package_manager=detection.discover_package_manager(runner),
        environment_mode=detection.classify_environment(config),
        script_name=config.script_name,
        script_found=config.script_path.is_file(),
        artifact_path=str(config.artifact_path),
        artifact_found=config.artifact_path.is_file(),
    )

    result.runtime = detection.find_runtime(config, runner)
    if result.runtime is None:
        result.missing_packages = list(config.required_packages)
        return result

    result.pip_available = pip_ops.pip_available(runner, result.runtime)
    if not result.pip_available:
        result.missing_packages = list(config.required_packages)
        return result

    result.missing_packages = pip_ops.resolve_missing(
        runner, result.runtime, config.required_packages
    )
    result.bundler_installed = pip_ops.is_installed(
        runner, result.runtime, config.bundler_package
    )
    return result
