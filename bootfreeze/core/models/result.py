"""
Bootstrap result — the record of one pipeline run.

Each stage appends a ``StageRecord``; the finished ``BootstrapResult``
is what the CLI summarises and what tests assert on.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from bootfreeze.core.models.environment import EnvironmentMode, PackageManagerKind


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class StageRecord(BaseModel):
    """What a single pipeline stage did."""

    stage: str
    status: Literal["ok", "skipped", "warning"] = "ok"
    message: str = ""
    installed: list[str] = Field(default_factory=list)
    at: str = Field(default_factory=_now_iso)


class BootstrapResult(BaseModel):
    """Outcome of a completed bootstrap run."""

    runtime: str = ""
    package_manager: PackageManagerKind = PackageManagerKind.UNKNOWN
    environment_mode: EnvironmentMode = EnvironmentMode.NORMAL
    missing_packages: list[str] = Field(default_factory=list)
    artifact_path: str | None = None
    stages: list[StageRecord] = Field(default_factory=list)

    def record(
        self,
        stage: str,
        status: Literal["ok", "skipped", "warning"] = "ok",
        message: str = "",
        installed: list[str] | None = None,
    ) -> StageRecord:
        """Append a stage record and return it."""
        entry = StageRecord(
            stage=stage,
            status=status,
            message=message,
            installed=list(installed or []),
        )
        self.stages.append(entry)
        return entry

    @property
    def installed(self) -> list[str]:
        """Every package or tool installed during the run, in order."""
        names: list[str] = []
        for entry in self.stages:
            names.extend(entry.installed)
        return names

    @property
    def install_count(self) -> int:
        """Number of stages that performed an install."""
        return sum(1 for entry in self.stages if entry.installed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "runtime": self.runtime,
            "package_manager": self.package_manager.value,
            "environment_mode": self.environment_mode.value,
            "missing_packages": list(self.missing_packages),
            "installed": self.installed,
            "artifact_path": self.artifact_path,
            "stages": [s.model_dump() for s in self.stages],
        }
