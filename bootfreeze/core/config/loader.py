"""
Configuration loader — builds the run's immutable ``BootstrapConfig``.

The configuration is assembled ONCE at startup from three layers:

    CLI flags  >  bootfreeze.yml  >  built-in defaults

and the process environment is captured into it at the same moment.
No pipeline stage reads ``os.environ`` or the working directory on its
own; everything flows through the config object.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "bootfreeze.yml"

DEFAULT_SCRIPT = "BTP2-extract.py"
DEFAULT_PACKAGES = ("pandas", "matplotlib", "seaborn", "numpy")
DEFAULT_BOOTSTRAP_URL = "https://bootstrap.pypa.io/get-pip.py"
DEFAULT_OUTPUT_DIR = "dist"

# Set (non-empty) inside an activated conda environment.
ISOLATED_ENV_VAR = "CONDA_DEFAULT_ENV"


class ConfigError(Exception):
    """Raised when bootfreeze.yml is unreadable or invalid."""


class FileSettings(BaseModel):
    """Keys accepted in bootfreeze.yml. Every key is optional."""

    model_config = ConfigDict(extra="forbid")

    script: str | None = None
    packages: list[str] | None = None
    bundler_package: str | None = None
    bundler_module: str | None = None
    output_dir: str | None = None
    bootstrap_url: str | None = None

    @field_validator("bootstrap_url")
    @classmethod
    def _check_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"bootstrap_url must be an http(s) URL, got {v!r}")
        return v


class BootstrapConfig(BaseModel):
    """Everything a pipeline stage is allowed to know about the world."""

    model_config = ConfigDict(frozen=True)

    working_dir: Path
    script_name: str = DEFAULT_SCRIPT
    required_packages: tuple[str, ...] = DEFAULT_PACKAGES

    bundler_package: str = "pyinstaller"
    bundler_module: str = "PyInstaller"
    output_dir: str = DEFAULT_OUTPUT_DIR

    runtime_candidates: tuple[str, ...] = ("python3", "python")

    isolated_env_var: str = ISOLATED_ENV_VAR
    isolated_env_value: str = ""
    override_flag: str = "--break-system-packages"

    bootstrap_url: str = DEFAULT_BOOTSTRAP_URL
    download_timeout: int = Field(default=60, gt=0)

    @property
    def script_path(self) -> Path:
        return self.working_dir / self.script_name

    @property
    def dist_dir(self) -> Path:
        return self.working_dir / self.output_dir

    @property
    def artifact_path(self) -> Path:
        """Where PyInstaller's ``--onefile`` output is expected to land."""
        return self.dist_dir / Path(self.script_name).stem


def find_config_file(start_dir: Path) -> Path | None:
    """Search for bootfreeze.yml starting from ``start_dir``, walking up.

    Returns:
        Path to bootfreeze.yml, or None if not found.
    """
    current = start_dir.resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_file_settings(path: Path) -> FileSettings:
    """Read and validate a bootfreeze.yml file.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return FileSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return FileSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e


def load_config(
    *,
    working_dir: Path,
    environ: Mapping[str, str],
    config_path: Path | None = None,
    script_name: str | None = None,
) -> BootstrapConfig:
    """Build the run configuration.

    Args:
        working_dir: Directory the build target is expected in.
        environ: Snapshot of the process environment.
        config_path: Explicit bootfreeze.yml. If None, searches upward
            from ``working_dir``; a missing file is not an error.
        script_name: Build target override from the command line.

    Raises:
        ConfigError: If a config file exists but is invalid.
    """
    path = config_path or find_config_file(working_dir)
    settings = load_file_settings(path) if path else FileSettings()

    values: dict = {"working_dir": working_dir.resolve()}
    if settings.script:
        values["script_name"] = settings.script
    if settings.packages is not None:
        values["required_packages"] = tuple(settings.packages)
    if settings.bundler_package:
        values["bundler_package"] = settings.bundler_package
    if settings.bundler_module:
        values["bundler_module"] = settings.bundler_module
    if settings.output_dir:
        values["output_dir"] = settings.output_dir
    if settings.bootstrap_url:
        values["bootstrap_url"] = settings.bootstrap_url
    if script_name:
        values["script_name"] = script_name

    config = BootstrapConfig(**values)
    config = config.model_copy(
        update={"isolated_env_value": environ.get(config.isolated_env_var, "")}
    )
    logger.info(
        "Config: script=%s packages=%s (from %s)",
        config.script_name,
        ",".join(config.required_packages),
        path or "defaults",
    )
    return config
