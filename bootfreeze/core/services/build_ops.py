"""
Build operations — freeze the target script and explain how to run it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bootfreeze.adapters.console import StatusPrinter
from bootfreeze.core.config.loader import DEFAULT_OUTPUT_DIR
from bootfreeze.core.context import BootstrapContext
from bootfreeze.core.errors import ArtifactNotFound, BuildFailed, BuildTargetNotFound

logger = logging.getLogger(__name__)

SHELL_RC_FILES = ("~/.bashrc", "~/.zshrc")


def build_command(
    runtime: str,
    bundler_module: str,
    script_name: str,
    distpath: Path | None = None,
) -> list[str]:
    """``<runtime> -m PyInstaller --onefile [--distpath DIR] <script>``."""
    cmd = [runtime, "-m", bundler_module, "--onefile"]
    if distpath is not None:
        cmd += ["--distpath", str(distpath)]
    cmd.append(script_name)
    return cmd


def build_executable(ctx: BootstrapContext, runtime: str) -> Path:
    """Run PyInstaller in one-file mode and locate the executable.

    Returns:
        Absolute path of the built executable.

    Raises:
        BuildTargetNotFound: The script is not in the working directory.
        BuildFailed: PyInstaller exited non-zero.
        ArtifactNotFound: PyInstaller succeeded but the file is missing.
    """
    printer = ctx.printer
    config = ctx.config
    script = config.script_name

    printer.info(f"Checking for the Python script '{script}'...")
    if not config.script_path.is_file():
        raise BuildTargetNotFound(
            f"The script '{script}' was not found in the current directory."
        )
    printer.success(f"Found the script '{script}'.")

    printer.info("Creating executable with PyInstaller...")
    # PyInstaller writes to ./dist unless told otherwise
    distpath = None if config.output_dir == DEFAULT_OUTPUT_DIR else config.dist_dir
    cmd = build_command(runtime, config.bundler_module, script, distpath)
    result = ctx.runner.run(cmd, capture=False, cwd=config.working_dir)
    if result.failed:
        raise BuildFailed("There was an error creating the executable.")

    printer.success("Executable created successfully.")
    printer.info(f"You can find the executable in the '{config.output_dir}' directory.")

    artifact = config.artifact_path
    if not artifact.is_file():
        raise ArtifactNotFound(f"Executable '{artifact}' not found.")

    logger.info("Artifact: %s", artifact)
    return artifact


def export_line(dist_dir: Path) -> str:
    """The shell line that appends ``dist_dir`` to PATH."""
    return f'export PATH="$PATH:{dist_dir}"'


def path_guidance(artifact: Path) -> dict:
    """Everything needed to put the executable's directory on PATH."""
    dist_dir = artifact.parent
    line = export_line(dist_dir)
    return {
        "artifact": str(artifact),
        "dist_dir": str(dist_dir),
        "export": line,
        "append": {rc: f"echo '{line}' >> {rc}" for rc in SHELL_RC_FILES},
        "reload": [f"source {rc}" for rc in SHELL_RC_FILES],
    }


def emit_path_guidance(printer: StatusPrinter, artifact: Path) -> None:
    """Print where the executable is and how to add it to PATH."""
    guidance = path_guidance(artifact)
    dist_name = artifact.parent.name
    bashrc, zshrc = SHELL_RC_FILES

    printer.success(f"Executable is located at: {guidance['artifact']}")
    printer.info(
        f"To run the executable from anywhere, add the '{dist_name}' directory "
        "to your system PATH."
    )
    printer.info("Add the following line to your shell configuration file (.bashrc or .zshrc):")
    printer.blank()
    printer.command(guidance["export"])
    printer.blank()
    printer.info("Or add it automatically using:")
    printer.blank()
    printer.command(guidance["append"][bashrc])
    printer.command("# or for Zsh users:")
    printer.command(guidance["append"][zshrc])
    printer.blank()
    printer.info("Then reload your shell configuration with:")
    printer.command("  or  ".join(guidance["reload"]))
    printer.blank()
    printer.success(
        "Installation and packaging complete. "
        "You can now run the executable from anywhere on your system."
    )
