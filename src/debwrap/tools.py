"""
External programs invoked while building a package.
"""

from collections.abc import Sequence
import os
from pathlib import Path
import subprocess
from typing import Protocol, runtime_checkable

from attrs import define
from pyvider.telemetry import logger

from .exceptions import MissingToolError

DPKG_DEB_PATH = Path("/usr/bin/dpkg-deb")


@define(frozen=True, slots=True)
class ToolResult:
    exit_status: int
    stdout: str
    stderr: str


@runtime_checkable
class ExternalTool(Protocol):
    executable: Path

    def is_available(self) -> bool: ...

    def invoke(
        self, args: Sequence[str], cwd: Path | str | None = None
    ) -> ToolResult: ...


@define
class SubprocessTool:
    """Runs an executable synchronously and captures its output."""

    executable: Path

    def is_available(self) -> bool:
        return self.executable.is_file() and os.access(self.executable, os.X_OK)

    def invoke(
        self, args: Sequence[str], cwd: Path | str | None = None
    ) -> ToolResult:
        command = [str(self.executable), *args]
        logger.info(f"Running command: {' '.join(command)}")
        result = subprocess.run(
            command, capture_output=True, text=True, cwd=cwd, check=False
        )
        if result.stderr:
            logger.debug("Command stderr", output=result.stderr.strip())
        return ToolResult(result.returncode, result.stdout, result.stderr)


def dpkg_deb(path: Path | str = DPKG_DEB_PATH) -> SubprocessTool:
    return SubprocessTool(Path(path))


def require(tool: ExternalTool) -> ExternalTool:
    """Returns `tool`, raising MissingToolError if it is not installed."""
    if not tool.is_available():
        raise MissingToolError(
            f"'{tool.executable.name}' program not found at {tool.executable}. "
            "Can't create deb package."
        )
    return tool
