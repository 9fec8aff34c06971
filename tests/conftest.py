"""Pytest fixtures for the entire debwrap test suite."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Callable

import pytest

from debwrap.models import PackageMetadata
from debwrap.tools import ToolResult


class FakeTool:
    """Stands in for dpkg-deb: records invocations and writes the archive."""

    def __init__(
        self,
        available: bool = True,
        exit_status: int = 0,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.executable = Path("/usr/bin/dpkg-deb")
        self.available = available
        self.exit_status = exit_status
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[tuple[list[str], Path | str | None]] = []

    def is_available(self) -> bool:
        return self.available

    def invoke(
        self, args: Sequence[str], cwd: Path | str | None = None
    ) -> ToolResult:
        self.calls.append((list(args), cwd))
        if self.exit_status == 0 and cwd is not None:
            (Path(cwd) / args[-1]).write_bytes(b"!<arch>\n")
        return ToolResult(self.exit_status, self.stdout, self.stderr)


@pytest.fixture
def fake_tool() -> FakeTool:
    return FakeTool()


@pytest.fixture
def make_metadata() -> Callable[..., PackageMetadata]:
    """A factory fixture for metadata holding only the mandatory fields."""

    def _make(**overrides: Any) -> PackageMetadata:
        fields: dict[str, Any] = {
            "package": "foo",
            "version": "1.0",
            "architecture": "all",
            "maintainer": "A <a@x.com>",
            "description": "short",
        }
        fields.update(overrides)
        return PackageMetadata(**fields)

    return _make


@pytest.fixture
def system_bin_dir(tmp_path: Path) -> Path:
    """An empty stand-in for /usr/bin."""
    path = tmp_path / "system-bin"
    path.mkdir()
    return path


@pytest.fixture
def make_sample_project() -> Callable[..., Path]:
    """A factory fixture to create a sample project inside a given directory."""

    def _make_project(
        root_dir: Path, tool_section: str = "", executables: Sequence[str] = ("foo",)
    ) -> Path:
        (root_dir / "pyproject.toml").write_text(
            "[project]\n"
            'name = "foo"\n'
            'version = "1.0"\n'
            'description = "short"\n'
            'authors = [{name = "A", email = "a@x.com"}]\n'
            "\n"
            "[project.urls]\n"
            'Homepage = "https://example.com/foo"\n'
            "\n" + tool_section
        )
        bin_dir = root_dir / "bin"
        bin_dir.mkdir(exist_ok=True)
        for name in executables:
            (bin_dir / name).write_text("#!/bin/sh\necho hello\n")
        return root_dir

    return _make_project
