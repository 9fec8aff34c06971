"""Tests for reading project metadata."""

from pathlib import Path

import pytest

from debwrap import control
from debwrap.exceptions import ConfigurationError
from debwrap.models import PYPI, PackageMetadata
from debwrap.provider import (
    ProjectMetadata,
    PyprojectMetadataProvider,
    discover_executables,
    load_metadata,
    mark_paragraphs,
)


class StaticProvider:
    def __init__(self, project: ProjectMetadata) -> None:
        self.project = project
        self.reads = 0

    def read(self) -> ProjectMetadata:
        self.reads += 1
        return self.project


def _write_pyproject(root: Path, body: str) -> Path:
    path = root / "pyproject.toml"
    path.write_text(body)
    return path


def test_pyproject_provider_reads_project_table(tmp_path: Path) -> None:
    (tmp_path / "README.md").write_text("Long description.\n")
    path = _write_pyproject(
        tmp_path,
        "[project]\n"
        'name = "foo"\n'
        'version = "1.0"\n'
        'description = "short"\n'
        'readme = "README.md"\n'
        'authors = [{name = "A", email = "a@x.com"}, {name = "B"}]\n'
        "[project.urls]\n"
        'Repository = "https://example.com/repo"\n'
        'homepage = "https://example.com"\n',
    )
    assert PyprojectMetadataProvider(path).read() == ProjectMetadata(
        name="foo",
        version="1.0",
        author_name="A",
        author_email="a@x.com",
        homepage="https://example.com",
        summary="short",
        description="Long description.\n",
    )


def test_pyproject_provider_readme_table(tmp_path: Path) -> None:
    path = _write_pyproject(
        tmp_path,
        '[project]\nname = "foo"\nversion = "1.0"\n'
        'readme = {text = "Inline text", content-type = "text/plain"}\n',
    )
    project = PyprojectMetadataProvider(path).read()
    assert project.description == "Inline text"
    assert project.author_name is None
    assert project.homepage is None


def test_pyproject_provider_missing_readme(tmp_path: Path) -> None:
    path = _write_pyproject(
        tmp_path, '[project]\nname = "foo"\nversion = "1.0"\nreadme = "NOPE.md"\n'
    )
    with pytest.raises(ConfigurationError, match="Readme file not found"):
        PyprojectMetadataProvider(path).read()


def test_pyproject_provider_rejects_dynamic_version(tmp_path: Path) -> None:
    path = _write_pyproject(
        tmp_path, '[project]\nname = "foo"\ndynamic = ["version"]\n'
    )
    with pytest.raises(ConfigurationError, match="dynamic"):
        PyprojectMetadataProvider(path).read()


def test_discover_executables(tmp_path: Path) -> None:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    (bin_dir / "foo").touch()
    (bin_dir / "foo-admin").touch()
    (bin_dir / "subdir").mkdir()

    assert sorted(discover_executables(bin_dir)) == ["foo", "foo-admin"]
    assert discover_executables(tmp_path / "missing") == ()


def test_load_metadata_defaults(tmp_path: Path) -> None:
    provider = StaticProvider(
        ProjectMetadata(
            name="foo",
            version="1.0",
            author_name="A",
            author_email="a@x.com",
            homepage="https://example.com",
            summary="short",
            description="long",
        )
    )
    metadata = load_metadata(provider, bin_dir=tmp_path / "bin")

    assert provider.reads == 1
    assert metadata == PackageMetadata(
        package="foo",
        version="1.0",
        maintainer="A <a@x.com>",
        description="short",
        architecture="all",
        depends="ruby (>= 1.8.7), rubygems (>= 1.3.5)",
        homepage="https://example.com",
        description_extended="long",
        executables=(),
    )


@pytest.mark.parametrize(
    ("author_name", "author_email", "maintainer"),
    [("A", None, "A"), (None, "a@x.com", None), (None, None, None)],
)
def test_load_metadata_maintainer(
    tmp_path: Path,
    author_name: str | None,
    author_email: str | None,
    maintainer: str | None,
) -> None:
    provider = StaticProvider(
        ProjectMetadata(
            name="foo",
            version="1.0",
            author_name=author_name,
            author_email=author_email,
        )
    )
    assert load_metadata(provider, bin_dir=tmp_path).maintainer == maintainer


def test_configure_runs_before_depends_are_finalized(tmp_path: Path) -> None:
    provider = StaticProvider(ProjectMetadata(name="foo", version="1.0"))
    seen: list[str | None] = []

    def configure(metadata: PackageMetadata) -> None:
        seen.append(metadata.depends)
        metadata.depends = "python3 (>= 3.11), libssl3"
        metadata.architecture = "amd64"

    metadata = load_metadata(
        provider, bin_dir=tmp_path, configure=configure, ecosystem=PYPI
    )
    assert seen == [None]
    assert metadata.architecture == "amd64"
    assert metadata.depends == "python3 (>= 3.11), libssl3, python3-pip (>= 20.0)"


def test_mark_paragraphs() -> None:
    assert mark_paragraphs("First.\n\nSecond.\n  \nThird.\n") == (
        "First.\n.\nSecond.\n.\nThird."
    )
    assert mark_paragraphs("single line") == "single line"
    assert mark_paragraphs("") == ""
    assert mark_paragraphs(None) is None


def test_multi_paragraph_readme_gives_valid_continuation_lines(
    tmp_path: Path,
) -> None:
    (tmp_path / "README.md").write_text("# foo\n\nA tool.\n")
    path = _write_pyproject(
        tmp_path,
        "[project]\n"
        'name = "foo"\n'
        'version = "1.0"\n'
        'description = "short"\n'
        'readme = "README.md"\n'
        'authors = [{name = "A", email = "a@x.com"}]\n',
    )
    metadata = load_metadata(PyprojectMetadataProvider(path), bin_dir=tmp_path / "bin")

    manifest = control.build(metadata)
    assert manifest.endswith("Description: short\n # foo\n .\n A tool.\n")
    continuation = manifest.split("Description: short\n", 1)[1]
    for line in continuation.splitlines():
        assert line.startswith(" ")
        assert line.strip()


def test_configured_extended_description_gets_paragraph_marks(
    tmp_path: Path,
) -> None:
    provider = StaticProvider(ProjectMetadata(name="foo", version="1.0"))

    def configure(metadata: PackageMetadata) -> None:
        metadata.description_extended = "One.\n\nTwo."

    metadata = load_metadata(provider, bin_dir=tmp_path, configure=configure)
    assert metadata.description_extended == "One.\n.\nTwo."
