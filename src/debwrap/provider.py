"""Project metadata sources and construction of PackageMetadata."""

from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from attrs import define
from pyvider.telemetry import logger

from .config import read_pyproject
from .exceptions import ConfigurationError
from .models import DEFAULT_ECOSYSTEM, Ecosystem, PackageMetadata

_HOMEPAGE_KEYS = ("homepage", "home", "source")


@define(frozen=True, slots=True)
class ProjectMetadata:
    name: str | None
    version: str | None
    author_name: str | None = None
    author_email: str | None = None
    homepage: str | None = None
    summary: str | None = None
    description: str | None = None


class MetadataProvider(Protocol):
    def read(self) -> ProjectMetadata: ...


class PyprojectMetadataProvider:
    """Reads project metadata from the `[project]` table of pyproject.toml."""

    def __init__(self, pyproject_path: Path) -> None:
        self.pyproject_path = pyproject_path

    def _readme(self, readme: Any) -> str | None:
        if readme is None:
            return None
        if isinstance(readme, dict):
            if "text" in readme:
                return readme["text"]
            readme = readme.get("file")
            if readme is None:
                return None
        readme_path = self.pyproject_path.parent / readme
        if not readme_path.is_file():
            raise ConfigurationError(f"Readme file not found: {readme_path}")
        return readme_path.read_text()

    def read(self) -> ProjectMetadata:
        project = read_pyproject(self.pyproject_path).get("project", {})
        if "version" in project.get("dynamic", []):
            raise ConfigurationError(
                "A dynamic [project] version is not supported; set 'version' "
                "or override it in [tool.debwrap.control]."
            )

        authors = project.get("authors") or [{}]
        author = authors[0]
        urls = {key.lower(): url for key, url in project.get("urls", {}).items()}
        homepage = next(
            (urls[key] for key in _HOMEPAGE_KEYS if key in urls), None
        )

        return ProjectMetadata(
            name=project.get("name"),
            version=project.get("version"),
            author_name=author.get("name"),
            author_email=author.get("email"),
            homepage=homepage,
            summary=project.get("description"),
            description=self._readme(project.get("readme")),
        )


def mark_paragraphs(text: str | None) -> str | None:
    """Replaces blank lines with the control-file paragraph separator '.'."""
    if not text:
        return text
    lines = [line if line.strip() else "." for line in text.strip("\n").split("\n")]
    return "\n".join(lines)


def discover_executables(bin_dir: Path) -> tuple[str, ...]:
    """Names of the files in a project's binaries directory."""
    if not bin_dir.is_dir():
        return ()
    return tuple(path.name for path in bin_dir.iterdir() if path.is_file())


def load_metadata(
    provider: MetadataProvider,
    bin_dir: Path,
    configure: Callable[[PackageMetadata], None] | None = None,
    ecosystem: Ecosystem = DEFAULT_ECOSYSTEM,
) -> PackageMetadata:
    """
    Builds the package metadata for a project.

    The provider is read once. `configure`, if given, may adjust any field
    before the dependency defaults of `ecosystem` are merged in.
    """
    project = provider.read()
    maintainer = project.author_name
    if maintainer is not None and project.author_email is not None:
        maintainer += f" <{project.author_email}>"

    metadata = PackageMetadata(
        package=project.name,
        version=project.version,
        maintainer=maintainer,
        description=project.summary,
        homepage=project.homepage,
        description_extended=project.description,
        executables=discover_executables(bin_dir),
    )
    if configure is not None:
        configure(metadata)
    metadata.description_extended = mark_paragraphs(metadata.description_extended)
    metadata.finalize_depends(ecosystem)
    logger.debug(
        "Loaded package metadata",
        package=metadata.package,
        version=metadata.version,
        executables=list(metadata.executables),
    )
    return metadata
