import re

from attrs import define, field

# Fields of the DEBIAN/control file for a binary package, in output order.
CONTROL_FIELDS: tuple[str, ...] = (
    "package",
    "source",
    "version",
    "section",
    "priority",
    "architecture",
    "essential",
    "depends",
    "installed_size",
    "maintainer",
    "homepage",
    "description",
)

MANDATORY_FIELDS: tuple[str, ...] = (
    "package",
    "version",
    "architecture",
    "maintainer",
    "description",
)

DEFAULT_ARCHITECTURE = "all"

_PACKAGE_TOKEN_RE = re.compile(r"^\s*([^\s(\[,]+)")


def package_token(relation: str) -> str | None:
    """Returns the package name of a single dependency expression."""
    match = _PACKAGE_TOKEN_RE.match(relation)
    return match.group(1) if match else None


def merge_depends(existing: str | None, defaults: tuple[str, ...]) -> str:
    """
    Merges default dependency expressions into a Depends value.

    Each default is appended, in order, unless an existing entry already
    names the same package (with or without a version constraint).
    """
    entries = [part.strip() for part in (existing or "").split(",")]
    entries = [entry for entry in entries if entry]
    present = {package_token(entry) for entry in entries}
    for default in defaults:
        token = package_token(default)
        if token not in present:
            entries.append(default)
            present.add(token)
    return ", ".join(entries)


@define(frozen=True, slots=True)
class Ecosystem:
    """The foreign package manager a meta-package delegates to."""

    name: str
    interpreter_depend: str
    package_manager_depend: str

    @property
    def default_depends(self) -> tuple[str, str]:
        return (self.interpreter_depend, self.package_manager_depend)


RUBYGEMS = Ecosystem(
    name="rubygems",
    interpreter_depend="ruby (>= 1.8.7)",
    package_manager_depend="rubygems (>= 1.3.5)",
)
PYPI = Ecosystem(
    name="pypi",
    interpreter_depend="python3 (>= 3.8)",
    package_manager_depend="python3-pip (>= 20.0)",
)

ECOSYSTEMS: dict[str, Ecosystem] = {e.name: e for e in (RUBYGEMS, PYPI)}
DEFAULT_ECOSYSTEM = RUBYGEMS


@define(slots=True)
class PackageMetadata:
    package: str | None
    version: str | None
    maintainer: str | None
    description: str | None
    architecture: str | None = DEFAULT_ARCHITECTURE
    source: str | None = None
    section: str | None = None
    priority: str | None = None
    essential: bool | None = None
    depends: str | None = None
    installed_size: int | None = None
    homepage: str | None = None
    description_extended: str | None = None
    executables: tuple[str, ...] = field(default=(), converter=tuple)

    def finalize_depends(self, ecosystem: Ecosystem = DEFAULT_ECOSYSTEM) -> None:
        """Ensures the interpreter and package manager are depended upon."""
        self.depends = merge_depends(self.depends, ecosystem.default_depends)

    @property
    def package_filename(self) -> str:
        return f"{self.package}_{self.version}_{self.architecture}.deb"
