"""Settings read from the `[tool.debwrap]` table of pyproject.toml."""

from pathlib import Path
import tomllib
from typing import Any

from attrs import define, field

from .exceptions import ConfigurationError
from .models import DEFAULT_ECOSYSTEM, ECOSYSTEMS, Ecosystem, PackageMetadata
from .packaging.stager import DEFAULT_STAGING_DIR, SYSTEM_BIN_DIR
from .tools import DPKG_DEB_PATH

# Control fields that may be overridden, with their accepted value types.
_CONTROL_OVERRIDES: dict[str, type | tuple[type, ...]] = {
    "package": str,
    "source": str,
    "version": str,
    "section": str,
    "priority": str,
    "architecture": str,
    "essential": bool,
    "depends": str,
    "installed_size": int,
    "maintainer": str,
    "homepage": str,
    "description": str,
    "description_extended": str,
}

_SETTINGS_KEYS = {
    "ecosystem",
    "staging_dir",
    "bin_dir",
    "system_bin_dir",
    "builder",
    "control",
}


@define(frozen=True, slots=True)
class Settings:
    project_dir: Path
    ecosystem: Ecosystem = DEFAULT_ECOSYSTEM
    staging_dir: str = DEFAULT_STAGING_DIR
    bin_dir: str = "bin"
    system_bin_dir: Path = SYSTEM_BIN_DIR
    builder: Path = DPKG_DEB_PATH
    control: dict[str, Any] = field(factory=dict)

    def apply_control_overrides(self, metadata: PackageMetadata) -> None:
        """Configuration callback: copies `[tool.debwrap.control]` onto metadata."""
        for name, value in self.control.items():
            setattr(metadata, name, value)


def read_pyproject(pyproject_path: Path) -> dict[str, Any]:
    if not pyproject_path.is_file():
        raise ConfigurationError(f"pyproject.toml not found at {pyproject_path}")
    try:
        with pyproject_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {pyproject_path}: {e}") from e


def _check_control(control: Any) -> dict[str, Any]:
    if not isinstance(control, dict):
        raise ConfigurationError("[tool.debwrap.control] must be a table.")
    for name, value in control.items():
        expected = _CONTROL_OVERRIDES.get(name)
        if expected is None:
            raise ConfigurationError(f"Unknown control field '{name}'.")
        # bool is a subclass of int; installed_size must be a real integer.
        if not isinstance(value, expected) or (
            expected is int and isinstance(value, bool)
        ):
            raise ConfigurationError(
                f"Control field '{name}' has an invalid value: {value!r}"
            )
    return dict(control)


def settings_from_pyproject(
    pyproject_data: dict[str, Any], project_dir: Path
) -> Settings:
    conf = pyproject_data.get("tool", {}).get("debwrap", {})
    unknown = set(conf) - _SETTINGS_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown [tool.debwrap] settings: {', '.join(sorted(unknown))}"
        )

    ecosystem_name = conf.get("ecosystem", DEFAULT_ECOSYSTEM.name)
    ecosystem = ECOSYSTEMS.get(ecosystem_name)
    if ecosystem is None:
        raise ConfigurationError(
            f"Unknown ecosystem '{ecosystem_name}'. "
            f"Expected one of: {', '.join(sorted(ECOSYSTEMS))}"
        )

    return Settings(
        project_dir=project_dir,
        ecosystem=ecosystem,
        staging_dir=conf.get("staging_dir", DEFAULT_STAGING_DIR),
        bin_dir=conf.get("bin_dir", "bin"),
        system_bin_dir=Path(conf.get("system_bin_dir", SYSTEM_BIN_DIR)),
        builder=Path(conf.get("builder", DPKG_DEB_PATH)),
        control=_check_control(conf.get("control", {})),
    )


def load_settings(pyproject_path: Path) -> Settings:
    return settings_from_pyproject(
        read_pyproject(pyproject_path), pyproject_path.parent
    )
