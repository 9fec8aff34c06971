"""Stages a meta-package tree and hands it to the external package builder."""

from pathlib import Path
import shutil

import click
from pyvider.telemetry import logger

from .. import control
from ..checksums import md5sums_for
from ..exceptions import ToolInvocationError, ValidationError
from ..models import DEFAULT_ECOSYSTEM, Ecosystem, PackageMetadata
from ..tools import ExternalTool, dpkg_deb, require
from .scripts import render_postinst, render_prerm, render_wrapper

EXECUTABLE_MODE = 0o755
DEFAULT_STAGING_DIR = "deb"
SYSTEM_BIN_DIR = Path("/usr/bin")


class PackageStager:
    def __init__(
        self,
        metadata: PackageMetadata,
        project_dir: Path,
        staging_dir: str | Path = DEFAULT_STAGING_DIR,
        system_bin_dir: Path = SYSTEM_BIN_DIR,
        ecosystem: Ecosystem = DEFAULT_ECOSYSTEM,
        builder: ExternalTool | None = None,
    ) -> None:
        self.metadata = metadata
        self.project_dir = Path(project_dir)
        self.staging_root = self.project_dir / staging_dir
        self.system_bin_dir = Path(system_bin_dir)
        self.ecosystem = ecosystem
        self.builder = builder if builder is not None else dpkg_deb()

    @property
    def debian_dir(self) -> Path:
        return self.staging_root / "DEBIAN"

    @property
    def bin_dir(self) -> Path:
        return self.staging_root / "usr" / "bin"

    @property
    def package_path(self) -> Path:
        return self.project_dir / self.metadata.package_filename

    def _control_or_report(self) -> str | None:
        """Returns the rendered control file, or None after reporting why not."""
        try:
            control.validate(self.metadata)
        except ValidationError as e:
            click.secho(f"ERROR! {e}.", fg="red", err=True)
            return None
        return control.build(self.metadata)

    def print_manifest(self) -> bool:
        control_text = self._control_or_report()
        if control_text is None:
            return False
        click.echo(control_text, nl=False)
        return True

    def _write_wrappers(self) -> None:
        for name in self.metadata.executables:
            if (self.system_bin_dir / name).exists():
                logger.debug(
                    "Executable already on the system, no wrapper staged",
                    executable=name,
                )
                continue
            self.bin_dir.mkdir(parents=True, exist_ok=True)
            wrapper = self.bin_dir / name
            wrapper.write_text(render_wrapper(self.ecosystem, name))
            wrapper.chmod(EXECUTABLE_MODE)

    def create_structure(self) -> bool:
        """Populates the staging tree. Returns False if validation failed."""
        control_text = self._control_or_report()
        if control_text is None:
            return False

        logger.info("Staging package structure", root=str(self.staging_root))
        self.staging_root.mkdir(parents=True, exist_ok=True)
        self.debian_dir.mkdir(exist_ok=True)

        package, version = self.metadata.package, self.metadata.version
        postinst = render_postinst(self.ecosystem, package, version)
        prerm = render_prerm(self.ecosystem, package, version)

        self._write_wrappers()

        (self.debian_dir / "control").write_text(control_text)
        for name, script in (("postinst", postinst), ("prerm", prerm)):
            script_path = self.debian_dir / name
            script_path.write_text(script)
            script_path.chmod(EXECUTABLE_MODE)

        (self.debian_dir / "md5sums").write_text(md5sums_for(self.staging_root))
        return True

    def _builder_target(self) -> str:
        try:
            target = self.staging_root.relative_to(self.project_dir)
        except ValueError:
            target = self.staging_root
        return f"{target.as_posix()}/"

    def build(self) -> Path | None:
        """
        Builds the .deb archive, staging the tree first if it is missing.

        Raises MissingToolError when the package builder is not installed and
        ToolInvocationError when it fails. Returns the archive path, or None if
        nothing could be staged.
        """
        builder = require(self.builder)
        if not self.staging_root.exists():
            self.create_structure()
        if not self.staging_root.exists():
            return None

        args = ["-b", self._builder_target(), self.metadata.package_filename]
        logger.info("Building package", archive=self.metadata.package_filename)
        result = builder.invoke(args, cwd=self.project_dir)
        if result.stdout:
            click.echo(result.stdout, nl=False)
        if result.stderr:
            click.echo(result.stderr, nl=False, err=True)
        if result.exit_status != 0:
            raise ToolInvocationError(
                [str(builder.executable), *args],
                result.exit_status,
                result.stdout,
                result.stderr,
            )
        return self.package_path

    def clean(self) -> bool:
        """Removes the staging tree. Returns whether there was one."""
        return remove_staging_root(self.staging_root)


def remove_staging_root(staging_root: Path) -> bool:
    if not staging_root.exists():
        return False
    shutil.rmtree(staging_root)
    logger.info("Removed staging directory", root=str(staging_root))
    return True
