"""The `debwrap` command-line interface."""

import importlib.metadata
from pathlib import Path

import click

from .config import Settings, load_settings
from .exceptions import ConfigurationError, DebwrapError
from .packaging.stager import PackageStager, remove_staging_root
from .provider import PyprojectMetadataProvider, load_metadata
from .tools import dpkg_deb

try:
    __version__ = importlib.metadata.version("debwrap")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"


def make_stager(manifest_path: Path) -> PackageStager:
    """Builds a stager for the project described by a pyproject.toml."""
    settings = load_settings(manifest_path)
    metadata = load_metadata(
        PyprojectMetadataProvider(manifest_path),
        bin_dir=settings.project_dir / settings.bin_dir,
        configure=settings.apply_control_overrides,
        ecosystem=settings.ecosystem,
    )
    return PackageStager(
        metadata,
        project_dir=settings.project_dir,
        staging_dir=settings.staging_dir,
        system_bin_dir=settings.system_bin_dir,
        ecosystem=settings.ecosystem,
        builder=dpkg_deb(settings.builder),
    )


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="debwrap",
    message="%(prog)s version %(version)s",
)
@click.option(
    "--manifest",
    "pyproject_toml_path",
    default="pyproject.toml",
    type=click.Path(dir_okay=False, resolve_path=True),
    help="Path to the pyproject.toml manifest file.",
)
@click.pass_context
def cli(ctx: click.Context, pyproject_toml_path: str) -> None:
    """Debian meta-package builder for RubyGems and PyPI packages."""
    ctx.obj = Path(pyproject_toml_path)


def _stager(ctx: click.Context) -> PackageStager:
    try:
        return make_stager(ctx.obj)
    except DebwrapError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        raise click.Abort() from e


@cli.command("control")
@click.pass_context
def control_command(ctx: click.Context) -> None:
    """Prints the DEBIAN/control file."""
    _stager(ctx).print_manifest()


@cli.command("create-structure")
@click.pass_context
def create_structure_command(ctx: click.Context) -> None:
    """Creates only the package structure inside the staging directory."""
    stager = _stager(ctx)
    if stager.create_structure():
        click.secho(
            f"✅ Package structure created in '{stager.staging_root}'.", fg="green"
        )


@cli.command("build")
@click.pass_context
def build_command(ctx: click.Context) -> None:
    """Builds the .deb package, creating the structure if it does not exist."""
    stager = _stager(ctx)
    click.echo("🚀 Building package...")
    try:
        package_path = stager.build()
    except DebwrapError as e:
        click.secho(f"❌ Build failed:\n{e}", fg="red", err=True)
        raise click.Abort() from e
    if package_path is not None:
        click.secho(f"✅ Package built successfully: {package_path}", fg="green")


@cli.command("clean")
@click.pass_context
def clean_command(ctx: click.Context) -> None:
    """Removes the staging directory."""
    manifest_path: Path = ctx.obj
    try:
        settings = load_settings(manifest_path)
    except ConfigurationError as e:
        click.secho(f"⚠️  {e}\nUsing the default staging directory.", fg="yellow")
        settings = Settings(project_dir=manifest_path.parent)
    staging_root = settings.project_dir / settings.staging_dir
    if remove_staging_root(staging_root):
        click.secho(f"✅ Removed staging directory: {staging_root}", fg="green")
    else:
        click.secho(
            "i️ Staging directory not found, nothing to clean.", fg="yellow"
        )


main = cli

if __name__ == "__main__":
    main()
