"""Main CLI entry point for copy-with-hash."""

import logging
from pathlib import Path

import click
from rich.console import Console

from copy_with_hash import __version__
from copy_with_hash.exceptions import ConfigurationError
from copy_with_hash.constants import FORMAT_DEFINE_KEY, SILENT_LOG_LEVEL
from copy_with_hash.services.logger_service import setup_logging

console = Console()
logger = logging.getLogger(__name__)

SOURCEMAP_CHOICES = ["false", "true", "inline", "external", "linked", "both"]


def _parse_sourcemap(value: str) -> bool | str:
    if value == "true":
        return True
    if value == "false":
        return False
    return value


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose (DEBUG) logging",
)
@click.pass_context
def cli(ctx, verbose: bool):
    """
    copy-with-hash - Publish build assets under content-hashed file names.

    Copies matched files next to the build output as <name>-<hash><ext> and
    keeps a JSON manifest that maps each logical path to its published name.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_logging(verbose=verbose)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with patterns and publish options",
)
@click.option(
    "--outdir",
    "-o",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Build output directory",
)
@click.option(
    "--outfile",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Build output file (its directory is used when --outdir is absent)",
)
@click.option(
    "--sourcemap",
    type=click.Choice(SOURCEMAP_CHOICES),
    default="false",
    show_default=True,
    help="Sourcemap mode of the build",
)
@click.option(
    "--format",
    "format_label",
    default=None,
    help="Output format label (e.g. esm, cjs) used in reports and {format} manifest names",
)
@click.option(
    "--hash/--no-hash",
    "add_hashes",
    default=None,
    help="Override whether fingerprints are added to file names",
)
@click.option(
    "--manifest",
    "-m",
    default=None,
    help="Override the manifest file name",
)
@click.option(
    "--silent",
    is_flag=True,
    help="Suppress engine logging and the size report",
)
def publish(
    config_path: Path,
    outdir: Path | None,
    outfile: Path | None,
    sourcemap: str,
    format_label: str | None,
    add_hashes: bool | None,
    manifest: str | None,
    silent: bool,
):
    """Copy matched files with content hashes and update the manifest."""
    from copy_with_hash.models import BuildContext
    from copy_with_hash.plugin import run_pass
    from copy_with_hash.publish_config import (
        FORMAT_PLACEHOLDER,
        format_manifest_resolver,
        load_options,
    )

    if outdir is None and outfile is None:
        raise click.UsageError("Either --outdir or --outfile is required")

    try:
        options = load_options(config_path)
        updates = {}
        if add_hashes is not None:
            updates["add_hashes_to_file_names"] = add_hashes
        if manifest is not None:
            updates["manifest"] = (
                format_manifest_resolver(manifest)
                if FORMAT_PLACEHOLDER in manifest
                else manifest
            )
        if updates:
            options = options.model_copy(update=updates)

        build = BuildContext(
            outdir=outdir,
            outfile=outfile,
            sourcemap=_parse_sourcemap(sourcemap),
            define={FORMAT_DEFINE_KEY: f'"{format_label}"'} if format_label else {},
            log_level=SILENT_LOG_LEVEL if silent else None,
        )
        report = run_pass(options, build)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if report is not None and not silent:
        written = len(report.written)
        console.print(
            f"[green]✓ Published {written} of {len(report.artifacts)} file(s)[/green] "
            f"- manifest {'updated' if report.manifest_written else 'unchanged'}: "
            f"{report.manifest_path}"
        )


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def fingerprint(files: tuple[Path, ...]):
    """Print the content fingerprint of each FILE."""
    from copy_with_hash.services.fingerprint import fingerprint_file

    for path in files:
        click.echo(f"{fingerprint_file(path)}  {path}")


@cli.command()
@click.argument(
    "manifest_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def show_manifest(manifest_path: Path):
    """Show the entries of a manifest file."""
    from rich.table import Table

    from copy_with_hash.services.manifest import Manifest

    try:
        manifest = Manifest.load(manifest_path)
    except (ConfigurationError, ValueError) as e:
        raise click.ClickException(f"Cannot read manifest {manifest_path}: {e}") from e

    if not manifest.entries:
        console.print("[yellow]Manifest is empty[/yellow]")
        return

    table = Table(title=str(manifest_path))
    table.add_column("Logical path", style="cyan")
    table.add_column("Published path", style="green")
    for logical_path, published_path in sorted(manifest.entries.items()):
        table.add_row(logical_path, published_path)

    console.print(table)


if __name__ == "__main__":
    cli()
