"""
stylesync CLI.

Commands:
- export: Generate style code, update renamed references, save the snapshot
- diff: Show what changed since the last export without writing anything
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ._version import get_version
from .core.errors import ConfigError, Diagnostic, StyleSyncError
from .core.fileset import discover_project_files
from .core.manifest import MANIFEST_FILE, ProjectManifest, load_manifest
from .core.state import load_snapshot
from .core.style_loader import load_style_records
from .exporter import ExportDestinations, StyleExporter

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "STYLESYNC_LOG_LEVEL"

app = typer.Typer(
    help="Versioned code generation for design styles",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"stylesync {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """stylesync CLI main callback for global options."""
    pass


def _configure_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _build_exporter(manifest: ProjectManifest) -> tuple[StyleExporter, list[Diagnostic]]:
    """Load everything an export needs and construct the exporter."""
    if manifest.styles_input is None:
        raise ConfigError(f"[styles] input is not set in {MANIFEST_FILE}")

    loaded = load_style_records(manifest.styles_input)
    snapshot, snapshot_warnings = load_snapshot(manifest.snapshot_path)

    exporter = StyleExporter(
        latest_color_styles=loaded.color_styles,
        latest_text_styles=loaded.text_styles,
        previous_color_styles=snapshot.color_styles,
        previous_text_styles=snapshot.text_styles,
        project_files=discover_project_files(manifest.root, manifest),
        previous_version=snapshot.version,
        prune_unused_deprecated=manifest.scan.prune_unused_deprecated,
    )
    return exporter, [*loaded.warnings, *snapshot_warnings]


# =============================================================================
# Output
# =============================================================================


def _print_changes(exporter: StyleExporter) -> None:
    change_set = exporter.change_set
    if change_set.is_empty():
        console.print("[dim]No style changes since the last export[/dim]")
        return

    table = Table(title=f"Style changes ({exporter.previous_version} -> {exporter.new_version})")
    table.add_column("Change", style="cyan")
    table.add_column("Style")
    table.add_column("Details", style="dim")

    for name in [*change_set.colors_added, *change_set.text_styles_added]:
        table.add_row("[green]added[/green]", escape(name), "")
    for name in [*change_set.colors_deprecated, *change_set.text_styles_deprecated]:
        table.add_row("[yellow]deprecated[/yellow]", escape(name), "")
    for old_name, new_name in [*change_set.colors_renamed, *change_set.text_styles_renamed]:
        table.add_row("[magenta]renamed[/magenta]", escape(new_name), escape(f"was {old_name}"))
    for entry in exporter.changelog:
        table.add_row(
            "updated",
            escape(entry.style_name),
            escape(", ".join(a.describe() for a in entry.updated_attributes)),
        )

    console.print(table)


def _print_deprecated_references(exporter: StyleExporter) -> None:
    references = exporter.file_names_for_deprecated_style_names
    if not references:
        return

    table = Table(title="Deprecated styles still in use")
    table.add_column("Style", style="yellow")
    table.add_column("Files")
    for name, file_names in sorted(references.items()):
        table.add_row(escape(name), "\n".join(file_names))
    console.print(table)


def _print_warnings(warnings: list[Diagnostic]) -> None:
    if not warnings:
        return
    console.print(f"\n[yellow]{len(warnings)} warning(s):[/yellow]")
    for warning in warnings:
        console.print(f"  [yellow]•[/yellow] {escape(warning.format())}", highlight=False)


# =============================================================================
# Commands
# =============================================================================


@app.command(name="export")
def export_command(
    config: Path = typer.Option(
        Path(MANIFEST_FILE), "--config", "-c", help="Path to stylesync.toml"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be generated without writing files"
    ),
    no_update_references: bool = typer.Option(
        False,
        "--no-update-references",
        help="Do not rewrite project references to renamed styles",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Generate style code from the latest styles."""
    _configure_logging(verbose)

    try:
        manifest = load_manifest(config)
        exporter, warnings = _build_exporter(manifest)
        destinations = ExportDestinations.from_manifest(manifest)

        _print_changes(exporter)

        if dry_run:
            planned = exporter.generate_files(destinations)
            console.print("\n[bold]Dry run[/bold] - would write:")
            for planned_file in planned:
                console.print(f"  {planned_file.path}", highlight=False)
                warnings.extend(planned_file.result.warnings)
            console.print(f"  {destinations.snapshot_path}", highlight=False)
            _print_deprecated_references(exporter)
            _print_warnings([*warnings, *exporter.deprecated_reference_warnings])
            return

        result = exporter.export_styles(destinations, update_references=not no_update_references)
    except StyleSyncError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e

    console.print(f"\n[green]✓[/green] Exported styles version [bold]{result.version}[/bold]")
    for path in result.files_created:
        console.print(f"  [dim]wrote[/dim] {path}", highlight=False)
    for path in result.updated_reference_files:
        console.print(f"  [dim]updated references in[/dim] {path}", highlight=False)

    _print_deprecated_references(exporter)
    _print_warnings([*warnings, *result.warnings])


@app.command(name="diff")
def diff_command(
    config: Path = typer.Option(
        Path(MANIFEST_FILE), "--config", "-c", help="Path to stylesync.toml"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Show style changes since the last export."""
    _configure_logging(verbose)

    try:
        manifest = load_manifest(config)
        exporter, warnings = _build_exporter(manifest)
    except StyleSyncError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e

    _print_changes(exporter)
    _print_deprecated_references(exporter)
    _print_warnings(warnings)


def main() -> None:
    """Entry point for the stylesync console script."""
    app()


if __name__ == "__main__":
    main()
