"""
tokenvex command-line interface.

Commands:
- export: snapshot -> CSS / SCSS / TypeScript / JSON files
- serialize: snapshot -> DTCG token document
- convert: DTCG token document -> one output format
- evaluate: evaluate a calc expression, optionally against a snapshot
- sync-calculations: evaluate every calc directive and write values back
- sync-code-syntax: compute WEB code syntax from the rename rules
- export-settings: write the project settings as a portable JSON file
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ._version import get_version
from .converters import convert_to_json
from .core.errors import TokenVexError
from .core.ir.settings import ConversionSettings, ExportType, TokenConfig, Unit
from .core.ir.tokens import Document
from .core.ir.variables import Variable, VariableCollection
from .core.resolution.context import ResolutionContext
from .core.resolution.expressions import resolve_expression
from .core.settings_loader import (
    export_settings_file,
    import_settings_file,
    load_settings,
    validate_settings,
)
from .core.transforms.names import get_all_rules_with_default
from .core.transforms.units import clean_number
from .exporters.service import (
    CONVERTERS,
    FILE_EXTENSIONS,
    build_document,
    export_direct,
    export_document,
)
from .exporters.sync import reset_code_syntax, sync_calculations, sync_code_syntax
from .provider import JsonSnapshotProvider

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    help="tokenvex: export design variables as CSS, SCSS, TypeScript and DTCG JSON",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tokenvex {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """tokenvex CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# =============================================================================
# Helpers
# =============================================================================


def _load_settings(project_dir: Path, settings_file: Path | None) -> ConversionSettings:
    """Settings from a portable export file when given, else from the project."""
    try:
        if settings_file is not None:
            return import_settings_file(settings_file)
        return load_settings(project_dir.resolve())
    except TokenVexError as e:
        typer.echo(f"Settings error: {e}", err=True)
        raise typer.Exit(code=1)


def _open_snapshot(snapshot: Path) -> JsonSnapshotProvider:
    if not snapshot.exists():
        typer.echo(f"Snapshot not found: {snapshot}", err=True)
        raise typer.Exit(code=1)
    return JsonSnapshotProvider(snapshot)


def _write_or_echo(content: str, output: Path | None) -> None:
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")
        typer.echo(f"Wrote {output}")
    else:
        typer.echo(content)


def _find_mode_id(collections: list[VariableCollection], mode: str | None) -> str:
    """Mode id matching ``mode`` by id or name; empty when nothing matches."""
    if mode:
        for collection in collections:
            for candidate in collection.modes:
                if mode in (candidate.mode_id, candidate.name):
                    return candidate.mode_id
    return ""


# =============================================================================
# Commands
# =============================================================================


@app.command()
def export(
    snapshot: Path = typer.Argument(..., help="Variable snapshot JSON file"),
    formats: list[ExportType] = typer.Option(  # noqa: B008
        [ExportType.CSS],
        "--format",
        "-f",
        help="Output format (repeatable)",
    ),
    out_dir: Path | None = typer.Option(
        None, "--out-dir", "-o", help="Directory for output files (default: stdout)"
    ),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."), "--project", "-p", help="Project directory holding tokenvex.yaml"
    ),
    settings_file: Path | None = typer.Option(
        None, "--settings", "-s", help="Portable settings export file"
    ),
    direct: bool = typer.Option(
        False, "--direct", help="Resolve aliases to var() references instead of values"
    ),
) -> None:
    """
    Export variables (and styles) to one or more formats.

    Examples:
        tokenvex export tokens.json                  # CSS to stdout
        tokenvex export tokens.json -f css -f typescript -o build/
        tokenvex export tokens.json --direct -f scss
    """
    settings = _load_settings(project_dir, settings_file)
    provider = _open_snapshot(snapshot)

    try:
        validation = validate_settings(
            settings, provider.get_variables(), provider.get_collections()
        )
        for warning in validation.warnings:
            typer.echo(f"Warning: {warning}", err=True)
        if not validation.is_valid:
            for error in validation.errors:
                typer.echo(f"Error: {error}", err=True)
            raise typer.Exit(code=1)

        run = export_direct if direct else export_document
        results = run(provider, formats, settings)
    except TokenVexError as e:
        typer.echo(f"Export failed: {e}", err=True)
        raise typer.Exit(code=1)

    if out_dir is None:
        for content in results.values():
            typer.echo(content)
        return

    out_dir.mkdir(parents=True, exist_ok=True)
    for export_type, content in results.items():
        target = out_dir / f"{snapshot.stem}.{FILE_EXTENSIONS[export_type]}"
        target.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")
        typer.echo(f"Wrote {target}")


@app.command()
def serialize(
    snapshot: Path = typer.Argument(..., help="Variable snapshot JSON file"),
    output: Path | None = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Output file (default: stdout)"
    ),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."), "--project", "-p", help="Project directory holding tokenvex.yaml"
    ),
    settings_file: Path | None = typer.Option(
        None, "--settings", "-s", help="Portable settings export file"
    ),
) -> None:
    """Serialize a snapshot to a DTCG token document."""
    settings = _load_settings(project_dir, settings_file)
    provider = _open_snapshot(snapshot)
    try:
        document = build_document(provider, settings)
    except TokenVexError as e:
        typer.echo(f"Serialization failed: {e}", err=True)
        raise typer.Exit(code=1)
    _write_or_echo(convert_to_json(document, settings), output)


@app.command()
def convert(
    document_file: Path = typer.Argument(..., help="DTCG token document JSON file"),
    format: ExportType = typer.Option(ExportType.CSS, "--format", "-f", help="Output format"),
    output: Path | None = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Output file (default: stdout)"
    ),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."), "--project", "-p", help="Project directory holding tokenvex.yaml"
    ),
    settings_file: Path | None = typer.Option(
        None, "--settings", "-s", help="Portable settings export file"
    ),
) -> None:
    """Convert a DTCG token document to CSS, SCSS, TypeScript or JSON."""
    settings = _load_settings(project_dir, settings_file)
    if not document_file.exists():
        typer.echo(f"Document not found: {document_file}", err=True)
        raise typer.Exit(code=1)

    try:
        data = json.loads(document_file.read_text(encoding="utf-8"))
        document = Document.from_dtcg(data)
        content = CONVERTERS[format](document, settings)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON in {document_file}: {e}", err=True)
        raise typer.Exit(code=1)
    except TokenVexError as e:
        typer.echo(f"Conversion failed: {e}", err=True)
        raise typer.Exit(code=1)
    _write_or_echo(content, output)


@app.command()
def evaluate(
    expression: str = typer.Argument(..., help="Expression, e.g. \"'Spacing/base' * 2\""),
    snapshot: Path | None = typer.Option(
        None, "--snapshot", help="Snapshot providing referenced variables"
    ),
    mode: str | None = typer.Option(None, "--mode", "-m", help="Mode name or id"),
    unit: Unit = typer.Option(Unit.PX, "--unit", "-u", help="Unit for the result"),
) -> None:
    """Evaluate a calc expression and print the result."""
    variables: list[Variable] = []
    collections: list[VariableCollection] = []
    if snapshot is not None:
        provider = _open_snapshot(snapshot)
        try:
            variables = provider.get_variables()
            collections = provider.get_collections()
        except TokenVexError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)

    ctx = ResolutionContext(variables=variables, collections=collections)
    config = TokenConfig(expression=expression, unit=unit)
    try:
        result = resolve_expression(config, _find_mode_id(collections, mode), ctx)
    except TokenVexError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    if result.value is None:
        raise typer.Exit(code=1)

    suffix = "" if result.unit == Unit.NONE else result.unit.value
    typer.echo(f"{clean_number(result.value)}{suffix}")


@app.command(name="sync-calculations")
def sync_calculations_command(
    snapshot: Path = typer.Argument(..., help="Variable snapshot JSON file"),
    write: bool = typer.Option(False, "--write", "-w", help="Write values back to the snapshot"),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."), "--project", "-p", help="Project directory holding tokenvex.yaml"
    ),
) -> None:
    """Evaluate every calc directive and report (or write back) the results."""
    settings = _load_settings(project_dir, None)
    provider = _open_snapshot(snapshot)
    try:
        variables = provider.get_variables()
        collections = provider.get_collections()
    except TokenVexError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    report = sync_calculations(variables, collections, settings)
    by_id = {v.id: v for v in variables}
    mode_names = {m.mode_id: m.name for c in collections for m in c.modes}

    table = Table(title="Calculations")
    table.add_column("Variable", style="cyan")
    table.add_column("Mode")
    table.add_column("Value", justify="right")
    for variable_id, values in report.updates.items():
        for mode_id, value in values.items():
            table.add_row(
                by_id[variable_id].name, mode_names.get(mode_id, mode_id), clean_number(value)
            )
    if report.updates:
        console.print(table)

    for warning in report.warnings:
        console.print(f"[yellow]{warning}[/yellow]")
    console.print(f"\n[dim]{report.synced} synced, {report.failed} failed[/dim]")

    if write and report.updates:
        provider.save(report.apply(variables))
        console.print(f"[green]Updated {snapshot}[/green]")
    if report.failed:
        raise typer.Exit(code=1)


@app.command(name="sync-code-syntax")
def sync_code_syntax_command(
    snapshot: Path = typer.Argument(..., help="Variable snapshot JSON file"),
    write: bool = typer.Option(
        False, "--write", "-w", help="Write code syntax back to the snapshot"
    ),
    reset: bool = typer.Option(False, "--reset", help="Clear WEB code syntax instead"),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."), "--project", "-p", help="Project directory holding tokenvex.yaml"
    ),
) -> None:
    """Compute WEB code syntax (var(--name)) for every variable."""
    settings = _load_settings(project_dir, None)
    provider = _open_snapshot(snapshot)
    try:
        variables = provider.get_variables()
    except TokenVexError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if reset:
        report = reset_code_syntax(variables)
    else:
        rules = get_all_rules_with_default(
            settings.name_format_rules, settings.prefix, settings.name_format_casing
        )
        report = sync_code_syntax(variables, settings.prefix, rules)

    by_id = {v.id: v for v in variables}
    table = Table(title="Code syntax")
    table.add_column("Variable", style="cyan")
    table.add_column("WEB")
    for variable_id, web in report.code_syntax.items():
        table.add_row(by_id[variable_id].name, web or "[dim](cleared)[/dim]")
    if report.code_syntax:
        console.print(table)
    console.print(f"\n[dim]{report.synced} synced, {report.skipped} skipped[/dim]")

    if write and report.code_syntax:
        provider.save(report.apply(variables))
        console.print(f"[green]Updated {snapshot}[/green]")


@app.command(name="export-settings")
def export_settings_command(
    output: Path = typer.Argument(..., help="Destination JSON file"),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."), "--project", "-p", help="Project directory holding tokenvex.yaml"
    ),
) -> None:
    """Write the project settings as a portable export file."""
    settings = _load_settings(project_dir, None)
    export_settings_file(settings, output)
    typer.echo(f"Wrote {output}")


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
