"""Per-file statement commands: imports and exports."""

from pathlib import Path

import typer
from rich.table import Table

from ..api import DependencyAnalyzer
from . import app
from ._common import console, print_json, validate_format

_FILE_ARGUMENT = typer.Argument(
    ...,
    help="Source file to scan",
    exists=True,
    file_okay=True,
    dir_okay=False,
)

_FORMAT_OPTION = typer.Option(
    "rich",
    "--format",
    "-f",
    help="Output format: rich (human-readable) or json",
    callback=validate_format,
)


@app.command()
def imports(file: Path = _FILE_ARGUMENT, fmt: str = _FORMAT_OPTION):
    """List the import, require and dynamic import statements of a file."""
    statements = DependencyAnalyzer(file.parent).analyze_imports(file)

    if fmt == "json":
        print_json([s.to_dict() for s in statements])
        return

    if not statements:
        console.print("[dim]No imports found.[/dim]")
        return

    table = Table(show_header=True, title=f"Imports in {file.name}")
    table.add_column("Line", justify="right")
    table.add_column("Source", style="cyan")
    table.add_column("Type")
    table.add_column("Names")
    table.add_column("Flags", style="dim")
    for s in statements:
        flags = []
        if s.is_default:
            flags.append("default")
        if s.is_type_only:
            flags.append("type")
        if s.alias:
            flags.append(f"as {s.alias}")
        table.add_row(str(s.line), s.source, s.type.value, ", ".join(s.imported), " ".join(flags))
    console.print(table)


@app.command()
def exports(file: Path = _FILE_ARGUMENT, fmt: str = _FORMAT_OPTION):
    """List the export statements of a file."""
    statements = DependencyAnalyzer(file.parent).analyze_exports(file)

    if fmt == "json":
        print_json([s.to_dict() for s in statements])
        return

    if not statements:
        console.print("[dim]No exports found.[/dim]")
        return

    table = Table(show_header=True, title=f"Exports in {file.name}")
    table.add_column("Line", justify="right")
    table.add_column("Names", style="cyan")
    table.add_column("Type")
    table.add_column("Re-exported from", style="dim")
    for s in statements:
        table.add_row(str(s.line), ", ".join(s.exported), s.type.value, s.source or "")
    console.print(table)
