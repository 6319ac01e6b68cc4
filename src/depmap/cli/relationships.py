"""Single-file relationship command."""

from pathlib import Path
from typing import Optional

import typer

from ..api import DependencyAnalyzer
from ..exceptions import DepmapError
from ..logging_config import setup_logging
from . import app
from ._common import (
    console,
    display_path,
    print_json,
    report_error,
    resolve_options,
    validate_format,
)


@app.command()
def relationships(
    file: Path = typer.Argument(
        ...,
        help="File whose dependencies and dependents to map",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        help="Project root searched for dependents",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
        callback=validate_format,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Show what FILE depends on and which files in the tree depend on it.

    Scans the whole tree on every call; use [bold]depmap graph[/bold] for
    many files at once.
    """
    setup_logging(quiet=quiet or fmt == "json")

    try:
        options = resolve_options(config=config)
        analyzer = DependencyAnalyzer(root)
        rel = analyzer.map_file_relationships(file, options)
    except DepmapError as e:
        report_error(e, fmt)
        raise typer.Exit(1)

    if fmt == "json":
        print_json(rel.to_dict())
        return

    base = analyzer.root
    console.print()
    console.print(f"[bold cyan]{display_path(rel.file_path, base)}[/bold cyan]")
    role = "entry point" if rel.is_entry_point else "leaf node" if rel.is_leaf_node else None
    if role:
        console.print(f"  [dim]{role}, strength {rel.relationship_strength:.2f}[/dim]")
    console.print()
    console.print(f"[bold]Depends on[/bold] ({len(rel.dependencies)})")
    for dep in rel.dependencies:
        console.print(f"  {display_path(dep, base)}")
    console.print(f"[bold]Depended on by[/bold] ({len(rel.dependents)})")
    for dependent in rel.dependents:
        console.print(f"  {display_path(dependent, base)}")
    console.print()
