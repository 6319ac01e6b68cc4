"""Dependency graph command: full-tree structure report."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..api import DependencyAnalyzer
from ..exceptions import DepmapError
from ..graph.models import DependencyGraph
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
def graph(
    path: Path = typer.Argument(
        Path("."),
        help="Project root to analyze",
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
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show every file and edge",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
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
    no_aliases: bool = typer.Option(
        False,
        "--no-aliases",
        help="Ignore tsconfig/jsconfig path aliases",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        help="Maximum directory depth to scan",
        min=0,
    ),
    follow_symlinks: Optional[bool] = typer.Option(
        None,
        "--follow-symlinks/--no-follow-symlinks",
        help="Follow symbolic links while scanning",
    ),
    package_probe: Optional[bool] = typer.Option(
        None,
        "--package-probe/--no-package-probe",
        help="Resolve bare specifiers against the packages directory",
    ),
):
    """
    Build the dependency graph: entry points, leaves, cycles, clusters, metrics.

    [bold cyan]Examples:[/bold cyan]

      depmap graph ./my-app

      depmap graph . --format json > graph.json

      depmap graph . --no-aliases --max-depth 4
    """
    logger = setup_logging(verbose=verbose, quiet=quiet or fmt == "json")

    try:
        options = resolve_options(
            config=config,
            no_aliases=no_aliases,
            max_depth=max_depth,
            follow_symlinks=follow_symlinks,
            package_probe=package_probe,
        )
        analyzer = DependencyAnalyzer(path)
        result = analyzer.build_dependency_graph(options)

        if fmt == "json":
            print_json(result.to_dict())
        else:
            _output_rich(result, analyzer.root, verbose=verbose)

    except DepmapError as e:
        report_error(e, fmt)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _output_rich(result: DependencyGraph, root: str, verbose: bool = False) -> None:
    """Human-readable terminal output."""
    m = result.metrics

    console.print()
    console.print("[bold cyan]depmap: Dependency Graph[/bold cyan]")
    console.print()
    console.print(f"  [bold]{m.total_files}[/bold] files, [bold]{m.total_dependencies}[/bold] dependency edges")
    console.print(
        f"  [bold]{len(result.entry_points)}[/bold] entry points, "
        f"[bold]{len(result.leaf_nodes)}[/bold] leaf nodes"
    )
    console.print()

    # ── Circular Dependencies ──────────────────────────────────────
    if result.cyclic_dependencies:
        console.print("[bold red]Circular Dependencies[/bold red]")
        for cycle in result.cyclic_dependencies:
            members = [display_path(p, root) for p in cycle]
            console.print(f"  {' -> '.join(members)} -> {members[0]}")
        console.print()

    # ── Clusters ───────────────────────────────────────────────────
    if result.clusters:
        console.print("[bold yellow]Strongly Coupled Clusters[/bold yellow]")
        for cluster in result.clusters:
            members = [display_path(p, root) for p in cluster]
            console.print(f"  Cluster ({len(members)} files): {', '.join(members)}")
        console.print()

    # ── Entry points / leaves ──────────────────────────────────────
    if verbose:
        if result.entry_points:
            console.print("[bold]Entry Points[/bold]")
            for p in result.entry_points:
                console.print(f"  {display_path(p, root)}")
            console.print()
        if result.leaf_nodes:
            console.print("[bold]Leaf Nodes[/bold]")
            for p in result.leaf_nodes:
                console.print(f"  {display_path(p, root)}")
            console.print()

        table = Table(show_header=True)
        table.add_column("File", style="cyan")
        table.add_column("Deps", justify="right")
        table.add_column("Dependents", justify="right")
        table.add_column("Strength", justify="right")
        for p, node in result.nodes.items():
            table.add_row(
                display_path(p, root),
                str(len(node.dependencies)),
                str(len(node.dependents)),
                f"{node.relationship_strength:.2f}",
            )
        console.print(table)
        console.print()

    # ── Metrics ────────────────────────────────────────────────────
    table = Table(show_header=True, title="Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Average dependencies", f"{m.average_dependencies:.2f}")
    table.add_row("Max dependencies", str(m.max_dependencies))
    table.add_row("Cycles", str(m.cyclic_dependency_count))
    coh_style = "green" if m.cohesion > 0.3 else "yellow" if m.cohesion > 0.1 else "red"
    coup_style = "green" if m.coupling < 0.5 else "yellow" if m.coupling < 0.8 else "red"
    table.add_row("Cohesion", f"[{coh_style}]{m.cohesion:.2f}[/{coh_style}]")
    table.add_row("Coupling", f"[{coup_style}]{m.coupling:.2f}[/{coup_style}]")
    console.print(table)

    if result.unresolved_imports:
        count = sum(len(v) for v in result.unresolved_imports.values())
        console.print()
        console.print(f"[yellow]{count} relative imports did not resolve to a file[/yellow]")
        if verbose:
            for p, specifiers in result.unresolved_imports.items():
                console.print(f"  {display_path(p, root)}: {', '.join(specifiers)}")
    console.print()
