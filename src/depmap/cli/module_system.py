"""Module system detection command."""

from pathlib import Path
from typing import Optional

import typer

from ..api import DependencyAnalyzer
from ..exceptions import DepmapError
from ..logging_config import setup_logging
from . import app
from ._common import console, print_json, report_error, resolve_options, validate_format


@app.command("module-system")
def module_system(
    path: Path = typer.Argument(
        Path("."),
        help="Project root to sample",
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
):
    """Detect whether a tree uses CommonJS, ES modules, AMD, UMD or a mix."""
    setup_logging(quiet=fmt == "json")

    try:
        options = resolve_options(config=config)
        result = DependencyAnalyzer(path).detect_module_system(options)
    except DepmapError as e:
        report_error(e, fmt)
        raise typer.Exit(1)

    if fmt == "json":
        print_json(result.to_dict())
        return

    console.print(
        f"Module system: [bold cyan]{result.type}[/bold cyan] "
        f"(confidence {result.confidence:.0%})"
    )
    for example in result.examples:
        console.print(f"  [dim]{example}[/dim]")
