"""Shared CLI helpers."""

import json
import os
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import AnalysisOptions, load_options
from ..exceptions import DepmapError

console = Console()

OUTPUT_FORMATS = ("rich", "json")


def validate_format(value: str) -> str:
    """Reject --format values other than OUTPUT_FORMATS (exit code 2)."""
    if value not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"expected one of: {', '.join(OUTPUT_FORMATS)}")
    return value


def resolve_options(
    config: Optional[Path] = None,
    no_aliases: bool = False,
    max_depth: Optional[int] = None,
    follow_symlinks: Optional[bool] = None,
    package_probe: Optional[bool] = None,
) -> AnalysisOptions:
    """Build options from CLI flags on top of file/env configuration."""
    overrides: dict[str, Any] = {
        "max_depth": max_depth,
        "follow_symlinks": follow_symlinks,
        "include_package_probe": package_probe,
    }
    if no_aliases:
        overrides["resolve_aliases"] = False
    return load_options(config_file=config, **overrides)


def print_json(data: Any) -> None:
    """Machine-readable output on stdout."""
    print(json.dumps(data, indent=2))


def display_path(path: str, root: str) -> str:
    """Show paths under root relative to it, others unchanged."""
    rel = os.path.relpath(path, root)
    if rel.startswith(os.pardir):
        return path
    return rel


def report_error(error: DepmapError, fmt: str = "rich") -> None:
    """Print a DepmapError as JSON or as a red error line."""
    if fmt == "json":
        print_json(error.to_dict())
    else:
        console.print(f"[red]Error:[/red] {escape(str(error))}")
