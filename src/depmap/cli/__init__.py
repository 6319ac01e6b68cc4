"""CLI entry point: the typer app and subcommand registration."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="depmap",
    help="depmap - Source Dependency Analysis for JavaScript and TypeScript",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]depmap[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Map imports, exports and file dependencies of a source tree."""


# Import subcommands to register them
from .graph import graph as _graph  # noqa: F401, E402
from .statements import imports as _imports, exports as _exports  # noqa: F401, E402
from .relationships import relationships as _relationships  # noqa: F401, E402
from .module_system import module_system as _module_system  # noqa: F401, E402
