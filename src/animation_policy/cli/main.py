"""Root callback: global options shared by every subcommand."""

from pathlib import Path
from typing import Optional

import typer

from ..logging_config import setup_logging
from . import app
from ._common import console


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every rule firing",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Inspect how animations would be configured on a device.

    [bold cyan]Examples:[/bold cyan]

      animation-policy profile --hints device.json

      animation-policy resolve intent.json --hints device.json

      animation-policy table --json
    """
    ctx.ensure_object(dict)
    ctx.obj["config"] = config

    from .. import __version__

    if version:
        console.print(
            f"[bold cyan]Animation Policy[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)

    setup_logging(verbose=verbose, quiet=quiet)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)
