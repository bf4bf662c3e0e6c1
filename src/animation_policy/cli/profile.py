"""Profile CLI command -- show the signal and capability profile."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import AnimationPolicyError
from ..formatters.rich_formatter import render_profile
from ..logging_config import get_logger
from . import app
from ._common import build_engine, console

logger = get_logger(__name__)


@app.command("profile")
def profile_cmd(
    ctx: typer.Context,
    hints: Optional[Path] = typer.Option(
        None,
        "--hints",
        help="JSON file of client capability hints (deviceMemory, webglVersion, ...)",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    requires_webgl: bool = typer.Option(
        False,
        "--requires-webgl",
        help="Profile for an animation that cannot run without WebGL",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Collect device signals and show the capability profile.

    Without --hints the host running this command is probed.
    """
    try:
        engine = build_engine(ctx, hints)
        result = engine.profile(requires_webgl)
    except AnimationPolicyError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(
            json.dumps(
                {"signal": engine.signal.to_dict(), "profile": result.to_dict()},
                indent=2,
            )
        )
        return

    render_profile(result, console)
