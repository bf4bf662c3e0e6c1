"""Resolve CLI command -- resolve a JSON intent into a configuration."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import AnimationPolicyError
from ..formatters.recommendations import format_adjustments, recommendations
from ..formatters.rich_formatter import render_configuration
from ..intent import IntentDescriptor
from ..logging_config import get_logger
from . import app
from ._common import build_engine, console, load_json

logger = get_logger(__name__)


@app.command("resolve")
def resolve_cmd(
    ctx: typer.Context,
    intent_file: Path = typer.Argument(
        ...,
        help="JSON file describing the animation intent",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    hints: Optional[Path] = typer.Option(
        None,
        "--hints",
        help="JSON file of client capability hints",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Resolve an animation intent against the device profile.

    [bold cyan]Intent file:[/bold cyan]

      {"complexity": "advanced", "elementCount": 500, "durationMs": 1200,
       "easing": "elastic.out", "features": ["shadows", "postProcessing"]}
    """
    try:
        intent = IntentDescriptor.from_dict(load_json(intent_file, "intent"))
        engine = build_engine(ctx, hints)
        config = engine.resolve(intent)
    except AnimationPolicyError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        payload = config.to_dict()
        payload["notes"] = format_adjustments(config)
        payload["recommendations"] = recommendations(config)
        print(json.dumps(payload, indent=2))
        return

    render_configuration(config, console)
