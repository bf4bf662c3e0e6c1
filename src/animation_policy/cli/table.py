"""Table CLI command -- show the effective capability table."""

import json

import typer

from ..config import load_full_config
from ..exceptions import AnimationPolicyError
from ..formatters.rich_formatter import render_capability_table
from ..profiling.tiers import load_capability_table
from . import app
from ._common import console


@app.command("table")
def table_cmd(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Show the tier capability table, including [tiers.*] config overrides.
    """
    obj = ctx.obj or {}
    try:
        loaded = load_full_config(config_file=obj.get("config"))
        table = load_capability_table(loaded.tier_overrides)
    except AnimationPolicyError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(
            json.dumps(
                {
                    tier.value: {
                        "max_elements": row.max_elements,
                        "max_triangles": row.max_triangles,
                        "recommended_texture_size": row.recommended_texture_size,
                        "recommended_renderer": (
                            row.recommended_renderer.value if row.recommended_renderer else None
                        ),
                        "allow_post_processing": row.allow_post_processing,
                        "allow_shadows": row.allow_shadows,
                        "allow_physics": row.allow_physics,
                        "allow_scroll_linked": row.allow_scroll_linked,
                    }
                    for tier, row in table.items()
                },
                indent=2,
            )
        )
        return

    render_capability_table(table, console)
