"""Shared CLI helpers."""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from ..config import load_full_config
from ..engine import PolicyEngine
from ..exceptions import ConfigurationError
from ..profiling.tiers import load_capability_table

console = Console()


def load_json(path: Path, what: str) -> Any:
    """Read a JSON document supplied on the command line."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read {what} file: {path}", details={"reason": str(e)})
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {what} file: {path}", details={"reason": str(e)})


def build_engine(ctx: typer.Context, hints_file: Optional[Path] = None) -> PolicyEngine:
    """Engine from the --config file stored by the root callback plus hints."""
    obj = ctx.obj or {}
    loaded = load_full_config(config_file=obj.get("config"))
    table = load_capability_table(loaded.tier_overrides)

    hints = None
    if hints_file is not None:
        hints = load_json(hints_file, "hints")
        if not isinstance(hints, dict):
            raise ConfigurationError(f"Hints file must contain a JSON object: {hints_file}")

    return PolicyEngine(config=loaded.policy, hints=hints, table=table)
