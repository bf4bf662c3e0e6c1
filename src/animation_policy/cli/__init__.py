"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="animation-policy",
    help="Animation Policy - device-aware animation configuration diagnostics",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .main import main as _main_callback  # noqa: F401, E402
from .profile import profile_cmd as _profile  # noqa: F401, E402
from .resolve import resolve_cmd as _resolve  # noqa: F401, E402
from .table import table_cmd as _table  # noqa: F401, E402
