"""Output formatters for resolved configurations."""

from .recommendations import format_adjustment, format_adjustments, recommendations
from .rich_formatter import render_capability_table, render_configuration, render_profile

__all__ = [
    "format_adjustment",
    "format_adjustments",
    "recommendations",
    "render_profile",
    "render_configuration",
    "render_capability_table",
]
