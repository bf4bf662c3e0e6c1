"""Rich terminal rendering for profiles, configurations and the table."""

from typing import Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..policy.models import ResolvedConfiguration
from ..profiling.profiler import CapabilityProfile
from ..profiling.tiers import Tier, TierCapabilities
from .recommendations import format_value, recommendations

_TIER_STYLES = {
    Tier.UNSUPPORTED: "red bold",
    Tier.ACCESSIBILITY: "magenta",
    Tier.LOW: "yellow",
    Tier.MEDIUM: "cyan",
    Tier.HIGH: "green",
}


def _tier_label(tier: Tier) -> str:
    style = _TIER_STYLES[tier]
    return f"[{style}]{tier.value}[/{style}]"


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


def render_profile(profile: CapabilityProfile, console: Console) -> None:
    """Print the signal and the capability profile derived from it."""
    if profile.signal is not None:
        signal = profile.signal
        signals = Table(title="Signal", show_header=False, pad_edge=True)
        signals.add_column("Signal", min_width=24)
        signals.add_column("Value", justify="right")
        signals.add_row("Device memory (GiB)", format_value(signal.device_memory_gib))
        signals.add_row("Logical cores", format_value(signal.logical_cores))
        signals.add_row("Prefers reduced motion", _flag(signal.prefers_reduced_motion))
        signals.add_row("WebGL version", str(signal.webgl_version))
        signals.add_row("Benchmark score (ms)", f"{signal.benchmark_score_ms:.1f}")
        console.print(signals)

    table = Table(title="Capability profile", show_header=False, pad_edge=True)
    table.add_column("Attribute", min_width=24)
    table.add_column("Value", justify="right")
    table.add_row("Tier", _tier_label(profile.tier))
    table.add_row("Max elements", f"{profile.max_elements:,}")
    table.add_row("Max triangles", f"{profile.max_triangles:,}")
    table.add_row("Texture size", str(profile.recommended_texture_size))
    table.add_row(
        "Renderer",
        profile.recommended_renderer.value if profile.recommended_renderer else "[dim]none[/dim]",
    )
    table.add_row("Post-processing", _flag(profile.allow_post_processing))
    table.add_row("Shadows", _flag(profile.allow_shadows))
    table.add_row("Physics", _flag(profile.allow_physics))
    table.add_row("Scroll-linked", _flag(profile.allow_scroll_linked))
    console.print(table)


def render_configuration(config: ResolvedConfiguration, console: Console) -> None:
    """Print a resolved configuration, its adjustments and advice."""
    tier = _tier_label(config.tier) if config.tier else "[dim]?[/dim]"
    features = ", ".join(sorted(f.value for f in config.enabled_features)) or "[dim]none[/dim]"
    renderer = config.renderer.value if config.renderer else "none"
    console.print(
        Panel(
            f"Tier {tier}   renderer [bold]{renderer}[/bold]\n"
            f"duration [bold]{format_value(config.duration_ms)} ms[/bold]   "
            f"easing [bold]{config.easing}[/bold]   "
            f"elements ≤ [bold]{config.element_count_cap:,}[/bold]\n"
            f"features {features}",
            title=f"[bold cyan]Resolved configuration[/bold cyan] (policy {config.policy_version})",
            expand=False,
        )
    )

    if not config.adjustments:
        console.print("[green]No adjustments: the intent runs as requested.[/green]")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Rule")
    table.add_column("Field")
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")
    table.add_column("Reason", style="yellow")
    for i, adj in enumerate(config.adjustments, 1):
        table.add_row(
            str(i),
            adj.rule,
            adj.field,
            format_value(adj.from_value),
            format_value(adj.to_value),
            adj.reason,
        )
    console.print(table)

    for line in recommendations(config):
        console.print(f"  [dim]→[/dim] {line}")


def render_capability_table(table: Mapping[Tier, TierCapabilities], console: Console) -> None:
    """Print the tier → capability table."""
    out = Table(show_header=True, pad_edge=True, title="Capability table")
    out.add_column("Tier")
    out.add_column("Elements", justify="right")
    out.add_column("Triangles", justify="right")
    out.add_column("Texture", justify="right")
    out.add_column("Renderer")
    out.add_column("Post")
    out.add_column("Shadows")
    out.add_column("Physics")
    out.add_column("Scroll")
    for tier, row in table.items():
        out.add_row(
            _tier_label(tier),
            f"{row.max_elements:,}",
            f"{row.max_triangles:,}",
            str(row.recommended_texture_size),
            row.recommended_renderer.value if row.recommended_renderer else "[dim]none[/dim]",
            _flag(row.allow_post_processing),
            _flag(row.allow_shadows),
            _flag(row.allow_physics),
            _flag(row.allow_scroll_linked),
        )
    console.print(out)
