"""Tier and renderer vocabulary plus the capability table.

The table is the single source of truth for what each tier may do. It is
plain data so it can be tested exhaustively and swapped without touching
control flow.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..exceptions import InvalidConfigError


class Tier(Enum):
    """Discrete device-capability class, most restrictive first."""

    UNSUPPORTED = "UNSUPPORTED"
    ACCESSIBILITY = "ACCESSIBILITY"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)


_TIER_ORDER = [Tier.UNSUPPORTED, Tier.ACCESSIBILITY, Tier.LOW, Tier.MEDIUM, Tier.HIGH]

# Tiers under which nothing should visibly animate
MOTIONLESS_TIERS = frozenset({Tier.UNSUPPORTED, Tier.ACCESSIBILITY})


class Renderer(Enum):
    """Rendering backend, ordered by cost."""

    SVG = "svg"
    CANVAS = "canvas"
    WEBGL = "webgl"

    @property
    def cost(self) -> int:
        return _RENDERER_COST[self]


_RENDERER_COST = {Renderer.SVG: 0, Renderer.CANVAS: 1, Renderer.WEBGL: 2}


@dataclass(frozen=True)
class TierCapabilities:
    """One row of the capability table."""

    max_elements: int
    max_triangles: int
    recommended_texture_size: int
    recommended_renderer: Optional[Renderer]
    allow_post_processing: bool
    allow_shadows: bool
    allow_physics: bool
    allow_scroll_linked: bool


NO_CAPABILITIES = TierCapabilities(
    max_elements=0,
    max_triangles=0,
    recommended_texture_size=0,
    recommended_renderer=None,
    allow_post_processing=False,
    allow_shadows=False,
    allow_physics=False,
    allow_scroll_linked=False,
)

CAPABILITY_TABLE: Mapping[Tier, TierCapabilities] = MappingProxyType(
    {
        Tier.UNSUPPORTED: NO_CAPABILITIES,
        # Reduced motion: nothing animates, cheapest renderer for the end state
        Tier.ACCESSIBILITY: replace(NO_CAPABILITIES, recommended_renderer=Renderer.SVG),
        Tier.LOW: TierCapabilities(
            max_elements=100,
            max_triangles=50_000,
            recommended_texture_size=1024,
            recommended_renderer=Renderer.SVG,
            allow_post_processing=False,
            allow_shadows=False,
            allow_physics=False,
            allow_scroll_linked=True,
        ),
        Tier.MEDIUM: TierCapabilities(
            max_elements=500,
            max_triangles=250_000,
            recommended_texture_size=2048,
            recommended_renderer=Renderer.CANVAS,
            allow_post_processing=False,
            allow_shadows=True,
            allow_physics=True,
            allow_scroll_linked=True,
        ),
        Tier.HIGH: TierCapabilities(
            max_elements=2000,
            max_triangles=1_000_000,
            recommended_texture_size=4096,
            recommended_renderer=Renderer.WEBGL,
            allow_post_processing=True,
            allow_shadows=True,
            allow_physics=True,
            allow_scroll_linked=True,
        ),
    }
)


def cheapest_renderer(table: Mapping[Tier, TierCapabilities] = CAPABILITY_TABLE) -> Renderer:
    """Cheapest renderer any row of the table recommends."""
    renderers = [row.recommended_renderer for row in table.values() if row.recommended_renderer]
    if not renderers:
        return Renderer.SVG
    return min(renderers, key=lambda r: r.cost)


def load_capability_table(
    overrides: Mapping[str, Mapping[str, Any]],
    base: Mapping[Tier, TierCapabilities] = CAPABILITY_TABLE,
) -> Mapping[Tier, TierCapabilities]:
    """Build a capability table with per-tier field overrides.

    Args:
        overrides: {"LOW": {"max_elements": 150}, ...}; tier names are
                   case-insensitive, renderer values are strings
        base: Table to start from

    Returns:
        New read-only table

    Raises:
        InvalidConfigError: Unknown tier or field, bad value, or an
                            UNSUPPORTED row that grants anything
    """
    table = dict(base)
    known = {f.name for f in fields(TierCapabilities)}

    for tier_name, row in overrides.items():
        try:
            tier = Tier(tier_name.upper())
        except ValueError:
            raise InvalidConfigError(f"tiers.{tier_name}", tier_name, "unknown tier")

        changes: dict[str, Any] = {}
        for key, value in row.items():
            if key not in known:
                raise InvalidConfigError(f"tiers.{tier_name}.{key}", value, "unknown field")
            changes[key] = _coerce_field(f"tiers.{tier_name}.{key}", key, value)

        table[tier] = replace(table[tier], **changes)

    if table[Tier.UNSUPPORTED] != NO_CAPABILITIES:
        raise InvalidConfigError("tiers.unsupported", "override", "UNSUPPORTED must grant nothing")

    return MappingProxyType(table)


def _coerce_field(key: str, name: str, value: Any) -> Any:
    if name == "recommended_renderer":
        if value is None or value == "":
            return None
        try:
            return Renderer(str(value).lower())
        except ValueError:
            raise InvalidConfigError(key, value, "expected svg, canvas or webgl")
    if name.startswith("allow_"):
        if not isinstance(value, bool):
            raise InvalidConfigError(key, value, "expected true/false")
        return value
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfigError(key, value, "expected a non-negative integer")
    return value
