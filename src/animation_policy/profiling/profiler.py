"""Capability Profiler: reduce a Signal to a Tier and capability attributes.

Tiering is evaluated top to bottom, first match wins:
    1. reduced motion requested                     -> ACCESSIBILITY
    2. no WebGL while the caller requires it        -> UNSUPPORTED
    3. slow memory, slow cores or slow benchmark    -> LOW
    4. moderate memory and cores, or moderate bench -> MEDIUM
    5. otherwise                                    -> HIGH

The tier then keys into the capability table. A few attributes are derived
from the signal afterwards: a WebGL recommendation falls back to canvas when
WebGL is absent, and WebGL 1 caps the texture size.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from ..config import DEFAULT_CONFIG, PolicyConfig
from ..logging_config import get_logger
from ..signals.models import Signal
from .tiers import CAPABILITY_TABLE, NO_CAPABILITIES, Renderer, Tier, TierCapabilities

logger = get_logger(__name__)


@dataclass(frozen=True)
class CapabilityProfile:
    """Derived, immutable device capabilities for one Signal."""

    tier: Tier
    max_elements: int
    max_triangles: int
    recommended_texture_size: int
    recommended_renderer: Optional[Renderer]
    allow_post_processing: bool
    allow_shadows: bool
    allow_physics: bool = False
    allow_scroll_linked: bool = False
    signal: Optional[Signal] = field(default=None, compare=False)

    @property
    def capabilities(self) -> TierCapabilities:
        return TierCapabilities(
            max_elements=self.max_elements,
            max_triangles=self.max_triangles,
            recommended_texture_size=self.recommended_texture_size,
            recommended_renderer=self.recommended_renderer,
            allow_post_processing=self.allow_post_processing,
            allow_shadows=self.allow_shadows,
            allow_physics=self.allow_physics,
            allow_scroll_linked=self.allow_scroll_linked,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tier": self.tier.value,
            "max_elements": self.max_elements,
            "max_triangles": self.max_triangles,
            "recommended_texture_size": self.recommended_texture_size,
            "recommended_renderer": (
                self.recommended_renderer.value if self.recommended_renderer else None
            ),
            "allow_post_processing": self.allow_post_processing,
            "allow_shadows": self.allow_shadows,
            "allow_physics": self.allow_physics,
            "allow_scroll_linked": self.allow_scroll_linked,
        }


def classify_tier(
    signal: Signal,
    requires_webgl: bool = False,
    config: PolicyConfig = DEFAULT_CONFIG,
) -> Tier:
    """Classify a signal into a Tier. Rule order is the tie-break policy."""
    if signal.prefers_reduced_motion:
        return Tier.ACCESSIBILITY

    if signal.webgl_version == 0 and requires_webgl:
        return Tier.UNSUPPORTED

    memory = (
        signal.device_memory_gib
        if signal.device_memory_gib is not None
        else config.default_memory_gib
    )
    cores = signal.logical_cores if signal.logical_cores is not None else config.default_logical_cores
    score = signal.benchmark_score_ms

    if (
        memory <= config.slow_memory_gib
        or cores <= config.slow_logical_cores
        or score > config.slow_benchmark_ms
    ):
        return Tier.LOW

    if (
        memory <= config.moderate_memory_gib and cores <= config.moderate_logical_cores
    ) or score > config.moderate_benchmark_ms:
        return Tier.MEDIUM

    return Tier.HIGH


def profile(
    signal: Signal,
    requires_webgl: bool = False,
    config: PolicyConfig = DEFAULT_CONFIG,
    table: Mapping[Tier, TierCapabilities] = CAPABILITY_TABLE,
) -> CapabilityProfile:
    """Derive the capability profile for a signal.

    Args:
        signal: Collected signal snapshot
        requires_webgl: The pending animation cannot run without WebGL
        config: Tier thresholds and defaults
        table: Capability table (swap to test or tune)

    Returns:
        CapabilityProfile. Deterministic for equal inputs; never raises.
    """
    tier = classify_tier(signal, requires_webgl, config)
    row = NO_CAPABILITIES if tier is Tier.UNSUPPORTED else table[tier]

    if row.recommended_renderer is Renderer.WEBGL and signal.webgl_version == 0:
        row = replace(row, recommended_renderer=Renderer.CANVAS)
    if signal.webgl_version == 1 and row.recommended_texture_size > config.webgl1_max_texture_size:
        row = replace(row, recommended_texture_size=config.webgl1_max_texture_size)

    result = CapabilityProfile(
        tier=tier,
        max_elements=row.max_elements,
        max_triangles=row.max_triangles,
        recommended_texture_size=row.recommended_texture_size,
        recommended_renderer=row.recommended_renderer,
        allow_post_processing=row.allow_post_processing,
        allow_shadows=row.allow_shadows,
        allow_physics=row.allow_physics,
        allow_scroll_linked=row.allow_scroll_linked,
        signal=signal,
    )
    logger.debug("Profiled tier %s (requires_webgl=%s)", tier.value, requires_webgl)
    return result
