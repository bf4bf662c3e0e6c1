"""The ordered rule pipeline.

Each rule reads the current working configuration and may change it,
appending one Adjustment per change. Rules never raise and record nothing
when there is nothing to change. Later rules observe the effects of earlier
ones, so RULES order is part of the policy: reordering requires a new
policy_version.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from ..config import PolicyConfig
from ..intent import Complexity, Feature, IntentDescriptor
from ..profiling.profiler import CapabilityProfile
from ..profiling.tiers import MOTIONLESS_TIERS, Tier, TierCapabilities, cheapest_renderer
from .models import WorkingConfiguration

# Reasons recorded on Adjustments
ELEMENT_COUNT_EXCEEDS_CAPABILITY = "element-count-exceeds-capability"
FEATURE_UNSUPPORTED_AT_TIER = "feature-unsupported-at-tier"
LOW_TIER_DAMPING = "low-tier-damping"
LOW_TIER_CEILING = "low-tier-ceiling"
REDUCED_MOTION = "reduced-motion"
TIER_UNSUPPORTED = "tier-unsupported"
SKIP_REQUIRES_REDUCED_MOTION = "skip-requires-reduced-motion"
COMPLEX_EASING_BELOW_HIGH = "complex-easing-below-high-tier"
COMPLEXITY_EXCEEDS_TIER = "complexity-exceeds-tier"

# Which profile flag each capability feature needs
FEATURE_REQUIREMENTS: Mapping[Feature, str] = MappingProxyType(
    {
        Feature.SHADOWS: "allow_shadows",
        Feature.POST_PROCESSING: "allow_post_processing",
        Feature.PHYSICS: "allow_physics",
        Feature.SCROLL_LINKED: "allow_scroll_linked",
    }
)


@dataclass(frozen=True)
class RuleContext:
    """Read-only inputs every rule sees."""

    profile: CapabilityProfile
    intent: IntentDescriptor
    config: PolicyConfig
    table: Mapping[Tier, TierCapabilities]


Rule = Callable[[WorkingConfiguration, RuleContext], None]


def element_cap(working: WorkingConfiguration, ctx: RuleContext) -> None:
    """Clamp the element count to what the tier can sustain."""
    if ctx.intent.element_count == 0:
        return
    if working.element_count_cap > ctx.profile.max_elements:
        working.record(
            "element-cap",
            "element_count_cap",
            working.element_count_cap,
            ctx.profile.max_elements,
            ELEMENT_COUNT_EXCEEDS_CAPABILITY,
        )
        working.element_count_cap = ctx.profile.max_elements


def feature_gating(working: WorkingConfiguration, ctx: RuleContext) -> None:
    """Drop requested features whose capability flag is off."""
    # Table order keeps the Adjustment order stable
    for feature, flag in FEATURE_REQUIREMENTS.items():
        if feature in working.enabled_features and not getattr(ctx.profile, flag):
            working.enabled_features.discard(feature)
            working.record(
                "feature-gating",
                "enabled_features",
                feature.value,
                None,
                FEATURE_UNSUPPORTED_AT_TIER,
            )


def duration_scaling(working: WorkingConfiguration, ctx: RuleContext) -> None:
    """Damp durations on slow tiers; flatten them when motion is suppressed."""
    tier = ctx.profile.tier
    config = ctx.config

    if tier in MOTIONLESS_TIERS:
        reason = REDUCED_MOTION if tier is Tier.ACCESSIBILITY else TIER_UNSUPPORTED
        if working.duration_ms > config.accessibility_duration_ms:
            working.record(
                "duration-scaling",
                "duration_ms",
                working.duration_ms,
                config.accessibility_duration_ms,
                reason,
            )
            working.duration_ms = config.accessibility_duration_ms
        return

    if Feature.SKIP_TO_END in working.enabled_features:
        working.enabled_features.discard(Feature.SKIP_TO_END)
        working.record(
            "duration-scaling",
            "enabled_features",
            Feature.SKIP_TO_END.value,
            None,
            SKIP_REQUIRES_REDUCED_MOTION,
        )

    if tier is not Tier.LOW:
        return

    damped = round(working.duration_ms * config.low_duration_factor, 3)
    working.record("duration-scaling", "duration_ms", working.duration_ms, damped, LOW_TIER_DAMPING)
    working.duration_ms = damped

    if working.duration_ms > config.low_duration_ceiling_ms:
        working.record(
            "duration-scaling",
            "duration_ms",
            working.duration_ms,
            config.low_duration_ceiling_ms,
            LOW_TIER_CEILING,
        )
        working.duration_ms = config.low_duration_ceiling_ms


def easing_simplification(working: WorkingConfiguration, ctx: RuleContext) -> None:
    """Below HIGH, replace spring-like easings with a simple one."""
    if ctx.profile.tier is Tier.HIGH:
        return
    if is_complex_easing(working.easing, ctx.config.complex_easing_families):
        working.record(
            "easing-simplification",
            "easing",
            working.easing,
            ctx.config.simple_easing,
            COMPLEX_EASING_BELOW_HIGH,
        )
        working.easing = ctx.config.simple_easing


def renderer_downgrade(working: WorkingConfiguration, ctx: RuleContext) -> None:
    """ADVANCED work on a LOW device gets the cheapest renderer."""
    if ctx.intent.complexity is not Complexity.ADVANCED or ctx.profile.tier is not Tier.LOW:
        return
    cheapest = cheapest_renderer(ctx.table)
    if working.renderer is not None and working.renderer.cost > cheapest.cost:
        working.record(
            "renderer-downgrade",
            "renderer",
            working.renderer.value,
            cheapest.value,
            COMPLEXITY_EXCEEDS_TIER,
        )
        working.renderer = cheapest


def is_complex_easing(easing: str, families: tuple[str, ...]) -> bool:
    """True for spring/elastic/bounce style easings in any library's spelling.

    Matches "elastic.out" (GSAP), "easeOutBounce" (anime.js) and
    "spring(1, 80, 10, 0)" alike.
    """
    lowered = easing.lower()
    return any(family in lowered for family in families)


RULES: tuple[tuple[str, Rule], ...] = (
    ("element-cap", element_cap),
    ("feature-gating", feature_gating),
    ("duration-scaling", duration_scaling),
    ("easing-simplification", easing_simplification),
    ("renderer-downgrade", renderer_downgrade),
)
