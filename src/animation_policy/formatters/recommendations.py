"""Recommendation Reporter: turn Adjustments into developer-facing notes.

Pure presentation. The reporter never decides anything and never mutates
the configuration it is given.
"""

from __future__ import annotations

from typing import Any, List

from ..policy import rules
from ..policy.models import Adjustment, ResolvedConfiguration

# One sentence of advice per reason, keyed by the reason recorded on the Adjustment
REASON_ADVICE = {
    rules.ELEMENT_COUNT_EXCEEDS_CAPABILITY: (
        "Animate fewer elements at once or stagger them in batches."
    ),
    rules.FEATURE_UNSUPPORTED_AT_TIER: (
        "This device tier cannot afford the feature; design a fallback without it."
    ),
    rules.LOW_TIER_DAMPING: "Shorter animations keep low-end devices responsive.",
    rules.LOW_TIER_CEILING: "Long animations are capped on low-end devices.",
    rules.REDUCED_MOTION: (
        "The user prefers reduced motion; show the end state with minimal transition."
    ),
    rules.TIER_UNSUPPORTED: "The device cannot run this animation; show the end state.",
    rules.SKIP_REQUIRES_REDUCED_MOTION: (
        "Skip-to-end only applies when motion is suppressed; animating normally."
    ),
    rules.COMPLEX_EASING_BELOW_HIGH: (
        "Spring, elastic and bounce easings are reserved for high-end devices."
    ),
    rules.COMPLEXITY_EXCEEDS_TIER: (
        "Advanced scenes on low-end devices use the cheapest renderer."
    ),
}


def format_value(value: Any) -> str:
    if value is None:
        return "none"
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def format_adjustment(adjustment: Adjustment) -> str:
    """One line: ``rule: field from → to (reason)``."""
    return (
        f"{adjustment.rule}: {adjustment.field} "
        f"{format_value(adjustment.from_value)} → {format_value(adjustment.to_value)} "
        f"({adjustment.reason})"
    )


def format_adjustments(config: ResolvedConfiguration) -> List[str]:
    """Format every Adjustment of a configuration, in application order.

    An unadjusted configuration yields an empty list.
    """
    return [format_adjustment(a) for a in config.adjustments]


def recommendations(config: ResolvedConfiguration) -> List[str]:
    """Distinct optimisation advice for the reasons present, in first-seen order."""
    seen: List[str] = []
    for adjustment in config.adjustments:
        advice = REASON_ADVICE.get(adjustment.reason)
        if advice and advice not in seen:
            seen.append(advice)
    return seen
