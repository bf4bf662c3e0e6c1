"""Policy Resolver: combine a capability profile and an intent.

resolve() is pure and total. The working configuration is seeded from the
intent verbatim and then threaded through RULES in order.
"""

from __future__ import annotations

from typing import Mapping

from ..config import DEFAULT_CONFIG, PolicyConfig
from ..intent import IntentDescriptor
from ..logging_config import get_logger
from ..profiling.profiler import CapabilityProfile
from ..profiling.tiers import CAPABILITY_TABLE, Tier, TierCapabilities
from .models import ResolvedConfiguration, WorkingConfiguration
from .rules import RULES, RuleContext

logger = get_logger(__name__)


def resolve(
    profile: CapabilityProfile,
    intent: IntentDescriptor,
    config: PolicyConfig = DEFAULT_CONFIG,
    table: Mapping[Tier, TierCapabilities] = CAPABILITY_TABLE,
) -> ResolvedConfiguration:
    """Resolve an intent into a device-safe configuration.

    Args:
        profile: Capability profile of the device
        intent: Validated animation intent
        config: Policy constants (damping, easing whitelist, version)
        table: Capability table the profile came from

    Returns:
        ResolvedConfiguration with every Adjustment in rule order.
    """
    working = WorkingConfiguration(
        duration_ms=intent.requested_duration_ms,
        easing=intent.requested_easing,
        renderer=profile.recommended_renderer,
        enabled_features=set(intent.features),
        element_count_cap=intent.element_count,
    )
    ctx = RuleContext(profile=profile, intent=intent, config=config, table=table)

    for name, rule in RULES:
        before = len(working.adjustments)
        rule(working, ctx)
        for adjustment in working.adjustments[before:]:
            logger.debug(
                "%s: %s %r -> %r (%s)",
                name,
                adjustment.field,
                adjustment.from_value,
                adjustment.to_value,
                adjustment.reason,
            )

    return working.freeze(profile.tier, config.policy_version)
