"""Capability profiling: tiers, the capability table and the profiler."""

from .profiler import CapabilityProfile, classify_tier, profile
from .tiers import (
    CAPABILITY_TABLE,
    MOTIONLESS_TIERS,
    NO_CAPABILITIES,
    Renderer,
    Tier,
    TierCapabilities,
    cheapest_renderer,
    load_capability_table,
)

__all__ = [
    "Tier",
    "Renderer",
    "TierCapabilities",
    "CAPABILITY_TABLE",
    "NO_CAPABILITIES",
    "MOTIONLESS_TIERS",
    "CapabilityProfile",
    "classify_tier",
    "profile",
    "cheapest_renderer",
    "load_capability_table",
]
