"""
Animation Policy - Adaptive Animation Policy Engine

Classifies the running device into a performance tier and resolves an
animation intent into a device-safe configuration: renderer choice,
duration scaling and feature toggles, with every deviation recorded.

The engine decides how an animation should be parameterised. It never
renders anything itself.
"""

__version__ = "0.1.0"

from .engine import PolicyEngine
from .exceptions import AnimationPolicyError, InvalidIntent
from .formatters.recommendations import format_adjustments
from .intent import Complexity, Feature, IntentDescriptor
from .policy import Adjustment, ResolvedConfiguration, resolve
from .profiling import CapabilityProfile, Renderer, Tier, profile
from .signals import Signal, collect

__all__ = [
    "PolicyEngine",  # Session facade (collect once, resolve many)
    "collect",
    "profile",
    "resolve",
    "format_adjustments",
    "Signal",
    "CapabilityProfile",
    "Tier",
    "Renderer",
    "IntentDescriptor",
    "Complexity",
    "Feature",
    "Adjustment",
    "ResolvedConfiguration",
    "AnimationPolicyError",
    "InvalidIntent",
]
