#!/usr/bin/env python3
"""
Example: Basic usage of Animation Policy as a Python library
"""

from animation_policy import IntentDescriptor, PolicyEngine

# Hints as a browser would report them (navigator.deviceMemory, etc.)
engine = PolicyEngine(
    hints={
        "deviceMemory": 1,
        "hardwareConcurrency": 2,
        "webglVersion": 1,
        "benchmarkScoreMs": 250,
    }
)

intent = IntentDescriptor.from_dict(
    {
        "complexity": "advanced",
        "elementCount": 500,
        "durationMs": 1200,
        "easing": "elastic.out",
        "features": ["shadows", "postProcessing"],
    }
)

config = engine.resolve(intent)

print(f"Tier: {config.tier.value}")
print(f"Renderer: {config.renderer.value if config.renderer else 'none'}")
print(f"Duration: {config.duration_ms:g} ms, easing {config.easing}")
print(f"Elements: up to {config.element_count_cap}")
print()

# Every deviation from the intent, in rule order
for line in engine.notes(intent):
    print(f"  - {line}")

# The same user later enables reduced motion
engine.refresh({**engine.signal.to_dict(), "prefers_reduced_motion": True})
print()
print(f"After refresh: {engine.resolve(intent).duration_ms:g} ms")
