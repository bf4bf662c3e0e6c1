"""Tests for the session-scoped PolicyEngine."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from animation_policy import PolicyEngine
from animation_policy.formatters import recommendations
from animation_policy.intent import IntentDescriptor
from animation_policy.profiling import Renderer, Tier, load_capability_table
from animation_policy.signals import Signal
from animation_policy.signals import collector as collector_module

HIGH_HINTS = {"deviceMemory": 8, "hardwareConcurrency": 8, "webglVersion": 2, "benchmarkScoreMs": 40}
LOW_HINTS = {"deviceMemory": 1, "hardwareConcurrency": 2, "webglVersion": 1, "benchmarkScoreMs": 250}


class TestCaching:
    """Signal collected once, profiles cached per WebGL requirement."""

    def test_signal_collected_once(self, monkeypatch):
        calls = []
        real_collect = collector_module.collect

        def counting(*args, **kwargs):
            calls.append(1)
            return real_collect(*args, **kwargs)

        monkeypatch.setattr("animation_policy.engine.collect", counting)
        engine = PolicyEngine(hints=HIGH_HINTS)
        engine.profile()
        engine.profile(requires_webgl=True)
        engine.resolve(IntentDescriptor())
        assert len(calls) == 1

    def test_profile_is_cached(self):
        engine = PolicyEngine(hints=HIGH_HINTS)
        assert engine.profile() is engine.profile()

    def test_requires_webgl_profile(self):
        engine = PolicyEngine(hints={**HIGH_HINTS, "webglVersion": 0})
        assert engine.profile().tier is Tier.HIGH
        assert engine.profile(requires_webgl=True).tier is Tier.UNSUPPORTED

    def test_resolve_uses_intent_webgl_requirement(self):
        engine = PolicyEngine(hints={**HIGH_HINTS, "webglVersion": 0})
        config = engine.resolve(IntentDescriptor(requires_webgl=True))
        assert config.tier is Tier.UNSUPPORTED
        assert config.renderer is None


class TestRefresh:
    """Re-profiling after external events."""

    def test_refresh_with_unchanged_hints_is_idempotent(self):
        engine = PolicyEngine(hints=HIGH_HINTS)
        before = engine.profile()
        assert engine.refresh() == before

    def test_reduced_motion_change(self):
        engine = PolicyEngine(hints=HIGH_HINTS)
        assert engine.profile().tier is Tier.HIGH
        refreshed = engine.refresh({**HIGH_HINTS, "prefersReducedMotion": True})
        assert refreshed.tier is Tier.ACCESSIBILITY
        assert engine.profile().tier is Tier.ACCESSIBILITY

    def test_injected_signal_survives_hintless_refresh(self, monkeypatch):
        def no_collection(*args, **kwargs):
            raise AssertionError("collect() should not run")

        monkeypatch.setattr("animation_policy.engine.collect", no_collection)
        signal = Signal(
            device_memory_gib=1, logical_cores=2, webgl_version=1, benchmark_score_ms=250
        )
        engine = PolicyEngine(signal=signal)
        assert engine.refresh().tier is Tier.LOW
        assert engine.signal is signal

    def test_hints_replace_injected_signal(self):
        engine = PolicyEngine(signal=Signal(device_memory_gib=1, logical_cores=2))
        assert engine.refresh(HIGH_HINTS).tier is Tier.HIGH
        assert engine.refresh().tier is Tier.HIGH

    def test_refresh_clears_webgl_profiles(self):
        engine = PolicyEngine(hints={**HIGH_HINTS, "webglVersion": 0})
        assert engine.profile(requires_webgl=True).tier is Tier.UNSUPPORTED
        engine.refresh({**HIGH_HINTS, "webglVersion": 2})
        assert engine.profile(requires_webgl=True).tier is Tier.HIGH


class TestResolve:
    """End-to-end resolution through the engine."""

    def test_notes_and_recommendations(self):
        engine = PolicyEngine(hints=LOW_HINTS)
        intent = IntentDescriptor(
            complexity="advanced",
            element_count=500,
            requested_duration_ms=1200,
            requested_easing="elastic.out",
            features=["shadows", "postProcessing"],
        )
        notes = engine.notes(intent)
        assert len(notes) == 5
        assert notes[0].startswith("element-cap: element_count_cap 500 → 100")

        advice = engine.recommendations(intent)
        assert advice == recommendations(engine.resolve(intent))
        # Both dropped features share one sentence
        assert len(advice) == 4

    def test_custom_table(self):
        table = load_capability_table({"high": {"recommended_renderer": "canvas"}})
        engine = PolicyEngine(hints=HIGH_HINTS, table=table)
        assert engine.resolve(IntentDescriptor()).renderer is Renderer.CANVAS

    def test_concurrent_resolution(self):
        engine = PolicyEngine(hints=LOW_HINTS)
        intents = [IntentDescriptor(element_count=n) for n in range(0, 400, 4)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(engine.resolve, intents))
        assert [r.element_count_cap for r in results] == [min(i.element_count, 100) for i in intents]
