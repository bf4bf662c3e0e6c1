"""Tests for the Signal Collector."""

from __future__ import annotations

import json

import pytest

from animation_policy.config import PolicyConfig
from animation_policy.signals import Signal, collect
from animation_policy.signals import collector as collector_module


@pytest.fixture
def no_host(monkeypatch):
    """Host probes report nothing."""

    def broken_memory():
        raise OSError("no /proc")

    monkeypatch.setattr(collector_module.psutil, "virtual_memory", broken_memory)
    monkeypatch.setattr(collector_module.os, "cpu_count", lambda: None)


class TestHints:
    """Client hints take precedence over host probes."""

    def test_browser_keys(self):
        signal = collect(
            {
                "deviceMemory": 8,
                "hardwareConcurrency": 12,
                "prefersReducedMotion": True,
                "webglVersion": 2,
                "benchmarkScoreMs": 40,
            }
        )
        assert signal == Signal(
            device_memory_gib=8.0,
            logical_cores=12,
            prefers_reduced_motion=True,
            webgl_version=2,
            benchmark_score_ms=40.0,
        )

    def test_snake_case_keys(self):
        signal = collect({"device_memory_gib": 2, "logical_cores": 4, "benchmark_score_ms": 1})
        assert signal.device_memory_gib == 2.0
        assert signal.logical_cores == 4

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("webgl2", 2),
            ("webgl", 1),
            (True, 1),
            (False, 0),
            (3, 0),
            ("nope", 0),
            (None, 0),
            (float("inf"), 0),
            (float("nan"), 0),
        ],
    )
    def test_webgl_spellings(self, value, expected):
        assert collect({"webglVersion": value, "benchmarkScoreMs": 1}).webgl_version == expected

    @pytest.mark.parametrize("value", ["reduce", "true", 1, True])
    def test_reduced_motion_spellings(self, value):
        assert collect({"prefersReducedMotion": value, "benchmarkScoreMs": 1}).prefers_reduced_motion

    def test_reduced_motion_defaults_false(self):
        assert collect({"benchmarkScoreMs": 1}).prefers_reduced_motion is False

    def test_webgl_absent_on_host(self):
        assert collect({"benchmarkScoreMs": 1}).webgl_version == 0


class TestFallbacks:
    """Missing or malformed values never raise."""

    def test_host_probe_used_without_hints(self, monkeypatch):
        class Memory:
            total = 16 * 1024**3

        monkeypatch.setattr(collector_module.psutil, "virtual_memory", lambda: Memory())
        monkeypatch.setattr(collector_module.os, "cpu_count", lambda: 6)
        signal = collect({"benchmarkScoreMs": 1})
        assert signal.device_memory_gib == 16.0
        assert signal.logical_cores == 6

    def test_defaults_when_host_probe_fails(self, no_host):
        signal = collect({"benchmarkScoreMs": 1})
        assert signal.device_memory_gib == 4.0
        assert signal.logical_cores == 4

    def test_defaults_follow_config(self, no_host):
        config = PolicyConfig(default_memory_gib=3.0, default_logical_cores=2)
        signal = collect({"benchmarkScoreMs": 1}, config=config)
        assert signal.device_memory_gib == 3.0
        assert signal.logical_cores == 2

    @pytest.mark.parametrize(
        "value", ["lots", -2, 0, float("nan"), float("inf"), float("-inf"), 10**400, [8]]
    )
    def test_malformed_memory_hint(self, no_host, value):
        signal = collect({"deviceMemory": value, "benchmarkScoreMs": 1})
        assert signal.device_memory_gib == 4.0

    @pytest.mark.parametrize("value", ["many", -1, float("nan"), float("inf"), 10**400])
    def test_malformed_cores_hint(self, no_host, value):
        signal = collect({"hardwareConcurrency": value, "benchmarkScoreMs": 1})
        assert signal.logical_cores == 4

    @pytest.mark.parametrize("value", [float("inf"), float("nan"), 10**400])
    def test_non_finite_benchmark_hint_triggers_measurement(self, monkeypatch, value):
        monkeypatch.setattr(collector_module, "run_benchmark", lambda *a, **k: 12.5)
        assert collect({"benchmarkScoreMs": value}).benchmark_score_ms == 12.5

    def test_json_infinity_hints(self, no_host, monkeypatch):
        monkeypatch.setattr(collector_module, "run_benchmark", lambda *a, **k: 12.5)
        hints = json.loads(
            '{"deviceMemory": Infinity, "hardwareConcurrency": Infinity, '
            '"webglVersion": Infinity, "benchmarkScoreMs": 1e400}'
        )
        signal = collect(hints)
        assert signal == Signal(
            device_memory_gib=4.0,
            logical_cores=4,
            prefers_reduced_motion=False,
            webgl_version=0,
            benchmark_score_ms=12.5,
        )

    def test_negative_benchmark_hint_triggers_measurement(self, monkeypatch):
        monkeypatch.setattr(collector_module, "run_benchmark", lambda *a, **k: 12.5)
        assert collect({"benchmarkScoreMs": -5}).benchmark_score_ms == 12.5

    def test_broken_benchmark_assumes_slow_device(self, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("clock went backwards")

        monkeypatch.setattr(collector_module, "run_benchmark", explode)
        config = PolicyConfig()
        signal = collect({}, config=config)
        assert signal.benchmark_score_ms > config.slow_benchmark_ms

    def test_hints_not_mutated(self):
        hints = {"deviceMemory": 8, "benchmarkScoreMs": 3}
        collect(hints)
        assert hints == {"deviceMemory": 8, "benchmarkScoreMs": 3}
