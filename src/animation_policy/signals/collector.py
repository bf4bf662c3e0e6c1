"""Signal Collector: gather raw environment signals.

Signals come from two places. Hints are values a client reports about
itself (a browser posting navigator.deviceMemory, hardwareConcurrency, its
prefers-reduced-motion media query and WebGL probe). Anything the hints do
not carry is probed on the host this process runs on. Nothing here raises:
unreadable values are logged and replaced by conservative defaults.

Example:
    >>> signal = collect({"deviceMemory": 8, "hardwareConcurrency": 8,
    ...                   "webglVersion": 2, "benchmarkScoreMs": 40})
    >>> signal.webgl_version
    2
"""

from __future__ import annotations

import math
import os
import time
from typing import Any, Callable, Mapping, Optional

import psutil

from ..config import DEFAULT_CONFIG, PolicyConfig
from ..logging_config import get_logger
from .benchmark import run_benchmark
from .models import Signal

logger = get_logger(__name__)

# Accepted spellings for each signal, browser names first
HINT_KEYS: dict[str, tuple[str, ...]] = {
    "device_memory_gib": ("deviceMemory", "deviceMemoryGiB", "device_memory_gib"),
    "logical_cores": ("hardwareConcurrency", "logicalCores", "logical_cores"),
    "prefers_reduced_motion": (
        "prefersReducedMotion",
        "reducedMotion",
        "prefers_reduced_motion",
    ),
    "webgl_version": ("webglVersion", "webgl", "webgl_version"),
    "benchmark_score_ms": ("benchmarkScoreMs", "benchmark", "benchmark_score_ms"),
}

_MISSING = object()


def collect(
    hints: Optional[Mapping[str, Any]] = None,
    config: PolicyConfig = DEFAULT_CONFIG,
    clock: Callable[[], float] = time.perf_counter,
) -> Signal:
    """Collect a Signal snapshot from hints and host probes.

    Args:
        hints: Client-reported capability values (browser or snake_case keys)
        config: Policy configuration (defaults and benchmark settings)
        clock: Clock handed to the micro-benchmark

    Returns:
        Immutable Signal. Never raises.
    """
    hints = hints or {}

    memory = _positive_float(_hint(hints, "device_memory_gib"), "device_memory_gib")
    if memory is None:
        memory = _probe_memory_gib()
    if memory is None:
        logger.debug("Device memory unavailable, using %.1f GiB", config.default_memory_gib)
        memory = config.default_memory_gib

    cores = _positive_int(_hint(hints, "logical_cores"), "logical_cores")
    if cores is None:
        cores = _probe_logical_cores()
    if cores is None:
        logger.debug("Core count unavailable, using %d", config.default_logical_cores)
        cores = config.default_logical_cores

    reduced_motion = _flag(_hint(hints, "prefers_reduced_motion"))
    webgl = _webgl_version(_hint(hints, "webgl_version"))

    score = _non_negative_float(_hint(hints, "benchmark_score_ms"), "benchmark_score_ms")
    if score is None:
        score = _measure(config, clock)

    signal = Signal(
        device_memory_gib=memory,
        logical_cores=cores,
        prefers_reduced_motion=reduced_motion,
        webgl_version=webgl,
        benchmark_score_ms=score,
    )
    logger.debug("Collected signal: %s", signal)
    return signal


def _hint(hints: Mapping[str, Any], name: str) -> Any:
    for key in HINT_KEYS[name]:
        if key in hints:
            return hints[key]
    return _MISSING


def _positive_float(value: Any, name: str) -> Optional[float]:
    if value is _MISSING or value is None:
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring malformed %s hint: %r", name, value)
        return None
    if not math.isfinite(parsed) or parsed <= 0:
        logger.debug("Ignoring out-of-range %s hint: %r", name, value)
        return None
    return parsed


def _non_negative_float(value: Any, name: str) -> Optional[float]:
    if value is _MISSING or value is None:
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring malformed %s hint: %r", name, value)
        return None
    if not math.isfinite(parsed) or parsed < 0:
        logger.debug("Ignoring out-of-range %s hint: %r", name, value)
        return None
    return parsed


def _positive_int(value: Any, name: str) -> Optional[int]:
    parsed = _positive_float(value, name)
    if parsed is None:
        return None
    return max(1, int(parsed))


def _flag(value: Any) -> bool:
    if value is _MISSING or value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on", "reduce")
    return bool(value)


def _webgl_version(value: Any) -> int:
    if value is _MISSING or value is None:
        return 0
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("webgl2", "2"):
            return 2
        if text in ("webgl", "webgl1", "1"):
            return 1
        return 0
    try:
        version = int(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring malformed webgl_version hint: %r", value)
        return 0
    return version if version in (0, 1, 2) else 0


def _probe_memory_gib() -> Optional[float]:
    try:
        total = psutil.virtual_memory().total
    except Exception as e:
        logger.debug("Memory probe failed: %s", e)
        return None
    return round(total / (1024**3), 2) if total > 0 else None


def _probe_logical_cores() -> Optional[int]:
    try:
        return os.cpu_count()
    except Exception as e:
        logger.debug("Core probe failed: %s", e)
        return None


def _measure(config: PolicyConfig, clock: Callable[[], float]) -> float:
    try:
        return run_benchmark(
            config.benchmark_cap_ms,
            iterations=config.benchmark_iterations,
            chunk=config.benchmark_chunk,
            clock=clock,
        )
    except Exception as e:
        # A broken clock must not fail collection; assume a slow device
        logger.debug("Benchmark failed: %s", e)
        return config.slow_benchmark_ms + 1.0
