"""Signal snapshot: raw environment facts, no policy."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Signal:
    """Immutable snapshot of device capability signals.

    Created once per session by collect(). Unknown memory or core counts
    stay None here; the profiler substitutes conservative defaults.

    Attributes:
        device_memory_gib: Approximate device memory (navigator.deviceMemory)
        logical_cores: Logical processor count (hardwareConcurrency)
        prefers_reduced_motion: User asked the platform to minimise motion
        webgl_version: 0 (unavailable), 1 or 2
        benchmark_score_ms: Relative cost score from the micro-benchmark
    """

    device_memory_gib: Optional[float] = None
    logical_cores: Optional[int] = None
    prefers_reduced_motion: bool = False
    webgl_version: int = 0
    benchmark_score_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
