"""Policy Engine: session-scoped facade over collect → profile → resolve.

The signal is collected once, lazily, and the derived profiles are cached
for the session. refresh() re-collects after an external event that can
change tiering (a prefers-reduced-motion change, an orientation change).
Resolution only reads the cached, immutable profile, so concurrent
resolve() calls need no coordination; the lock guards cache population.

Example:
    >>> engine = PolicyEngine(hints={"deviceMemory": 8, "hardwareConcurrency": 8,
    ...                              "webglVersion": 2, "benchmarkScoreMs": 40})
    >>> engine.profile().tier
    <Tier.HIGH: 'HIGH'>
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional

from .config import DEFAULT_CONFIG, PolicyConfig
from .formatters.recommendations import format_adjustments
from .formatters.recommendations import recommendations as advice_for
from .intent import IntentDescriptor
from .logging_config import get_logger
from .policy.models import ResolvedConfiguration
from .policy.resolver import resolve
from .profiling.profiler import CapabilityProfile, profile
from .profiling.tiers import CAPABILITY_TABLE, Tier, TierCapabilities
from .signals.collector import collect
from .signals.models import Signal

logger = get_logger(__name__)


class PolicyEngine:
    """Cache a device profile and resolve animation intents against it."""

    def __init__(
        self,
        config: Optional[PolicyConfig] = None,
        hints: Optional[Mapping[str, Any]] = None,
        table: Optional[Mapping[Tier, TierCapabilities]] = None,
        signal: Optional[Signal] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.table = table if table is not None else CAPABILITY_TABLE
        self._hints = dict(hints) if hints else None
        self._signal = signal
        # An injected snapshot stands in for collection until hints arrive
        self._pinned = signal is not None and hints is None
        self._profiles: Dict[bool, CapabilityProfile] = {}
        self._lock = threading.Lock()

    @property
    def signal(self) -> Signal:
        with self._lock:
            return self._ensure_signal()

    def profile(self, requires_webgl: bool = False) -> CapabilityProfile:
        """Cached capability profile for this session."""
        with self._lock:
            cached = self._profiles.get(requires_webgl)
            if cached is None:
                cached = profile(self._ensure_signal(), requires_webgl, self.config, self.table)
                self._profiles[requires_webgl] = cached
            return cached

    def refresh(self, hints: Optional[Mapping[str, Any]] = None) -> CapabilityProfile:
        """Re-collect the signal and drop cached profiles.

        An engine built with ``signal=`` and no hints keeps that snapshot
        on a hint-less refresh and only re-profiles it. Passing hints
        replaces it with a fresh collection.

        Args:
            hints: New client hints; None keeps the previous hints

        Returns:
            The fresh profile (no WebGL requirement). Equal to the previous
            one when the environment did not change.
        """
        with self._lock:
            if hints is not None:
                self._hints = dict(hints)
                self._pinned = False
            previous = self._profiles.get(False)
            if not self._pinned:
                self._signal = collect(self._hints, self.config)
            self._profiles.clear()
            fresh = profile(self._signal, False, self.config, self.table)
            self._profiles[False] = fresh

        if previous is not None and previous.tier is not fresh.tier:
            logger.info("Device tier changed: %s -> %s", previous.tier.value, fresh.tier.value)
        else:
            logger.debug("Refreshed device profile: %s", fresh.tier.value)
        return fresh

    def resolve(self, intent: IntentDescriptor) -> ResolvedConfiguration:
        """Resolve an intent against the cached profile."""
        return resolve(self.profile(intent.requires_webgl), intent, self.config, self.table)

    def notes(self, intent: IntentDescriptor) -> List[str]:
        """Resolve and format each adjustment as one developer note."""
        return format_adjustments(self.resolve(intent))

    def recommendations(self, intent: IntentDescriptor) -> List[str]:
        """Resolve and return the distinct optimisation advice."""
        return advice_for(self.resolve(intent))

    def _ensure_signal(self) -> Signal:
        if self._signal is None:
            self._signal = collect(self._hints, self.config)
        return self._signal
