"""Resolver output models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..intent import Feature
from ..profiling.tiers import Renderer, Tier


@dataclass(frozen=True)
class Adjustment:
    """One rule firing: the resolver moved ``field`` away from the intent."""

    rule: str
    field: str
    from_value: Any
    to_value: Any
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "field": self.field,
            "from": self.from_value,
            "to": self.to_value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ResolvedConfiguration:
    """Device-safe animation parameters handed to an external renderer.

    ``enabled_features`` is always a subset of the intent's features and
    ``element_count_cap`` never exceeds the profile's ``max_elements``.
    """

    duration_ms: float
    easing: str
    renderer: Optional[Renderer]
    enabled_features: frozenset[Feature]
    element_count_cap: int
    adjustments: tuple[Adjustment, ...] = ()
    tier: Optional[Tier] = None
    policy_version: str = ""

    @property
    def skip_to_end(self) -> bool:
        """Consumer should jump to the end state instead of animating."""
        return Feature.SKIP_TO_END in self.enabled_features

    def to_dict(self) -> dict[str, Any]:
        return {
            "duration_ms": self.duration_ms,
            "easing": self.easing,
            "renderer": self.renderer.value if self.renderer else None,
            "enabled_features": sorted(f.value for f in self.enabled_features),
            "element_count_cap": self.element_count_cap,
            "adjustments": [a.to_dict() for a in self.adjustments],
            "tier": self.tier.value if self.tier else None,
            "policy_version": self.policy_version,
        }


@dataclass
class WorkingConfiguration:
    """Mutable scratch state threaded through the rule pipeline.

    Local to a single resolve() call; never shared between requests.
    """

    duration_ms: float
    easing: str
    renderer: Optional[Renderer]
    enabled_features: set[Feature]
    element_count_cap: int
    adjustments: list[Adjustment] = field(default_factory=list)

    def record(self, rule: str, field_name: str, from_value: Any, to_value: Any, reason: str) -> None:
        self.adjustments.append(Adjustment(rule, field_name, from_value, to_value, reason))

    def freeze(self, tier: Optional[Tier], policy_version: str) -> ResolvedConfiguration:
        return ResolvedConfiguration(
            duration_ms=self.duration_ms,
            easing=self.easing,
            renderer=self.renderer,
            enabled_features=frozenset(self.enabled_features),
            element_count_cap=self.element_count_cap,
            adjustments=tuple(self.adjustments),
            tier=tier,
            policy_version=policy_version,
        )
