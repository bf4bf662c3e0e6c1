"""Intent Descriptor: what the caller would like to animate.

An intent is independent of what the device can sustain. It is validated
once, here, so the resolver can assume well-formed input.

Example:
    >>> intent = IntentDescriptor.from_dict({
    ...     "complexity": "advanced",
    ...     "elementCount": 500,
    ...     "durationMs": 1200,
    ...     "easing": "elastic.out",
    ...     "features": ["shadows", "postProcessing"],
    ... })
    >>> intent.complexity
    <Complexity.ADVANCED: 'ADVANCED'>
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

from .exceptions import InvalidIntent


class Complexity(Enum):
    SIMPLE = "SIMPLE"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class Feature(Enum):
    """Optional animation features a caller may request."""

    SHADOWS = "shadows"
    POST_PROCESSING = "postProcessing"
    PHYSICS = "physics"
    SCROLL_LINKED = "scrollLinked"
    # Jump straight to the end state when motion must be suppressed
    SKIP_TO_END = "skip-to-end"


_FEATURE_ALIASES = {
    "post_processing": Feature.POST_PROCESSING,
    "postprocessing": Feature.POST_PROCESSING,
    "scroll_linked": Feature.SCROLL_LINKED,
    "scrolllinked": Feature.SCROLL_LINKED,
    "skip_to_end": Feature.SKIP_TO_END,
    "skiptoend": Feature.SKIP_TO_END,
    "skipanimation": Feature.SKIP_TO_END,
}


@dataclass(frozen=True)
class IntentDescriptor:
    """Caller-declared animation request, immutable per request.

    Attributes:
        complexity: SIMPLE, INTERMEDIATE or ADVANCED
        element_count: Number of animated elements (>= 0)
        requested_duration_ms: Desired duration (> 0)
        requested_easing: Easing name as the target library spells it
        features: Requested optional features
        properties: Animated properties (informational, e.g. "opacity")
        requires_webgl: The animation cannot run without WebGL
    """

    complexity: Complexity = Complexity.SIMPLE
    element_count: int = 1
    requested_duration_ms: float = 300.0
    requested_easing: str = "ease-out"
    features: frozenset[Feature] = field(default_factory=frozenset)
    properties: tuple[str, ...] = ()
    requires_webgl: bool = False

    def __post_init__(self) -> None:
        complexity = _coerce_complexity(self.complexity)
        if isinstance(self.features, str) or not isinstance(self.features, Iterable):
            raise InvalidIntent("features", self.features, "must be a collection")
        features = frozenset(_coerce_feature(f) for f in self.features)

        if isinstance(self.properties, str) or not isinstance(self.properties, Iterable):
            raise InvalidIntent("properties", self.properties, "must be a collection")
        properties = tuple(self.properties)
        for prop in properties:
            if not isinstance(prop, str) or not prop:
                raise InvalidIntent("properties", prop, "must be a non-empty string")

        if not isinstance(self.requires_webgl, bool):
            raise InvalidIntent("requires_webgl", self.requires_webgl, "must be a boolean")

        if isinstance(self.element_count, bool) or not isinstance(self.element_count, int):
            raise InvalidIntent("element_count", self.element_count, "must be an integer")
        if self.element_count < 0:
            raise InvalidIntent("element_count", self.element_count, "must be >= 0")

        duration = self.requested_duration_ms
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise InvalidIntent("requested_duration_ms", duration, "must be a number")
        if not math.isfinite(duration) or duration <= 0:
            raise InvalidIntent("requested_duration_ms", duration, "must be > 0")

        if not isinstance(self.requested_easing, str) or not self.requested_easing.strip():
            raise InvalidIntent("requested_easing", self.requested_easing, "must be a non-empty string")

        # Normalized values are written back on the frozen instance
        object.__setattr__(self, "complexity", complexity)
        object.__setattr__(self, "features", features)
        object.__setattr__(self, "requested_duration_ms", float(duration))
        object.__setattr__(self, "properties", properties)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IntentDescriptor:
        """Build an intent from JSON-style data (camelCase or snake_case keys).

        Raises:
            InvalidIntent: On any missing-type or out-of-range value
        """
        if not isinstance(data, Mapping):
            raise InvalidIntent("intent", data, "must be a mapping")

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            return default

        features = pick("features", default=())
        if isinstance(features, str) or not isinstance(features, Iterable):
            raise InvalidIntent("features", features, "must be a list")

        properties = pick("properties", default=())
        if isinstance(properties, str):
            properties = (properties,)
        elif not isinstance(properties, Iterable):
            raise InvalidIntent("properties", properties, "must be a list")

        return cls(
            complexity=pick("complexity", default=Complexity.SIMPLE),
            element_count=pick("elementCount", "element_count", default=1),
            requested_duration_ms=pick(
                "requestedDurationMs", "durationMs", "duration", "requested_duration_ms", default=300.0
            ),
            requested_easing=pick("requestedEasing", "easing", "requested_easing", default="ease-out"),
            features=tuple(features),
            properties=tuple(properties),
            requires_webgl=_coerce_flag(pick("requiresWebgl", "requires_webgl", default=False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "complexity": self.complexity.value,
            "element_count": self.element_count,
            "requested_duration_ms": self.requested_duration_ms,
            "requested_easing": self.requested_easing,
            "features": sorted(f.value for f in self.features),
            "properties": list(self.properties),
            "requires_webgl": self.requires_webgl,
        }


def _coerce_complexity(value: Any) -> Complexity:
    if isinstance(value, Complexity):
        return value
    if isinstance(value, str):
        try:
            return Complexity(value.strip().upper())
        except ValueError:
            pass
    raise InvalidIntent("complexity", value, "expected SIMPLE, INTERMEDIATE or ADVANCED")


def _coerce_feature(value: Any) -> Feature:
    if isinstance(value, Feature):
        return value
    if isinstance(value, str):
        try:
            return Feature(value)
        except ValueError:
            alias = _FEATURE_ALIASES.get(value.replace("-", "_").lower()) or _FEATURE_ALIASES.get(
                value.replace("-", "").lower()
            )
            if alias is not None:
                return alias
    raise InvalidIntent("features", value, "unknown feature")


def _coerce_flag(value: Any) -> Any:
    # JSON-ish spellings only; anything else is left for __post_init__ to reject
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "1", "yes", "on"):
            return True
        if text in ("false", "0", "no", "off"):
            return False
    return value
