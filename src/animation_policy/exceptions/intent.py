"""Intent validation exception.

Validation happens once, at the boundary where an IntentDescriptor is built.
Everything downstream of construction assumes well-formed input.
"""

from typing import Any

from .base import AnimationPolicyError


class InvalidIntent(AnimationPolicyError, ValueError):
    """Raised when an animation intent carries an invalid value."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid intent {field}: {value!r}",
            details={"field": field, "value": str(value), "reason": reason},
        )
        self.field = field
        self.value = value
        self.reason = reason
