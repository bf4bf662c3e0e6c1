"""Exception hierarchy for the animation policy engine."""

from .base import AnimationPolicyError
from .config import ConfigurationError, InvalidConfigError
from .intent import InvalidIntent

__all__ = [
    "AnimationPolicyError",
    "InvalidIntent",
    "ConfigurationError",
    "InvalidConfigError",
]
