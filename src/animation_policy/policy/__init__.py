"""Policy resolution: rule pipeline and resolved configuration."""

from .models import Adjustment, ResolvedConfiguration
from .resolver import resolve
from .rules import FEATURE_REQUIREMENTS, RULES, is_complex_easing

__all__ = [
    "Adjustment",
    "ResolvedConfiguration",
    "resolve",
    "RULES",
    "FEATURE_REQUIREMENTS",
    "is_complex_easing",
]
