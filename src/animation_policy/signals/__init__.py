"""Signal collection: raw device capability facts."""

from .benchmark import run_benchmark
from .collector import HINT_KEYS, collect
from .models import Signal

__all__ = ["Signal", "collect", "run_benchmark", "HINT_KEYS"]
