"""Configuration loading and management for the animation policy engine.

The thresholds that drive tiering and the resolver's damping constants are
heuristics, so they live here as a swappable policy rather than in control
flow. Configuration sources are merged in priority order:
    1. Defaults (defined in PolicyConfig)
    2. Global config (~/.animation-policy.toml)
    3. Project config (./animation-policy.toml)
    4. Explicit config file
    5. Environment variables (ANIMATION_POLICY_* prefix)
    6. Keyword overrides

Example:
    >>> config = load_config(low_duration_factor=0.5)
    >>> config.low_duration_factor
    0.5
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigurationError

ENV_PREFIX = "ANIMATION_POLICY_"


@dataclass(frozen=True)
class PolicyConfig:
    """Tiering thresholds and resolver tuning parameters.

    Attributes:
        Tier thresholds:
            slow_memory_gib: Memory at or below this is LOW
            slow_logical_cores: Core count at or below this is LOW
            slow_benchmark_ms: Benchmark score above this is LOW
            moderate_memory_gib: Memory at or below this (with cores) is MEDIUM
            moderate_logical_cores: Cores at or below this (with memory) is MEDIUM
            moderate_benchmark_ms: Benchmark score above this is MEDIUM

        Signal defaults:
            default_memory_gib: Substituted when device memory is unknown
            default_logical_cores: Substituted when core count is unknown

        Benchmark:
            benchmark_cap_ms: Hard wall-clock cap on the micro-benchmark
            benchmark_iterations: Size of the reference workload
            benchmark_chunk: Iterations between clock checks

        Duration policy:
            low_duration_factor: Damping applied to durations at LOW (< 1)
            low_duration_ceiling_ms: Ceiling applied after damping at LOW
            accessibility_duration_ms: Flat duration under reduced motion

        Easing policy:
            simple_easing: Replacement for complex easings below HIGH
            complex_easing_families: Substrings marking spring-like easings

        Renderer:
            webgl1_max_texture_size: Texture cap when only WebGL 1 is present

        Versioning:
            policy_version: Bumped whenever rule order or semantics change
    """

    # === Tier thresholds ===
    slow_memory_gib: float = 2.0
    slow_logical_cores: int = 2
    slow_benchmark_ms: float = 200.0
    moderate_memory_gib: float = 4.0
    moderate_logical_cores: int = 4
    moderate_benchmark_ms: float = 100.0

    # === Signal defaults ===
    default_memory_gib: float = 4.0
    default_logical_cores: int = 4

    # === Benchmark ===
    benchmark_cap_ms: float = 8.0
    benchmark_iterations: int = 100_000
    benchmark_chunk: int = 1_000

    # === Duration policy ===
    low_duration_factor: float = 0.6
    low_duration_ceiling_ms: float = 800.0
    accessibility_duration_ms: float = 10.0

    # === Easing policy ===
    simple_easing: str = "power2.out"
    complex_easing_families: tuple[str, ...] = ("spring", "elastic", "bounce")

    # === Renderer ===
    webgl1_max_texture_size: int = 2048

    policy_version: str = "1.0"

    def __post_init__(self) -> None:
        """Validate policy configuration."""
        if self.slow_memory_gib > self.moderate_memory_gib:
            raise ValueError("slow_memory_gib must not exceed moderate_memory_gib")
        if self.slow_logical_cores > self.moderate_logical_cores:
            raise ValueError("slow_logical_cores must not exceed moderate_logical_cores")
        if self.moderate_benchmark_ms > self.slow_benchmark_ms:
            raise ValueError("moderate_benchmark_ms must not exceed slow_benchmark_ms")

        if self.default_memory_gib <= 0:
            raise ValueError("default_memory_gib must be positive")
        if self.default_logical_cores < 1:
            raise ValueError("default_logical_cores must be at least 1")

        # The benchmark must stay inside a frame budget
        if not 0.0 < self.benchmark_cap_ms <= 10.0:
            raise ValueError("benchmark_cap_ms must be in (0, 10]")
        if self.benchmark_iterations < 1 or self.benchmark_chunk < 1:
            raise ValueError("benchmark_iterations and benchmark_chunk must be at least 1")

        if not 0.0 < self.low_duration_factor < 1.0:
            raise ValueError("low_duration_factor must be between 0.0 and 1.0 (exclusive)")
        if self.low_duration_ceiling_ms <= 0:
            raise ValueError("low_duration_ceiling_ms must be positive")
        if self.accessibility_duration_ms <= 0:
            raise ValueError("accessibility_duration_ms must be positive")

        if not self.simple_easing:
            raise ValueError("simple_easing must not be empty")
        if any(family in self.simple_easing.lower() for family in self.complex_easing_families):
            raise ValueError("simple_easing must not belong to a complex easing family")

        if self.webgl1_max_texture_size < 1:
            raise ValueError("webgl1_max_texture_size must be at least 1")


# Default policy configuration (singleton)
DEFAULT_CONFIG = PolicyConfig()


@dataclass(frozen=True)
class LoadedConfig:
    """Result of load_config(): the policy plus any capability-table overrides."""

    policy: PolicyConfig = field(default_factory=PolicyConfig)
    tier_overrides: dict[str, dict[str, Any]] = field(default_factory=dict)


def load_config(config_file: Optional[Path] = None, **overrides) -> PolicyConfig:
    """Load the policy configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from code or CLI flags)

    Returns:
        Validated PolicyConfig instance

    Raises:
        ConfigurationError: If a config file or value is invalid
    """
    return load_full_config(config_file, **overrides).policy


def load_full_config(config_file: Optional[Path] = None, **overrides) -> LoadedConfig:
    """Like load_config(), but also returns ``[tiers.*]`` table overrides.

    Example TOML:
        low_duration_factor = 0.5

        [tiers.low]
        max_elements = 150
    """
    merged: dict = {}
    tier_overrides: dict[str, dict[str, Any]] = {}

    candidates = [
        ("global", Path.home() / ".animation-policy.toml"),
        ("project", Path.cwd() / "animation-policy.toml"),
    ]
    for label, path in candidates:
        if path.exists():
            try:
                data = _load_toml_file(path)
            except ConfigurationError:
                raise
            except Exception as e:
                raise ConfigurationError(f"Invalid {label} config '{path}': {e}")
            _merge_section(merged, tier_overrides, data)

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            data = _load_toml_file(config_file)
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")
        _merge_section(merged, tier_overrides, data)

    merged.update(_load_env_vars())
    merged.update(overrides)

    # TOML arrays arrive as lists; the dataclass stores tuples
    families = merged.get("complex_easing_families")
    if isinstance(families, list):
        merged["complex_easing_families"] = tuple(families)

    try:
        policy = PolicyConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")

    return LoadedConfig(policy=policy, tier_overrides=tier_overrides)


def _merge_section(
    merged: dict, tier_overrides: dict[str, dict[str, Any]], data: dict
) -> None:
    """Fold one parsed TOML document into the running merge."""
    data = dict(data)
    tiers = data.pop("tiers", None)
    if tiers is not None:
        if not isinstance(tiers, dict):
            raise ConfigurationError("[tiers] must be a table of tier tables")
        for name, row in tiers.items():
            if not isinstance(row, dict):
                raise ConfigurationError(f"[tiers.{name}] must be a table")
            tier_overrides.setdefault(name.upper(), {}).update(row)
    merged.update(data)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ANIMATION_POLICY_* environment variables.

    Every scalar PolicyConfig field is addressable, e.g.
    ANIMATION_POLICY_SLOW_BENCHMARK_MS=250 or
    ANIMATION_POLICY_SIMPLE_EASING=ease-out.

    Returns:
        Dict of field_name -> parsed_value for any matching vars found.
    """
    type_hints = get_type_hints(PolicyConfig)

    result: dict[str, Any] = {}

    for f in fields(PolicyConfig):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(f.name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[f.name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single string.

    Raises:
        ValueError: If value can't be parsed to the expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Comma-separated tuples, e.g. "spring,elastic,bounce"
    if origin is tuple:
        return tuple(part.strip() for part in value.split(",") if part.strip())

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If no TOML parser is available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
