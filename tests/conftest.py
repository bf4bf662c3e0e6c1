"""Shared test fixtures for the animation policy engine."""

import os

import pytest

from animation_policy.intent import Complexity, Feature, IntentDescriptor
from animation_policy.profiling import profile
from animation_policy.signals import Signal


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project TOML files and ANIMATION_POLICY_* vars out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("ANIMATION_POLICY_"):
            monkeypatch.delenv(key)


@pytest.fixture
def low_signal():
    """Budget phone: 1 GiB, 2 cores, WebGL 1, slow benchmark."""
    return Signal(
        device_memory_gib=1,
        logical_cores=2,
        prefers_reduced_motion=False,
        webgl_version=1,
        benchmark_score_ms=250,
    )


@pytest.fixture
def medium_signal():
    """Mid-range laptop: 4 GiB, 4 cores, WebGL 2."""
    return Signal(
        device_memory_gib=4,
        logical_cores=4,
        prefers_reduced_motion=False,
        webgl_version=2,
        benchmark_score_ms=60,
    )


@pytest.fixture
def high_signal():
    """Workstation: 8 GiB, 8 cores, WebGL 2, fast benchmark."""
    return Signal(
        device_memory_gib=8,
        logical_cores=8,
        prefers_reduced_motion=False,
        webgl_version=2,
        benchmark_score_ms=40,
    )


@pytest.fixture
def reduced_motion_signal():
    """High-end hardware whose user asked for reduced motion."""
    return Signal(
        device_memory_gib=16,
        logical_cores=16,
        prefers_reduced_motion=True,
        webgl_version=2,
        benchmark_score_ms=10,
    )


@pytest.fixture
def low_profile(low_signal):
    return profile(low_signal)


@pytest.fixture
def high_profile(high_signal):
    return profile(high_signal)


@pytest.fixture
def accessibility_profile(reduced_motion_signal):
    return profile(reduced_motion_signal)


@pytest.fixture
def advanced_intent():
    """500 elements, elastic easing, shadows and post-processing."""
    return IntentDescriptor(
        complexity=Complexity.ADVANCED,
        element_count=500,
        requested_duration_ms=1200,
        requested_easing="elastic.out",
        features=frozenset({Feature.SHADOWS, Feature.POST_PROCESSING}),
    )


@pytest.fixture
def simple_intent():
    """A plain fade: nothing any tier needs to change."""
    return IntentDescriptor(
        complexity=Complexity.SIMPLE,
        element_count=1,
        requested_duration_ms=300,
        requested_easing="ease-out",
    )
