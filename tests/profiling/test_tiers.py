"""Tests for the capability table and its overrides."""

from __future__ import annotations

import pytest

from animation_policy.exceptions import InvalidConfigError
from animation_policy.profiling import (
    CAPABILITY_TABLE,
    NO_CAPABILITIES,
    Renderer,
    Tier,
    cheapest_renderer,
    load_capability_table,
)


class TestCapabilityTable:
    """The table is exhaustive and monotone in tier rank."""

    def test_every_tier_has_a_row(self):
        assert set(CAPABILITY_TABLE) == set(Tier)

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            CAPABILITY_TABLE[Tier.LOW] = NO_CAPABILITIES  # type: ignore[index]

    def test_unsupported_row_is_empty(self):
        assert CAPABILITY_TABLE[Tier.UNSUPPORTED] == NO_CAPABILITIES

    def test_accessibility_allows_no_motion(self):
        row = CAPABILITY_TABLE[Tier.ACCESSIBILITY]
        assert row.max_elements == 0
        assert row.recommended_renderer is Renderer.SVG
        assert not (row.allow_shadows or row.allow_post_processing or row.allow_physics)

    def test_budgets_grow_with_tier(self):
        ordered = [CAPABILITY_TABLE[t] for t in (Tier.LOW, Tier.MEDIUM, Tier.HIGH)]
        for lower, higher in zip(ordered, ordered[1:]):
            assert lower.max_elements < higher.max_elements
            assert lower.max_triangles < higher.max_triangles
            assert lower.recommended_texture_size < higher.recommended_texture_size
            assert lower.recommended_renderer.cost <= higher.recommended_renderer.cost

    def test_only_high_allows_post_processing(self):
        allowed = {t for t, row in CAPABILITY_TABLE.items() if row.allow_post_processing}
        assert allowed == {Tier.HIGH}

    def test_tier_rank(self):
        assert Tier.UNSUPPORTED.rank < Tier.ACCESSIBILITY.rank < Tier.LOW.rank
        assert Tier.LOW.rank < Tier.MEDIUM.rank < Tier.HIGH.rank

    def test_cheapest_renderer(self):
        assert cheapest_renderer() is Renderer.SVG


class TestLoadCapabilityTable:
    """[tiers.*] overrides from configuration."""

    def test_override_one_field(self):
        table = load_capability_table({"low": {"max_elements": 150}})
        assert table[Tier.LOW].max_elements == 150
        assert table[Tier.LOW].max_triangles == CAPABILITY_TABLE[Tier.LOW].max_triangles
        assert CAPABILITY_TABLE[Tier.LOW].max_elements == 100

    def test_renderer_from_string(self):
        table = load_capability_table({"MEDIUM": {"recommended_renderer": "webgl"}})
        assert table[Tier.MEDIUM].recommended_renderer is Renderer.WEBGL

    def test_unknown_tier(self):
        with pytest.raises(InvalidConfigError):
            load_capability_table({"ultra": {"max_elements": 1}})

    def test_unknown_field(self):
        with pytest.raises(InvalidConfigError):
            load_capability_table({"low": {"max_particles": 1}})

    @pytest.mark.parametrize(
        "row",
        [
            {"max_elements": -1},
            {"max_elements": "many"},
            {"allow_shadows": "yes"},
            {"recommended_renderer": "vulkan"},
        ],
    )
    def test_bad_values(self, row):
        with pytest.raises(InvalidConfigError):
            load_capability_table({"high": row})

    def test_unsupported_cannot_grant(self):
        with pytest.raises(InvalidConfigError):
            load_capability_table({"unsupported": {"max_elements": 10}})
