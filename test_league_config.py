"""
League Configuration Tests
==========================
"""

import pytest

from pyramid import (
    COUNTRY_TIER_NAMES,
    ConfigurationError,
    LeagueConfig,
    LeagueRegistry,
    Team,
    TeamNotFoundError,
    TeamRegistry,
    build_default_registry,
    build_world,
)


# ═══════════════════════════════════════════════════════════════
# REGISTRY VALIDATION
# ═══════════════════════════════════════════════════════════════

class TestLeagueRegistry:
    def test_default_pyramid(self):
        registry = build_default_registry({"Testland": ["One", "Two", "Three"]})
        assert registry.tiers("Testland") == [1, 2, 3]
        assert registry.top_tier("Testland") == 1
        assert registry.bottom_tier("Testland") == 3
        assert registry.get("Testland", 1).promotion_spots == 0
        assert registry.get("Testland", 3).relegation_spots == 0
        assert registry.get("Testland", 2).name == "Two"

    def test_default_pyramid_is_balanced(self):
        registry = build_default_registry({"Testland": None})
        for tier in (1, 2):
            assert registry.get("Testland", tier).relegation_spots == \
                registry.get("Testland", tier + 1).promotion_spots

    def test_default_playoff_places_fit_ten_team_tables(self):
        registry = build_default_registry({"Testland": None})
        assert registry.get("Testland", 2).playoff_spots == 4
        assert registry.get("Testland", 3).playoff_spots == 4
        for tier in (1, 2, 3):
            registry.get("Testland", tier).validate_table_size(10)

    def test_top_tier_promotion_rejected(self):
        registry = LeagueRegistry()
        with pytest.raises(ConfigurationError):
            registry.register_country("Bad", [
                LeagueConfig(tier=1, name="Top", promotion_spots=1),
                LeagueConfig(tier=2, name="Bottom"),
            ])
        assert "Bad" not in registry

    def test_bottom_tier_relegation_rejected(self):
        registry = LeagueRegistry()
        with pytest.raises(ConfigurationError):
            registry.register_country("Bad", [
                LeagueConfig(tier=1, name="Top", relegation_spots=2),
                LeagueConfig(tier=2, name="Bottom", promotion_spots=2, relegation_spots=1),
            ])

    def test_gaps_and_duplicates_rejected(self):
        registry = LeagueRegistry()
        with pytest.raises(ConfigurationError):
            registry.register_country("Gap", [LeagueConfig(tier=1, name="A"), LeagueConfig(tier=3, name="C")])
        with pytest.raises(ConfigurationError):
            registry.register_country("Dup", [LeagueConfig(tier=1, name="A"), LeagueConfig(tier=1, name="B")])
        with pytest.raises(ConfigurationError):
            registry.register_country("Empty", [])

    def test_negative_spots_rejected(self):
        with pytest.raises(ConfigurationError):
            LeagueConfig(tier=2, name="Neg", playoff_spots=-1).validate()

    def test_missing_config_lookup(self):
        registry = build_default_registry({"Testland": None})
        with pytest.raises(ConfigurationError):
            registry.get("Testland", 4)
        with pytest.raises(ConfigurationError):
            registry.tiers("Atlantis")

    def test_table_size_check(self):
        config = LeagueConfig(tier=2, name="Mid", promotion_spots=2, relegation_spots=3, playoff_spots=4)
        config.validate_table_size(10)
        with pytest.raises(ConfigurationError):
            config.validate_table_size(8)

    def test_config_is_immutable(self):
        config = LeagueConfig(tier=1, name="Top")
        with pytest.raises(Exception):
            config.relegation_spots = 4


# ═══════════════════════════════════════════════════════════════
# TEAMS & SAMPLE WORLD
# ═══════════════════════════════════════════════════════════════

class TestTeams:
    def test_registry_lookup(self):
        teams = TeamRegistry([Team(team_id="a", name="Alpha", country="X", tier=1)])
        assert teams.get("a").name == "Alpha"
        assert "a" in teams
        with pytest.raises(TeamNotFoundError):
            teams.get("missing")

    def test_duplicate_team_rejected(self):
        teams = TeamRegistry([Team(team_id="a", name="Alpha", country="X", tier=1)])
        with pytest.raises(ConfigurationError):
            teams.add(Team(team_id="a", name="Again", country="X", tier=2))

    def test_sample_world(self):
        registry, teams = build_world()
        assert registry.countries() == list(COUNTRY_TIER_NAMES)
        assert len(teams) == 60
        for country in COUNTRY_TIER_NAMES:
            for tier in (1, 2, 3):
                assert len(teams.in_tier(country, tier)) == 10
        ids = [t.team_id for t in teams]
        assert len(ids) == len(set(ids))

    def test_sample_world_unknown_country(self):
        with pytest.raises(ConfigurationError):
            build_world(["Atlantis"])
