"""
Promotion/Relegation Tests
==========================

End-of-season tier movements for a 3-tier country, playoff candidates and
the double-close guard.
"""

from datetime import date

import pytest

from pyramid import (
    LeagueConfig,
    LeagueRegistry,
    SeasonController,
    SeasonStateError,
    Team,
    TeamRegistry,
    partition_table,
    process_promotion_relegation,
)
from pyramid.table import TableEntry


TIER_SIZE = 10


def _three_tier_registry() -> LeagueRegistry:
    registry = LeagueRegistry()
    registry.register_country("Testland", [
        LeagueConfig(tier=1, name="League One", promotion_spots=0, relegation_spots=3),
        LeagueConfig(tier=2, name="League Two", promotion_spots=2, relegation_spots=3, playoff_spots=4),
        LeagueConfig(tier=3, name="League Three", promotion_spots=2, relegation_spots=0, playoff_spots=4),
    ])
    return registry


def _three_tier_teams() -> TeamRegistry:
    teams = TeamRegistry()
    for tier in (1, 2, 3):
        for i in range(TIER_SIZE):
            teams.add(Team(team_id=f"t{tier}_{i}", name=f"Team {tier}-{i:02d}", country="Testland", tier=tier))
    return teams


def _play_ranked_season(controller: SeasonController):
    """Every fixture is won by the team listed earlier in its tier's roster."""
    season = controller.start_season(2025)
    for league in season.all_leagues():
        rank = {team_id: idx for idx, team_id in enumerate(league.team_ids)}
        for fixture in list(league.fixtures):
            home_better = rank[fixture.home_id] < rank[fixture.away_id]
            controller.record_result(
                league.country, league.tier, fixture.home_id, fixture.away_id,
                2 if home_better else 0, 0 if home_better else 2,
            )
    return season


# ═══════════════════════════════════════════════════════════════
# THREE-TIER SCENARIO
# ═══════════════════════════════════════════════════════════════

class TestThreeTierCountry:
    def _finished(self):
        controller = SeasonController(_three_tier_registry(), _three_tier_teams(), season_start=date(2025, 8, 9))
        season = _play_ranked_season(controller)
        for league in season.all_leagues():
            assert [e.team_id for e in league.table] == league.team_ids
        controller.end_season()
        return controller, season

    def test_bottom_three_of_tier_one_relegated(self):
        controller, _ = self._finished()
        teams = controller.teams
        relegated = {f"t1_{i}" for i in (7, 8, 9)}
        for i in range(TIER_SIZE):
            expected = 2 if f"t1_{i}" in relegated else 1
            assert teams.get(f"t1_{i}").tier == expected

    def test_top_two_of_tier_two_promoted(self):
        controller, _ = self._finished()
        teams = controller.teams
        assert teams.get("t2_0").tier == 1
        assert teams.get("t2_1").tier == 1
        for i in range(2, 7):
            assert teams.get(f"t2_{i}").tier == 2
        for i in (7, 8, 9):
            assert teams.get(f"t2_{i}").tier == 3

    def test_tier_three_promotion_only(self):
        controller, _ = self._finished()
        teams = controller.teams
        assert [teams.get(f"t3_{i}").tier for i in range(TIER_SIZE)] == [2, 2] + [3] * 8

    def test_movement_report(self):
        _, season = self._finished()
        result = season.promotion_results["Testland"]
        assert len(result.relegated_teams) == 6
        assert len(result.promoted_teams) == 4
        assert {(m.from_tier, m.to_tier) for m in result.relegated_teams} == {(1, 2), (2, 3)}
        assert all(m.reason == "promoted" for m in result.promoted_teams)
        assert result.new_tier_assignments["t2_0"] == 1
        assert result.new_tier_assignments["t1_9"] == 2

        payload = result.to_dict()
        assert payload["country"] == "Testland"
        assert len(payload["movements"]) == 10

    def test_playoff_teams_identified_not_moved(self):
        controller, season = self._finished()
        candidates = season.promotion_results["Testland"].playoff_candidates
        by_tier = {}
        for c in candidates:
            by_tier.setdefault(c.tier, []).append(c)
        assert [c.position for c in by_tier[2]] == [3, 4, 5, 6]
        assert [c.position for c in by_tier[3]] == [3, 4, 5, 6]
        assert 1 not in by_tier
        assert all(c.kind == "promotion_playoff" for c in candidates)
        for c in by_tier[3]:
            assert controller.teams.get(c.team_id).tier == 3

    def test_second_end_fails_without_second_pass(self):
        controller, season = self._finished()
        assignments = controller.teams.tier_assignments()
        report = season.promotion_results["Testland"]
        with pytest.raises(SeasonStateError):
            controller.end_season()
        assert controller.teams.tier_assignments() == assignments
        assert season.promotion_results["Testland"] is report

    def test_next_season_uses_new_tiers(self):
        controller, _ = self._finished()
        # 2 promoted vs 3 relegated leaves tier 1 one short; top up to keep it even
        controller.teams.get("t2_2").tier = 1
        controller.teams.get("t3_2").tier = 2
        season = controller.start_season(2026)
        top = season.league("Testland", 1)
        assert "t2_0" in top.team_ids
        assert "t1_9" not in top.team_ids
        assert len(top.team_ids) == TIER_SIZE


# ═══════════════════════════════════════════════════════════════
# PROCESSOR IN ISOLATION
# ═══════════════════════════════════════════════════════════════

class _FinishedLeague:
    def __init__(self, config, table):
        self.config = config
        self.table = table


class TestProcessor:
    def _table(self, prefix, size):
        return [
            TableEntry(team_id=f"{prefix}{i}", team_name=f"{prefix}{i}", position=i + 1)
            for i in range(size)
        ]

    def test_moves_once_even_when_tier_field_changes(self):
        registry = LeagueRegistry()
        registry.register_country("Duo", [
            LeagueConfig(tier=1, name="Upper", relegation_spots=1),
            LeagueConfig(tier=2, name="Lower", promotion_spots=1),
        ])
        teams = TeamRegistry(
            [Team(team_id=f"u{i}", name=f"u{i}", country="Duo", tier=1) for i in range(4)]
            + [Team(team_id=f"l{i}", name=f"l{i}", country="Duo", tier=2) for i in range(4)]
        )
        leagues = {
            1: _FinishedLeague(registry.get("Duo", 1), self._table("u", 4)),
            2: _FinishedLeague(registry.get("Duo", 2), self._table("l", 4)),
        }
        result = process_promotion_relegation("Duo", leagues, registry, teams)
        assert teams.get("u3").tier == 2
        assert teams.get("l0").tier == 1
        assert len(result.movements) == 2

    def test_relegation_playoff_band(self):
        config = LeagueConfig(tier=1, name="Upper", relegation_spots=2, relegation_playoff_spots=1)
        bands = partition_table(self._table("u", 8), config)
        assert [e.team_id for e in bands["relegation_playoff"]] == ["u5"]
        assert [e.team_id for e in bands["automatic_relegation"]] == ["u6", "u7"]
        assert len(bands["safe"]) == 5

    def test_bands_cover_table_without_overlap(self):
        config = LeagueConfig(tier=2, name="Mid", promotion_spots=2, relegation_spots=3,
                              playoff_spots=4, relegation_playoff_spots=1)
        table = self._table("m", 10)
        bands = partition_table(table, config)
        flattened = [e.team_id for band in bands.values() for e in band]
        assert sorted(flattened) == sorted(e.team_id for e in table)
        assert len(flattened) == len(set(flattened))
