"""
Multi-Country Season Orchestrator
=================================

Owns one LeagueInstance per (country, tier) for a season and walks it
through not_started -> active -> complete.

Each league runs its own double round-robin. ``advance_matchday`` moves every
league forward together; once every league in every country has played its
last matchday the season ends and promotion/relegation runs per country.

The current season lives on the controller, never in a module global, so
independent simulations can coexist in one process.
"""

import copy
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional

from pyramid.errors import ConfigurationError, SeasonStateError
from pyramid.fixtures import Fixture, MatchResult, build_calendar, generate_fixtures
from pyramid.league_config import LeagueConfig, LeagueRegistry
from pyramid.models import TeamRegistry
from pyramid.promotion_relegation import (
    PromotionRelegationResult, partition_table, process_promotion_relegation,
)
from pyramid.table import TableEntry, initialize_table, record_result

_log = logging.getLogger("pyramid.season")


# ═══════════════════════════════════════════════════════════════
# LEAGUE INSTANCE
# ═══════════════════════════════════════════════════════════════

@dataclass
class LeagueInstance:
    """One country's tier for one season."""
    country: str
    config: LeagueConfig
    team_ids: List[str]
    table: List[TableEntry]
    fixtures: List[Fixture]
    results: List[MatchResult] = field(default_factory=list)
    matchday: int = 0
    is_complete: bool = False

    @property
    def tier(self) -> int:
        return self.config.tier

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def total_matchdays(self) -> int:
        return 2 * (len(self.team_ids) - 1)

    def entry_for(self, team_id: str) -> Optional[TableEntry]:
        for entry in self.table:
            if entry.team_id == team_id:
                return entry
        return None

    def fixtures_for_matchday(self, matchday: int) -> List[Fixture]:
        return [f for f in self.fixtures if f.matchday == matchday]

    def unplayed_fixtures(self) -> List[Fixture]:
        return [f for f in self.fixtures if not f.played]

    def next_fixtures(self) -> List[Fixture]:
        """Unplayed fixtures of the upcoming matchday."""
        if self.matchday >= self.total_matchdays:
            return []
        return [f for f in self.fixtures_for_matchday(self.matchday + 1) if not f.played]

    def summary(self) -> dict:
        return {
            "name": self.name,
            "matchday": self.matchday,
            "total_matchdays": self.total_matchdays,
            "is_complete": self.is_complete,
            "games_played": len(self.results),
            "total_games": len(self.fixtures),
        }


@dataclass
class LeagueStatus:
    """A sorted table cut into promotion/relegation bands."""
    country: str
    tier: int
    automatic_promotion: List[TableEntry]
    promotion_playoff: List[TableEntry]
    safe: List[TableEntry]
    relegation_playoff: List[TableEntry]
    automatic_relegation: List[TableEntry]

    def to_dict(self) -> dict:
        bands = ("automatic_promotion", "promotion_playoff", "safe",
                 "relegation_playoff", "automatic_relegation")
        result = {"country": self.country, "tier": self.tier}
        for band in bands:
            result[band] = [e.to_dict() for e in getattr(self, band)]
        return result


@dataclass
class Season:
    year: int
    countries: Dict[str, Dict[int, LeagueInstance]] = field(default_factory=dict)
    is_active: bool = False
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    promotion_results: Dict[str, PromotionRelegationResult] = field(default_factory=dict)

    def league(self, country: str, tier: int) -> LeagueInstance:
        league = self.countries.get(country, {}).get(tier)
        if league is None:
            raise ConfigurationError(f"No league for {country} tier {tier} in season {self.year}")
        return league

    def all_leagues(self) -> List[LeagueInstance]:
        return [lg for leagues in self.countries.values() for lg in leagues.values()]


# ═══════════════════════════════════════════════════════════════
# CONTROLLER
# ═══════════════════════════════════════════════════════════════

class SeasonController:
    """Runs seasons for every country in a LeagueRegistry."""

    def __init__(self, registry: LeagueRegistry, teams: TeamRegistry,
                 season_start: Optional[date] = None):
        self.registry = registry
        self.teams = teams
        self.season_start = season_start
        self.season: Optional[Season] = None
        self.history: List[Season] = []

    @property
    def phase(self) -> str:
        if self.season is None:
            return "not_started"
        return "active" if self.season.is_active else "complete"

    # ── lifecycle ──────────────────────────────────────────────

    def start_season(self, year: int) -> Season:
        if self.season is not None and self.season.is_active:
            raise SeasonStateError(f"Season {self.season.year} is still active")

        start = self.season_start or date.today()
        season = Season(year=year)
        for country in self.registry.countries():
            season.countries[country] = self._build_country(country, start)

        season.is_active = True
        season.started_at = datetime.now()
        self.season = season
        self.history.append(season)

        league_count = len(season.all_leagues())
        _log.info(f"Started {year} season: {league_count} leagues across {len(season.countries)} countries")
        return season

    def _build_country(self, country: str, start: date) -> Dict[int, LeagueInstance]:
        tiers = self.registry.tiers(country)
        stray = [t for t in self.teams.by_country(country) if t.tier not in tiers]
        if stray:
            raise ConfigurationError(
                f"No league configured for {country} tier {stray[0].tier} ({stray[0].name})"
            )

        leagues: Dict[int, LeagueInstance] = {}
        for tier in tiers:
            config = self.registry.get(country, tier)
            team_ids = [t.team_id for t in self.teams.in_tier(country, tier)]
            config.validate_table_size(len(team_ids))
            leagues[tier] = LeagueInstance(
                country=country,
                config=config,
                team_ids=team_ids,
                table=initialize_table(team_ids, self.teams),
                fixtures=generate_fixtures(team_ids, start),
            )
        return leagues

    def advance_matchday(self) -> dict:
        season = self._require_active()

        for league in season.all_leagues():
            if league.matchday < league.total_matchdays:
                league.matchday += 1
            if league.matchday >= league.total_matchdays:
                league.is_complete = True

        if all(lg.is_complete for lg in season.all_leagues()):
            self.end_season()

        return self.get_current_season_status()

    def end_season(self) -> Dict[str, PromotionRelegationResult]:
        if self.season is None or not self.season.is_active:
            raise SeasonStateError("No active season to end")

        season = self.season
        for country, leagues in season.countries.items():
            season.promotion_results[country] = process_promotion_relegation(
                country, leagues, self.registry, self.teams,
            )

        season.is_active = False
        season.ended_at = datetime.now()
        moved = sum(len(r.movements) for r in season.promotion_results.values())
        _log.info(f"Ended {season.year} season: {moved} tier movements")
        return season.promotion_results

    # ── results ────────────────────────────────────────────────

    def record_result(self, country: str, tier: int, home_id: str, away_id: str,
                      home_goals: int, away_goals: int) -> MatchResult:
        season = self._require_active()
        league = season.league(country, tier)
        return record_result(season, league, home_id, away_id, home_goals, away_goals)

    # ── views ──────────────────────────────────────────────────

    def get_league_table(self, country: str, tier: int) -> Optional[List[TableEntry]]:
        league = self._active_league(country, tier)
        if league is None:
            return None
        return copy.deepcopy(league.table)

    def get_league_status(self, country: str, tier: int) -> Optional[LeagueStatus]:
        league = self._active_league(country, tier)
        if league is None:
            return None
        bands = partition_table(copy.deepcopy(league.table), league.config)
        return LeagueStatus(country=country, tier=tier, **bands)

    def get_final_table(self, country: str, tier: int) -> Optional[List[TableEntry]]:
        """Standings of the most recently completed season, or None."""
        league = self._completed_league(country, tier)
        if league is None:
            return None
        return copy.deepcopy(league.table)

    def get_final_status(self, country: str, tier: int) -> Optional[LeagueStatus]:
        league = self._completed_league(country, tier)
        if league is None:
            return None
        bands = partition_table(copy.deepcopy(league.table), league.config)
        return LeagueStatus(country=country, tier=tier, **bands)

    def get_current_season_status(self) -> Optional[dict]:
        season = self.season
        if season is None:
            return None
        return {
            "year": season.year,
            "is_active": season.is_active,
            "phase": self.phase,
            "started_at": season.started_at.isoformat() if season.started_at else None,
            "ended_at": season.ended_at.isoformat() if season.ended_at else None,
            "countries": {
                country: {tier: league.summary() for tier, league in leagues.items()}
                for country, leagues in season.countries.items()
            },
        }

    def next_fixtures(self, country: str, tier: int) -> List[Fixture]:
        return self._require_active().league(country, tier).next_fixtures()

    def get_calendar(self, country: str, tier: int) -> List[dict]:
        return build_calendar(self._require_season().league(country, tier).fixtures)

    def get_results(self, country: str, tier: int) -> List[MatchResult]:
        return list(self._require_season().league(country, tier).results)

    def last_promotion_results(self) -> Dict[str, PromotionRelegationResult]:
        for season in reversed(self.history):
            if season.promotion_results:
                return season.promotion_results
        return {}

    # ── helpers ────────────────────────────────────────────────

    def _require_season(self) -> Season:
        if self.season is None:
            raise SeasonStateError("No season has been started")
        return self.season

    def _require_active(self) -> Season:
        if self.season is None or not self.season.is_active:
            raise SeasonStateError("No active season")
        return self.season

    def _active_league(self, country: str, tier: int) -> Optional[LeagueInstance]:
        if self.season is None or not self.season.is_active:
            return None
        return self.season.countries.get(country, {}).get(tier)

    def _completed_league(self, country: str, tier: int) -> Optional[LeagueInstance]:
        for season in reversed(self.history):
            if season.ended_at is not None:
                return season.countries.get(country, {}).get(tier)
        return None
