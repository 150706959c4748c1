"""
League table maintenance.

Every recorded result updates both entries, appends to the league's result
log, marks the matching fixture played and re-sorts the table in place.

Ordering: points, goal difference, goals scored (all descending), then team
name ascending. Head-to-head is not used as a tie-break yet; equal teams on
the first three keys are separated alphabetically.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from pyramid.errors import FixtureNotFoundError, InvalidResultError, SeasonStateError, TeamNotFoundError
from pyramid.fixtures import Fixture, MatchResult
from pyramid.league_config import FORM_LENGTH, POINTS_FOR_DRAW, POINTS_FOR_LOSS, POINTS_FOR_WIN
from pyramid.models import TeamRegistry

_log = logging.getLogger("pyramid.table")


@dataclass
class VenueRecord:
    """Home or away split of a team's record."""
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0

    @property
    def played(self) -> int:
        return self.won + self.drawn + self.lost

    @property
    def points(self) -> int:
        return self.won * POINTS_FOR_WIN + self.drawn * POINTS_FOR_DRAW + self.lost * POINTS_FOR_LOSS

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> dict:
        return {
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
        }


@dataclass
class TableEntry:
    team_id: str
    team_name: str
    position: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    form: List[str] = field(default_factory=list)
    home: VenueRecord = field(default_factory=VenueRecord)
    away: VenueRecord = field(default_factory=VenueRecord)

    @property
    def played(self) -> int:
        return self.won + self.drawn + self.lost

    @property
    def points(self) -> int:
        return self.won * POINTS_FOR_WIN + self.drawn * POINTS_FOR_DRAW + self.lost * POINTS_FOR_LOSS

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def record_result(self, goals_for: int, goals_against: int, is_home: bool) -> str:
        """Apply one match to this entry. Returns the form code (W/D/L)."""
        venue = self.home if is_home else self.away
        if goals_for > goals_against:
            code = "W"
            self.won += 1
            venue.won += 1
        elif goals_for == goals_against:
            code = "D"
            self.drawn += 1
            venue.drawn += 1
        else:
            code = "L"
            self.lost += 1
            venue.lost += 1

        self.goals_for += goals_for
        self.goals_against += goals_against
        venue.goals_for += goals_for
        venue.goals_against += goals_against

        self.form.append(code)
        self.form = self.form[-FORM_LENGTH:]
        return code

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "team_id": self.team_id,
            "team_name": self.team_name,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_difference": self.goal_difference,
            "points": self.points,
            "form": list(self.form),
            "home": self.home.to_dict(),
            "away": self.away.to_dict(),
        }


# ═══════════════════════════════════════════════════════════════
# ORDERING
# ═══════════════════════════════════════════════════════════════

def standings_sort_key(entry: TableEntry) -> tuple:
    return (-entry.points, -entry.goal_difference, -entry.goals_for, entry.team_name)


def sort_table(table: List[TableEntry]) -> List[TableEntry]:
    """Sort in place and rewrite 1-based positions."""
    table.sort(key=standings_sort_key)
    for idx, entry in enumerate(table):
        entry.position = idx + 1
    return table


def initialize_table(team_ids: List[str], teams: TeamRegistry) -> List[TableEntry]:
    """Zeroed entries in roster order."""
    return [
        TableEntry(team_id=team_id, team_name=teams.get(team_id).name, position=idx + 1)
        for idx, team_id in enumerate(team_ids)
    ]


# ═══════════════════════════════════════════════════════════════
# RESULT INGESTION
# ═══════════════════════════════════════════════════════════════

def _find_entry(table: List[TableEntry], team_id: str) -> Optional[TableEntry]:
    for entry in table:
        if entry.team_id == team_id:
            return entry
    return None


def _find_open_fixture(fixtures: List[Fixture], home_id: str, away_id: str) -> Optional[Fixture]:
    for fixture in fixtures:
        if not fixture.played and fixture.home_id == home_id and fixture.away_id == away_id:
            return fixture
    return None


def _validate_goals(home_goals, away_goals):
    for goals in (home_goals, away_goals):
        if isinstance(goals, bool) or not isinstance(goals, int) or goals < 0:
            raise InvalidResultError(f"Goals must be non-negative integers, got {goals!r}")


def record_result(season, league, home_id: str, away_id: str, home_goals: int, away_goals: int) -> MatchResult:
    """Ingest a final score into ``league``'s table.

    All checks run before anything is mutated, so a rejected result leaves
    the table, fixtures and result log exactly as they were.

    Beyond an active season and both teams being in the table, the pairing
    must still have an unplayed fixture: a third meeting of the same home
    and away sides is rejected rather than counted.

    Raises:
        SeasonStateError: the season is not active
        InvalidResultError: bad scoreline or a team playing itself
        TeamNotFoundError: either team has no entry in this table
        FixtureNotFoundError: the pairing has no unplayed fixture left
    """
    if season is None or not season.is_active:
        raise SeasonStateError("No active season")
    _validate_goals(home_goals, away_goals)
    if home_id == away_id:
        raise InvalidResultError(f"Team '{home_id}' cannot play itself")

    home_entry = _find_entry(league.table, home_id)
    away_entry = _find_entry(league.table, away_id)
    if home_entry is None or away_entry is None:
        raise TeamNotFoundError("Teams not found in league table")

    fixture = _find_open_fixture(league.fixtures, home_id, away_id)
    if fixture is None:
        raise FixtureNotFoundError(f"No unplayed fixture for {home_id} v {away_id}")

    home_entry.record_result(home_goals, away_goals, is_home=True)
    away_entry.record_result(away_goals, home_goals, is_home=False)

    result = MatchResult(
        home_id=home_id,
        away_id=away_id,
        home_goals=home_goals,
        away_goals=away_goals,
        matchday=league.matchday + 1,
        recorded_at=datetime.now(),
    )
    league.results.append(result)
    fixture.played = True
    fixture.result = result

    sort_table(league.table)
    _log.debug(
        f"{league.config.name}: {home_entry.team_name} {home_goals}-{away_goals} "
        f"{away_entry.team_name} (matchday {result.matchday})"
    )
    return result
