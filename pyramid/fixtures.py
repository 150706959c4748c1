"""
Double round-robin fixture generation.

Circle method: team index 0 stays fixed while indices 1..N-1 sit on a ring
of N-1 seats. In round ``r`` index 0 plays seat N-1 (round 0) or seat ``r``,
and the remaining seats are paired symmetrically around that seat, so every
team appears exactly once per round and every pair meets once per half.

The second half replays the first half's rounds in order with home and away
swapped (a mirrored double round-robin, not a reshuffled one).
Same team order in => same calendar out.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from pyramid.errors import ConfigurationError
from pyramid.league_config import MATCHDAY_INTERVAL_DAYS

_log = logging.getLogger("pyramid.fixtures")


@dataclass(frozen=True)
class MatchResult:
    """An immutable, already-final scoreline."""
    home_id: str
    away_id: str
    home_goals: int
    away_goals: int
    matchday: int
    recorded_at: datetime

    @property
    def outcome(self) -> str:
        if self.home_goals > self.away_goals:
            return "H"
        if self.home_goals < self.away_goals:
            return "A"
        return "D"

    def to_dict(self) -> dict:
        return {
            "home_team_id": self.home_id,
            "away_team_id": self.away_id,
            "home_goals": self.home_goals,
            "away_goals": self.away_goals,
            "matchday": self.matchday,
            "recorded_at": self.recorded_at.isoformat(),
        }


@dataclass
class Fixture:
    matchday: int
    home_id: str
    away_id: str
    date: date
    played: bool = False
    result: Optional[MatchResult] = None

    def to_dict(self) -> dict:
        return {
            "matchday": self.matchday,
            "home_team_id": self.home_id,
            "away_team_id": self.away_id,
            "date": self.date.isoformat(),
            "played": self.played,
            "result": self.result.to_dict() if self.result else None,
        }


def calculate_match_date(matchday: int, season_start: date) -> date:
    """Weekly cadence from the season anchor. Informational only."""
    return season_start + timedelta(days=(matchday - 1) * MATCHDAY_INTERVAL_DAYS)


def _round_pairings(num_teams: int) -> List[List[tuple]]:
    """Index pairings (home, away) for one single round-robin."""
    ring = num_teams - 1
    rounds = []
    for r in range(ring):
        seat = num_teams - 1 if r == 0 else r
        pairs = [(0, seat)]
        for i in range(1, num_teams // 2):
            home = (seat - 1 + i) % ring + 1
            away = (seat - 1 - i) % ring + 1
            pairs.append((home, away))
        rounds.append(pairs)
    return rounds


def generate_fixtures(team_ids: Sequence[str], season_start: Optional[date] = None) -> List[Fixture]:
    """
    Build the full double round-robin calendar for ``team_ids``.

    Produces 2*(N-1) matchdays of N/2 fixtures each, ordered by matchday.
    Raises ConfigurationError for an odd or too-small team list.
    """
    ids = list(team_ids)
    num_teams = len(ids)
    if num_teams < 2:
        raise ConfigurationError(f"At least 2 teams are required, got {num_teams}")
    if num_teams % 2 == 1:
        raise ConfigurationError(f"Fixture generation needs an even number of teams, got {num_teams}")
    if len(set(ids)) != num_teams:
        raise ConfigurationError("Team list contains duplicate ids")

    start = season_start or date.today()
    first_half = _round_pairings(num_teams)
    half_length = len(first_half)

    fixtures: List[Fixture] = []
    for round_idx in range(2 * half_length):
        matchday = round_idx + 1
        match_date = calculate_match_date(matchday, start)
        second_half = round_idx >= half_length
        for home, away in first_half[round_idx % half_length]:
            if second_half:
                home, away = away, home
            fixtures.append(Fixture(
                matchday=matchday,
                home_id=ids[home],
                away_id=ids[away],
                date=match_date,
            ))

    _log.debug(f"Generated {len(fixtures)} fixtures over {2 * half_length} matchdays for {num_teams} teams")
    return fixtures


def build_calendar(fixtures: Sequence[Fixture]) -> List[Dict]:
    """Group fixtures into one calendar entry per matchday."""
    by_matchday: Dict[int, List[Fixture]] = {}
    for fixture in fixtures:
        by_matchday.setdefault(fixture.matchday, []).append(fixture)
    return [
        {
            "matchday": matchday,
            "date": day_fixtures[0].date,
            "fixtures": day_fixtures,
        }
        for matchday, day_fixtures in sorted(by_matchday.items())
    ]
