"""
Team Records
============

Teams are owned by the roster provider and addressed by a stable id.
League tables, fixtures and results only ever hold ``team_id`` strings and
resolve them through a ``TeamRegistry``, so rewriting a team's ``tier`` at
season end is visible everywhere without copying records around.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List

from pyramid.errors import ConfigurationError, TeamNotFoundError


@dataclass
class Team:
    """A club in the pyramid. ``tier`` is rewritten by promotion/relegation."""
    team_id: str
    name: str
    country: str
    tier: int

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "name": self.name,
            "country": self.country,
            "tier": self.tier,
        }


class TeamRegistry:
    """Arena of Team records keyed by ``team_id``."""

    def __init__(self, teams=None):
        self._teams: Dict[str, Team] = {}
        for team in teams or []:
            self.add(team)

    def add(self, team: Team) -> Team:
        if team.team_id in self._teams:
            raise ConfigurationError(f"Duplicate team id '{team.team_id}'")
        self._teams[team.team_id] = team
        return team

    def get(self, team_id: str) -> Team:
        team = self._teams.get(team_id)
        if team is None:
            raise TeamNotFoundError(f"Team '{team_id}' not found")
        return team

    def __contains__(self, team_id: str) -> bool:
        return team_id in self._teams

    def __iter__(self) -> Iterator[Team]:
        return iter(self._teams.values())

    def __len__(self) -> int:
        return len(self._teams)

    def countries(self) -> List[str]:
        seen: List[str] = []
        for team in self._teams.values():
            if team.country not in seen:
                seen.append(team.country)
        return seen

    def by_country(self, country: str) -> List[Team]:
        return [t for t in self._teams.values() if t.country == country]

    def in_tier(self, country: str, tier: int) -> List[Team]:
        """Teams currently assigned to ``tier``, in registration order."""
        return [t for t in self._teams.values() if t.country == country and t.tier == tier]

    def tier_assignments(self) -> Dict[str, int]:
        return {t.team_id: t.tier for t in self._teams.values()}
