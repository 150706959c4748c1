"""
Promotion/Relegation Engine
===========================

Handles end-of-season tier movements within one country's pyramid.

For every tier, top to bottom:
  - Bottom ``relegation_spots`` teams move down one tier (not the bottom tier)
  - Top ``promotion_spots`` teams move up one tier (not the top tier)
  - Promotion-playoff and relegation-playoff places are reported as
    candidates only; playoff resolution happens outside the engine

Tier changes are written straight onto the Team records and carry into the
next ``start_season``.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from pyramid.league_config import LeagueConfig, LeagueRegistry
from pyramid.models import TeamRegistry
from pyramid.table import TableEntry

_log = logging.getLogger("pyramid.promotion_relegation")


# ═══════════════════════════════════════════════════════════════
# DATA STRUCTURES
# ═══════════════════════════════════════════════════════════════

@dataclass
class TierMovement:
    """A single team moving between tiers."""
    team_id: str
    team_name: str
    from_tier: int
    to_tier: int
    reason: str  # "promoted" | "relegated"


@dataclass
class PlayoffCandidate:
    """A team finishing in a playoff place. Not moved by this engine."""
    team_id: str
    team_name: str
    tier: int
    position: int
    kind: str  # "promotion_playoff" | "relegation_playoff"


@dataclass
class PromotionRelegationResult:
    """Complete pro/rel result for one country and season."""
    country: str
    movements: List[TierMovement] = field(default_factory=list)
    playoff_candidates: List[PlayoffCandidate] = field(default_factory=list)
    new_tier_assignments: Dict[str, int] = field(default_factory=dict)

    @property
    def promoted_teams(self) -> List[TierMovement]:
        return [m for m in self.movements if m.to_tier < m.from_tier]

    @property
    def relegated_teams(self) -> List[TierMovement]:
        return [m for m in self.movements if m.to_tier > m.from_tier]

    def to_dict(self) -> dict:
        return {
            "country": self.country,
            "movements": [
                {
                    "team_id": m.team_id,
                    "team_name": m.team_name,
                    "from_tier": m.from_tier,
                    "to_tier": m.to_tier,
                    "reason": m.reason,
                }
                for m in self.movements
            ],
            "playoff_candidates": [
                {
                    "team_id": c.team_id,
                    "team_name": c.team_name,
                    "tier": c.tier,
                    "position": c.position,
                    "kind": c.kind,
                }
                for c in self.playoff_candidates
            ],
            "new_tier_assignments": dict(self.new_tier_assignments),
        }


# ═══════════════════════════════════════════════════════════════
# TABLE BANDS
# ═══════════════════════════════════════════════════════════════

def partition_table(table: List[TableEntry], config: LeagueConfig) -> Dict[str, List[TableEntry]]:
    """Slice a sorted table into the five disjoint promotion/relegation bands."""
    n = len(table)
    promo_cut = min(config.promotion_spots, n)
    playoff_cut = min(promo_cut + config.playoff_spots, n)
    releg_cut = max(n - config.relegation_spots, playoff_cut)
    releg_playoff_cut = max(releg_cut - config.relegation_playoff_spots, playoff_cut)
    return {
        "automatic_promotion": table[:promo_cut],
        "promotion_playoff": table[promo_cut:playoff_cut],
        "safe": table[playoff_cut:releg_playoff_cut],
        "relegation_playoff": table[releg_playoff_cut:releg_cut],
        "automatic_relegation": table[releg_cut:],
    }


# ═══════════════════════════════════════════════════════════════
# MAIN ENGINE
# ═══════════════════════════════════════════════════════════════

def process_promotion_relegation(
    country: str,
    leagues: Dict,
    registry: LeagueRegistry,
    teams: TeamRegistry,
) -> PromotionRelegationResult:
    """Apply one country's end-of-season tier movements.

    Args:
        country: country whose pyramid is being processed
        leagues: tier_number -> league instance (needs ``config`` and a sorted ``table``)
        registry: tier rules, used to find the top and bottom tiers
        teams: Team arena; moved teams have their ``tier`` rewritten

    Returns:
        PromotionRelegationResult with every movement and playoff candidate.
    """
    result = PromotionRelegationResult(country=country)
    top_tier = registry.top_tier(country)
    bottom_tier = registry.bottom_tier(country)

    for tier in sorted(leagues):
        league = leagues[tier]
        config = league.config
        bands = partition_table(league.table, config)

        if tier < bottom_tier and config.relegation_spots > 0:
            for entry in bands["automatic_relegation"]:
                _move(result, teams, entry, tier, tier + 1, "relegated")

        if tier > top_tier and config.promotion_spots > 0:
            for entry in bands["automatic_promotion"]:
                _move(result, teams, entry, tier, tier - 1, "promoted")

        if tier > top_tier:
            for entry in bands["promotion_playoff"]:
                result.playoff_candidates.append(PlayoffCandidate(
                    entry.team_id, entry.team_name, tier, entry.position, "promotion_playoff",
                ))
        if tier < bottom_tier:
            for entry in bands["relegation_playoff"]:
                result.playoff_candidates.append(PlayoffCandidate(
                    entry.team_id, entry.team_name, tier, entry.position, "relegation_playoff",
                ))

    result.new_tier_assignments = {t.team_id: t.tier for t in teams.by_country(country)}
    return result


def _move(result: PromotionRelegationResult, teams: TeamRegistry, entry: TableEntry,
          from_tier: int, to_tier: int, reason: str):
    teams.get(entry.team_id).tier = to_tier
    result.movements.append(TierMovement(
        team_id=entry.team_id,
        team_name=entry.team_name,
        from_tier=from_tier,
        to_tier=to_tier,
        reason=reason,
    ))
    verb = "promoted" if to_tier < from_tier else "relegated"
    _log.info(f"{result.country}: {entry.team_name} {verb} from Tier {from_tier} to Tier {to_tier}")
