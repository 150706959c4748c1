"""
League Pyramid Configuration
============================

Static per-country, per-tier rules for the promotion/relegation pyramid.
Independent of any running season: a ``LeagueRegistry`` is built once and
rejects invalid tier layouts at registration time.

Default pyramid (every country):

Tier 1:
  - No promotion (top flight)
  - 7th flagged for the relegation playoff, bottom 3 relegated
Tier 2:
  - Top 3 promoted, 4th-7th flagged for the promotion playoff
  - Bottom 3 relegated
Tier 3:
  - Top 3 promoted, 4th-7th flagged for the promotion playoff
  - No relegation (bottom tier)

Promotion and relegation counts match across each boundary so tier sizes
stay constant from season to season; playoff places are informational.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from pyramid.errors import ConfigurationError


# ═══════════════════════════════════════════════════════════════
# ENGINE CONSTANTS
# ═══════════════════════════════════════════════════════════════

POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1
POINTS_FOR_LOSS = 0

FORM_LENGTH = 5               # results kept in a team's form guide
MATCHDAY_INTERVAL_DAYS = 7    # one matchday per week


# ═══════════════════════════════════════════════════════════════
# TIER CONFIG
# ═══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LeagueConfig:
    """Rules for a single tier of one country's pyramid."""
    tier: int
    name: str
    promotion_spots: int = 0          # auto-promoted to tier - 1
    relegation_spots: int = 0         # auto-relegated to tier + 1
    playoff_spots: int = 0            # promotion playoff places below the promotion cut
    relegation_playoff_spots: int = 0  # places directly above the relegation cut

    @property
    def reserved_spots(self) -> int:
        return (self.promotion_spots + self.playoff_spots
                + self.relegation_playoff_spots + self.relegation_spots)

    def validate(self):
        if self.tier < 1:
            raise ConfigurationError(f"Tier must be >= 1, got {self.tier}")
        for label in ("promotion_spots", "relegation_spots", "playoff_spots", "relegation_playoff_spots"):
            if getattr(self, label) < 0:
                raise ConfigurationError(f"{self.name}: {label} cannot be negative")
        if self.tier == 1 and self.promotion_spots:
            raise ConfigurationError(f"{self.name}: the top tier cannot have promotion spots")

    def validate_table_size(self, team_count: int):
        """Spot counts must fit inside a table of ``team_count`` rows."""
        if self.reserved_spots > team_count:
            raise ConfigurationError(
                f"{self.name}: {self.reserved_spots} promotion/playoff/relegation spots "
                f"exceed a table of {team_count} teams"
            )


# ═══════════════════════════════════════════════════════════════
# REGISTRY
# ═══════════════════════════════════════════════════════════════

class LeagueRegistry:
    """Validated tier configurations for every country."""

    def __init__(self):
        self._countries: Dict[str, Dict[int, LeagueConfig]] = {}

    def register_country(self, country: str, configs: Iterable[LeagueConfig]):
        by_tier: Dict[int, LeagueConfig] = {}
        for config in configs:
            config.validate()
            if config.tier in by_tier:
                raise ConfigurationError(f"{country}: tier {config.tier} configured twice")
            by_tier[config.tier] = config

        if not by_tier:
            raise ConfigurationError(f"{country}: at least one tier is required")
        tiers = sorted(by_tier)
        if tiers != list(range(1, len(tiers) + 1)):
            raise ConfigurationError(f"{country}: tiers must be contiguous from 1, got {tiers}")
        bottom = by_tier[tiers[-1]]
        if bottom.relegation_spots:
            raise ConfigurationError(f"{bottom.name}: the bottom tier cannot have relegation spots")

        self._countries[country] = {t: by_tier[t] for t in tiers}

    def __contains__(self, country: str) -> bool:
        return country in self._countries

    def countries(self) -> List[str]:
        return list(self._countries)

    def tiers(self, country: str) -> List[int]:
        return list(self._country(country))

    def get(self, country: str, tier: int) -> LeagueConfig:
        config = self._country(country).get(tier)
        if config is None:
            raise ConfigurationError(f"No league configured for {country} tier {tier}")
        return config

    def top_tier(self, country: str) -> int:
        return min(self._country(country))

    def bottom_tier(self, country: str) -> int:
        return max(self._country(country))

    def _country(self, country: str) -> Dict[int, LeagueConfig]:
        if country not in self._countries:
            raise ConfigurationError(f"No leagues configured for {country}")
        return self._countries[country]


# ═══════════════════════════════════════════════════════════════
# DEFAULT PYRAMID
# ═══════════════════════════════════════════════════════════════

def default_league_configs(tier_names: Optional[List[str]] = None) -> List[LeagueConfig]:
    """The standard three-tier layout, optionally with country-specific names."""
    names = tier_names or ["Premier Division", "First Division", "Second Division"]
    return [
        LeagueConfig(tier=1, name=names[0], relegation_spots=3, relegation_playoff_spots=1),
        LeagueConfig(tier=2, name=names[1], promotion_spots=3, relegation_spots=3, playoff_spots=4),
        LeagueConfig(tier=3, name=names[2], promotion_spots=3, playoff_spots=4),
    ]


def build_default_registry(countries: Dict[str, List[str]]) -> LeagueRegistry:
    """Register the default pyramid for each ``country -> [tier names]``."""
    registry = LeagueRegistry()
    for country, tier_names in countries.items():
        registry.register_country(country, default_league_configs(tier_names))
    return registry
