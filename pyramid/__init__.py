"""
Pyramid League Engine
"""

from .errors import (
    LeagueError,
    ConfigurationError,
    SeasonStateError,
    TeamNotFoundError,
    FixtureNotFoundError,
    InvalidResultError,
)
from .models import Team, TeamRegistry
from .league_config import (
    LeagueConfig,
    LeagueRegistry,
    build_default_registry,
    default_league_configs,
    POINTS_FOR_WIN,
    POINTS_FOR_DRAW,
    POINTS_FOR_LOSS,
    FORM_LENGTH,
    MATCHDAY_INTERVAL_DAYS,
)
from .fixtures import Fixture, MatchResult, generate_fixtures, build_calendar, calculate_match_date
from .table import TableEntry, VenueRecord, standings_sort_key, sort_table, initialize_table, record_result
from .promotion_relegation import (
    TierMovement,
    PlayoffCandidate,
    PromotionRelegationResult,
    partition_table,
    process_promotion_relegation,
)
from .season import LeagueInstance, LeagueStatus, Season, SeasonController
from .world_data import build_world, build_team_registry, COUNTRY_TIER_NAMES

__all__ = [
    "LeagueError",
    "ConfigurationError",
    "SeasonStateError",
    "TeamNotFoundError",
    "FixtureNotFoundError",
    "InvalidResultError",
    "Team",
    "TeamRegistry",
    "LeagueConfig",
    "LeagueRegistry",
    "build_default_registry",
    "default_league_configs",
    "POINTS_FOR_WIN",
    "POINTS_FOR_DRAW",
    "POINTS_FOR_LOSS",
    "FORM_LENGTH",
    "MATCHDAY_INTERVAL_DAYS",
    "Fixture",
    "MatchResult",
    "generate_fixtures",
    "build_calendar",
    "calculate_match_date",
    "TableEntry",
    "VenueRecord",
    "standings_sort_key",
    "sort_table",
    "initialize_table",
    "record_result",
    "TierMovement",
    "PlayoffCandidate",
    "PromotionRelegationResult",
    "partition_table",
    "process_promotion_relegation",
    "LeagueInstance",
    "LeagueStatus",
    "Season",
    "SeasonController",
    "build_world",
    "build_team_registry",
    "COUNTRY_TIER_NAMES",
]
