"""
Sample World Rosters
====================

Two-country starter world used by the API sessions and the CLI driver.
Each country runs a 3-tier pyramid of 10 clubs per tier; the starting tier
below is only the initial assignment, promotion/relegation rewrites it.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pyramid.errors import ConfigurationError
from pyramid.league_config import LeagueRegistry, build_default_registry
from pyramid.models import Team, TeamRegistry


@dataclass(frozen=True)
class WorldClub:
    key: str
    name: str
    country: str
    tier: int


COUNTRY_TIER_NAMES: Dict[str, List[str]] = {
    "England": ["Premier Division", "Championship", "League One"],
    "Spain": ["Primera", "Segunda", "Primera RFEF"],
}


# ═══════════════════════════════════════════════════════════════
# CLUBS
# ═══════════════════════════════════════════════════════════════

_ENGLAND = {
    1: [
        ("ashford_utd", "Ashford United"), ("blackmere", "Blackmere Rovers"),
        ("carrow_city", "Carrow City"), ("dunmore", "Dunmore Athletic"),
        ("easton_park", "Easton Park"), ("fairhaven", "Fairhaven Town"),
        ("greywater", "Greywater Albion"), ("holloway", "Holloway Wanderers"),
        ("ironbridge", "Ironbridge"), ("kingsmead", "Kingsmead Forest"),
    ],
    2: [
        ("lowfield", "Lowfield Borough"), ("marston", "Marston Villa"),
        ("northgate", "Northgate County"), ("oakhurst", "Oakhurst United"),
        ("pembury", "Pembury Town"), ("queensbury", "Queensbury Rangers"),
        ("redcliffe", "Redcliffe City"), ("saltash", "Saltash Harbour"),
        ("thornbury", "Thornbury Athletic"), ("upton", "Upton Park Rovers"),
    ],
    3: [
        ("vale_royal", "Vale Royal"), ("westbrook", "Westbrook Town"),
        ("yarmouth", "Yarmouth Dockers"), ("alderley", "Alderley Edge"),
        ("brackley", "Brackley Saints"), ("colwyn", "Colwyn Bay"),
        ("darlston", "Darlston Wednesday"), ("elmbridge", "Elmbridge"),
        ("frome", "Frome Town"), ("grantham", "Grantham Rovers"),
    ],
}

_SPAIN = {
    1: [
        ("atl_costa", "Atlético Costa"), ("real_alcor", "Real Alcor"),
        ("cd_brisa", "CD Brisa"), ("deportivo_sierra", "Deportivo Sierra"),
        ("ud_estrella", "UD Estrella"), ("sd_faro", "SD Faro"),
        ("cf_granada_norte", "CF Granada Norte"), ("racing_hierro", "Racing Hierro"),
        ("real_isla", "Real Isla"), ("cd_jardin", "CD Jardín"),
    ],
    2: [
        ("ud_laguna", "UD Laguna"), ("cf_montes", "CF Montes"),
        ("real_navas", "Real Navas"), ("cd_olivar", "CD Olivar"),
        ("sd_puerto", "SD Puerto"), ("atl_quintana", "Atlético Quintana"),
        ("cf_ribera", "CF Ribera"), ("ud_salinas", "UD Salinas"),
        ("cd_torre", "CD Torre"), ("real_umbria", "Real Umbría"),
    ],
    3: [
        ("cf_valle", "CF Valle"), ("ud_viento", "UD Viento"),
        ("cd_zafra", "CD Zafra"), ("sd_arroyo", "SD Arroyo"),
        ("cf_bahia", "CF Bahía"), ("real_cumbre", "Real Cumbre"),
        ("ud_dehesa", "UD Dehesa"), ("cd_encina", "CD Encina"),
        ("atl_fuente", "Atlético Fuente"), ("sd_gaviota", "SD Gaviota"),
    ],
}


def _clubs(country: str, tiers: Dict[int, List[Tuple[str, str]]]) -> List[WorldClub]:
    return [
        WorldClub(key=key, name=name, country=country, tier=tier)
        for tier, entries in tiers.items()
        for key, name in entries
    ]


ALL_CLUBS: List[WorldClub] = _clubs("England", _ENGLAND) + _clubs("Spain", _SPAIN)


# ═══════════════════════════════════════════════════════════════
# BUILDERS
# ═══════════════════════════════════════════════════════════════

def build_team_registry(countries: Optional[List[str]] = None) -> TeamRegistry:
    """Fresh Team records at their starting tiers."""
    wanted = countries or list(COUNTRY_TIER_NAMES)
    return TeamRegistry(
        Team(team_id=c.key, name=c.name, country=c.country, tier=c.tier)
        for c in ALL_CLUBS
        if c.country in wanted
    )


def build_world(countries: Optional[List[str]] = None) -> Tuple[LeagueRegistry, TeamRegistry]:
    """League rules and rosters for the requested countries (all by default)."""
    wanted = countries or list(COUNTRY_TIER_NAMES)
    unknown = [c for c in wanted if c not in COUNTRY_TIER_NAMES]
    if unknown:
        raise ConfigurationError(f"Unknown countries: {', '.join(unknown)}")
    registry = build_default_registry({c: COUNTRY_TIER_NAMES[c] for c in wanted})
    return registry, build_team_registry(wanted)
