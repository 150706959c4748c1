#!/usr/bin/env python3
"""
Play complete pyramid seasons with random scorelines and print the outcome

Usage:
    python simulate_season.py [--seasons N] [--seed S] [--countries England,Spain]

Example:
    python simulate_season.py --seasons 2 --seed 7 --countries England
"""

import argparse
import logging
import random

from pyramid import SeasonController, build_world


def random_score(rng: random.Random) -> int:
    """Stand-in for the match engine: a plausible football scoreline."""
    return rng.choices([0, 1, 2, 3, 4, 5], weights=[26, 34, 23, 11, 4, 2])[0]


def play_season(controller: SeasonController, year: int, rng: random.Random):
    season = controller.start_season(year)
    while controller.phase == "active":
        for league in season.all_leagues():
            for fixture in league.next_fixtures():
                controller.record_result(
                    league.country, league.tier, fixture.home_id, fixture.away_id,
                    random_score(rng), random_score(rng),
                )
        controller.advance_matchday()
    return season


def print_tables(season):
    for country, leagues in season.countries.items():
        for tier, league in leagues.items():
            print()
            print(f"{country} - {league.name} (Tier {tier})")
            print(f"{'Pos':>3}  {'Team':<24}{'P':>3}{'W':>4}{'D':>4}{'L':>4}{'GF':>5}{'GA':>5}{'GD':>5}{'Pts':>5}  Form")
            for e in league.table:
                print(
                    f"{e.position:>3}  {e.team_name:<24}{e.played:>3}{e.won:>4}{e.drawn:>4}{e.lost:>4}"
                    f"{e.goals_for:>5}{e.goals_against:>5}{e.goal_difference:>+5}{e.points:>5}  {''.join(e.form)}"
                )


def print_movements(season):
    for country, result in season.promotion_results.items():
        print()
        print(f"{country}: promotion / relegation")
        for m in result.promoted_teams:
            print(f"  ▲ {m.team_name}: Tier {m.from_tier} → Tier {m.to_tier}")
        for m in result.relegated_teams:
            print(f"  ▼ {m.team_name}: Tier {m.from_tier} → Tier {m.to_tier}")
        for c in result.playoff_candidates:
            print(f"  ◆ {c.team_name}: {c.kind.replace('_', ' ')} (Tier {c.tier}, {c.position})")


def main():
    parser = argparse.ArgumentParser(description="Simulate pyramid league seasons")
    parser.add_argument("--seasons", type=int, default=1, help="Number of consecutive seasons")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for scorelines")
    parser.add_argument("--start-year", type=int, default=2025)
    parser.add_argument("--countries", help="Comma-separated list of countries")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    countries = [c.strip() for c in args.countries.split(",")] if args.countries else None
    registry, teams = build_world(countries)
    controller = SeasonController(registry, teams)
    rng = random.Random(args.seed)

    for offset in range(args.seasons):
        year = args.start_year + offset
        print("=" * 80)
        print(f"SEASON {year}")
        print("=" * 80)
        season = play_season(controller, year, rng)
        print_tables(season)
        print_movements(season)
        print()


if __name__ == "__main__":
    main()
