"""
League engine error taxonomy.

Every error is raised synchronously at the offending call, before any table,
fixture or tier state is touched.
"""


class LeagueError(Exception):
    """Base class for all league engine errors."""


class ConfigurationError(LeagueError, ValueError):
    """Invalid team list or tier configuration, or an unknown league."""


class SeasonStateError(LeagueError, RuntimeError):
    """Operation not allowed in the current season phase."""


class TeamNotFoundError(LeagueError, LookupError):
    """A team is not part of the registry or the target table."""


class FixtureNotFoundError(TeamNotFoundError):
    """No unplayed fixture exists for a home/away pairing."""


class InvalidResultError(LeagueError, ValueError):
    """A submitted scoreline cannot be recorded."""
