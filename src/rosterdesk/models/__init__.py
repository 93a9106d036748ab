"""Domain models for teams, players and their statistics."""

from .enums import Department, TeamStatus, TournamentVariant
from .player import DraftPlayer, Player, coerce_optional_int
from .stats import (
    PremierStats,
    SoccerStats,
    StatsRecord,
    build_stats,
    coerce_count,
    coerce_decimal,
)
from .team import Team, TeamFields, validate_team_fields

__all__ = [
    "Department",
    "DraftPlayer",
    "Player",
    "PremierStats",
    "SoccerStats",
    "StatsRecord",
    "Team",
    "TeamFields",
    "TeamStatus",
    "TournamentVariant",
    "build_stats",
    "coerce_count",
    "coerce_decimal",
    "coerce_optional_int",
    "validate_team_fields",
]
