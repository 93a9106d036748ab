"""Roster entity store for committed teams and players."""

from .players import next_player_id, validate_player_fields
from .roster import RosterStore, RosterSummary

__all__ = [
    "RosterStore",
    "RosterSummary",
    "next_player_id",
    "validate_player_fields",
]
