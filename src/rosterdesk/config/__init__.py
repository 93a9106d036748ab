"""Configuration helpers for tournament rules and runtime settings."""

from .settings import PLAYER_ID_MONOTONIC, PLAYER_ID_REUSE, Settings, load_settings
from .tournaments import (
    TournamentRules,
    default_position,
    display_name,
    empty_stats,
    get_rules,
    iter_rules,
    positions_for,
    resolve_position,
)

__all__ = [
    "PLAYER_ID_MONOTONIC",
    "PLAYER_ID_REUSE",
    "Settings",
    "TournamentRules",
    "default_position",
    "display_name",
    "empty_stats",
    "get_rules",
    "iter_rules",
    "load_settings",
    "positions_for",
    "resolve_position",
]
