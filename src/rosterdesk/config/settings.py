"""Runtime settings read from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import os


logger = logging.getLogger(__name__)

_SUBMIT_DELAY_ENV = "ROSTERDESK_SUBMIT_DELAY"
_MIN_PLAYERS_ENV = "ROSTERDESK_MIN_PLAYERS"
_MAX_PLAYERS_ENV = "ROSTERDESK_MAX_PLAYERS"
_PLAYER_IDS_ENV = "ROSTERDESK_PLAYER_IDS"

_SUBMIT_DELAY_DEFAULT = 1.5
_MIN_PLAYERS_DEFAULT = 11
_MAX_PLAYERS_DEFAULT = 18
# Jersey numbers run 1..99, so no squad can list more players than that.
_PLAYERS_CEILING = 99

PLAYER_ID_REUSE = "reuse"
PLAYER_ID_MONOTONIC = "monotonic"
_PLAYER_ID_POLICIES = (PLAYER_ID_REUSE, PLAYER_ID_MONOTONIC)


@dataclass(frozen=True)
class Settings:
    submit_delay: float = _SUBMIT_DELAY_DEFAULT
    min_players: int = _MIN_PLAYERS_DEFAULT
    max_players: int = _MAX_PLAYERS_DEFAULT
    player_id_policy: str = PLAYER_ID_REUSE


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None and value > max_value:
        logger.warning("%s=%d is above %d; using %d", name, value, max_value, max_value)
        value = max_value
    return value


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value not in choices:
        logger.warning("Invalid value for %s: %s; using default %s", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    min_players = _env_int(_MIN_PLAYERS_ENV, _MIN_PLAYERS_DEFAULT, min_value=1, max_value=_PLAYERS_CEILING)
    max_players = _env_int(_MAX_PLAYERS_ENV, _MAX_PLAYERS_DEFAULT, min_value=1, max_value=_PLAYERS_CEILING)
    if max_players < min_players:
        logger.warning(
            "%s=%d is below %s=%d; raising maximum to match",
            _MAX_PLAYERS_ENV,
            max_players,
            _MIN_PLAYERS_ENV,
            min_players,
        )
        max_players = min_players
    return Settings(
        submit_delay=_env_float(_SUBMIT_DELAY_ENV, _SUBMIT_DELAY_DEFAULT, clamp_min=0.0),
        min_players=min_players,
        max_players=max_players,
        player_id_policy=_env_choice(_PLAYER_IDS_ENV, PLAYER_ID_REUSE, _PLAYER_ID_POLICIES),
    )
