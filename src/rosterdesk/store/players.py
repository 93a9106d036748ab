"""Player field rules shared by committed and draft rosters."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple

from rosterdesk.config import PLAYER_ID_MONOTONIC, TournamentRules
from rosterdesk.exceptions import ValidationError
from rosterdesk.models import StatsRecord, coerce_optional_int
from rosterdesk.models.team import normalize_keys
from rosterdesk.models.player import Player


PLAYER_NAME_MESSAGE = "Please enter the player's name"


def validate_player_fields(
    rules: TournamentRules,
    fields: Mapping[str, Any],
    *,
    default_position: bool = True,
) -> dict[str, Any]:
    """Check name and position, coercing jersey number and age.

    A missing position falls back to the tournament's first position when
    ``default_position`` is set; an unknown one is always rejected.
    """

    data = normalize_keys(Player, fields)
    errors: dict[str, str] = {}

    raw_name = data.get("name")
    name = raw_name.strip() if isinstance(raw_name, str) else ""
    if not name:
        errors["name"] = PLAYER_NAME_MESSAGE

    raw_position = data.get("position")
    if (raw_position is None or raw_position == "") and default_position:
        position: Optional[str] = rules.default_position
    else:
        position = rules.resolve_position(raw_position)
    if position is None:
        errors["position"] = f"Position must be one of: {', '.join(rules.positions)}"

    if errors:
        raise ValidationError(errors)

    return {
        "name": name,
        "position": position,
        "jersey_number": coerce_optional_int(data.get("jersey_number")),
        "age": coerce_optional_int(data.get("age")),
    }


def split_stats_patch(
    rules: TournamentRules, patch: Mapping[str, Any]
) -> Tuple[dict[str, Any], dict[str, Any]]:
    """Separate statistics keys (nested under ``stats`` or top-level) from player fields."""

    stat_keys = set(rules.stats_model.field_names()) | set(rules.stats_model.aliases())
    fields: dict[str, Any] = {}
    stats: dict[str, Any] = {}
    for key, value in patch.items():
        if key == "stats":
            if isinstance(value, StatsRecord):
                stats.update(value.as_dict())
            elif isinstance(value, Mapping):
                stats.update(value)
        elif key in stat_keys:
            stats[key] = value
        else:
            fields[key] = value
    return fields, stats


def next_player_id(existing: Sequence[int], policy: str, issued: int = 0) -> int:
    """Pick the id for a new player.

    The ``reuse`` policy numbers players by roster length, so an id freed by a
    removal can be handed out again while another player still holds it.
    ``monotonic`` never repeats an id within a team.
    """

    if policy == PLAYER_ID_MONOTONIC:
        return max([issued, *existing]) + 1
    return len(existing) + 1
