"""Load demo or fixture teams into a roster store."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from rosterdesk.config import Settings, get_rules
from rosterdesk.exceptions import ConfigurationError, ValidationError
from rosterdesk.models import Player, Team, TeamStatus, build_stats, coerce_optional_int, validate_team_fields
from rosterdesk.store import RosterStore


DEFAULT_SEED: Dict[str, List[Dict[str, Any]]] = {
    "asl": [
        {
            "id": 1,
            "name": "Engineering Tigers",
            "department": "engineering",
            "captainName": "John Davis",
            "captainEmail": "john@example.com",
            "captainPhone": "9876543210",
            "status": "active",
            "players": [
                {"id": 1, "name": "John Davis", "position": "Forward", "jerseyNumber": 10,
                 "stats": {"goals": 5, "assists": 3, "yellowCards": 1, "redCards": 0}},
                {"id": 2, "name": "Mike Smith", "position": "Midfielder", "jerseyNumber": 8,
                 "stats": {"goals": 2, "assists": 4, "yellowCards": 0, "redCards": 0}},
                {"id": 3, "name": "Chris Johnson", "position": "Defender", "jerseyNumber": 5,
                 "stats": {"goals": 0, "assists": 1, "yellowCards": 2, "redCards": 0}},
            ],
        },
        {
            "id": 2,
            "name": "Medicine United",
            "department": "medicine",
            "captainName": "Sarah Wilson",
            "captainEmail": "sarah@example.com",
            "captainPhone": "9876543211",
            "status": "active",
            "players": [
                {"id": 1, "name": "Sarah Wilson", "position": "Midfielder", "jerseyNumber": 7,
                 "stats": {"goals": 3, "assists": 5, "yellowCards": 0, "redCards": 0}},
                {"id": 2, "name": "Alex Brown", "position": "Forward", "jerseyNumber": 9,
                 "stats": {"goals": 6, "assists": 2, "yellowCards": 1, "redCards": 0}},
            ],
        },
    ],
    "apl": [
        {
            "id": 1,
            "name": "Science Strikers",
            "department": "science",
            "captainName": "David Miller",
            "captainEmail": "david@example.com",
            "captainPhone": "9876543212",
            "status": "active",
            "players": [
                {"id": 1, "name": "David Miller", "position": "Batter", "jerseyNumber": 45,
                 "stats": {"runs": 120, "wickets": 0, "matches": 4, "average": 30}},
                {"id": 2, "name": "Raj Patel", "position": "Bowler", "jerseyNumber": 99,
                 "stats": {"runs": 15, "wickets": 8, "matches": 4, "average": 3.75}},
                {"id": 3, "name": "Tom Wilson", "position": "All Rounder", "jerseyNumber": 7,
                 "stats": {"runs": 85, "wickets": 5, "matches": 4, "average": 21.25}},
            ],
        },
        {
            "id": 2,
            "name": "Arts Avengers",
            "department": "arts",
            "captainName": "Jessica Lee",
            "captainEmail": "jessica@example.com",
            "captainPhone": "9876543213",
            "status": "active",
            "players": [
                {"id": 1, "name": "Jessica Lee", "position": "Batter", "jerseyNumber": 18,
                 "stats": {"runs": 95, "wickets": 0, "matches": 3, "average": 31.67}},
                {"id": 2, "name": "Ben Smith", "position": "All Rounder", "jerseyNumber": 23,
                 "stats": {"runs": 75, "wickets": 4, "matches": 3, "average": 25}},
            ],
        },
    ],
}


def _build_team(variant: str, entry: Dict[str, Any]) -> Team:
    rules = get_rules(variant)
    try:
        fields = validate_team_fields(entry)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid seed team {entry.get('name')!r}: {exc}") from exc
    try:
        status = TeamStatus(entry.get("status", TeamStatus.ACTIVE.value))
    except ValueError as exc:
        raise ConfigurationError(f"Invalid status for seed team {fields.name!r}") from exc

    players = []
    for raw in entry.get("players", []):
        position = rules.resolve_position(raw.get("position"))
        if position is None or not raw.get("name"):
            raise ConfigurationError(
                f"Seed player {raw.get('name')!r} of {fields.name!r} does not fit the {rules.display_name}"
            )
        players.append(
            Player(
                id=int(raw["id"]),
                name=str(raw["name"]).strip(),
                position=position,
                jersey_number=coerce_optional_int(raw.get("jerseyNumber", raw.get("jersey_number"))),
                age=coerce_optional_int(raw.get("age")),
                stats=build_stats(rules.stats_model, raw.get("stats")),
            )
        )
    return Team(
        id=int(entry["id"]),
        variant=rules.variant,
        status=status,
        players=tuple(players),
        **fields.model_dump(),
    )


@dataclass
class SeedProfile:
    """Teams per tournament code, in the JSON shape used by ``load``/``save``."""

    teams: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "SeedProfile":
        return cls(teams=json.loads(json.dumps(DEFAULT_SEED)))

    @classmethod
    def load(cls, path: Path) -> "SeedProfile":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot read seed file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Seed file {path} must contain an object keyed by tournament")
        return cls(teams={str(key): list(value) for key, value in data.items()})

    @classmethod
    def from_store(cls, store: RosterStore) -> "SeedProfile":
        teams: Dict[str, List[Dict[str, Any]]] = {}
        for variant in store.variants():
            teams[variant.value] = [
                team.model_dump(mode="json", by_alias=True, exclude={"variant"})
                for team in store.list_teams(variant)
            ]
        return cls(teams=teams)

    def save(self, path: Path) -> None:
        path.write_text(json.dumps(self.teams, indent=2), encoding="utf-8")

    def build_teams(self) -> List[Team]:
        return [
            _build_team(variant, entry)
            for variant, entries in self.teams.items()
            for entry in entries
        ]


def seed_store(profile: Optional[SeedProfile] = None, *, settings: Optional[Settings] = None) -> RosterStore:
    """Create a store pre-populated with ``profile`` (the built-in demo teams by default)."""

    profile = profile or SeedProfile.default()
    return RosterStore(profile.build_teams(), settings=settings)
