"""Team entities and the registration field rules shared by every entry point."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from rosterdesk.exceptions import ValidationError

from .enums import Department, TeamStatus, TournamentVariant
from .player import Player


FIELD_MESSAGES: Mapping[str, str] = {
    "name": "Team name must be at least 3 characters",
    "department": "Please select a department",
    "captain_name": "Captain name is required",
    "captain_email": "Please enter a valid email address",
    "captain_phone": "Please enter a valid phone number",
    "description": "Description must be text",
    "status": "Status must be one of: active, pending, rejected",
}


class TeamFields(BaseModel):
    """Fields a captain or administrator supplies for a team."""

    name: str = Field(..., min_length=3)
    department: Department
    captain_name: str = Field(..., min_length=3)
    captain_email: EmailStr
    captain_phone: str = Field(..., min_length=10)
    description: Optional[str] = None

    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("department", mode="before")
    @classmethod
    def _normalize_department(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _field_lookup(model: type[BaseModel]) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for name, field in model.model_fields.items():
        lookup[name] = name
        if field.alias:
            lookup[field.alias] = name
    return lookup


def normalize_keys(model: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    """Rename camelCase aliases in ``data`` to the model's field names."""

    lookup = _field_lookup(model)
    return {lookup.get(key, key): value for key, value in data.items()}


def collect_errors(model: type[BaseModel], exc: PydanticValidationError) -> dict[str, str]:
    """Translate a pydantic error into one message per failing field, in declaration order."""

    lookup = _field_lookup(model)
    failing: set[str] = set()
    extra: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        field = lookup.get(str(loc[0]), str(loc[0]))
        if field in model.model_fields:
            failing.add(field)
        else:
            extra.setdefault(field, error.get("msg", "Invalid value"))
    errors = {
        name: FIELD_MESSAGES.get(name, "Invalid value")
        for name in model.model_fields
        if name in failing
    }
    errors.update(extra)
    return errors


def validate_team_fields(data: Mapping[str, Any]) -> TeamFields:
    """Validate every registration field, raising one error listing all failures."""

    try:
        return TeamFields.model_validate(normalize_keys(TeamFields, data))
    except PydanticValidationError as exc:
        raise ValidationError(collect_errors(TeamFields, exc)) from None


class Team(BaseModel):
    """Committed team owned by the roster store."""

    id: int
    variant: TournamentVariant
    name: str
    department: Department
    captain_name: str
    captain_email: str
    captain_phone: str
    description: Optional[str] = None
    status: TeamStatus = TeamStatus.ACTIVE
    players: Tuple[Player, ...] = ()

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def editable_fields(self) -> dict[str, Any]:
        """Full shadow copy of the team fields an editor may change."""

        return {
            "name": self.name,
            "department": self.department.value,
            "captain_name": self.captain_name,
            "captain_email": self.captain_email,
            "captain_phone": self.captain_phone,
            "description": self.description,
            "status": self.status.value,
        }

    def find_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_ids(self) -> Iterable[int]:
        return (player.id for player in self.players)
