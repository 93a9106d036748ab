"""Player entities shared by the store, the wizard and the admin editor."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from .stats import PremierStats, SoccerStats


def coerce_optional_int(value: Any) -> Optional[int]:
    """Jersey numbers and ages: integers when parseable, otherwise omitted."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        try:
            return int(float(text))
        except (ValueError, OverflowError):
            return None


class Player(BaseModel):
    """Committed player, attached to exactly one team."""

    id: int
    name: str = Field(..., min_length=1)
    position: str
    jersey_number: Optional[int] = None
    age: Optional[int] = None
    stats: Union[SoccerStats, PremierStats]

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class DraftPlayer(BaseModel):
    """Player held by the registration wizard before the team is committed."""

    id: int
    name: str = Field(..., min_length=1)
    position: str
    jersey_number: Optional[int] = None
    age: Optional[int] = None

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_fields(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "position": self.position,
            "jersey_number": self.jersey_number,
            "age": self.age,
        }
