"""Per-variant player statistics records."""

from __future__ import annotations

import math
from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


def coerce_count(value: Any) -> int:
    """Parse a counting stat, treating anything unusable as 0."""

    if isinstance(value, bool):
        return int(value)
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            number = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0
    return max(number, 0)


def coerce_decimal(value: Any) -> float:
    """Parse a decimal stat such as a batting average; bad input becomes 0.0."""

    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


class StatsRecord(BaseModel):
    """Base for the statistics shape of a tournament variant."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(cls.model_fields)

    @classmethod
    def aliases(cls) -> tuple[str, ...]:
        return tuple(field.alias or name for name, field in cls.model_fields.items())

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def merged(self, patch: Mapping[str, Any]) -> "StatsRecord":
        """Merge ``patch`` per field with lenient coercion; unknown keys are dropped."""

        lookup = {}
        for name, field in type(self).model_fields.items():
            lookup[name] = name
            if field.alias:
                lookup[field.alias] = name
        updates: dict[str, Any] = {}
        for key, raw in patch.items():
            name = lookup.get(key)
            if name is None:
                continue
            if type(self).model_fields[name].annotation is float:
                updates[name] = coerce_decimal(raw)
            else:
                updates[name] = coerce_count(raw)
        return self.model_copy(update=updates)


class SoccerStats(StatsRecord):
    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    yellow_cards: int = Field(default=0, ge=0)
    red_cards: int = Field(default=0, ge=0)


class PremierStats(StatsRecord):
    runs: int = Field(default=0, ge=0)
    wickets: int = Field(default=0, ge=0)
    matches: int = Field(default=0, ge=0)
    average: float = Field(default=0.0, ge=0.0)


StatsT = TypeVar("StatsT", bound=StatsRecord)


def build_stats(model: Type[StatsT], values: Mapping[str, Any] | None = None) -> StatsT:
    """Create a zeroed record of ``model`` and merge ``values`` into it."""

    record = model()
    if values:
        return record.merged(values)  # type: ignore[return-value]
    return record
