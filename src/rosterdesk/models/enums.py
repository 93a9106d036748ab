"""Enumerations shared by the roster models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from rosterdesk.exceptions import ConfigurationError


class TournamentVariant(str, Enum):
    SOCCER_LEAGUE = "asl"
    PREMIER_LEAGUE = "apl"

    @classmethod
    def parse(cls, value: Any) -> "TournamentVariant":
        """Resolve an enum member, its code or its member name."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            for member in cls:
                if key.lower() == member.value or key.upper() == member.name:
                    return member
            compact = key.replace("_", "").replace(" ", "").lower()
            for member in cls:
                if compact == member.name.replace("_", "").lower():
                    return member
        raise ConfigurationError(f"Unknown tournament variant: {value!r}")


class Department(str, Enum):
    ENGINEERING = "engineering"
    MEDICINE = "medicine"
    SCIENCE = "science"
    ARTS = "arts"
    COMMERCE = "commerce"
    PHARMACY = "pharmacy"


class TeamStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    REJECTED = "rejected"
