"""Position and statistics rules for each supported tournament."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple, Type

from rosterdesk.models.enums import TournamentVariant
from rosterdesk.models.stats import PremierStats, SoccerStats, StatsRecord


@dataclass(frozen=True)
class TournamentRules:
    variant: TournamentVariant
    display_name: str
    positions: Tuple[str, ...]
    stats_model: Type[StatsRecord]

    @property
    def code(self) -> str:
        return self.variant.value

    @property
    def default_position(self) -> str:
        return self.positions[0]

    def empty_stats(self) -> StatsRecord:
        return self.stats_model()

    def stat_fields(self) -> Tuple[str, ...]:
        return self.stats_model.aliases()

    def resolve_position(self, label: Any) -> Optional[str]:
        """Match ``label`` to a position ignoring case and spacing."""

        if not isinstance(label, str):
            return None
        key = label.replace(" ", "").replace("-", "").lower()
        if not key:
            return None
        for position in self.positions:
            if position.lower() == key:
                return position
        return None


_TOURNAMENT_RULES: Dict[TournamentVariant, TournamentRules] = {
    TournamentVariant.SOCCER_LEAGUE: TournamentRules(
        variant=TournamentVariant.SOCCER_LEAGUE,
        display_name="Ahalia Soccer League",
        positions=("Forward", "Midfielder", "Defender", "Goalkeeper"),
        stats_model=SoccerStats,
    ),
    TournamentVariant.PREMIER_LEAGUE: TournamentRules(
        variant=TournamentVariant.PREMIER_LEAGUE,
        display_name="Ahalia Premier League",
        positions=("Batter", "Bowler", "AllRounder"),
        stats_model=PremierStats,
    ),
}


def iter_rules() -> Iterable[TournamentRules]:
    """Return an iterator of all configured tournaments."""

    return _TOURNAMENT_RULES.values()


def get_rules(variant: Any) -> TournamentRules:
    """Fetch rules for a variant, raising ConfigurationError if it is unknown."""

    return _TOURNAMENT_RULES[TournamentVariant.parse(variant)]


def positions_for(variant: Any) -> Tuple[str, ...]:
    return get_rules(variant).positions


def empty_stats(variant: Any) -> StatsRecord:
    return get_rules(variant).empty_stats()


def default_position(variant: Any) -> str:
    return get_rules(variant).default_position


def resolve_position(variant: Any, label: Any) -> Optional[str]:
    return get_rules(variant).resolve_position(label)


def display_name(variant: Any) -> str:
    return get_rules(variant).display_name
