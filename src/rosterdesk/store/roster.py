"""In-memory store for committed teams and their rosters."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from rosterdesk.config import Settings, TournamentRules, get_rules, iter_rules, load_settings
from rosterdesk.exceptions import ConfigurationError, NotFoundError, ValidationError
from rosterdesk.models import (
    Player,
    Team,
    TeamStatus,
    TournamentVariant,
    build_stats,
    validate_team_fields,
)
from rosterdesk.models.team import FIELD_MESSAGES, normalize_keys, TeamFields

from .players import next_player_id, split_stats_patch, validate_player_fields


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterSummary:
    variant: TournamentVariant
    total_teams: int
    active_teams: int
    total_players: int


class RosterStore:
    """Committed teams for every tournament, each tournament in its own partition.

    Teams and players are immutable values; each mutation validates first and
    then swaps in a new value, so a failed call never leaves a partial write.
    """

    def __init__(self, teams: Optional[Iterable[Team]] = None, *, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()
        self._partitions: Dict[TournamentVariant, List[Team]] = {rules.variant: [] for rules in iter_rules()}
        self._team_counters: Dict[TournamentVariant, int] = {rules.variant: 0 for rules in iter_rules()}
        self._player_counters: Dict[Tuple[TournamentVariant, int], int] = {}
        for team in teams or ():
            self._insert_seeded(team)

    # -- internals -----------------------------------------------------

    def _partition(self, variant: Any) -> Tuple[TournamentRules, List[Team]]:
        rules = get_rules(variant)
        return rules, self._partitions[rules.variant]

    @staticmethod
    def _index(teams: List[Team], team_id: int) -> int:
        for idx, team in enumerate(teams):
            if team.id == team_id:
                return idx
        raise NotFoundError(f"Team {team_id} not found")

    def _next_team_id(self, variant: TournamentVariant) -> int:
        self._team_counters[variant] += 1
        return self._team_counters[variant]

    def _issue_player_id(self, variant: TournamentVariant, team: Team, existing: List[int]) -> int:
        key = (variant, team.id)
        player_id = next_player_id(existing, self.settings.player_id_policy, self._player_counters.get(key, 0))
        self._player_counters[key] = max(self._player_counters.get(key, 0), player_id)
        return player_id

    def _insert_seeded(self, team: Team) -> None:
        rules, teams = self._partition(team.variant)
        if any(existing.id == team.id for existing in teams):
            raise ConfigurationError(f"Duplicate team id {team.id} in {rules.code} seed data")
        for player in team.players:
            if player.position not in rules.positions or not isinstance(player.stats, rules.stats_model):
                raise ConfigurationError(
                    f"Player {player.name!r} of {team.name!r} does not fit the {rules.display_name} schema"
                )
        teams.append(team)
        self._team_counters[rules.variant] = max(self._team_counters[rules.variant], team.id)
        self._player_counters[(rules.variant, team.id)] = max(team.player_ids(), default=0)

    # -- teams ---------------------------------------------------------

    def variants(self) -> List[TournamentVariant]:
        return list(self._partitions)

    def list_teams(self, variant: Any, *, search: Optional[str] = None) -> List[Team]:
        """Committed teams of a tournament in insertion order.

        ``search`` keeps teams whose name contains it, ignoring case.
        """

        _, teams = self._partition(variant)
        needle = (search or "").strip().casefold()
        return [team for team in teams if needle in team.name.casefold()]

    def list_players(
        self,
        variant: Any,
        *,
        position: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Tuple[Team, Player]]:
        """Every player of a tournament paired with its team, in team then roster order.

        ``position`` accepts any label the tournament resolves ("all rounder"
        finds AllRounder); ``search`` matches player names ignoring case.
        """

        rules, teams = self._partition(variant)
        wanted: Optional[str] = None
        if position:
            wanted = rules.resolve_position(position)
            if wanted is None:
                raise ValidationError({"position": f"Position must be one of: {', '.join(rules.positions)}"})
        needle = (search or "").strip().casefold()
        return [
            (team, player)
            for team in teams
            for player in team.players
            if (wanted is None or player.position == wanted) and needle in player.name.casefold()
        ]

    def get_team(self, variant: Any, team_id: int) -> Team:
        _, teams = self._partition(variant)
        return teams[self._index(teams, team_id)]

    def create_team(self, variant: Any, fields: Mapping[str, Any]) -> Team:
        rules, teams = self._partition(variant)
        validated = validate_team_fields(fields)
        team = Team(
            id=self._next_team_id(rules.variant),
            variant=rules.variant,
            status=TeamStatus.ACTIVE,
            **validated.model_dump(),
        )
        teams.append(team)
        logger.info("Created team %s (%s #%d)", team.name, rules.code, team.id)
        return team

    def update_team(self, variant: Any, team_id: int, patch: Mapping[str, Any]) -> Team:
        """Apply ``patch`` to a team's fields and status; players are left alone."""

        rules, teams = self._partition(variant)
        idx = self._index(teams, team_id)
        current = teams[idx]
        merged = {**current.editable_fields(), **normalize_keys(TeamFields, patch)}

        errors: dict[str, str] = {}
        validated: Optional[TeamFields] = None
        try:
            validated = validate_team_fields(merged)
        except ValidationError as exc:
            errors.update(exc.errors)
        try:
            status = TeamStatus(merged.get("status"))
        except ValueError:
            errors["status"] = FIELD_MESSAGES["status"]
        if errors or validated is None:
            raise ValidationError(errors)

        updated = current.model_copy(update={**validated.model_dump(), "status": status})
        teams[idx] = updated
        logger.info("Updated team %s (%s #%d)", updated.name, rules.code, updated.id)
        return updated

    def delete_team(self, variant: Any, team_id: int) -> Team:
        """Remove a team and, with it, every player it owns."""

        rules, teams = self._partition(variant)
        removed = teams.pop(self._index(teams, team_id))
        self._player_counters.pop((rules.variant, team_id), None)
        logger.info(
            "Deleted team %s (%s #%d) with %d players",
            removed.name,
            rules.code,
            removed.id,
            len(removed.players),
        )
        return removed

    def summary(self, variant: Any) -> RosterSummary:
        rules, teams = self._partition(variant)
        return RosterSummary(
            variant=rules.variant,
            total_teams=len(teams),
            active_teams=sum(1 for team in teams if team.status is TeamStatus.ACTIVE),
            total_players=sum(len(team.players) for team in teams),
        )

    # -- players -------------------------------------------------------

    def add_player(self, variant: Any, team_id: int, fields: Mapping[str, Any]) -> Player:
        rules, teams = self._partition(variant)
        idx = self._index(teams, team_id)
        team = teams[idx]
        player_fields = validate_player_fields(rules, fields)
        player = Player(
            id=self._issue_player_id(rules.variant, team, list(team.player_ids())),
            stats=rules.empty_stats(),
            **player_fields,
        )
        teams[idx] = team.model_copy(update={"players": team.players + (player,)})
        logger.info("Added player %s (#%d) to %s", player.name, player.id, team.name)
        return player

    def update_player(self, variant: Any, team_id: int, player_id: int, patch: Mapping[str, Any]) -> Player:
        """Edit player fields and merge statistics.

        Statistics are merged field by field; unparseable or negative numbers
        become 0. When duplicate ids exist the first matching player is edited.
        """

        rules, teams = self._partition(variant)
        idx = self._index(teams, team_id)
        team = teams[idx]
        player = team.find_player(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found in team {team_id}")

        field_patch, stats_patch = split_stats_patch(rules, normalize_keys(Player, patch))
        base = {
            "name": player.name,
            "position": player.position,
            "jersey_number": player.jersey_number,
            "age": player.age,
        }
        player_fields = validate_player_fields(rules, {**base, **field_patch}, default_position=False)
        stats = player.stats.merged(stats_patch) if stats_patch else player.stats

        updated = player.model_copy(update={**player_fields, "stats": stats})
        players = list(team.players)
        players[players.index(player)] = updated
        teams[idx] = team.model_copy(update={"players": tuple(players)})
        logger.info("Updated player %s (#%d) of %s", updated.name, updated.id, team.name)
        return updated

    def remove_player(self, variant: Any, team_id: int, player_id: int) -> Optional[Player]:
        """Drop every player carrying ``player_id``; an absent id is a no-op."""

        _, teams = self._partition(variant)
        idx = self._index(teams, team_id)
        team = teams[idx]
        removed = team.find_player(player_id)
        if removed is None:
            return None
        teams[idx] = team.model_copy(
            update={"players": tuple(player for player in team.players if player.id != player_id)}
        )
        logger.info("Removed player %s (#%d) from %s", removed.name, removed.id, team.name)
        return removed

    # -- registration --------------------------------------------------

    def commit_registration(
        self,
        variant: Any,
        fields: Mapping[str, Any],
        players: Iterable[Mapping[str, Any]],
    ) -> Team:
        """Create a team together with its roster in one step.

        Team fields, the roster size and every player are checked before
        anything is stored; all failures are reported together.
        """

        rules, teams = self._partition(variant)
        roster = list(players)
        errors: dict[str, str] = {}

        validated: Optional[TeamFields] = None
        try:
            validated = validate_team_fields(fields)
        except ValidationError as exc:
            errors.update(exc.errors)

        minimum, maximum = self.settings.min_players, self.settings.max_players
        if not minimum <= len(roster) <= maximum:
            errors["players"] = (
                f"Each team must have at least {minimum} players and maximum {maximum} players"
            )

        checked: list[dict[str, Any]] = []
        for position, entry in enumerate(roster, start=1):
            try:
                checked.append(validate_player_fields(rules, entry))
            except ValidationError as exc:
                for field, message in exc.errors.items():
                    errors[f"players.{position}.{field}"] = message

        if errors or validated is None:
            raise ValidationError(errors)

        team_id = self._next_team_id(rules.variant)
        committed: list[Player] = []
        ids: list[int] = []
        for entry in checked:
            player_id = next_player_id(ids, self.settings.player_id_policy, max(ids, default=0))
            ids.append(player_id)
            committed.append(Player(id=player_id, stats=build_stats(rules.stats_model), **entry))

        team = Team(
            id=team_id,
            variant=rules.variant,
            status=TeamStatus.ACTIVE,
            players=tuple(committed),
            **validated.model_dump(),
        )
        teams.append(team)
        self._player_counters[(rules.variant, team_id)] = max(ids, default=0)
        logger.info(
            "Registered team %s (%s #%d) with %d players",
            team.name,
            rules.code,
            team.id,
            len(committed),
        )
        return team
