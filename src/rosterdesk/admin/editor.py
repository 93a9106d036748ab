"""Admin CRUD over committed teams with inline editing and a player sub-editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Dict, List, Optional, Tuple

from rosterdesk.config import TournamentRules, get_rules
from rosterdesk.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from rosterdesk.models import Player, StatsRecord, Team, TournamentVariant
from rosterdesk.models.team import TeamFields, normalize_keys
from rosterdesk.notifications import NotificationLog, Notifier, destructive, info
from rosterdesk.store import RosterStore

from .session import AdminSession


logger = logging.getLogger(__name__)

_EDITABLE_TEAM_FIELDS = ("name", "department", "captain_name", "captain_email", "captain_phone", "description", "status")
_EDITABLE_PLAYER_FIELDS = ("name", "position", "jersey_number", "age")


class DialogState(str, Enum):
    CLOSED = "closed"
    PLAYER_LIST = "player_list"
    PLAYER_EDIT = "player_edit"


@dataclass
class TeamEdit:
    team_id: int
    shadow: Dict[str, Any]


@dataclass
class PlayerEdit:
    player_id: int
    fields: Dict[str, Any]
    stats: StatsRecord


class AdminRosterEditor:
    """Administrator view of one tournament's committed teams.

    Only one team row can be in inline-edit mode; starting another edit drops
    the previous shadow without saving it.
    """

    def __init__(
        self,
        store: RosterStore,
        session: AdminSession,
        variant: Any = TournamentVariant.SOCCER_LEAGUE,
        *,
        notifier: Optional[Notifier] = None,
        location: str = "/admin/teams",
    ):
        self.store = store
        self.session = session
        self.notifier: Notifier = notifier or NotificationLog()
        self.location = location
        self.variant = TournamentVariant.parse(variant)
        self.editing: Optional[TeamEdit] = None
        self.dialog_team_id: Optional[int] = None
        self.player_edit: Optional[PlayerEdit] = None

    @property
    def rules(self) -> TournamentRules:
        return get_rules(self.variant)

    @property
    def dialog_state(self) -> DialogState:
        if self.dialog_team_id is None:
            return DialogState.CLOSED
        if self.player_edit is None:
            return DialogState.PLAYER_LIST
        return DialogState.PLAYER_EDIT

    def _require_admin(self) -> None:
        self.session.require(self.location)

    def _tournament_label(self) -> str:
        return self.rules.code.upper()

    # -- listing -------------------------------------------------------

    def switch_variant(self, variant: Any) -> List[Team]:
        """Show another tournament's teams; open edits and dialogs are discarded."""

        self._require_admin()
        self.variant = TournamentVariant.parse(variant)
        self.editing = None
        self.close_dialog()
        return self.store.list_teams(self.variant)

    def teams(self) -> List[Team]:
        self._require_admin()
        return self.store.list_teams(self.variant)

    def summary(self):
        self._require_admin()
        return self.store.summary(self.variant)

    def positions(self) -> Tuple[str, ...]:
        return self.rules.positions

    def stat_fields(self) -> Tuple[str, ...]:
        return self.rules.stat_fields()

    # -- teams ---------------------------------------------------------

    def add_team(self, fields: Dict[str, Any]) -> Team:
        self._require_admin()
        try:
            team = self.store.create_team(self.variant, fields)
        except ValidationError as exc:
            self.notifier.notify(destructive("Missing information", "; ".join(exc.errors.values())))
            raise
        self.notifier.notify(
            info("Team added", f"{team.name} has been added to the {self._tournament_label()} tournament.")
        )
        return team

    def begin_edit(self, team_id: int) -> Dict[str, Any]:
        self._require_admin()
        team = self.store.get_team(self.variant, team_id)
        if self.editing is not None and self.editing.team_id != team_id:
            logger.info("Discarding unsaved edit of team #%d", self.editing.team_id)
        self.editing = TeamEdit(team_id=team.id, shadow=team.editable_fields())
        return dict(self.editing.shadow)

    def edit_field(self, name: str, value: Any) -> Dict[str, Any]:
        self._require_admin()
        if self.editing is None:
            raise InvalidTransitionError("No team is being edited")
        key = next(iter(normalize_keys(TeamFields, {name: value})))
        if key not in _EDITABLE_TEAM_FIELDS:
            raise ValidationError({name: "Field cannot be edited"})
        self.editing.shadow[key] = value
        return dict(self.editing.shadow)

    def save_edit(self) -> Team:
        """Write the shadow copy back; on failure the edit stays open and the store is untouched."""

        self._require_admin()
        if self.editing is None:
            raise InvalidTransitionError("No team is being edited")
        try:
            team = self.store.update_team(self.variant, self.editing.team_id, self.editing.shadow)
        except ValidationError as exc:
            self.notifier.notify(destructive("Missing information", "; ".join(exc.errors.values())))
            raise
        self.editing = None
        self.notifier.notify(info("Team updated", f"{team.name} has been updated successfully."))
        return team

    def cancel_edit(self) -> None:
        self.editing = None

    def set_status(self, team_id: int, status: Any) -> Team:
        self._require_admin()
        try:
            team = self.store.update_team(self.variant, team_id, {"status": status})
        except ValidationError as exc:
            self.notifier.notify(destructive("Invalid status", "; ".join(exc.errors.values())))
            raise
        self.notifier.notify(info("Team updated", f"{team.name} is now {team.status.value}."))
        return team

    def delete_team(self, team_id: int) -> Optional[Team]:
        """Remove a team; a team that is already gone counts as removed."""

        self._require_admin()
        try:
            removed = self.store.delete_team(self.variant, team_id)
        except NotFoundError:
            logger.info("Team #%d already absent from %s", team_id, self.rules.code)
            return None
        if self.editing is not None and self.editing.team_id == team_id:
            self.editing = None
        if self.dialog_team_id == team_id:
            self.close_dialog()
        self.notifier.notify(info("Team removed", f"{removed.name} has been removed from the tournament."))
        return removed

    # -- team dialog ---------------------------------------------------

    def open_team(self, team_id: int) -> Team:
        self._require_admin()
        team = self.store.get_team(self.variant, team_id)
        self.dialog_team_id = team.id
        self.player_edit = None
        return team

    def _dialog_team(self) -> Team:
        if self.dialog_team_id is None:
            raise InvalidTransitionError("No team dialog is open")
        return self.store.get_team(self.variant, self.dialog_team_id)

    @property
    def dialog_team(self) -> Optional[Team]:
        if self.dialog_team_id is None:
            return None
        return self.store.get_team(self.variant, self.dialog_team_id)

    def add_player(self, fields: Dict[str, Any]) -> Player:
        self._require_admin()
        team = self._dialog_team()
        try:
            player = self.store.add_player(self.variant, team.id, fields)
        except ValidationError as exc:
            self.notifier.notify(destructive("Missing information", "; ".join(exc.errors.values())))
            raise
        self.notifier.notify(info("Player added", f"{player.name} has been added to {team.name}."))
        return player

    def remove_player(self, player_id: int) -> Optional[Player]:
        self._require_admin()
        team = self._dialog_team()
        removed = self.store.remove_player(self.variant, team.id, player_id)
        if removed is None:
            return None
        if self.player_edit is not None and self.player_edit.player_id == player_id:
            self.player_edit = None
        self.notifier.notify(info("Player removed", f"{removed.name} has been removed from {team.name}."))
        return removed

    # -- player sub-editor ---------------------------------------------

    def open_player(self, player_id: int) -> PlayerEdit:
        self._require_admin()
        team = self._dialog_team()
        player = team.find_player(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found in team {team.id}")
        self.player_edit = PlayerEdit(
            player_id=player.id,
            fields={name: getattr(player, name) for name in _EDITABLE_PLAYER_FIELDS},
            stats=player.stats,
        )
        return self.player_edit

    def _require_player_edit(self) -> PlayerEdit:
        if self.player_edit is None:
            raise InvalidTransitionError("No player is being edited")
        return self.player_edit

    def edit_player_field(self, name: str, value: Any) -> PlayerEdit:
        self._require_admin()
        edit = self._require_player_edit()
        stats_model = self.rules.stats_model
        if name in stats_model.field_names() or name in stats_model.aliases():
            return self.edit_player_stat(name, value)
        key = next(iter(normalize_keys(Player, {name: value})))
        if key not in _EDITABLE_PLAYER_FIELDS:
            raise ValidationError({name: "Field cannot be edited"})
        edit.fields[key] = value
        return edit

    def edit_player_stat(self, name: str, value: Any) -> PlayerEdit:
        """Set one statistic; unusable numbers are stored as 0."""

        self._require_admin()
        edit = self._require_player_edit()
        stats_model = self.rules.stats_model
        if name not in stats_model.field_names() and name not in stats_model.aliases():
            raise ValidationError({name: f"Statistic must be one of: {', '.join(stats_model.aliases())}"})
        edit.stats = edit.stats.merged({name: value})
        return edit

    def save_player(self) -> Player:
        self._require_admin()
        edit = self._require_player_edit()
        team = self._dialog_team()
        try:
            player = self.store.update_player(
                self.variant,
                team.id,
                edit.player_id,
                {**edit.fields, "stats": edit.stats},
            )
        except ValidationError as exc:
            self.notifier.notify(destructive("Missing information", "; ".join(exc.errors.values())))
            raise
        self.player_edit = None
        self.notifier.notify(info("Player updated", f"{player.name}'s statistics have been updated."))
        return player

    def back_to_players(self) -> None:
        self.player_edit = None

    def close_dialog(self) -> None:
        self.dialog_team_id = None
        self.player_edit = None
