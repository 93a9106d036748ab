"""Multi-step team registration: team info, players, review, submit."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Dict, List, Optional

from rosterdesk.config import Settings, TournamentRules, get_rules
from rosterdesk.exceptions import InvalidTransitionError, ValidationError
from rosterdesk.models import DraftPlayer, Team, TournamentVariant, coerce_optional_int, validate_team_fields
from rosterdesk.models.player import Player
from rosterdesk.models.team import TeamFields, normalize_keys
from rosterdesk.notifications import NotificationLog, Notifier, destructive, info
from rosterdesk.store import RosterStore, next_player_id, validate_player_fields


logger = logging.getLogger(__name__)


class WizardStep(str, Enum):
    TEAM_INFO = "team_info"
    PLAYERS = "players"
    REVIEW = "review"
    SUBMITTED = "submitted"


@dataclass
class StagedPlayer:
    """Player form contents before they are added to the draft roster."""

    name: str = ""
    position: str = ""
    jersey_number: Optional[int] = None
    age: Optional[int] = None

    def as_fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "position": self.position,
            "jersey_number": self.jersey_number,
            "age": self.age,
        }


@dataclass
class DraftSession:
    """Everything the wizard has collected and not yet committed."""

    variant: TournamentVariant
    team_fields: Dict[str, Any] = field(default_factory=dict)
    staged: StagedPlayer = field(default_factory=StagedPlayer)
    players: List[DraftPlayer] = field(default_factory=list)
    issued_ids: int = 0

    @classmethod
    def start(cls, variant: TournamentVariant) -> "DraftSession":
        return cls(variant=variant, staged=StagedPlayer(position=get_rules(variant).default_position))


class RegistrationWizard:
    """Drives one registration from blank form to committed team.

    The draft lives in a :class:`DraftSession` owned by the wizard; the store
    only sees the team once :meth:`submit` succeeds.
    """

    def __init__(
        self,
        store: RosterStore,
        variant: Any = TournamentVariant.SOCCER_LEAGUE,
        *,
        notifier: Optional[Notifier] = None,
        return_to: Optional[str] = "/",
    ):
        self.store = store
        self.notifier: Notifier = notifier or NotificationLog()
        self.return_to = return_to
        self.step = WizardStep.TEAM_INFO
        self.draft = DraftSession.start(TournamentVariant.parse(variant))
        self.busy = False
        self.redirect_to: Optional[str] = None
        self.last_committed: Optional[Team] = None

    @property
    def settings(self) -> Settings:
        """Roster limits and submission delay, always those of the store that commits."""

        return self.store.settings

    @property
    def variant(self) -> TournamentVariant:
        return self.draft.variant

    @property
    def rules(self) -> TournamentRules:
        return get_rules(self.draft.variant)

    @property
    def players(self) -> List[DraftPlayer]:
        return list(self.draft.players)

    def _require(self, action: str, *steps: WizardStep) -> None:
        if self.busy:
            raise InvalidTransitionError(f"Cannot {action} while the registration is being submitted")
        if self.step not in steps:
            raise InvalidTransitionError(f"Cannot {action} during the {self.step.value} step")

    def _roster_shortfall_message(self) -> str:
        count = len(self.draft.players)
        minimum = self.settings.min_players
        return (
            f"You need at least {minimum} players to register a team for {self.rules.display_name} "
            f"({count} added, {minimum - count} more needed)"
        )

    def _check_roster_size(self, *, maximum: bool = True) -> None:
        count = len(self.draft.players)
        if count < self.settings.min_players:
            message = self._roster_shortfall_message()
            self.notifier.notify(destructive("Insufficient players", message))
            raise ValidationError({"players": message})
        if maximum and count > self.settings.max_players:
            message = (
                f"A {self.rules.display_name} team can have at most {self.settings.max_players} players "
                f"({count} added)"
            )
            self.notifier.notify(destructive("Too many players", message))
            raise ValidationError({"players": message})

    # -- team info -----------------------------------------------------

    def update_team_info(self, **fields: Any) -> Dict[str, Any]:
        """Merge ``fields`` into the draft team.

        On the review step the merged fields must still pass validation;
        a rejected edit leaves the draft as it was.
        """

        self._require("edit team information", WizardStep.TEAM_INFO, WizardStep.REVIEW)
        patch = normalize_keys(TeamFields, fields)
        if self.step is WizardStep.REVIEW:
            try:
                validate_team_fields({**self.draft.team_fields, **patch})
            except ValidationError as exc:
                self.notifier.notify(destructive("Missing information", "; ".join(exc.errors.values())))
                raise
        self.draft.team_fields.update(patch)
        return dict(self.draft.team_fields)

    def switch_variant(self, variant: Any) -> List[DraftPlayer]:
        """Change tournament, dropping draft players whose position no longer exists.

        Returns the players that were removed.
        """

        self._require("change tournament", WizardStep.TEAM_INFO)
        new_variant = TournamentVariant.parse(variant)
        if new_variant is self.draft.variant:
            return []
        rules = get_rules(new_variant)
        kept = [player for player in self.draft.players if rules.resolve_position(player.position)]
        purged = [player for player in self.draft.players if not rules.resolve_position(player.position)]

        self.draft.variant = new_variant
        self.draft.players = kept
        self.draft.staged.position = rules.default_position
        logger.info("Registration switched to %s; %d draft players removed", rules.code, len(purged))
        if purged:
            self.notifier.notify(
                destructive(
                    "Players removed",
                    f"{len(purged)} players were removed because their positions are not used in the "
                    f"{rules.display_name}.",
                )
            )
        return purged

    # -- players -------------------------------------------------------

    def stage_player(self, **fields: Any) -> StagedPlayer:
        self._require("edit the player form", WizardStep.PLAYERS)
        data = normalize_keys(Player, fields)
        staged = self.draft.staged
        if "name" in data:
            staged.name = "" if data["name"] is None else str(data["name"])
        if "position" in data:
            staged.position = "" if data["position"] is None else str(data["position"])
        if "jersey_number" in data:
            staged.jersey_number = coerce_optional_int(data["jersey_number"])
        if "age" in data:
            staged.age = coerce_optional_int(data["age"])
        return staged

    def add_draft_player(self, **fields: Any) -> DraftPlayer:
        """Add the staged player (optionally overridden by ``fields``) to the draft roster.

        There is no upper limit here; the maximum is only checked on submit.
        """

        self._require("add players", WizardStep.PLAYERS)
        candidate = {**self.draft.staged.as_fields(), **normalize_keys(Player, fields)}
        try:
            checked = validate_player_fields(self.rules, candidate)
        except ValidationError as exc:
            if "name" in exc.errors:
                self.notifier.notify(destructive("Missing player name", exc.errors["name"]))
            else:
                self.notifier.notify(destructive("Invalid player", "; ".join(exc.errors.values())))
            raise

        existing = [player.id for player in self.draft.players]
        player_id = next_player_id(existing, self.settings.player_id_policy, self.draft.issued_ids)
        self.draft.issued_ids = max(self.draft.issued_ids, player_id)
        player = DraftPlayer(id=player_id, **checked)
        self.draft.players.append(player)
        self.draft.staged = StagedPlayer(position=self.rules.default_position)
        return player

    def remove_draft_player(self, player_id: int) -> Optional[DraftPlayer]:
        self._require("remove players", WizardStep.PLAYERS)
        removed = next((player for player in self.draft.players if player.id == player_id), None)
        if removed is not None:
            self.draft.players = [player for player in self.draft.players if player.id != player_id]
        return removed

    # -- navigation ----------------------------------------------------

    def next(self) -> WizardStep:
        self._require("continue", WizardStep.TEAM_INFO, WizardStep.PLAYERS)
        if self.step is WizardStep.TEAM_INFO:
            try:
                validate_team_fields(self.draft.team_fields)
            except ValidationError as exc:
                self.notifier.notify(destructive("Missing information", "; ".join(exc.errors.values())))
                raise
            self.step = WizardStep.PLAYERS
        else:
            self._check_roster_size(maximum=False)
            self.step = WizardStep.REVIEW
        return self.step

    def back(self) -> WizardStep:
        self._require("go back", WizardStep.PLAYERS, WizardStep.REVIEW)
        self.step = WizardStep.TEAM_INFO if self.step is WizardStep.PLAYERS else WizardStep.PLAYERS
        return self.step

    def review_summary(self) -> Dict[str, Any]:
        fields = self.draft.team_fields
        return {
            "team_name": fields.get("name", ""),
            "department": fields.get("department", ""),
            "captain": fields.get("captain_name", ""),
            "tournament": self.rules.display_name,
            "players": len(self.draft.players),
        }

    # -- submission ----------------------------------------------------

    async def submit(self) -> Team:
        """Commit the draft after the simulated submission delay.

        The wizard is busy for the whole delay; a second call in that window
        is rejected and the pending submission cannot be aborted.
        """

        if self.busy:
            raise InvalidTransitionError("Registration is already being submitted")
        self._require("submit", WizardStep.REVIEW)
        self._check_roster_size()

        self.busy = True
        try:
            await asyncio.sleep(self.settings.submit_delay)
            team = self.store.commit_registration(
                self.draft.variant,
                self.draft.team_fields,
                [player.to_fields() for player in self.draft.players],
            )
        except ValidationError as exc:
            self.notifier.notify(destructive("Registration failed", "; ".join(exc.errors.values())))
            raise
        finally:
            self.busy = False

        self.step = WizardStep.SUBMITTED
        self.last_committed = team
        self.redirect_to = self.return_to
        self.notifier.notify(
            info(
                "Team registered successfully!",
                f"Your team has been registered for the {self.rules.display_name}.",
            )
        )
        self._clear_draft()
        return team

    def _clear_draft(self) -> None:
        self.draft = DraftSession.start(self.draft.variant)
        self.step = WizardStep.TEAM_INFO

    def reset(self) -> None:
        """Discard the draft and start again at team info."""

        if self.busy:
            raise InvalidTransitionError("Cannot restart while the registration is being submitted")
        self._clear_draft()
        self.redirect_to = None
