"""Team registration and roster management for college tournaments."""

from rosterdesk.admin import AdminRosterEditor, AdminSession
from rosterdesk.exceptions import (
    ConfigurationError,
    InvalidTransitionError,
    NotAuthenticatedError,
    NotFoundError,
    RosterDeskError,
    ValidationError,
)
from rosterdesk.models import Player, Team, TournamentVariant
from rosterdesk.store import RosterStore
from rosterdesk.wizard import RegistrationWizard, WizardStep

__all__ = [
    "AdminRosterEditor",
    "AdminSession",
    "ConfigurationError",
    "InvalidTransitionError",
    "NotAuthenticatedError",
    "NotFoundError",
    "Player",
    "RegistrationWizard",
    "RosterDeskError",
    "RosterStore",
    "Team",
    "TournamentVariant",
    "ValidationError",
    "WizardStep",
]
