"""Team registration wizard."""

from .machine import DraftSession, RegistrationWizard, StagedPlayer, WizardStep

__all__ = ["DraftSession", "RegistrationWizard", "StagedPlayer", "WizardStep"]
