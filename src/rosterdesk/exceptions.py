"""Exceptions raised by the roster core."""

from __future__ import annotations

from typing import Mapping


class RosterDeskError(Exception):
    """Base class for every error raised by rosterdesk."""


class ValidationError(RosterDeskError):
    """One or more field-level violations.

    ``errors`` maps each failing field to its message, in the order the fields
    were checked, so callers can show every problem at once.
    """

    def __init__(self, errors: Mapping[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {message}" for field, message in self.errors.items()))

    @property
    def fields(self) -> list[str]:
        return list(self.errors)


class NotFoundError(RosterDeskError):
    """Referenced team or player does not exist."""


class ConfigurationError(RosterDeskError):
    """Unknown tournament variant or invalid static configuration."""


class InvalidTransitionError(RosterDeskError):
    """Operation not allowed in the current wizard or editor state."""


class NotAuthenticatedError(RosterDeskError):
    """Admin operation attempted without a signed-in administrator."""

    def __init__(self, login_path: str = "/admin-login", return_to: str | None = None):
        self.login_path = login_path
        self.return_to = return_to
        super().__init__(f"Administrator sign-in required (login at {login_path})")
