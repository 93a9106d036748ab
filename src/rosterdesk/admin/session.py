"""Administrator sign-in flag consumed by the admin editor."""

from __future__ import annotations

import logging
from typing import Optional

from rosterdesk.exceptions import NotAuthenticatedError


logger = logging.getLogger(__name__)


class AdminSession:
    """Holds whether an administrator is signed in.

    Credentials are checked elsewhere; this only records the outcome.
    """

    def __init__(self, authenticated: bool = False, *, login_path: str = "/admin-login"):
        self._authenticated = authenticated
        self.login_path = login_path

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def sign_in(self) -> None:
        self._authenticated = True
        logger.info("Administrator signed in")

    def sign_out(self) -> None:
        self._authenticated = False
        logger.info("Administrator signed out")

    def require(self, return_to: Optional[str] = None) -> None:
        if not self._authenticated:
            raise NotAuthenticatedError(self.login_path, return_to)
