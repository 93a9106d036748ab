"""Administrator roster management."""

from .editor import AdminRosterEditor, DialogState, PlayerEdit, TeamEdit
from .session import AdminSession

__all__ = ["AdminRosterEditor", "AdminSession", "DialogState", "PlayerEdit", "TeamEdit"]
