"""User-facing notification events emitted by the wizard and the admin editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import List, Protocol


logger = logging.getLogger(__name__)


class Severity(str, Enum):
    INFO = "info"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    severity: Severity = Severity.INFO


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


class NotificationLog:
    """Default sink: keeps every event in order and mirrors it to the log."""

    def __init__(self) -> None:
        self.events: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.events.append(notification)
        if notification.severity is Severity.DESTRUCTIVE:
            logger.warning("%s: %s", notification.title, notification.description)
        else:
            logger.info("%s: %s", notification.title, notification.description)

    @property
    def last(self) -> Notification | None:
        return self.events[-1] if self.events else None

    def titles(self) -> list[str]:
        return [event.title for event in self.events]

    def clear(self) -> None:
        self.events.clear()


def info(title: str, description: str) -> Notification:
    return Notification(title=title, description=description, severity=Severity.INFO)


def destructive(title: str, description: str) -> Notification:
    return Notification(title=title, description=description, severity=Severity.DESTRUCTIVE)
