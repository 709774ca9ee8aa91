"""Transient notifications shown while a generation runs."""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Interface for short-lived user notifications."""

    def show_error(self, message: str) -> None:
        """Show an error notification."""

    def show_success(self, message: str) -> None:
        """Show a success notification."""

    def show_loading(self, message: str) -> int:
        """Show a persistent progress notification and return its id."""

    def dismiss(self, notification_id: int) -> None:
        """Dismiss a notification by id."""


@dataclass
class LoggingNotifier(Notifier):
    """Notifier that writes notifications to the application log."""

    active: set[int] = field(default_factory=set)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def show_error(self, message: str) -> None:
        logger.error(message)

    def show_success(self, message: str) -> None:
        logger.info(message)

    def show_loading(self, message: str) -> int:
        notification_id = next(self._ids)
        self.active.add(notification_id)
        logger.info(message)
        return notification_id

    def dismiss(self, notification_id: int) -> None:
        self.active.discard(notification_id)
