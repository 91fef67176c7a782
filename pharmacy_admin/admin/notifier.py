"""Notifier implementations for running the admin screen without a UI."""

import logging
from typing import List

from pharmacy_admin.integrations.contracts.interfaces import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Logs alerts and answers every confirmation with a fixed reply."""

    def __init__(self, auto_confirm: bool = False):
        self.auto_confirm = auto_confirm
        self.messages: List[str] = []

    def alert(self, message: str) -> None:
        self.messages.append(message)
        logger.info(f"[ALERT] {message}")

    def confirm(self, message: str) -> bool:
        logger.info(f"[CONFIRM] {message} -> {'yes' if self.auto_confirm else 'no'}")
        return self.auto_confirm
