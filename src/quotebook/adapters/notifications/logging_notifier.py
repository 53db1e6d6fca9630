# src/quotebook/adapters/notifications/logging_notifier.py
"""
Logging Notifier - Operator Notifications Written to the Log

Default Notifier implementation: info notifications are logged at INFO,
error notifications at ERROR. The last notifications are kept in memory so
a front end can display them.

Files that USE this module:
- quotebook.app (default notifier of the workbench)

Files that this module USES:
- quotebook.domain.models (Severity)
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Tuple

from quotebook.domain.models import Severity

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Notifier that logs and remembers recent notifications."""

    def __init__(self, history_size: int = 50):
        self.history: Deque[Tuple[str, str, Severity]] = deque(maxlen=history_size)

    def notify(self, title: str, message: str, severity: Severity = Severity.INFO) -> None:
        self.history.append((title, message, severity))
        if severity == Severity.ERROR:
            logger.error("%s: %s", title, message)
        else:
            logger.info("%s: %s", title, message)
