# src/quotebook/application/notifier.py
"""
Notifier Protocol - Operator Notification Interface

Application services report success and failure to the operator through
this interface. The default implementation writes to the log.

Files that USE this module:
- quotebook.application.currency_service
- quotebook.application.budget_service
- quotebook.application.export_service
- quotebook.adapters.notifications.logging_notifier (implements it)

Files that this module USES:
- quotebook.domain.models (Severity)
"""
from __future__ import annotations

from typing import Protocol

from quotebook.domain.models import Severity


class Notifier(Protocol):
    """Protocol for operator notifications (toasts)."""
    def notify(self, title: str, message: str, severity: Severity = Severity.INFO) -> None:
        ...


class NullNotifier:
    """Notifier that drops everything, used when none is configured."""

    def notify(self, title: str, message: str, severity: Severity = Severity.INFO) -> None:
        return None
