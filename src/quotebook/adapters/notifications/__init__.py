# src/quotebook/adapters/notifications/__init__.py
"""
Notification Adapters - Operator Feedback
"""

from quotebook.adapters.notifications.logging_notifier import LoggingNotifier

__all__ = ["LoggingNotifier"]
