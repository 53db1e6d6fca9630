# src/quotebook/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Persistence (storage)
- Formatting (display strings and documents)
- Export (PDF/image rasterization)
- Notifications (operator messages)
- Telegram (text sharing)
"""

__all__ = []
