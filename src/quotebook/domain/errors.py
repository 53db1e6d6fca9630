# src/quotebook/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions that represent
business rule violations, storage problems and export failures.

Files that USE this module:
- quotebook.application.* (services raise and handle these errors)
- quotebook.adapters.persistence.* (stores raise storage errors)
- tests.* (tests assert on these errors)

Files that this module USES:
- None (pure domain layer)
"""
from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class ValidationError(DomainError):
    """
    Raised when operator input violates a business rule.

    Attributes:
        field: Name of the offending field, when a single field is at fault
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidRateError(ValidationError):
    """Raised when an exchange rate is invalid (e.g., negative or zero)."""

    def __init__(self, message: str):
        super().__init__(message, field="rate")


class StorageReadError(DomainError):
    """Raised when persisted content is absent or cannot be parsed."""
    pass


class StorageWriteError(DomainError):
    """Raised when persisted content cannot be written."""
    pass


class ExportFailure(DomainError):
    """Raised when a document, image or share action fails."""
    pass


class BudgetNotFoundError(DomainError):
    """Raised when a requested budget is not in the archive."""
    pass
