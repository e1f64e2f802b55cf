# src/tufinanza/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions. Most of them never reach
callers of the public services: they are raised by adapters and caught,
logged and degraded to safe defaults by the application layer.
"""


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class StorageError(DomainError):
    """Raised when the key-value store cannot read or write an item."""
    pass


class InvalidRecordError(DomainError):
    """Raised when a persisted record cannot be decoded."""
    pass
