"""
Exception hierarchy for annotation persistence.

Storage errors are translated once, at the transaction boundary; everything
raised here reaches the caller unchanged.
"""

from typing import Any


class AnnotationError(Exception):
    """Base class for all annotation errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(AnnotationError):
    """A write batch carries malformed or unresolvable identifiers."""


class NotFoundError(AnnotationError):
    """A referenced data record does not exist."""

    def __init__(self, message: str, missing_ids: set | None = None):
        details = {"missing_ids": sorted(str(i) for i in missing_ids)} if missing_ids else None
        super().__init__(message, details)
        self.missing_ids = set(missing_ids or ())


class ConflictError(AnnotationError):
    """The atomic commit was rejected, e.g. by a concurrent modification."""
