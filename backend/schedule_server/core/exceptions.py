"""
Application error taxonomy.

Repositories and services raise these; the HTTP layer maps them to status
codes in one place (see ``schedule_server.main``). Each class carries a stable
``code`` which is also what bulk operations report as the failure reason.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ApplicationError(Exception):
    """Base exception for all application-specific errors."""

    code = "ApplicationError"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFound(ApplicationError):
    """A requested identity does not exist."""

    code = "NotFound"

    def __init__(self, resource: str, identifier: Any, message: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            message or f"{resource} with ID {identifier} not found.",
            {"resource": resource, "identifier": identifier},
        )


class ConstraintViolation(ApplicationError):
    """A unique or foreign-key constraint was breached."""

    code = "ConstraintViolation"

    def __init__(self, resource: str, field: str, message: Optional[str] = None):
        self.resource = resource
        self.field = field
        super().__init__(
            message or f"{resource} violates a constraint on '{field}'.",
            {"resource": resource, "field": field},
        )


class InvalidArgument(ApplicationError):
    """Malformed paging, filter or request input."""

    code = "InvalidArgument"


class NotPostponable(ApplicationError):
    """The event is flagged as not postponable."""

    code = "NotPostponable"

    def __init__(self, event_id: int):
        self.event_id = event_id
        super().__init__(
            f"Event with ID {event_id} cannot be postponed.",
            {"event_id": event_id},
        )


class Forbidden(ApplicationError):
    """The actor may not touch this particular record."""

    code = "Forbidden"


class ValidationFailed(ApplicationError):
    """One or more field rules failed; all of them are listed."""

    code = "ValidationFailed"

    def __init__(self, reasons: List[str]):
        self.reasons = list(reasons)
        super().__init__("; ".join(self.reasons), {"reasons": self.reasons})
