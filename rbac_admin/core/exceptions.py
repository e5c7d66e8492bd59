"""
Error types raised by the RBAC core.

Every rejected operation leaves the stores exactly as they were, so callers
can report the error and retry with corrected input.
"""
from typing import Any, Optional


class RBACError(Exception):
    """Base class for all errors raised by the core."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        detail = {"error": self.message}
        if self.field:
            detail["field"] = self.field
        return detail


class ValidationError(RBACError):
    """Input failed a validation rule (malformed email, empty name, ...)."""


class NotFoundError(RBACError):
    """An operation referenced a record id that is not in the store."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConfirmationRequiredError(RBACError):
    """A destructive operation was invoked without the caller's confirmation."""
