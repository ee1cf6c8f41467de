"""
Application errors.

Each carries a stable `code` for the API envelope; exception_handlers maps
the class to an HTTP status.
"""

from typing import Any


class ApplicationError(Exception):
    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class NotFoundError(ApplicationError):
    """No row with the requested id; `resource_id` is echoed to the client."""

    def __init__(self, message: str = "Resource not found", resource_id: Any = None) -> None:
        super().__init__(message, code="RES_NOT_FOUND")
        self.resource_id = resource_id


class ValidationError(ApplicationError):
    """
    Input that breaks a card contract.

    `field` names the first offending input field (wire name, e.g. dueDate)
    and `reason` says what was wrong; both are mirrored into `details`.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict | None = None,
        field: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message, code="VAL_VALIDATION_ERROR")
        self.field = field
        self.reason = reason
        self.details = dict(details or {})
        if field is not None:
            self.details.setdefault("field", field)
        if reason is not None:
            self.details.setdefault("reason", reason)


class DatabaseError(ApplicationError):
    """A storage call failed; the SQLAlchemy error is chained as __cause__."""

    def __init__(self, message: str = "Database error") -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR")
