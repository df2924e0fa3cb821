"""
Domain Exceptions

Typed errors for the scheduling board. Store operations carry these inside a
result instead of raising them; the ``to_dict`` form is what a form panel or
any other caller can render next to the offending input.
"""

from datetime import date
from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    RESOURCE_CONFLICT = "resource_conflict"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for display."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when work order fields are missing, malformed or inconsistent."""

    def __init__(
        self,
        field_name: str,
        value: object,
        message: str,
        error_code: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        details = {
            "field": field_name,
            "value": str(value) if value is not None else None,
            "error_code": self.error_code,
        }
        super().__init__(message, ErrorType.VALIDATION, details)


class OverlapError(DomainError):
    """Raised when a date range collides with another order on the same work center."""

    MESSAGE = "Work order overlaps with an existing order on this work center"

    def __init__(
        self,
        work_center_id: str,
        start_date: date,
        end_date: date,
        conflicting_order_id: str | None = None,
    ) -> None:
        self.work_center_id = work_center_id
        self.start_date = start_date
        self.end_date = end_date
        self.conflicting_order_id = conflicting_order_id

        details = {
            "work_center_id": work_center_id,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "conflicting_order_id": conflicting_order_id,
        }
        super().__init__(self.MESSAGE, ErrorType.RESOURCE_CONFLICT, details)


class NotFoundError(DomainError):
    """Raised when an operation references an unknown work order."""

    def __init__(self, work_order_id: str) -> None:
        self.work_order_id = work_order_id
        super().__init__(
            "Work order not found",
            ErrorType.NOT_FOUND,
            {"work_order_id": work_order_id, "entity_type": "work_order"},
        )


class StorageError(DomainError):
    """Raised by storage adapters when a key cannot be read or written."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(
            f"Storage operation failed for key '{key}': {message}",
            ErrorType.STORAGE,
            {"key": key},
        )
