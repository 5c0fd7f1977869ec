"""Compensation ledger exception hierarchy."""

from __future__ import annotations


class CompLedgerError(Exception):
    """Base exception for all compensation ledger errors."""


class ValidationError(CompLedgerError):
    """One or more submitted fields failed validation.

    Raised before any ledger mutation. ``field_errors`` maps the camelCase
    field name to the message shown next to that field.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        if not field_errors:
            raise ValueError("ValidationError needs at least one field error")
        self.field_errors = dict(field_errors)
        super().__init__(
            "; ".join(f"{name}: {message}" for name, message in self.field_errors.items())
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> ValidationError:
        return cls({field: message})

    @property
    def field(self) -> str:
        """The first field that failed."""
        return next(iter(self.field_errors))

    @property
    def message(self) -> str:
        return self.field_errors[self.field]


class NotFoundError(CompLedgerError):
    """A sorted-view position no longer refers to a ledger entry."""

    def __init__(self, position: int, size: int) -> None:
        self.position = position
        self.size = size
        super().__init__(
            f"Salary record at position {position} not found (history has {size} records)"
        )


class EmployeeNotFoundError(CompLedgerError):
    """No compensation snapshot stored for the employee."""

    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id!r} not found")


class PersistenceError(CompLedgerError):
    """Writing the replacement payload to the backing store failed."""

    GENERIC_MESSAGE = "Unable to save salary details. Please try again."

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or None
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        return self.reason or self.GENERIC_MESSAGE


class CacheError(CompLedgerError):
    """Redis snapshot cache operation failed."""
