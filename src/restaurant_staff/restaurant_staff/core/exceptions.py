from __future__ import annotations

from datetime import date
from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Carries enough context (employee, day, field) for the caller to build a message.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        *,
        employee_id: Optional[int] = None,
        work_date: Optional[date] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.employee_id = employee_id
        self.work_date = work_date
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.employee_id is not None:
            out["employee_id"] = self.employee_id
        if self.work_date is not None:
            out["date"] = self.work_date.isoformat()
        if self.field is not None:
            out["field"] = self.field
        return out


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    error_code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Raised when an employee or record does not exist."""

    error_code = "NOT_FOUND"


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the current employee/record state."""

    error_code = "INVALID_STATE"


class EmployeeInactiveError(InvalidStateError):
    error_code = "EMPLOYEE_INACTIVE"


class AlreadyCheckedInError(InvalidStateError):
    error_code = "ALREADY_CHECKED_IN"


class NotCheckedInError(InvalidStateError):
    error_code = "NOT_CHECKED_IN"


class AlreadyCheckedOutError(InvalidStateError):
    error_code = "ALREADY_CHECKED_OUT"


class BreakInProgressError(InvalidStateError):
    error_code = "BREAK_IN_PROGRESS"


class NoOpenBreakError(InvalidStateError):
    error_code = "NO_OPEN_BREAK"


class InsufficientBalanceError(DomainError):
    error_code = "INSUFFICIENT_BALANCE"


class UnsupportedPayrollTypeError(DomainError):
    error_code = "UNSUPPORTED_PAYROLL_TYPE"
