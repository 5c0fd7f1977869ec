"""Totals for salary revisions and for an employee's current package.

All money is Decimal and is rounded half-up to cents at the point it is
stored or displayed, so repeated edits never accumulate float drift.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

from compledger.core.exceptions import ValidationError

if TYPE_CHECKING:
    from compledger.models.employee import EmployeeSnapshot

CENT = Decimal("0.01")
MONTHLY_TOLERANCE = Decimal("0.01")


def round2(value: Any) -> Decimal:
    """Round a money amount to 2 decimal places (half-up)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def entry_total(basic: Any, other_allowance: Any = 0) -> Decimal:
    """Total salary of a single revision: basic + other allowance."""
    return round2(Decimal(str(basic)) + Decimal(str(other_allowance)))


def aggregate_total(employee: EmployeeSnapshot) -> Decimal:
    """Current monthly package of an employee.

    Basic and other allowance are the ledger-versioned components; house
    rent, vehicle, fuel and the free-form additional allowances live only on
    the employee record.
    """
    total = (
        employee.basic
        + employee.other_allowance
        + employee.house_rent_allowance
        + employee.vehicle_allowance
        + employee.fuel_allowance
    )
    total += sum((a.amount for a in employee.additional_allowances), Decimal("0"))
    return round2(total)


def check_monthly_salary(monthly: Any, employee: EmployeeSnapshot, currency: str = "AED") -> None:
    """Require a declared monthly salary to equal the sum of its components."""
    try:
        declared = Decimal(str(monthly)) if monthly not in (None, "") else Decimal("0")
    except ArithmeticError:
        declared = Decimal("0")
    if not declared.is_finite() or declared <= 0:
        raise ValidationError.for_field("monthlySalary", "Monthly salary is required")

    total = aggregate_total(employee)
    if abs(total - declared) > MONTHLY_TOLERANCE:
        raise ValidationError.for_field(
            "monthlySalary",
            f"Monthly salary ({currency} {round2(declared)}) must equal total ({currency} {total})",
        )
