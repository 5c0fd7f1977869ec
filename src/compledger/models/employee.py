"""Employee compensation state as exchanged with the backing store."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from compledger.models.ledger_entry import LedgerEntry, Money, OptionalAmount, OptionalDateField


class AdditionalAllowance(BaseModel):
    """Free-form allowance added with "Add More"; not versioned by the ledger."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    type: str = ""
    amount: OptionalAmount = Decimal("0")
    percentage: Optional[Decimal] = None


class EmployeeSnapshot(BaseModel):
    """Currently loaded compensation state of one employee."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    employee_id: str = ""

    # --- Ledger-versioned components ---
    basic: OptionalAmount = Decimal("0")
    other_allowance: OptionalAmount = Decimal("0")

    # --- Components tracked on the employee record only ---
    house_rent_allowance: OptionalAmount = Decimal("0")
    vehicle_allowance: OptionalAmount = Decimal("0")
    fuel_allowance: OptionalAmount = Decimal("0")
    additional_allowances: tuple[AdditionalAllowance, ...] = ()

    # --- Dates used to anchor legacy history ---
    date_of_joining: OptionalDateField = None
    created_at: Optional[datetime] = None

    salary_history: tuple[LedgerEntry, ...] = ()
    current_revision_id: Optional[int] = None  # pointer to the open revision

    @property
    def has_legacy_pay(self) -> bool:
        """Carries current pay that was never versioned into the ledger."""
        return not self.salary_history and (self.basic > 0 or self.other_allowance > 0)


class CompensationPayload(BaseModel):
    """Full replacement written back to the store after an edit."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    basic: Money
    other_allowance: Money
    salary_history: tuple[LedgerEntry, ...] = Field(default_factory=tuple)
    current_revision_id: Optional[int] = None
