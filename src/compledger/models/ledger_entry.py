"""Salary history entry: one time-bounded compensation revision.

An entry is effective over the half-open interval ``[fromDate, toDate)``.
``toDate`` is null while the entry is the employee's current (open) rate.
``totalSalary`` is never taken from input; it is always derived from
``basic + otherAllowance``.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from itertools import combinations
from typing import Annotated, Any, Iterable, Mapping, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PlainSerializer,
    ValidationInfo,
    computed_field,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from compledger.core.exceptions import ValidationError
from compledger.ledger.totals import entry_total, round2

MAX_AMOUNT = Decimal("10000000")
REQUIRED_MESSAGE = "Number is required"


class Month(StrEnum):
    JANUARY = "January"
    FEBRUARY = "February"
    MARCH = "March"
    APRIL = "April"
    MAY = "May"
    JUNE = "June"
    JULY = "July"
    AUGUST = "August"
    SEPTEMBER = "September"
    OCTOBER = "October"
    NOVEMBER = "November"
    DECEMBER = "December"

    @classmethod
    def of(cls, day: date) -> Month:
        return list(cls)[day.month - 1]


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def _coerce_amount(value: Any, *, required: bool) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise PydanticCustomError("number_required", REQUIRED_MESSAGE)
        return Decimal("0")
    if isinstance(value, bool):
        raise PydanticCustomError("number_invalid", "Please enter a valid number")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise PydanticCustomError("number_invalid", "Please enter a valid number") from None
    if not number.is_finite():
        raise PydanticCustomError("number_invalid", "Please enter a valid number")
    if number < 0:
        raise PydanticCustomError("number_too_small", "Number must be at least {min}", {"min": 0})
    if number > MAX_AMOUNT:
        raise PydanticCustomError(
            "number_too_large", "Number must be no more than {max}", {"max": int(MAX_AMOUNT)}
        )
    return round2(number)


def _required_amount(value: Any) -> Decimal:
    return _coerce_amount(value, required=True)


def _optional_amount(value: Any) -> Decimal:
    return _coerce_amount(value, required=False)


def _coerce_month(value: Any) -> Month:
    if isinstance(value, Month):
        return value
    if isinstance(value, str):
        try:
            return Month(value.strip().title())
        except ValueError:
            pass
    raise PydanticCustomError("month_invalid", "Please select a valid month")


def _coerce_optional_month(value: Any) -> Month | None:
    if value is None or value == "":
        return None
    return _coerce_month(value)


def _coerce_date(value: Any) -> Any:
    """Accept ISO datetimes (``2023-03-15T00:00:00.000Z``) where a date is expected."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    if value == "":
        return None
    return value


def _money_json(value: Decimal) -> float:
    return float(value)


Money = Annotated[Decimal, PlainSerializer(_money_json, return_type=float, when_used="json")]
RequiredAmount = Annotated[Money, BeforeValidator(_required_amount)]
OptionalAmount = Annotated[Money, BeforeValidator(_optional_amount)]
MonthField = Annotated[Month, BeforeValidator(_coerce_month)]
OptionalMonthField = Annotated[Optional[Month], BeforeValidator(_coerce_optional_month)]
DateField = Annotated[date, BeforeValidator(_coerce_date)]
OptionalDateField = Annotated[Optional[date], BeforeValidator(_coerce_date)]


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    """Translate a pydantic error into a field-keyed ValidationError."""
    field_errors: dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "__root__"
        message = REQUIRED_MESSAGE if err["type"] == "missing" else err["msg"]
        field_errors.setdefault(field, message)
    return ValidationError(field_errors)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class ProposedRevision(BaseModel):
    """Compensation values a user submitted for a new or corrected revision."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    month: OptionalMonthField = None
    basic: RequiredAmount
    other_allowance: OptionalAmount = Decimal("0")

    def month_for(self, day: date) -> Month:
        return self.month or Month.of(day)


class LedgerEntry(BaseModel):
    """One compensation revision in an employee's salary history."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    revision_id: int = 0  # 0 = stored before revision ids existed
    month: MonthField
    from_date: DateField
    to_date: OptionalDateField = None
    basic: RequiredAmount
    other_allowance: OptionalAmount = Decimal("0")
    created_at: Optional[datetime] = None
    is_initial: bool = False

    @field_validator("to_date")
    @classmethod
    def _ends_after_start(cls, value: date | None, info: ValidationInfo) -> date | None:
        start = info.data.get("from_date")
        if value is not None and start is not None and value < start:
            raise PydanticCustomError("date_range", "End date cannot be before start date")
        return value

    @computed_field(alias="totalSalary")  # type: ignore[prop-decorator]
    @property
    def total_salary(self) -> Money:
        return entry_total(self.basic, self.other_allowance)

    @property
    def is_open(self) -> bool:
        return self.to_date is None

    def interval_overlaps(self, other: LedgerEntry) -> bool:
        """Whether the half-open effective intervals of two entries intersect."""
        if self.to_date == self.from_date or other.to_date == other.from_date:
            return False
        self_ends_after = other.to_date is None or self.from_date < other.to_date
        other_ends_after = self.to_date is None or other.from_date < self.to_date
        return self_ends_after and other_ends_after

    def closed_at(self, day: date) -> LedgerEntry:
        """Copy of this entry ending (exclusive) on ``day``."""
        return self._rebuild(to_date=day)

    def revised(self, revision: ProposedRevision) -> LedgerEntry:
        """Copy with new month/amounts; the effective interval is kept."""
        return self._rebuild(
            month=revision.month or self.month,
            basic=revision.basic,
            other_allowance=revision.other_allowance,
        )

    def _rebuild(self, **changes: Any) -> LedgerEntry:
        data = self.model_dump(by_alias=True, exclude={"total_salary"})
        data.update({to_camel(name): value for name, value in changes.items()})
        try:
            return LedgerEntry.model_validate(data)
        except PydanticValidationError as exc:
            raise validation_error_from(exc) from None


def parse_revision(data: Mapping[str, Any] | ProposedRevision) -> ProposedRevision:
    """Validate user input into a ProposedRevision, raising ValidationError."""
    if isinstance(data, ProposedRevision):
        return data
    try:
        return ProposedRevision.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise validation_error_from(exc) from None


# ---------------------------------------------------------------------------
# Ledger predicates
# ---------------------------------------------------------------------------

def open_entries(ledger: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    return [entry for entry in ledger if entry.is_open]


def has_single_open(ledger: Iterable[LedgerEntry]) -> bool:
    """At most one entry is open. An empty ledger qualifies."""
    return len(open_entries(ledger)) <= 1


def intervals_disjoint(ledger: Iterable[LedgerEntry]) -> bool:
    return not any(a.interval_overlaps(b) for a, b in combinations(list(ledger), 2))


def is_consistent(ledger: Iterable[LedgerEntry]) -> bool:
    entries = list(ledger)
    return has_single_open(entries) and intervals_disjoint(entries)


def next_revision_id(ledger: Iterable[LedgerEntry]) -> int:
    return max((entry.revision_id for entry in ledger), default=0) + 1
