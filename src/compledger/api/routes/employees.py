"""Salary history endpoints called by the employee profile page."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from compledger.models.edits import EditMode
from compledger.services.compensation import CompensationService

router = APIRouter(tags=["salary"])


class SalaryEditRequest(BaseModel):
    """Form submission from the salary modal.

    Amounts are taken as-is so the service reports field-level errors.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    mode: str = EditMode.EDIT_CURRENT.value
    month: Optional[str] = None
    basic: Any = None
    other_allowance: Any = None
    position: Optional[int] = None
    page: int = 1

    def revision_data(self) -> dict[str, Any]:
        return {"month": self.month, "basic": self.basic, "otherAllowance": self.other_allowance}


def get_service(request: Request) -> CompensationService:
    return request.app.state.service


@router.get("/employees/{employee_id}/salary-history")
def get_salary_history(
    employee_id: str, page: int = 1, service: CompensationService = Depends(get_service)
) -> dict:
    """Sorted, paginated salary history including legacy pay."""
    return service.view(employee_id, page).model_dump(by_alias=True, mode="json")


@router.post("/employees/{employee_id}/salary")
def submit_salary(
    employee_id: str, body: SalaryEditRequest, service: CompensationService = Depends(get_service)
) -> dict:
    """Edit current salary, add a record, or correct a historical row."""
    result = service.submit(
        employee_id, body.mode, body.revision_data(), position=body.position, page=body.page,
    )
    return result.model_dump(by_alias=True, mode="json")


@router.delete("/employees/{employee_id}/salary-history/{position}")
def delete_salary_record(
    employee_id: str, position: int, page: int = 1,
    service: CompensationService = Depends(get_service),
) -> dict:
    """Delete the row shown at a sorted-view position."""
    result = service.submit(employee_id, EditMode.DELETE_HISTORICAL, position=position, page=page)
    return result.model_dump(by_alias=True, mode="json")


@router.get("/employees/{employee_id}/package")
def get_package(
    employee_id: str,
    monthly_salary: Optional[str] = Query(default=None, alias="monthlySalary"),
    service: CompensationService = Depends(get_service),
) -> dict:
    """Current monthly package total; validates a declared monthly salary if given."""
    result = service.package(employee_id, monthly_salary)
    return {"total": float(result["total"]), "currency": result["currency"]}
