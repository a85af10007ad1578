"""Per-employee derived records."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hrcore.api.routes.deps import get_service
from hrcore.models.views import EmployeeLeaveBalances, PayrollBreakdown
from hrcore.services.report_service import ReportService

router = APIRouter(tags=["employees"])


@router.get("/{employee_id}/leave-balance", response_model=EmployeeLeaveBalances)
async def leave_balance(
    employee_id: int, service: ReportService = Depends(get_service)
) -> EmployeeLeaveBalances:
    return service.leave_balances(employee_id)


@router.get("/{employee_id}/payroll", response_model=PayrollBreakdown)
async def payroll(employee_id: int, service: ReportService = Depends(get_service)) -> PayrollBreakdown:
    return service.payroll_for(employee_id)
