"""Report endpoints: attendance, leave and payroll, with XLSX export."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends

from hrcore.api.routes.deps import get_service
from hrcore.models.entities import LeaveStatus
from hrcore.models.views import AttendanceReport, LeaveReport, PayrollReport
from hrcore.services.report_service import ReportService

router = APIRouter(tags=["reports"])


@router.get("/attendance", response_model=AttendanceReport)
async def attendance_report(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    department_id: Optional[int] = None,
    search: Optional[str] = None,
    service: ReportService = Depends(get_service),
) -> AttendanceReport:
    return service.attendance_report(start_date, end_date, department_id, search)


@router.get("/leave", response_model=LeaveReport)
async def leave_report(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    department_id: Optional[int] = None,
    status: Optional[LeaveStatus] = None,
    search: Optional[str] = None,
    service: ReportService = Depends(get_service),
) -> LeaveReport:
    return service.leave_report(start_date, end_date, department_id, status, search)


@router.get("/payroll", response_model=PayrollReport)
async def payroll_report(
    department_id: Optional[int] = None,
    search: Optional[str] = None,
    service: ReportService = Depends(get_service),
) -> PayrollReport:
    return service.payroll_report(department_id, search)


@router.post("/{report_type}/export")
async def export_report(
    report_type: Literal["attendance", "leave", "payroll"],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    department_id: Optional[int] = None,
    service: ReportService = Depends(get_service),
) -> dict:
    path = service.export_report(report_type, start_date, end_date, department_id)
    return {"report_type": report_type, "path": path}
