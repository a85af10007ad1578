"""Derived, never-persisted view records produced by the engine."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field

from hrcore.models.entities import AttendanceRecord, Employee, Holiday, LeaveRequest, PaymentRecord


class PayrollBreakdown(BaseModel):
    """Formula output for one base salary. Values are not rounded."""

    base_salary: Decimal = Decimal("0")
    gross_salary: Decimal = Decimal("0")
    hra: Decimal = Decimal("0")
    provident_fund: Decimal = Decimal("0")
    tds: Decimal = Decimal("0")
    net_salary: Decimal = Decimal("0")

    @computed_field
    @property
    def total_deductions(self) -> Decimal:
        return self.provident_fund + self.tds


class LeaveBalance(BaseModel):
    total: int = 0
    used: int = 0
    remaining: int = 0  # may go negative on over-consumption


class PresenceStatus(StrEnum):
    PRESENT = "present"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"


class DayPresence(BaseModel):
    day: date
    status: PresenceStatus
    late: bool = False


class EmployeeView(BaseModel):
    """Reconciled per-employee slice of a snapshot for one date range."""

    employee: Employee
    records: list[AttendanceRecord] = Field(default_factory=list)
    leave_requests: list[LeaveRequest] = Field(default_factory=list)
    days: list[DayPresence] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Report rows
# ---------------------------------------------------------------------------

class AttendanceReportRow(BaseModel):
    employee_id: int
    employee_name: str
    department: str
    present_days: int = 0
    absent_days: int = 0
    late_days: int = 0
    on_leave_days: int = 0
    total_days: int = 0
    attendance_rate: str = "0%"
    avg_check_in: str = "N/A"

    def export_dict(self) -> dict[str, Any]:
        return {
            "Employee Name": self.employee_name,
            "Department": self.department,
            "Present Days": self.present_days,
            "Absent Days": self.absent_days,
            "Late Days": self.late_days,
            "Total Days": self.total_days,
            "Attendance Rate": self.attendance_rate,
            "Avg. Check In": self.avg_check_in,
        }


class LeaveReportRow(BaseModel):
    employee_id: int
    employee_name: str
    department: str
    annual_leaves: int = 0
    sick_leaves: int = 0
    unpaid_leaves: int = 0
    total_days: int = 0

    def export_dict(self) -> dict[str, Any]:
        return {
            "Employee Name": self.employee_name,
            "Department": self.department,
            "Annual Leave": self.annual_leaves,
            "Sick Leave": self.sick_leaves,
            "Unpaid Leave": self.unpaid_leaves,
            "Total Days": self.total_days,
        }


class PayrollReportRow(BaseModel):
    employee_id: int
    employee_name: str
    department: str
    payroll: PayrollBreakdown

    def export_dict(self) -> dict[str, Any]:
        p = self.payroll
        return {
            "Employee Name": self.employee_name,
            "Department": self.department,
            "Basic Salary": int(p.base_salary),
            "HRA": round_whole(p.hra),
            "Gross Salary": round_whole(p.gross_salary),
            "PF Deduction": round_whole(p.provident_fund),
            "TDS": round_whole(p.tds),
            "Net Salary": round_whole(p.net_salary),
        }


def round_whole(value: Decimal) -> int:
    """Round half-up to whole currency units for display and payments."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Rollups and summaries
# ---------------------------------------------------------------------------

class ChartPoint(BaseModel):
    name: str
    value: Decimal | int


class DailyAttendance(BaseModel):
    label: str  # "MM/dd"
    day: date
    present: int = 0
    absent: int = 0
    late: int = 0


class PayrollSummary(BaseModel):
    employee_count: int = 0
    total_salary_budget: Decimal = Decimal("0")
    average_salary: Decimal = Decimal("0")
    total_net_salary: Decimal = Decimal("0")
    total_deductions: Decimal = Decimal("0")
    average_net_salary: Decimal = Decimal("0")
    top_department: str = "N/A"  # highest average base salary


class PaymentSummary(BaseModel):
    paid_count: int = 0
    pending_count: int = 0
    total_paid: int = 0
    total_due: int = 0


class PaymentPlan(BaseModel):
    month: str
    summary: PaymentSummary
    missing: list[PaymentRecord] = Field(default_factory=list)


class LeaveAnalytics(BaseModel):
    total_requests: int = 0
    pending_count: int = 0
    approved_count: int = 0
    rejected_count: int = 0
    this_month_requests: int = 0


class HolidayCalendar(BaseModel):
    """Company holidays split around today. Lists are sorted by date."""

    today: date
    holidays: list[Holiday] = Field(default_factory=list)
    past: list[Holiday] = Field(default_factory=list)
    todays_holiday: Optional[Holiday] = None
    upcoming: list[Holiday] = Field(default_factory=list)
    next_upcoming: list[Holiday] = Field(default_factory=list)
    total: int = 0
    past_count: int = 0
    upcoming_count: int = 0  # within the next 30 days
    this_month_count: int = 0


# ---------------------------------------------------------------------------
# Report envelopes
# ---------------------------------------------------------------------------

class AttendanceReport(BaseModel):
    start: date
    end: date
    rows: list[AttendanceReportRow] = Field(default_factory=list)
    chart: list[DailyAttendance] = Field(default_factory=list)


class LeaveReport(BaseModel):
    start: date
    end: date
    rows: list[LeaveReportRow] = Field(default_factory=list)
    chart: list[ChartPoint] = Field(default_factory=list)
    analytics: LeaveAnalytics = LeaveAnalytics()


class PayrollReport(BaseModel):
    rows: list[PayrollReportRow] = Field(default_factory=list)
    chart: list[ChartPoint] = Field(default_factory=list)
    summary: PayrollSummary = PayrollSummary()


class EmployeeLeaveBalances(BaseModel):
    employee_id: int
    balances: dict[str, LeaveBalance] = Field(default_factory=dict)
