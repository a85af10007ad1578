"""Report aggregator: report rows, rollups and chart series.

Everything here is recomputed from reconciled views on every call; nothing
is retained between calls.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, timedelta, timezone
from decimal import Decimal
from typing import Iterable, Optional

from hrcore.core.dates import calendar_days
from hrcore.engine.payroll_calc import compute_payroll
from hrcore.engine.reconciler import in_department, is_late, leave_window, local_time, record_day
from hrcore.models.entities import AttendanceStatus, Employee, LeaveStatus, LeaveType, Snapshot
from hrcore.models.policy import AttendanceRules, PayrollRates
from hrcore.models.views import (
    AttendanceReportRow,
    ChartPoint,
    DailyAttendance,
    EmployeeView,
    LeaveReportRow,
    PayrollReportRow,
    PresenceStatus,
)

NOT_AVAILABLE = "N/A"

# Pie buckets for the leave chart. Halfday has no bucket and is dropped.
LEAVE_CHART_BUCKETS = (
    LeaveType.ANNUAL,
    LeaveType.SICK,
    LeaveType.PERSONAL,
    LeaveType.UNPAID,
    LeaveType.OTHER,
)


# ---------------------------------------------------------------------------
# Per-employee rows
# ---------------------------------------------------------------------------

def average_check_in(view: EmployeeView, rules: AttendanceRules | None = None) -> str:
    """Mean check-in timestamp as "hh:mm AM", or "N/A" with no check-ins."""
    stamps = [
        ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)
        for ts in (r.check_in_time for r in view.records)
        if ts is not None
    ]
    if not stamps:
        return NOT_AVAILABLE
    base = stamps[0]
    offset = sum((ts - base for ts in stamps), timedelta()) / len(stamps)
    return local_time(base + offset, rules).strftime("%I:%M %p")


def attendance_row(
    view: EmployeeView, snapshot: Snapshot, rules: AttendanceRules | None = None
) -> AttendanceReportRow:
    present = [r for r in view.records if r.status == AttendanceStatus.PRESENT]
    absent = sum(1 for r in view.records if r.status == AttendanceStatus.ABSENT)
    total = len(view.records)
    rate = f"{len(present) / total * 100:.1f}%" if total else "0%"
    return AttendanceReportRow(
        employee_id=view.employee.id,
        employee_name=view.employee.full_name,
        department=snapshot.department_name(view.employee.department_id),
        present_days=len(present),
        absent_days=absent,
        late_days=sum(1 for r in present if is_late(r.check_in_time, rules)),
        on_leave_days=sum(1 for d in view.days if d.status == PresenceStatus.ON_LEAVE),
        total_days=total,
        attendance_rate=rate,
        avg_check_in=average_check_in(view, rules),
    )


def leave_row(view: EmployeeView, snapshot: Snapshot) -> LeaveReportRow:
    """Approved counts per type; total_days counts inclusive calendar days."""
    approved = [r for r in view.leave_requests if r.status == LeaveStatus.APPROVED]
    by_type = Counter(r.type for r in approved)
    total_days = 0
    for r in approved:
        window = leave_window(r)
        if window is not None:
            total_days += calendar_days(*window)
    return LeaveReportRow(
        employee_id=view.employee.id,
        employee_name=view.employee.full_name,
        department=snapshot.department_name(view.employee.department_id),
        annual_leaves=by_type[LeaveType.ANNUAL],
        sick_leaves=by_type[LeaveType.SICK],
        unpaid_leaves=by_type[LeaveType.UNPAID],
        total_days=total_days,
    )


def payroll_row(
    employee: Employee, snapshot: Snapshot, rates: PayrollRates | None = None
) -> PayrollReportRow:
    return PayrollReportRow(
        employee_id=employee.id,
        employee_name=employee.full_name,
        department=snapshot.department_name(employee.department_id),
        payroll=compute_payroll(employee.base_salary, rates),
    )


def payroll_rows(
    snapshot: Snapshot,
    rates: PayrollRates | None = None,
    department_id: Optional[int] = None,
) -> list[PayrollReportRow]:
    return [payroll_row(e, snapshot, rates) for e in in_department(snapshot.employees, department_id)]


# ---------------------------------------------------------------------------
# Rollups
# ---------------------------------------------------------------------------

def department_rollup(rows: Iterable[PayrollReportRow]) -> list[ChartPoint]:
    """Net salary per department name, in first-seen order."""
    totals: dict[str, Decimal] = {}
    for row in rows:
        totals[row.department] = totals.get(row.department, Decimal("0")) + row.payroll.net_salary
    return [ChartPoint(name=name, value=value) for name, value in totals.items()]


def leave_type_rollup(views: Iterable[EmployeeView]) -> list[ChartPoint]:
    counts = {bucket: 0 for bucket in LEAVE_CHART_BUCKETS}
    for view in views:
        for r in view.leave_requests:
            if r.status == LeaveStatus.APPROVED and r.type in counts:
                counts[r.type] += 1
    return [ChartPoint(name=str(t).capitalize(), value=n) for t, n in counts.items()]


def attendance_timeseries(
    views: Iterable[EmployeeView],
    today: Optional[date] = None,
    rules: AttendanceRules | None = None,
    window_days: int = 7,
) -> list[DailyAttendance]:
    """Present/absent/late per day for the window ending today.

    The window ignores the report's own date range. Empty when no view has
    any attendance record.
    """
    views = list(views)
    if not any(v.records for v in views):
        return []
    today = today or date.today()

    series = []
    for offset in range(window_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        point = DailyAttendance(label=day.strftime("%m/%d"), day=day)
        for view in views:
            for r in view.records:
                if record_day(r, rules) != day:
                    continue
                if r.status == AttendanceStatus.PRESENT:
                    point.present += 1
                    if is_late(r.check_in_time, rules):
                        point.late += 1
                elif r.status == AttendanceStatus.ABSENT:
                    point.absent += 1
        series.append(point)
    return series


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def matches_search(employee: Employee, term: Optional[str]) -> bool:
    """Case-insensitive substring match over the employee's identity fields."""
    needle = (term or "").strip().lower()
    if not needle:
        return True
    parts = [
        employee.first_name,
        employee.last_name,
        employee.email,
        employee.position or "",
        employee.username,
        employee.full_name,
    ]
    haystack = " ".join(p for p in parts if p).lower()
    return needle in haystack


def filter_views(views: Iterable[EmployeeView], term: Optional[str]) -> list[EmployeeView]:
    return [v for v in views if matches_search(v.employee, term)]


def filter_employees(employees: Iterable[Employee], term: Optional[str]) -> list[Employee]:
    return [e for e in employees if matches_search(e, term)]
