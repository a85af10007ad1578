"""Attendance/leave reconciler: per-employee view records for a date range.

Day classification for attendance views:
    present   record with status present (late flagged from check-in)
    absent    record with status absent
    on_leave  no record that day, but an approved leave covers it
    (none)    anything else; the day is left out of every tally

The store is assumed to hold at most one attendance record per employee and
day. Duplicates are not collapsed: each one yields its own DayPresence.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from hrcore.core.dates import iter_days
from hrcore.models.entities import (
    AttendanceRecord,
    AttendanceStatus,
    Employee,
    LeaveRequest,
    LeaveStatus,
    Snapshot,
)
from hrcore.models.policy import AttendanceRules
from hrcore.models.views import DayPresence, EmployeeView, PresenceStatus

logger = logging.getLogger(__name__)


def local_time(ts: datetime, rules: AttendanceRules | None = None) -> datetime:
    """Shift aware timestamps into the configured zone; naive ones are kept."""
    rules = rules or AttendanceRules()
    if rules.timezone and ts.tzinfo is not None:
        return ts.astimezone(ZoneInfo(rules.timezone))
    return ts


def is_late(check_in: Optional[datetime], rules: AttendanceRules | None = None) -> bool:
    """True when the check-in time-of-day is strictly after rules.late_after."""
    if check_in is None:
        return False
    rules = rules or AttendanceRules()
    return local_time(check_in, rules).time() > rules.late_after


def record_day(record: AttendanceRecord, rules: AttendanceRules | None = None) -> Optional[date]:
    if record.date is None:
        return None
    return local_time(record.date, rules).date()


def leave_window(
    request: LeaveRequest, rules: AttendanceRules | None = None
) -> Optional[tuple[date, date]]:
    """Inclusive local days covered by the request, read the same way as record_day."""
    if request.start_date is None or request.end_date is None:
        return None
    return local_time(request.start_date, rules).date(), local_time(request.end_date, rules).date()


def overlaps(
    request: LeaveRequest, start: date, end: date, rules: AttendanceRules | None = None
) -> bool:
    window = leave_window(request, rules)
    if window is None:
        return False
    return window[0] <= end and window[1] >= start


def covers(request: LeaveRequest, day: date, rules: AttendanceRules | None = None) -> bool:
    return overlaps(request, day, day, rules)


def in_department(employees: Iterable[Employee], department_id: Optional[int]) -> list[Employee]:
    if department_id is None:
        return list(employees)
    return [e for e in employees if e.department_id == department_id]


def on_leave_in_period(
    requests: Iterable[LeaveRequest],
    user_id: int,
    start: date,
    end: date,
    rules: AttendanceRules | None = None,
) -> bool:
    return any(
        r.user_id == user_id and r.status == LeaveStatus.APPROVED and overlaps(r, start, end, rules)
        for r in requests
    )


def classify_days(
    records: Iterable[AttendanceRecord],
    leaves: Iterable[LeaveRequest],
    start: date,
    end: date,
    rules: AttendanceRules | None = None,
) -> list[DayPresence]:
    days: list[DayPresence] = []
    recorded: set[date] = set()
    for record in records:
        day = record_day(record, rules)
        if day is None:
            continue
        recorded.add(day)
        if record.status == AttendanceStatus.PRESENT:
            days.append(DayPresence(
                day=day,
                status=PresenceStatus.PRESENT,
                late=is_late(record.check_in_time, rules),
            ))
        else:
            days.append(DayPresence(day=day, status=PresenceStatus.ABSENT))

    approved = [r for r in leaves if r.status == LeaveStatus.APPROVED]
    for day in iter_days(start, end):
        if day not in recorded and any(covers(r, day, rules) for r in approved):
            days.append(DayPresence(day=day, status=PresenceStatus.ON_LEAVE))

    days.sort(key=lambda d: d.day)
    return days


def reconcile_attendance(
    snapshot: Snapshot,
    start: date,
    end: date,
    department_id: Optional[int] = None,
    rules: AttendanceRules | None = None,
) -> list[EmployeeView]:
    """One view per employee in scope, including employees with no records."""
    views: list[EmployeeView] = []
    skipped = 0
    for emp in in_department(snapshot.employees, department_id):
        records: list[AttendanceRecord] = []
        for record in snapshot.attendance_for(emp.id):
            day = record_day(record, rules)
            if day is None:
                skipped += 1
                continue
            if start <= day <= end:
                records.append(record)
        leaves = [
            r for r in snapshot.leave_requests_for(emp.id)
            if r.status == LeaveStatus.APPROVED and overlaps(r, start, end, rules)
        ]
        views.append(EmployeeView(
            employee=emp,
            records=records,
            leave_requests=leaves,
            days=classify_days(records, leaves, start, end, rules),
        ))
    if skipped:
        logger.debug("Skipped %d attendance records without a usable date", skipped)
    return views


def reconcile_leave(
    snapshot: Snapshot,
    start: date,
    end: date,
    department_id: Optional[int] = None,
    status: Optional[LeaveStatus | str] = None,
) -> list[EmployeeView]:
    """Leave views: requests overlapping [start, end], optionally by status."""
    views: list[EmployeeView] = []
    for emp in in_department(snapshot.employees, department_id):
        requests = [
            r for r in snapshot.leave_requests_for(emp.id)
            if overlaps(r, start, end) and (status is None or r.status == status)
        ]
        views.append(EmployeeView(employee=emp, leave_requests=requests))
    return views
