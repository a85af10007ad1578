"""Leave balance calculator.

Consumption per approved request: one unit for halfday, otherwise the
number of Mon-Fri days in [start_date, end_date]. Company holidays are not
subtracted. Remaining is total - used and may go negative.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from hrcore.core.dates import business_days
from hrcore.models.entities import LeaveRequest, LeaveStatus, LeaveType, Snapshot
from hrcore.models.policy import LeaveQuotas
from hrcore.models.views import LeaveAnalytics, LeaveBalance

QUOTA_TYPES = (LeaveType.ANNUAL, LeaveType.SICK, LeaveType.PERSONAL, LeaveType.HALFDAY)


def leave_duration(request: LeaveRequest) -> int:
    """Units consumed by one request; 0 when a date is missing or unparseable."""
    if request.start_date is None or request.end_date is None:
        return 0
    if request.type == LeaveType.HALFDAY:
        return 1
    return business_days(request.start_date.date(), request.end_date.date())


def compute_balance(
    requests: Iterable[LeaveRequest],
    leave_type: LeaveType | str,
    quotas: LeaveQuotas | None = None,
) -> LeaveBalance:
    quotas = quotas or LeaveQuotas()
    total = quotas.quota_for(leave_type)
    if total is None:
        return LeaveBalance()
    used = sum(
        leave_duration(r) for r in requests
        if r.status == LeaveStatus.APPROVED and r.type == leave_type
    )
    return LeaveBalance(total=total, used=used, remaining=total - used)


def compute_balances(
    requests: Iterable[LeaveRequest],
    quotas: LeaveQuotas | None = None,
) -> dict[LeaveType, LeaveBalance]:
    requests = list(requests)
    return {t: compute_balance(requests, t, quotas) for t in QUOTA_TYPES}


def duration_label(request: LeaveRequest) -> str:
    """Label such as "3 working days". Halfday requests are not special-cased."""
    if request.start_date is None or request.end_date is None:
        return "0 working days"
    days = business_days(request.start_date.date(), request.end_date.date())
    return f"{days} working day{'' if days == 1 else 's'}"


def leave_analytics(requests: Iterable[LeaveRequest], today: Optional[date] = None) -> LeaveAnalytics:
    today = today or date.today()
    stats = LeaveAnalytics()
    for r in requests:
        stats.total_requests += 1
        if r.status == LeaveStatus.PENDING:
            stats.pending_count += 1
        elif r.status == LeaveStatus.APPROVED:
            stats.approved_count += 1
        elif r.status == LeaveStatus.REJECTED:
            stats.rejected_count += 1
        opened = r.created_at or r.start_date
        if opened is not None and (opened.year, opened.month) == (today.year, today.month):
            stats.this_month_requests += 1
    return stats


def search_leave_requests(
    requests: Iterable[LeaveRequest],
    term: str,
    snapshot: Snapshot | None = None,
) -> list[LeaveRequest]:
    """Case-insensitive match on type, reason, status and requester name."""
    needle = (term or "").strip().lower()
    requests = list(requests)
    if not needle:
        return requests

    matched = []
    for r in requests:
        fields = [str(r.type), r.reason or "", str(r.status)]
        if snapshot is not None:
            emp = snapshot.employee(r.user_id)
            if emp is not None:
                fields.append(emp.full_name)
        if any(needle in f.lower() for f in fields):
            matched.append(r)
    return matched
