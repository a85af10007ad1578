"""ReportService: loads the latest snapshot and policy, runs the engine.

Every call recomputes from scratch. With a cache injected and
reports.cache_enabled set, results are memoized under a key made of the
snapshot fingerprint and the call parameters, so a changed snapshot never
serves a stale report.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Callable, Literal, Optional, TypeVar

from pydantic import BaseModel

from hrcore.core.config import AppSettings
from hrcore.core.dates import month_key
from hrcore.core.exceptions import (
    CacheError,
    EmployeeNotFoundError,
    InvalidDateRangeError,
    StorageError,
)
from hrcore.core.protocols import ICacheBackend, IFileStore, IPolicyStore, ISnapshotStore
from hrcore.engine import balance_calc, payments, payroll_calc, reconciler
from hrcore.engine import report_aggregator as agg
from hrcore.engine.exporters import SHEET_NAMES, XLSX_CONTENT_TYPE, export_filename, rows_to_xlsx
from hrcore.engine.holiday_calendar import holiday_calendar
from hrcore.models.entities import LeaveStatus, Snapshot
from hrcore.models.views import (
    AttendanceReport,
    EmployeeLeaveBalances,
    HolidayCalendar,
    LeaveReport,
    PaymentPlan,
    PaymentSummary,
    PayrollBreakdown,
    PayrollReport,
)
from hrcore.services.base import BaseService

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
ReportType = Literal["attendance", "leave", "payroll"]


def check_range(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
    if start is None or end is None or end < start:
        raise InvalidDateRangeError(start, end)
    return start, end


class ReportService(BaseService):
    """Request/response facade over the computation engine."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        snapshots: ISnapshotStore,
        policies: IPolicyStore,
        cache: ICacheBackend | None = None,
        files: IFileStore | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(
            settings=settings, snapshots=snapshots, policies=policies, cache=cache, files=files,
        )
        self._clock = clock

    # ---- memoization ----

    def _memoized(self, snapshot: Snapshot, name: str, params: dict[str, Any],
                  model: type[M], compute: Callable[[], M]) -> M:
        if self._cache is None or not self._settings.reports.cache_enabled:
            return compute()
        key = "report:{}:{}:{}".format(
            name, snapshot.fingerprint(), json.dumps(params, sort_keys=True, default=str),
        )
        try:
            cached = self._cache.get(key)
        except CacheError as exc:
            logger.warning("Report cache read failed for %s, computing: %s", name, exc)
            cached = None
        if cached is not None:
            logger.debug("Report cache hit for %s", name)
            return model.model_validate_json(cached)
        result = compute()
        try:
            self._cache.setex(key, self._settings.reports.cache_ttl, result.model_dump_json())
        except CacheError as exc:
            logger.warning("Report cache write failed for %s: %s", name, exc)
        return result

    def _employee_requests(self, snapshot: Snapshot, employee_id: int):
        if snapshot.employee(employee_id) is None:
            raise EmployeeNotFoundError(employee_id)
        return snapshot.leave_requests_for(employee_id)

    # ---- reports ----

    def attendance_report(
        self,
        start: Optional[date],
        end: Optional[date],
        department_id: Optional[int] = None,
        search: Optional[str] = None,
        scope: Optional[str] = None,
    ) -> AttendanceReport:
        start, end = check_range(start, end)
        snapshot = self._snapshots.load()
        policy = self.policy(scope)
        today = self._clock()

        def compute() -> AttendanceReport:
            views = reconciler.reconcile_attendance(
                snapshot, start, end, department_id, policy.attendance,
            )
            rows = [agg.attendance_row(v, snapshot, policy.attendance) for v in agg.filter_views(views, search)]
            chart = agg.attendance_timeseries(
                views, today, policy.attendance, policy.reports.chart_window_days,
            )
            return AttendanceReport(start=start, end=end, rows=rows, chart=chart)

        params = {"start": start, "end": end, "department_id": department_id,
                  "search": search, "scope": policy.scope, "today": today}
        return self._memoized(snapshot, "attendance", params, AttendanceReport, compute)

    def leave_report(
        self,
        start: Optional[date],
        end: Optional[date],
        department_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        search: Optional[str] = None,
    ) -> LeaveReport:
        start, end = check_range(start, end)
        snapshot = self._snapshots.load()
        today = self._clock()

        def compute() -> LeaveReport:
            views = reconciler.reconcile_leave(snapshot, start, end, department_id, status)
            return LeaveReport(
                start=start,
                end=end,
                rows=[agg.leave_row(v, snapshot) for v in agg.filter_views(views, search)],
                chart=agg.leave_type_rollup(views),
                analytics=balance_calc.leave_analytics(snapshot.leave_requests, today),
            )

        params = {"start": start, "end": end, "department_id": department_id,
                  "status": status, "search": search, "today": today}
        return self._memoized(snapshot, "leave", params, LeaveReport, compute)

    def payroll_report(
        self,
        department_id: Optional[int] = None,
        search: Optional[str] = None,
        scope: Optional[str] = None,
    ) -> PayrollReport:
        snapshot = self._snapshots.load()
        policy = self.policy(scope)

        def compute() -> PayrollReport:
            in_scope = reconciler.in_department(snapshot.employees, department_id)
            all_rows = [agg.payroll_row(e, snapshot, policy.payroll) for e in in_scope]
            matched = {e.id for e in agg.filter_employees(in_scope, search)}
            return PayrollReport(
                rows=[r for r in all_rows if r.employee_id in matched],
                chart=agg.department_rollup(all_rows),
                summary=payroll_calc.payroll_summary(snapshot, policy.payroll, in_scope),
            )

        params = {"department_id": department_id, "search": search, "scope": policy.scope}
        return self._memoized(snapshot, "payroll", params, PayrollReport, compute)

    # ---- per-employee ----

    def leave_balances(self, employee_id: int, scope: Optional[str] = None) -> EmployeeLeaveBalances:
        snapshot = self._snapshots.load()
        requests = self._employee_requests(snapshot, employee_id)
        balances = balance_calc.compute_balances(requests, self.policy(scope).leave)
        return EmployeeLeaveBalances(
            employee_id=employee_id,
            balances={str(t): b for t, b in balances.items()},
        )

    def payroll_for(self, employee_id: int, scope: Optional[str] = None) -> PayrollBreakdown:
        snapshot = self._snapshots.load()
        employee = snapshot.employee(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return payroll_calc.compute_payroll(employee.base_salary, self.policy(scope).payroll)

    # ---- payments ----

    def payment_plan(self, month: Optional[str] = None, scope: Optional[str] = None) -> PaymentPlan:
        """Summary of recorded payments for month plus drafts for the rest."""
        month = month or month_key(self._clock())
        snapshot = self._snapshots.load()
        existing = snapshot.payments_for_month(month)
        return PaymentPlan(
            month=month,
            summary=payments.payment_summary(existing),
            missing=payments.plan_missing_payments(
                snapshot.employees, existing, month, self.policy(scope).payroll,
            ),
        )

    def payment_summary(self, month: Optional[str] = None) -> PaymentSummary:
        month = month or month_key(self._clock())
        return payments.payment_summary(self._snapshots.load().payments_for_month(month))

    # ---- holidays ----

    def holiday_calendar(self, today: Optional[date] = None) -> HolidayCalendar:
        return holiday_calendar(self._snapshots.load().holidays, today or self._clock())

    # ---- export ----

    def export_report(
        self,
        report_type: ReportType,
        start: Optional[date] = None,
        end: Optional[date] = None,
        department_id: Optional[int] = None,
    ) -> str:
        """Write the report's rows as XLSX to the file store; returns the path."""
        if self._files is None:
            raise StorageError("No file store configured for exports")
        report: AttendanceReport | LeaveReport | PayrollReport
        if report_type == "attendance":
            report = self.attendance_report(start, end, department_id)
        elif report_type == "leave":
            report = self.leave_report(start, end, department_id)
        else:
            report = self.payroll_report(department_id)
        data = rows_to_xlsx(report.rows, SHEET_NAMES[report_type])
        path = self._settings.reports.export_prefix + export_filename(report_type, start, end)
        written = self._files.write(path, data, content_type=XLSX_CONTENT_TYPE)
        logger.info("Exported %s report (%d rows) to %s", report_type, len(report.rows), written)
        return written
