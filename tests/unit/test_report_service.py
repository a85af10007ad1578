"""Tests for ReportService wiring, range checks and memoization."""

from __future__ import annotations

from datetime import date

import pytest

from hrcore.core.config import AppSettings, ReportConfig
from hrcore.core.exceptions import (
    CacheError,
    EmployeeNotFoundError,
    InvalidDateRangeError,
    StorageError,
)
from hrcore.engine.exporters import XLSX_CONTENT_TYPE
from hrcore.models.entities import LeaveStatus, Snapshot
from hrcore.models.policy import HRPolicy, LeaveQuotas
from hrcore.services.report_service import ReportService
from tests.fakes import (
    MemoryCacheBackend,
    MemoryFileStore,
    MemoryPolicyStore,
    MemorySnapshotStore,
    UnreachableCacheBackend,
)

MON = date(2025, 1, 6)
FRI = date(2025, 1, 10)


def _policies() -> MemoryPolicyStore:
    return MemoryPolicyStore({
        "GLOBAL": HRPolicy().model_dump(mode="json"),
        "DEPT#1": HRPolicy(leave=LeaveQuotas(annual=25)).model_dump(mode="json"),
    })


@pytest.fixture
def snapshots(snapshot):
    return MemorySnapshotStore(snapshot)


@pytest.fixture
def files():
    return MemoryFileStore()


@pytest.fixture
def service(snapshots, files):
    return ReportService(
        settings=AppSettings(),
        snapshots=snapshots,
        policies=_policies(),
        files=files,
        clock=lambda: date(2025, 1, 8),
    )


@pytest.fixture
def cache():
    return MemoryCacheBackend()


@pytest.fixture
def cached_service(snapshots, cache):
    return ReportService(
        settings=AppSettings(reports=ReportConfig(cache_enabled=True)),
        snapshots=snapshots,
        policies=_policies(),
        cache=cache,
        clock=lambda: date(2025, 1, 8),
    )


class TestRangeValidation:
    @pytest.mark.parametrize("start, end", [(None, FRI), (MON, None), (FRI, MON)])
    def test_attendance_rejects_bad_range(self, service, start, end):
        with pytest.raises(InvalidDateRangeError):
            service.attendance_report(start, end)

    def test_leave_rejects_inverted_range(self, service):
        with pytest.raises(InvalidDateRangeError):
            service.leave_report(FRI, MON)

    def test_single_day_range_is_valid(self, service):
        report = service.attendance_report(MON, MON)
        assert report.start == report.end == MON


class TestAttendanceReport:
    def test_rows_and_chart(self, service):
        report = service.attendance_report(MON, FRI)
        assert [r.employee_id for r in report.rows] == [1, 2, 3]
        assert len(report.chart) == 7
        assert report.chart[-1].day == date(2025, 1, 8)

    def test_search_filters_rows_not_chart(self, service):
        report = service.attendance_report(MON, FRI, search="bob")
        assert [r.employee_id for r in report.rows] == [2]
        day6 = next(p for p in report.chart if p.day == MON)
        assert day6.present == 2

    def test_department_filter(self, service):
        report = service.attendance_report(MON, FRI, department_id=1)
        assert [r.department for r in report.rows] == ["Engineering"]


class TestLeaveReport:
    def test_rows_chart_and_analytics(self, service):
        report = service.leave_report(MON, FRI)
        assert len(report.rows) == 3
        assert report.chart[0].name == "Annual"
        assert report.analytics.total_requests == 5

    def test_status_filter(self, service):
        report = service.leave_report(date(2025, 1, 1), date(2025, 1, 31), status=LeaveStatus.REJECTED)
        assert sum(r.total_days for r in report.rows) == 0


class TestPayrollReport:
    def test_summary_and_chart(self, service):
        report = service.payroll_report()
        assert report.summary.employee_count == 3
        assert report.summary.top_department == "Engineering"
        assert {p.name for p in report.chart} == {"Engineering", "Sales", "Unassigned"}

    def test_search_keeps_chart_for_whole_scope(self, service):
        report = service.payroll_report(search="alice")
        assert [r.employee_id for r in report.rows] == [1]
        assert len(report.chart) == 3


class TestPerEmployee:
    def test_leave_balances(self, service):
        result = service.leave_balances(1)
        assert result.balances["annual"].remaining == 17
        assert result.balances["halfday"].used == 1

    def test_leave_balances_scoped_policy(self, service):
        assert service.leave_balances(1, scope="DEPT#1").balances["annual"].remaining == 22

    def test_unknown_employee(self, service):
        with pytest.raises(EmployeeNotFoundError):
            service.leave_balances(99)
        with pytest.raises(EmployeeNotFoundError):
            service.payroll_for(99)

    def test_payroll_for(self, service):
        assert service.payroll_for(2).net_salary == 57000


class TestPolicy:
    def test_unknown_scope_falls_back_to_global(self, service):
        policy = service.policy("DEPT#42")
        assert policy.scope == "DEPT#42"
        assert policy.leave.annual == 20

    def test_default_scope_from_settings(self, service):
        assert service.policy().scope == "GLOBAL"


class TestPayments:
    def test_plan_for_month(self, service):
        plan = service.payment_plan("Jan 2025")
        assert plan.summary.paid_count == 1
        assert [d.employee_id for d in plan.missing] == [2, 3]

    def test_month_defaults_to_clock(self, service):
        assert service.payment_plan().month == "Jan 2025"

    def test_payment_summary(self, service):
        summary = service.payment_summary("Jan 2025")
        assert summary.total_paid == 114000
        assert service.payment_summary("Feb 2025").paid_count == 0


def test_holiday_calendar_uses_clock(service):
    cal = service.holiday_calendar()
    assert cal.today == date(2025, 1, 8)
    assert [h.name for h in cal.past] == ["New Year"]
    assert cal.this_month_count == 1
    assert cal.upcoming == []


def test_holiday_calendar_explicit_day(service):
    cal = service.holiday_calendar(date(2025, 1, 1))
    assert cal.todays_holiday.name == "New Year"
    assert cal.past_count == 0


class TestExport:
    def test_writes_xlsx(self, service, files):
        path = service.export_report("attendance", MON, FRI)
        assert path == "exports/attendance_report_2025-01-06_to_2025-01-10.xlsx"
        assert files.read(path)[:2] == b"PK"
        assert files.content_types[path] == XLSX_CONTENT_TYPE

    def test_payroll_export_needs_no_range(self, service, files):
        assert service.export_report("payroll") == "exports/payroll_report.xlsx"

    def test_requires_file_store(self, snapshots):
        svc = ReportService(settings=AppSettings(), snapshots=snapshots, policies=_policies())
        with pytest.raises(StorageError):
            svc.export_report("payroll")


class TestMemoization:
    def test_second_call_served_from_cache(self, cached_service, cache):
        first = cached_service.attendance_report(MON, FRI)
        second = cached_service.attendance_report(MON, FRI)
        assert first.model_dump() == second.model_dump()
        keys = cache.keys()
        assert len(keys) == 1
        assert keys[0].startswith("report:attendance:")

    def test_new_snapshot_gets_new_key(self, cached_service, cache, snapshots):
        cached_service.payroll_report()
        snapshots.replace(Snapshot())
        report = cached_service.payroll_report()
        assert report.summary.employee_count == 0
        assert len(cache.keys()) == 2

    def test_different_params_get_different_keys(self, cached_service, cache):
        cached_service.leave_report(MON, FRI)
        cached_service.leave_report(MON, FRI, search="bob")
        assert len(cache.keys()) == 2

    def test_disabled_cache_stores_nothing(self, snapshots, cache):
        svc = ReportService(
            settings=AppSettings(), snapshots=snapshots, policies=_policies(), cache=cache,
        )
        svc.payroll_report()
        assert cache.keys() == []


class TestCacheOutage:
    @pytest.fixture
    def down_service(self, snapshots):
        return ReportService(
            settings=AppSettings(reports=ReportConfig(cache_enabled=True)),
            snapshots=snapshots,
            policies=_policies(),
            cache=UnreachableCacheBackend(),
            clock=lambda: date(2025, 1, 8),
        )

    def test_reports_still_computed(self, down_service, service):
        assert down_service.payroll_report().model_dump() == service.payroll_report().model_dump()
        assert len(down_service.attendance_report(MON, FRI).rows) == 3

    def test_outage_is_logged(self, down_service, caplog):
        with caplog.at_level("WARNING", logger="hrcore.services.report_service"):
            down_service.leave_report(MON, FRI)
        assert "cache read failed" in caplog.text
        assert "cache write failed" in caplog.text

    def test_readiness_reports_unreachable_cache(self, down_service):
        with pytest.raises(CacheError):
            down_service.readiness()

    def test_readiness_with_reachable_cache(self, cached_service):
        cached_service.readiness()
