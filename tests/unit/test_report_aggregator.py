"""Tests for report rows, rollups and chart series."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from hrcore.engine.reconciler import reconcile_attendance, reconcile_leave
from hrcore.engine.report_aggregator import (
    attendance_row,
    attendance_timeseries,
    average_check_in,
    department_rollup,
    filter_employees,
    leave_row,
    leave_type_rollup,
    matches_search,
    payroll_rows,
)
from hrcore.models.entities import AttendanceRecord
from hrcore.models.views import EmployeeView

MON = date(2025, 1, 6)
FRI = date(2025, 1, 10)


class TestAttendanceRow:
    def test_mixed_week(self, snapshot):
        alice = reconcile_attendance(snapshot, MON, FRI)[0]
        row = attendance_row(alice, snapshot)
        assert row.employee_name == "Alice Smith"
        assert row.department == "Engineering"
        assert (row.present_days, row.absent_days, row.late_days) == (2, 1, 1)
        assert row.on_leave_days == 1
        assert row.total_days == 3
        assert row.attendance_rate == "66.7%"

    def test_check_in_exactly_nine_is_on_time(self, snapshot):
        bob = reconcile_attendance(snapshot, MON, FRI)[1]
        row = attendance_row(bob, snapshot)
        assert row.late_days == 0
        assert row.attendance_rate == "100.0%"
        assert row.avg_check_in == "09:00 AM"

    def test_no_records(self, snapshot):
        carol = reconcile_attendance(snapshot, MON, FRI)[2]
        row = attendance_row(carol, snapshot)
        assert row.total_days == 0
        assert row.attendance_rate == "0%"
        assert row.avg_check_in == "N/A"
        assert row.department == "Unassigned"


def test_average_check_in_is_mean_timestamp(snapshot):
    records = [
        AttendanceRecord.model_validate(
            {"id": i, "userId": 1, "date": "2025-01-06", "checkInTime": ts, "status": "present"}
        )
        for i, ts in enumerate(["2025-01-06T08:30:00", "2025-01-06T09:30:00"])
    ]
    view = EmployeeView(employee=snapshot.employee(1), records=records)
    assert average_check_in(view) == "09:00 AM"


class TestLeaveRow:
    def test_counts_and_calendar_days(self, snapshot):
        alice, bob, _ = reconcile_leave(snapshot, MON, FRI)
        bob_row = leave_row(bob, snapshot)
        assert bob_row.annual_leaves == 1
        assert bob_row.total_days == 2
        alice_row = leave_row(alice, snapshot)
        # halfday has no column of its own but still adds its calendar day
        assert (alice_row.annual_leaves, alice_row.sick_leaves, alice_row.unpaid_leaves) == (0, 0, 0)
        assert alice_row.total_days == 1

    def test_unapproved_requests_ignored(self, snapshot):
        views = reconcile_leave(snapshot, date(2025, 1, 1), date(2025, 1, 31))
        bob_row = leave_row(views[1], snapshot)
        assert bob_row.sick_leaves == 0


class TestRollups:
    def test_leave_type_rollup_drops_halfday(self, snapshot):
        chart = leave_type_rollup(reconcile_leave(snapshot, MON, FRI))
        assert [p.name for p in chart] == ["Annual", "Sick", "Personal", "Unpaid", "Other"]
        assert [p.value for p in chart] == [1, 0, 0, 0, 0]

    def test_department_rollup_sums_net(self, snapshot):
        chart = department_rollup(payroll_rows(snapshot))
        assert {p.name: p.value for p in chart} == {
            "Engineering": Decimal("114000"),
            "Sales": Decimal("57000"),
            "Unassigned": Decimal("0"),
        }

    def test_payroll_rows_department_filter(self, snapshot):
        rows = payroll_rows(snapshot, department_id=1)
        assert [r.employee_id for r in rows] == [1]
        assert rows[0].export_dict()["Net Salary"] == 114000


class TestAttendanceTimeseries:
    def test_window_ends_today(self, snapshot):
        views = reconcile_attendance(snapshot, MON, FRI)
        series = attendance_timeseries(views, today=date(2025, 1, 8))
        assert len(series) == 7
        assert series[0].label == "01/02"
        assert series[-1].label == "01/08"
        by_day = {p.day.day: (p.present, p.absent, p.late) for p in series}
        assert by_day[6] == (2, 0, 0)
        assert by_day[7] == (1, 0, 1)
        assert by_day[8] == (0, 1, 0)
        assert by_day[2] == (0, 0, 0)

    def test_custom_window(self, snapshot):
        views = reconcile_attendance(snapshot, MON, FRI)
        assert len(attendance_timeseries(views, today=FRI, window_days=3)) == 3

    def test_empty_when_no_records(self, snapshot):
        views = reconcile_attendance(snapshot, date(2025, 2, 1), date(2025, 2, 28))
        assert attendance_timeseries(views, today=date(2025, 2, 10)) == []


class TestSearch:
    def test_matches_identity_fields(self, snapshot):
        alice = snapshot.employee(1)
        assert matches_search(alice, "ali")
        assert matches_search(alice, "ENGINEER")
        assert matches_search(alice, "alice smith")
        assert matches_search(alice, "")
        assert not matches_search(alice, "zzz")

    def test_filter_employees(self, snapshot):
        assert [e.id for e in filter_employees(snapshot.employees, "example.com")] == [1, 2, 3]
        assert [e.id for e in filter_employees(snapshot.employees, "rep")] == [2]
