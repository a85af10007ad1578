"""Payroll formula engine: base salary to gross, HRA, PF, TDS and net.

gross = base + base * allowance
hra   = base * hra            (informational, not added to gross)
pf    = base * provident_fund
tds   = gross * tds
net   = gross - pf - tds

Values are exact Decimals; rounding is left to display and payment code.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from hrcore.models.entities import Employee, Snapshot
from hrcore.models.policy import PayrollRates
from hrcore.models.views import PayrollBreakdown, PayrollSummary

_ZERO = Decimal("0")


def compute_payroll(base_salary: Optional[int | Decimal], rates: PayrollRates | None = None) -> PayrollBreakdown:
    """Full breakdown for one base salary. Absent salary counts as 0."""
    rates = rates or PayrollRates()
    base = Decimal(base_salary or 0)
    gross = base + base * rates.allowance
    pf = base * rates.provident_fund
    tds = gross * rates.tds
    return PayrollBreakdown(
        base_salary=base,
        gross_salary=gross,
        hra=base * rates.hra,
        provident_fund=pf,
        tds=tds,
        net_salary=gross - pf - tds,
    )


def payroll_summary(
    snapshot: Snapshot,
    rates: PayrollRates | None = None,
    employees: Optional[Iterable[Employee]] = None,
) -> PayrollSummary:
    """Dashboard totals over employees (default: everyone in the snapshot).

    Averages are 0 and top_department is "N/A" when there are no employees.
    """
    rates = rates or PayrollRates()
    employees = list(snapshot.employees if employees is None else employees)
    if not employees:
        return PayrollSummary()

    budget = _ZERO
    net = _ZERO
    deductions = _ZERO
    by_dept: dict[str, list[Decimal]] = defaultdict(list)
    for emp in employees:
        breakdown = compute_payroll(emp.base_salary, rates)
        budget += breakdown.base_salary
        net += breakdown.net_salary
        deductions += breakdown.total_deductions
        dept = snapshot.department_name(emp.department_id)
        by_dept[dept].append(breakdown.base_salary)

    count = len(employees)
    top_department = "N/A"
    top_avg = _ZERO
    for dept, salaries in by_dept.items():
        avg = sum(salaries, _ZERO) / len(salaries)
        # strict comparison: a department only wins with a positive average
        if avg > top_avg:
            top_avg = avg
            top_department = dept

    return PayrollSummary(
        employee_count=count,
        total_salary_budget=budget,
        average_salary=budget / count,
        total_net_salary=net,
        total_deductions=deductions,
        average_net_salary=net / count,
        top_department=top_department,
    )
