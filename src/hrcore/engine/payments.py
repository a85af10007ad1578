"""Monthly payment records derived from payroll."""

from __future__ import annotations

from typing import Iterable

from hrcore.engine.payroll_calc import compute_payroll
from hrcore.models.entities import Employee, PaymentRecord, PaymentStatus
from hrcore.models.policy import PayrollRates
from hrcore.models.views import PaymentSummary, round_whole


def plan_missing_payments(
    employees: Iterable[Employee],
    existing: Iterable[PaymentRecord],
    month: str,
    rates: PayrollRates | None = None,
) -> list[PaymentRecord]:
    """Pending drafts for every employee without a record for ``month``.

    Amount is the net salary rounded to whole units. Drafts carry no id;
    saving them belongs to the storage collaborator.
    """
    covered = {p.employee_id for p in existing if p.month == month}
    drafts: list[PaymentRecord] = []
    for emp in employees:
        if emp.id in covered:
            continue
        covered.add(emp.id)
        net = compute_payroll(emp.base_salary, rates).net_salary
        drafts.append(
            PaymentRecord(
                employee_id=emp.id,
                month=month,
                payment_status=PaymentStatus.PENDING,
                amount=round_whole(net),
            )
        )
    return drafts


def payment_summary(records: Iterable[PaymentRecord]) -> PaymentSummary:
    summary = PaymentSummary()
    for record in records:
        if record.payment_status == PaymentStatus.PAID:
            summary.paid_count += 1
            summary.total_paid += record.amount
        else:
            summary.pending_count += 1
            summary.total_due += record.amount
    return summary
