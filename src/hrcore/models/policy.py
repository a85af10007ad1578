"""HR policy models: leave quotas, payroll rates, attendance rules.

Loaded from the policy store (GLOBAL or a narrower scope) and passed
explicitly into every engine function that needs a constant.
"""

from __future__ import annotations

from datetime import time
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class LeaveQuotas(BaseModel):
    """Annual entitlement per leave type. Halfday is counted in units."""

    annual: int = 20
    sick: int = 10
    personal: int = 5
    halfday: int = 12

    def quota_for(self, leave_type: str) -> Optional[int]:
        """Quota for a leave type, or None for types without one (unpaid, other)."""
        key = str(leave_type)
        return getattr(self, key) if key in type(self).model_fields else None


class PayrollRates(BaseModel):
    """Flat percentage rules applied to base (or gross) salary."""

    allowance: Decimal = Decimal("0.40")  # on base, added to gross
    hra: Decimal = Decimal("0.20")  # on base, informational
    provident_fund: Decimal = Decimal("0.12")  # on base
    tds: Decimal = Decimal("0.10")  # on gross


class AttendanceRules(BaseModel):
    """Lateness threshold. A check-in strictly after late_after is late."""

    late_after: time = time(9, 0, 0)
    timezone: Optional[str] = None  # IANA name; aware check-ins are converted before comparing


class ReportRules(BaseModel):
    chart_window_days: int = Field(default=7, ge=1)


class HRPolicy(BaseModel):
    """Complete policy for one scope."""

    scope: str = "GLOBAL"
    leave: LeaveQuotas = LeaveQuotas()
    payroll: PayrollRates = PayrollRates()
    attendance: AttendanceRules = AttendanceRules()
    reports: ReportRules = ReportRules()
