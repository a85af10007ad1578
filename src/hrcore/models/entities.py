"""Stored HR entities, as read from the storage collaborator.

The collaborator serializes camelCase keys; every model accepts those
aliases as well as the snake_case attribute names. Date-bearing fields are
run through safe_parse_datetime so an unparseable value arrives as None.
"""

from __future__ import annotations

import hashlib
from datetime import date, datetime
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from hrcore.core.dates import month_key, safe_parse_datetime

UNASSIGNED = "Unassigned"


class Role(StrEnum):
    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class AttendanceStatus(StrEnum):
    PRESENT = "present"
    ABSENT = "absent"


class LeaveType(StrEnum):
    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    HALFDAY = "halfday"
    UNPAID = "unpaid"
    OTHER = "other"


class LeaveStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"


class PaymentMode(StrEnum):
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
    CASH = "cash"
    UPI = "upi"


class _Entity(BaseModel):
    model_config = {"populate_by_name": True, "str_strip_whitespace": True}


class Department(_Entity):
    id: int
    name: str
    description: Optional[str] = None


class Employee(_Entity):
    """A user record. Salary is in whole currency units."""

    id: int
    username: str = ""
    email: str = ""
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    position: Optional[str] = None
    department_id: Optional[int] = Field(default=None, alias="departmentId")
    role: Role = Role.EMPLOYEE
    salary: Optional[int] = None
    join_date: Optional[datetime] = Field(default=None, alias="joinDate")
    is_active: bool = Field(default=True, alias="isActive")

    @field_validator("join_date", mode="before")
    @classmethod
    def parse_join_date(cls, value: Any) -> Optional[datetime]:
        return safe_parse_datetime(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def base_salary(self) -> int:
        """Salary for formula purposes; absent salary counts as 0, negatives pass through."""
        return self.salary or 0


class AttendanceRecord(_Entity):
    id: int
    user_id: int = Field(alias="userId")
    date: Optional[datetime] = None
    check_in_time: Optional[datetime] = Field(default=None, alias="checkInTime")
    check_out_time: Optional[datetime] = Field(default=None, alias="checkOutTime")
    status: AttendanceStatus = AttendanceStatus.PRESENT
    notes: Optional[str] = None

    @field_validator("date", "check_in_time", "check_out_time", mode="before")
    @classmethod
    def parse_dates(cls, value: Any) -> Optional[datetime]:
        return safe_parse_datetime(value)


class LeaveRequest(_Entity):
    id: int
    user_id: int = Field(alias="userId")
    type: LeaveType
    start_date: Optional[datetime] = Field(default=None, alias="startDate")
    end_date: Optional[datetime] = Field(default=None, alias="endDate")
    reason: Optional[str] = None
    status: LeaveStatus = LeaveStatus.PENDING
    approved_by_id: Optional[int] = Field(default=None, alias="approvedById")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("start_date", "end_date", "created_at", mode="before")
    @classmethod
    def parse_dates(cls, value: Any) -> Optional[datetime]:
        return safe_parse_datetime(value)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, value: Any) -> Any:
        return LeaveStatus.PENDING if value is None else value

    @property
    def is_approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED


class Holiday(_Entity):
    id: int
    name: str
    date: Optional[datetime] = None
    description: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Optional[datetime]:
        return safe_parse_datetime(value)


class PaymentRecord(_Entity):
    """Monthly payment for one employee. id is None for unsaved drafts."""

    id: Optional[int] = None
    employee_id: int = Field(alias="employeeId")
    month: str  # "Jan 2025"
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING, alias="paymentStatus")
    amount: int
    payment_date: Optional[datetime] = Field(default=None, alias="paymentDate")
    payment_mode: Optional[PaymentMode] = Field(default=None, alias="paymentMode")
    reference_no: Optional[str] = Field(default=None, alias="referenceNo")

    @field_validator("payment_date", mode="before")
    @classmethod
    def parse_payment_date(cls, value: Any) -> Optional[datetime]:
        return safe_parse_datetime(value)


class Snapshot(_Entity):
    """Point-in-time copy of everything the computation layer reads."""

    departments: list[Department] = Field(default_factory=list)
    employees: list[Employee] = Field(default_factory=list, alias="users")
    attendance_records: list[AttendanceRecord] = Field(default_factory=list, alias="attendanceRecords")
    leave_requests: list[LeaveRequest] = Field(default_factory=list, alias="leaveRequests")
    holidays: list[Holiday] = Field(default_factory=list)
    payment_records: list[PaymentRecord] = Field(default_factory=list, alias="paymentRecords")

    def department_name(self, department_id: Optional[int]) -> str:
        if not department_id:
            return UNASSIGNED
        for dept in self.departments:
            if dept.id == department_id:
                return dept.name
        return UNASSIGNED

    def employee(self, employee_id: int) -> Optional[Employee]:
        return next((e for e in self.employees if e.id == employee_id), None)

    def attendance_for(self, user_id: int) -> list[AttendanceRecord]:
        return [r for r in self.attendance_records if r.user_id == user_id]

    def leave_requests_for(self, user_id: int) -> list[LeaveRequest]:
        return [r for r in self.leave_requests if r.user_id == user_id]

    def payments_for_month(self, month: str | date) -> list[PaymentRecord]:
        key = month_key(month) if isinstance(month, date) else month
        return [p for p in self.payment_records if p.month == key]

    def fingerprint(self) -> str:
        """Content hash; two snapshots with equal data share a fingerprint."""
        return hashlib.sha256(self.model_dump_json().encode()).hexdigest()
