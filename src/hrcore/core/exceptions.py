"""hrcore exception hierarchy."""

from __future__ import annotations

from datetime import date


class HRCoreError(Exception):
    """Base exception for all hrcore errors."""


class StorageError(HRCoreError):
    """Reading from or writing to a file store failed."""


class SnapshotError(StorageError):
    """The storage document could not be turned into a snapshot."""


class PolicyNotFoundError(HRCoreError):
    """No HR policy item exists for the scope or the GLOBAL fallback."""


class CacheError(HRCoreError):
    """Redis cache operation failed."""


class EmployeeNotFoundError(HRCoreError):
    """Employee id is not present in the current snapshot."""

    def __init__(self, employee_id: int) -> None:
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


class InvalidDateRangeError(HRCoreError):
    """Report range is missing a bound or ends before it starts."""

    def __init__(self, start: date | None, end: date | None) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Invalid report range: {start} to {end}")
