"""Snapshot loader for the storage collaborator's JSON document.

The document is the one the HR app rewrites on every mutation:

    {"users": [...], "departments": [...], "attendanceRecords": [...],
     "leaveRequests": [...], "holidays": [...], "paymentRecords": [...]}

Records that fail validation (unknown status tags, missing ids) are skipped
one at a time so a single bad row never hides the rest of the data.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from hrcore.core.exceptions import SnapshotError
from hrcore.core.protocols import IFileStore
from hrcore.models.entities import (
    AttendanceRecord,
    Department,
    Employee,
    Holiday,
    LeaveRequest,
    PaymentRecord,
    Snapshot,
)

logger = logging.getLogger(__name__)

COLLECTIONS: dict[str, tuple[str, type[BaseModel]]] = {
    "departments": ("departments", Department),
    "users": ("employees", Employee),
    "attendanceRecords": ("attendance_records", AttendanceRecord),
    "leaveRequests": ("leave_requests", LeaveRequest),
    "holidays": ("holidays", Holiday),
    "paymentRecords": ("payment_records", PaymentRecord),
}


def parse_snapshot(document: dict[str, Any]) -> Snapshot:
    """Build a Snapshot from the raw document, skipping invalid records."""
    fields: dict[str, list[BaseModel]] = {}
    for key, (field, model) in COLLECTIONS.items():
        items: list[BaseModel] = []
        for raw in document.get(key) or []:
            try:
                items.append(model.model_validate(raw))
            except ValidationError as exc:
                logger.debug("Skipping invalid %s record: %s", key, exc.errors()[0]["msg"])
        fields[field] = items
    return Snapshot(**fields)


class JsonSnapshotStore:
    """ISnapshotStore reading the JSON document from any IFileStore."""

    def __init__(self, files: IFileStore, path: str = "data.json") -> None:
        self._files = files
        self._path = path

    def load(self) -> Snapshot:
        raw = self._files.read(self._path)
        try:
            document = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise SnapshotError(f"Snapshot {self._path!r} is not valid JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise SnapshotError(f"Snapshot {self._path!r} must be a JSON object")
        return parse_snapshot(document)
