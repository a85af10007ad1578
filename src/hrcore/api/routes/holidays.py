"""Company holiday calendar."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from hrcore.api.routes.deps import get_service
from hrcore.models.views import HolidayCalendar
from hrcore.services.report_service import ReportService

router = APIRouter(tags=["holidays"])


@router.get("", response_model=HolidayCalendar)
async def holiday_calendar(
    today: Optional[date] = None,
    service: ReportService = Depends(get_service),
) -> HolidayCalendar:
    """Past, today's and upcoming holidays; today defaults to the service clock."""
    return service.holiday_calendar(today)
