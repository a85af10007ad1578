"""Monthly payment planning."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hrcore.api.routes.deps import get_service
from hrcore.models.views import PaymentPlan
from hrcore.services.report_service import ReportService

router = APIRouter(tags=["payments"])


@router.get("/{month}", response_model=PaymentPlan)
async def payment_plan(month: str, service: ReportService = Depends(get_service)) -> PaymentPlan:
    """Existing records summary plus pending drafts. month looks like "Jan 2025"."""
    return service.payment_plan(month)
