"""Admin endpoints for HR policy inspection."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hrcore.api.routes.deps import get_service
from hrcore.models.policy import HRPolicy
from hrcore.services.report_service import ReportService

router = APIRouter(tags=["admin"])


@router.get("/policy/{scope}", response_model=HRPolicy)
async def get_policy(scope: str, service: ReportService = Depends(get_service)) -> HRPolicy:
    """Effective policy for a scope (falls back to GLOBAL)."""
    return service.policy(scope)
