"""Health check endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hrcore.api.routes.deps import get_service
from hrcore.core.exceptions import HRCoreError
from hrcore.services.report_service import ReportService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(service: ReportService = Depends(get_service)) -> dict:
    return service.health_check()


@router.get("/ready")
async def ready(service: ReportService = Depends(get_service)):
    """Ready once the snapshot document and the GLOBAL policy both load."""
    try:
        service.readiness()
    except HRCoreError as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(status_code=503, content={"status": "unavailable", "detail": str(exc)})
    return {"status": "ready"}
