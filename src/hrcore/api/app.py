"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hrcore.api.routes import admin, employees, health, holidays, payments, reports
from hrcore.core.config import AppSettings
from hrcore.core.exceptions import (
    CacheError,
    EmployeeNotFoundError,
    InvalidDateRangeError,
    PolicyNotFoundError,
    StorageError,
)
from hrcore.persistence import create_persistence
from hrcore.services.report_service import ReportService

logger = logging.getLogger(__name__)


def build_service(settings: AppSettings) -> ReportService:
    persistence = create_persistence(settings)
    return ReportService(
        settings=settings,
        snapshots=persistence.snapshots,
        policies=persistence.policies,
        cache=persistence.cache,
        files=persistence.files,
    )


def create_app(service: ReportService | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    A prebuilt service skips settings-driven wiring (used by tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize and tear down application resources."""
        settings = AppSettings()
        logging.basicConfig(level=settings.log_level)
        app.state.settings = settings
        app.state.service = service or build_service(settings)
        logger.info("hrcore API started (environment=%s)", settings.environment)
        yield

    app = FastAPI(
        title="HR Core Reporting Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(reports.router, prefix="/reports")
    app.include_router(employees.router, prefix="/employees")
    app.include_router(payments.router, prefix="/payments")
    app.include_router(holidays.router, prefix="/holidays")
    app.include_router(admin.router, prefix="/admin")

    @app.exception_handler(InvalidDateRangeError)
    async def invalid_range(request: Request, exc: InvalidDateRangeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(EmployeeNotFoundError)
    async def employee_not_found(request: Request, exc: EmployeeNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PolicyNotFoundError)
    async def policy_not_found(request: Request, exc: PolicyNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_failed(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure: %s", exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(CacheError)
    async def cache_failed(request: Request, exc: CacheError) -> JSONResponse:
        logger.error("Cache failure: %s", exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    return app
