"""Request-scoped access to the service wired at startup."""

from __future__ import annotations

from fastapi import Request

from hrcore.services.report_service import ReportService


def get_service(request: Request) -> ReportService:
    return request.app.state.service
