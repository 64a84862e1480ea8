"""Pydantic response models for API endpoints."""

from datetime import date

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    backend: str
    store_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ReportRowModel(BaseModel):
    """One written report row."""

    week_start: date
    week_end: date
    category: str
    hours: float
    tasks: list[str]


class WeeklyReportResponse(BaseModel):
    """Completed report run."""

    message: str
    week_start: date
    week_end: date
    events_fetched: int
    events_included: int
    total_hours: float
    rows: list[ReportRowModel]


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFIGURATION_MISSING = "CONFIGURATION_MISSING"
    EXTERNAL_FETCH_FAILURE = "EXTERNAL_FETCH_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
