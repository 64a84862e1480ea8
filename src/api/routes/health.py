"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION, REPORT_BACKEND
from services.backends import store_available

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if the report backend is reachable, 503 otherwise.
    """
    available = store_available(REPORT_BACKEND)
    timestamp = datetime.now(timezone.utc).isoformat()

    if available:
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            backend=REPORT_BACKEND,
            store_available=True,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                backend=REPORT_BACKEND,
                store_available=False,
                timestamp=timestamp,
                error=f"Report store for backend '{REPORT_BACKEND}' not found",
            ).model_dump(),
        )
