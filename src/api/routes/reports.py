"""Weekly report generation endpoints."""

import asyncio
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import get_report_collaborators, verify_api_key
from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes, ReportRowModel, WeeklyReportResponse
from core.config import TASK_SEPARATOR, TIME_ZONE
from core.errors import ConfigurationMissing, ExternalFetchFailure
from core.week import WeekMode
from services.weekly_report import ReportRun, generate_weekly_report

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def to_response(run: ReportRun) -> WeeklyReportResponse:
    return WeeklyReportResponse(
        message=run.message,
        week_start=run.window.start,
        week_end=run.window.end,
        events_fetched=run.event_count,
        events_included=run.included_count,
        total_hours=run.total_hours,
        rows=[
            ReportRowModel(
                week_start=row.week_start,
                week_end=row.week_end,
                category=row.category,
                hours=row.hours,
                tasks=[t for t in row.tasks.split(TASK_SEPARATOR) if t],
            )
            for row in run.rows
        ],
    )


async def _run_report(request: Request, mode: WeekMode, collaborators: dict) -> WeeklyReportResponse:
    """Run one report generation and log the request."""
    start_time = time.time()

    request_log = RequestLog(
        endpoint=request.url.path,
        method=request.method,
        client_ip=get_client_ip(request),
        week_mode=mode.value,
    )

    try:
        # Collaborators make blocking calls; keep them off the event loop
        run = await asyncio.to_thread(
            generate_weekly_report, mode, time_zone=TIME_ZONE, **collaborators
        )

        request_log.status_code = 200
        request_log.week_start = run.window.start.isoformat()
        request_log.categories_written = len(run.rows)
        request_log.total_hours = run.total_hours
        for row in run.rows:
            request_log.details.append(("category_written", f"{row.category}: {row.hours:.2f}"))
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return to_response(run)

    except ConfigurationMissing as e:
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.CONFIGURATION_MISSING
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": str(e),
                "code": ErrorCodes.CONFIGURATION_MISSING,
                "details": [],
            },
        )

    except ExternalFetchFailure as e:
        request_log.status_code = 502
        request_log.error_code = ErrorCodes.EXTERNAL_FETCH_FAILURE
        request_log.error_message = str(e)
        request_log.details.append(("error", str(e.__cause__ or e)))
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": f"An error occurred: {e}",
                "code": ErrorCodes.EXTERNAL_FETCH_FAILURE,
                "details": [str(e.__cause__)] if e.__cause__ else [],
            },
        )

    except Exception as e:
        # Unexpected errors
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        # Always log the request
        try:
            log_request(request_log)
        except Exception as e:
            # Don't fail the request if logging fails
            print(f"Failed to log request {request_log.request_id}: {e}")


@router.post("/reports/weekly/current", response_model=WeeklyReportResponse)
async def generate_current_week(
    request: Request,
    collaborators: dict = Depends(get_report_collaborators),
    _api_key: str = Depends(verify_api_key),
):
    """Generate the report for the week containing today."""
    return await _run_report(request, WeekMode.CURRENT, collaborators)


@router.post("/reports/weekly/previous", response_model=WeeklyReportResponse)
async def generate_previous_week(
    request: Request,
    collaborators: dict = Depends(get_report_collaborators),
    _api_key: str = Depends(verify_api_key),
):
    """Generate the report for the week before the current one."""
    return await _run_report(request, WeekMode.PREVIOUS, collaborators)
