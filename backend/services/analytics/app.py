"""Analytics Service API - view tracking, dashboard summary and export."""

from datetime import UTC, datetime

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from services.analytics.service import AnalyticsService, get_analytics_service
from shared.enums import ExportFormat
from shared.models import AnalyticsSummary, OkResponse, TrackViewRequest, ViewEvent
from shared.utils import config, setup_logging

logger = setup_logging("analytics-service")

app = FastAPI(
    title="Analytics Service",
    description="Share link view tracking and dashboard aggregation",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
}


@app.get("/analytics", response_model=list[ViewEvent], tags=["Analytics"])
def get_view_events(
    link_id: str | None = Query(None, alias="linkId", description="Filter by share link"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> list[ViewEvent]:
    """Return raw view events, oldest first."""
    return service.get_events(link_id)


@app.post("/analytics/track", response_model=OkResponse, tags=["Analytics"])
def track_view(
    request: TrackViewRequest, service: AnalyticsService = Depends(get_analytics_service)
) -> OkResponse:
    """Record time a viewer spent on one slide.

    Called by the public viewer when the visitor navigates away from a slide
    or closes the page. A missing duration is recorded as zero.

    Args:
        request: Link id, viewer email, slide id and duration in seconds

    Returns:
        Confirmation
    """
    if not request.link_id or not request.email or not request.slide_id:
        raise HTTPException(status_code=400, detail="linkId, email, slideId required")
    try:
        service.track_view(request.link_id, request.email, request.slide_id, request.duration)
        return OkResponse()
    except Exception as e:
        logger.error(f"Failed to track view: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to track view: {e!s}") from e


@app.get("/analytics/summary", response_model=AnalyticsSummary, tags=["Analytics"])
def get_summary(
    link_id: str | None = Query(None, alias="linkId"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> AnalyticsSummary:
    """Dashboard statistics: per-recipient and per-slide view time, link counts."""
    try:
        return service.get_summary(link_id)
    except Exception as e:
        logger.error(f"Failed to build analytics summary: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to get statistics: {e!s}") from e


@app.get("/analytics/export", tags=["Analytics"])
def export_view_events(
    format: ExportFormat = Query(ExportFormat.JSON, description="json or csv"),
    link_id: str | None = Query(None, alias="linkId"),
    service: AnalyticsService = Depends(get_analytics_service),
) -> FileResponse:
    """Export view events as a downloadable JSON or CSV file."""
    try:
        export_path = service.export_events(format, link_id)
    except Exception as e:
        logger.error(f"Failed to export view events: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to export data: {e!s}") from e
    return FileResponse(
        path=str(export_path),
        filename=export_path.name,
        media_type=MEDIA_TYPES[format],
    )


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """Health check endpoint for the analytics service."""
    return {
        "status": "healthy",
        "service": "analytics",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/", tags=["Info"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": "Analytics Service",
        "version": "1.0.0",
        "description": "Share link view tracking and dashboard aggregation",
        "endpoints": {
            "events": "/analytics",
            "track": "/analytics/track",
            "summary": "/analytics/summary",
            "export": "/analytics/export",
            "health": "/health",
            "docs": "/docs",
        },
    }
