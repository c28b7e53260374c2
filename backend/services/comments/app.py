"""Comment API endpoints."""

from datetime import UTC, datetime

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from services.comments.service import CommentService, get_comment_service
from shared.models import Comment, CommentRequest, OkResponse
from shared.utils import config, setup_logging

logger = setup_logging("comment-service")

app = FastAPI(
    title="Comment Service",
    description="Per-slide comments",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint for the comment service."""
    return {"status": "healthy", "service": "comments", "timestamp": datetime.now(UTC).isoformat()}


@app.get("/comments", response_model=list[Comment])
def get_comments(
    slide_id: str | None = Query(None, alias="slideId"),
    service: CommentService = Depends(get_comment_service),
) -> list[Comment]:
    """Comments oldest first, optionally limited to one slide."""
    return service.list_comments(slide_id)


@app.get("/comments/counts", response_model=dict[str, int])
def get_comment_counts(service: CommentService = Depends(get_comment_service)) -> dict[str, int]:
    """Comment count per slide id, for the editor's badges."""
    return service.counts()


@app.post("/comments", response_model=Comment)
def add_comment(
    request: CommentRequest, service: CommentService = Depends(get_comment_service)
) -> Comment:
    if not request.slide_id or not request.text or not request.text.strip():
        raise HTTPException(status_code=400, detail="slideId and text required")
    try:
        return service.add_comment(request.slide_id, request.text.strip(), request.author)
    except Exception as e:
        logger.error(f"Failed to add comment: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to add comment: {e!s}") from e


@app.delete("/comments", response_model=OkResponse)
def clear_comments(service: CommentService = Depends(get_comment_service)) -> OkResponse:
    """Remove every comment."""
    try:
        service.clear()
        return OkResponse()
    except Exception as e:
        logger.error(f"Failed to clear comments: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to clear comments: {e!s}") from e


@app.get("/", tags=["Info"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": "Comment Service",
        "version": "1.0.0",
        "endpoints": {
            "comments": "/comments",
            "counts": "/comments/counts",
            "health": "/health",
        },
    }
