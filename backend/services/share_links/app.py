"""Share link API: create, list, enable/disable, refresh and resolve links."""

from datetime import UTC, datetime

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.deck.service import DeckService, ShareLinkNotFoundError, get_deck_service
from shared.enums import ShareLinkAction
from shared.models import (
    LinkViewResponse,
    ShareLink,
    ShareLinkCreateRequest,
    ShareLinkUpdateRequest,
)
from shared.utils import config, setup_logging

logger = setup_logging("share-link-service")

app = FastAPI(
    title="Share Link Service",
    description="View-only share links with optional slide snapshots",
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
    """Health check endpoint for the share link service."""
    return {"status": "healthy", "service": "share_links", "timestamp": datetime.now(UTC).isoformat()}


@app.get("/share", response_model=ShareLink | list[ShareLink])
def get_share_links(
    id: str | None = Query(None, description="Return a single link"),
    service: DeckService = Depends(get_deck_service),
) -> ShareLink | list[ShareLink]:
    """List every share link (newest first) or fetch one by id."""
    if id is None:
        return service.list_links()
    try:
        return service.get_link(id)
    except ShareLinkNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.post("/share", response_model=ShareLink)
def create_share_link(
    request: ShareLinkCreateRequest, service: DeckService = Depends(get_deck_service)
) -> ShareLink:
    """Create a share link.

    Unless `snapshot` is false, the ids of the currently active slides are
    frozen into the link so later reordering does not change what its
    viewers see until the link is refreshed.
    """
    if not request.id:
        raise HTTPException(status_code=400, detail="id required")
    try:
        return service.create_link(request.id, label=request.label, snapshot=request.snapshot)
    except Exception as e:
        logger.error(f"Failed to create share link {request.id}: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to create share link: {e!s}") from e


@app.patch("/share", response_model=ShareLink)
def update_share_link(
    request: ShareLinkUpdateRequest, service: DeckService = Depends(get_deck_service)
) -> ShareLink:
    """Apply a link action: enable, disable, refresh (re-snapshot) or rename.

    Args:
        request: Link id, action and, for rename, the new label

    Returns:
        The updated share link
    """
    if not request.id or not request.action:
        raise HTTPException(status_code=400, detail="id and action required")
    try:
        action = ShareLinkAction(request.action)
    except ValueError as e:
        allowed = ", ".join(a.value for a in ShareLinkAction)
        raise HTTPException(status_code=400, detail=f"action must be one of: {allowed}") from e

    try:
        if action is ShareLinkAction.ENABLE:
            return service.set_link_disabled(request.id, False)
        if action is ShareLinkAction.DISABLE:
            return service.set_link_disabled(request.id, True)
        if action is ShareLinkAction.REFRESH:
            return service.refresh_link(request.id)
        return service.rename_link(request.id, request.label)
    except ShareLinkNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to {action.value} share link {request.id}: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to update share link: {e!s}") from e


@app.get("/view/{link_id}", response_model=LinkViewResponse)
def view_share_link(link_id: str, service: DeckService = Depends(get_deck_service)):
    """Slides an anonymous viewer of the link sees.

    Missing and disabled links answer 404 with status "unavailable"; the two
    cases are indistinguishable to the viewer.
    """
    view = service.view_link(link_id)
    response = LinkViewResponse(
        link_id=view.link_id,
        status=view.status,
        slides=view.slides,
        snapshot=view.from_snapshot,
    )
    if not view.available:
        return JSONResponse(status_code=404, content=response.model_dump(mode="json", by_alias=True))
    return response


@app.get("/", tags=["Info"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": "Share Link Service",
        "version": "1.0.0",
        "endpoints": {
            "links": "/share",
            "view": "/view/{link_id}",
            "health": "/health",
        },
    }
