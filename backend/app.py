"""
DeckShare Backend - Unified Application Entry Point
Mounts all service routes under /api in a single FastAPI application
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.analytics.app import app as analytics_app
from services.comments.app import app as comments_app
from services.deck.app import app as deck_app
from services.share_links.app import app as share_links_app
from shared.utils import config, setup_logging

logger = setup_logging("deckshare-backend")

app = FastAPI(
    title="DeckShare Backend API",
    description="""
    Unified API for the slide editor, share links, comments and view analytics.

    All endpoints are documented below. Service routes are organized by tag.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Health",
            "description": "Service health and status endpoints",
        },
        {
            "name": "Deck",
            "description": "Slide edits, custom order and reconciled decks - mounted at /api",
        },
        {
            "name": "Share Links",
            "description": "View-only share links and the public viewer - mounted at /api",
        },
        {
            "name": "Comments",
            "description": "Per-slide comments - mounted at /api",
        },
        {
            "name": "Analytics",
            "description": "View tracking and dashboard aggregation - mounted at /api",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api"

# Internal docs routes plus per-service index and health, served here instead
EXCLUDED_PATHS = {"/openapi.json", "/docs", "/docs/oauth2-redirect", "/redoc", "/", "/health"}

SERVICE_APPS = [
    (deck_app, "Deck", "deck"),
    (share_links_app, "Share Links", "share"),
    (comments_app, "Comments", "comments"),
    (analytics_app, "Analytics", "analytics"),
]

for service_app, tag, name_prefix in SERVICE_APPS:
    for route in service_app.routes:
        if hasattr(route, "path") and hasattr(route, "endpoint"):
            if route.path in EXCLUDED_PATHS:
                continue
            route_kwargs = {
                "path": f"{API_PREFIX}{route.path}",
                "endpoint": route.endpoint,
                "methods": route.methods,
                "tags": [tag],
            }
            if hasattr(route, "name"):
                route_kwargs["name"] = f"{name_prefix}_{route.name}"
            if hasattr(route, "response_model"):
                route_kwargs["response_model"] = route.response_model
            app.add_api_route(**route_kwargs)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with service information and API navigation"""
    return {
        "service": "DeckShare Backend API",
        "version": "1.0.0",
        "services": {
            "deck": {
                "slides": f"{API_PREFIX}/slides",
                "slide_order": f"{API_PREFIX}/slide-order",
                "deck": f"{API_PREFIX}/deck",
            },
            "share_links": {
                "links": f"{API_PREFIX}/share",
                "view": f"{API_PREFIX}/view/{{link_id}}",
            },
            "comments": {
                "comments": f"{API_PREFIX}/comments",
            },
            "analytics": {
                "events": f"{API_PREFIX}/analytics",
                "summary": f"{API_PREFIX}/analytics/summary",
            },
        },
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for all services"""
    return {
        "status": "healthy",
        "services": {
            "api_gateway": "operational",
            "deck": "operational",
            "share_links": "operational",
            "comments": "operational",
            "analytics": "operational",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting DeckShare Backend on http://0.0.0.0:8000")
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
