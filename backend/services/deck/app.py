"""Deck API endpoints: slide edits, slide order and reconciled decks."""

from datetime import UTC, datetime

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from services.deck.service import DeckService, get_deck_service
from shared.models import (
    DeckResponse,
    OkResponse,
    SlideEdit,
    SlideEditsRequest,
    SlideOrder,
    SlideOrderRequest,
)
from shared.utils import config, setup_logging

logger = setup_logging("deck-service")

app = FastAPI(
    title="Deck Service",
    description="Slide edits, custom ordering and reconciled slide decks",
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
    """Health check endpoint for the deck service."""
    return {"status": "healthy", "service": "deck", "timestamp": datetime.now(UTC).isoformat()}


@app.get("/slides", response_model=list[SlideEdit])
def get_slide_edits(service: DeckService = Depends(get_deck_service)) -> list[SlideEdit]:
    """Return every persisted slide edit."""
    return service.store.get_slide_edits()


@app.put("/slides", response_model=OkResponse)
def save_slide_edits(
    request: SlideEditsRequest, service: DeckService = Depends(get_deck_service)
) -> OkResponse:
    """Save a single edit ({slideId, field, value}) or a batch ({edits: [...]}).

    Batch entries missing any of the three fields are skipped. For the same
    (slideId, field) pair the last entry in the batch wins.
    """
    try:
        if request.edits is not None:
            batch = [
                (edit.slide_id, edit.field, edit.value)
                for edit in request.edits
                if edit.slide_id and edit.field and edit.value is not None
            ]
            skipped = len(request.edits) - len(batch)
            if skipped:
                logger.warning(f"Skipped {skipped} incomplete edits in batch")
            service.save_edits(batch)
            return OkResponse()

        if not request.slide_id or not request.field or request.value is None:
            raise HTTPException(status_code=400, detail="slideId, field, and value required")

        service.save_edit(request.slide_id, request.field, request.value)
        return OkResponse()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to save slide edits: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to save slide edits: {e!s}") from e


@app.get("/slide-order", response_model=SlideOrder | None)
def get_slide_order(service: DeckService = Depends(get_deck_service)) -> SlideOrder | None:
    """Return the persisted order record, or null when none was saved."""
    return service.store.get_slide_order()


@app.put("/slide-order", response_model=OkResponse)
def save_slide_order(
    request: SlideOrderRequest, service: DeckService = Depends(get_deck_service)
) -> OkResponse:
    """Replace the custom slide order and graveyard cut."""
    if request.slide_ids is None or request.graveyard_index is None:
        raise HTTPException(
            status_code=400, detail="slideIds (array) and graveyardIndex (number) required"
        )
    try:
        service.save_order(request.slide_ids, request.graveyard_index)
        return OkResponse()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Failed to save slide order: {e!s}")
        raise HTTPException(status_code=500, detail=f"Failed to save slide order: {e!s}") from e


@app.get("/deck", response_model=DeckResponse)
def get_editor_deck(service: DeckService = Depends(get_deck_service)) -> DeckResponse:
    """Editor view: every slide in custom order, graveyard included."""
    deck = service.editor_deck()
    return DeckResponse(
        slides=deck.slides,
        graveyard_index=deck.graveyard_index,
        active_count=len(deck.active),
    )


@app.get("/deck/active", response_model=DeckResponse)
def get_active_deck(service: DeckService = Depends(get_deck_service)) -> DeckResponse:
    """Live deck as viewers see it: slides before the graveyard cut."""
    slides = service.active_deck()
    return DeckResponse(slides=slides, graveyard_index=-1, active_count=len(slides))


@app.get("/", tags=["Info"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": "Deck Service",
        "version": "1.0.0",
        "endpoints": {
            "slide_edits": "/slides",
            "slide_order": "/slide-order",
            "editor_deck": "/deck",
            "active_deck": "/deck/active",
            "health": "/health",
        },
    }
