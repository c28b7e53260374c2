from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.enums import LinkViewStatus, SlideLayout


class CamelModel(BaseModel):
    """Base for payloads exchanged with the browser in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Slide content
class Slide(CamelModel):
    """A catalog slide. Edit field paths address the camelCase names."""

    id: str
    number: int | None = Field(None, description="1-based authoring number")
    layout: SlideLayout
    title: str = ""
    subtitle: str | None = None
    body: str | None = None
    bullets: list[str] | None = None
    left_text: str | None = None
    right_text: str | None = None
    note: str | None = None
    table_headers: list[str] | None = None
    table_rows: list[list[str]] | None = None


# Stored records
class SlideEdit(CamelModel):
    slide_id: str
    field: str = Field(..., description="Top-level field name or dotted path, e.g. bullets.2")
    value: str
    updated_at: datetime | None = None


class SlideOrder(CamelModel):
    slide_ids: list[str] = Field(default_factory=list)
    graveyard_index: int = Field(default=-1, description="-1 means no graveyard")
    updated_at: datetime | None = None


class ShareLink(CamelModel):
    id: str
    created_at: datetime
    updated_at: datetime | None = None
    disabled: bool = False
    slide_ids: list[str] | None = Field(
        None, description="Snapshot of active slide ids at create/refresh time"
    )
    label: str | None = None


class ViewEvent(CamelModel):
    id: str | None = None
    link_id: str
    email: str
    slide_id: str
    duration: float = Field(default=0.0, ge=0.0, description="Seconds spent on the slide")
    timestamp: datetime


class Comment(CamelModel):
    id: str
    slide_id: str
    author: str
    text: str
    created_at: datetime


# Request/Response Models
class SlideEditItem(CamelModel):
    slide_id: str | None = None
    field: str | None = None
    value: str | None = None


class SlideEditsRequest(CamelModel):
    """Single edit ({slideId, field, value}) or a batch ({edits: [...]})."""

    slide_id: str | None = None
    field: str | None = None
    value: str | None = None
    edits: list[SlideEditItem] | None = None


class SlideOrderRequest(CamelModel):
    slide_ids: list[str] | None = None
    graveyard_index: int | None = None


class DeckResponse(CamelModel):
    slides: list[Slide]
    graveyard_index: int = -1
    active_count: int


class ShareLinkCreateRequest(CamelModel):
    id: str | None = None
    label: str | None = None
    snapshot: bool = Field(default=True, description="Freeze the current active slide ids")


class ShareLinkUpdateRequest(CamelModel):
    id: str | None = None
    action: str | None = None
    label: str | None = None


class LinkViewResponse(CamelModel):
    link_id: str
    status: LinkViewStatus
    slides: list[Slide] = Field(default_factory=list)
    snapshot: bool = Field(default=False, description="Whether a frozen snapshot was used")


class CommentRequest(CamelModel):
    slide_id: str | None = None
    author: str | None = None
    text: str | None = None


class TrackViewRequest(CamelModel):
    link_id: str | None = None
    email: str | None = None
    slide_id: str | None = None
    duration: float | None = Field(None, ge=0.0)


class OkResponse(BaseModel):
    ok: bool = True


# Analytics
class RecipientSummary(CamelModel):
    email: str
    total_time: float
    slide_views: dict[str, float] = Field(default_factory=dict)
    last_seen: datetime
    link_ids: list[str] = Field(default_factory=list)


class SlideViewSummary(CamelModel):
    slide_id: str
    title: str
    total_time: float
    viewers: int


class AnalyticsSummary(CamelModel):
    total_view_time: float
    total_view_time_display: str
    recipient_count: int
    active_link_count: int
    total_link_count: int
    recipients: list[RecipientSummary]
    slides: list[SlideViewSummary]
