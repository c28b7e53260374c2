"""SQLAlchemy-backed store used when a database URL is configured."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import create_session_factory, init_database
from models.database import CommentDB, ShareLinkDB, SlideEditDB, SlideOrderDB, ViewEventDB
from models.database.slide_order import DEFAULT_ORDER_ID
from shared.models import Comment, ShareLink, SlideEdit, SlideOrder, ViewEvent
from shared.utils import setup_logging, utc_now

from .base import DeckStore, StoreError

logger = setup_logging("sql-store")


class SQLStore(DeckStore):
    """Persist deck records in relational tables (PostgreSQL in production)."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = create_session_factory(engine)
        init_database(engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database operation failed: {e}")
            raise StoreError(f"Database operation failed: {e}") from e
        finally:
            session.close()

    # Slide edits
    def get_slide_edits(self) -> list[SlideEdit]:
        with self._session() as session:
            rows = session.scalars(select(SlideEditDB).order_by(SlideEditDB.updated_at)).all()
            return [self._edit_to_model(row) for row in rows]

    def save_slide_edit(self, slide_id: str, field: str, value: str) -> SlideEdit:
        with self._session() as session:
            row = session.merge(
                SlideEditDB(slide_id=slide_id, field=field, value=value, updated_at=utc_now())
            )
            return self._edit_to_model(row)

    def save_slide_edits(self, edits: Iterable[tuple[str, str, str]]) -> int:
        now = utc_now()
        count = 0
        with self._session() as session:
            for slide_id, field, value in edits:
                session.merge(SlideEditDB(slide_id=slide_id, field=field, value=value, updated_at=now))
                # Flush so a repeated key within the batch updates the pending row
                session.flush()
                count += 1
        return count

    # Slide order
    def get_slide_order(self) -> SlideOrder | None:
        with self._session() as session:
            row = session.get(SlideOrderDB, DEFAULT_ORDER_ID)
            if row is None:
                return None
            return SlideOrder(
                slide_ids=list(row.slide_ids or []),
                graveyard_index=row.graveyard_index,
                updated_at=row.updated_at,
            )

    def save_slide_order(self, slide_ids: list[str], graveyard_index: int) -> SlideOrder:
        now = utc_now()
        with self._session() as session:
            session.merge(
                SlideOrderDB(
                    id=DEFAULT_ORDER_ID,
                    slide_ids=list(slide_ids),
                    graveyard_index=graveyard_index,
                    updated_at=now,
                )
            )
        return SlideOrder(slide_ids=list(slide_ids), graveyard_index=graveyard_index, updated_at=now)

    # Share links
    def get_share_link(self, link_id: str) -> ShareLink | None:
        with self._session() as session:
            row = session.get(ShareLinkDB, link_id)
            return self._link_to_model(row) if row else None

    def get_all_share_links(self) -> list[ShareLink]:
        with self._session() as session:
            rows = session.scalars(select(ShareLinkDB).order_by(ShareLinkDB.created_at.desc())).all()
            return [self._link_to_model(row) for row in rows]

    def create_share_link(self, link: ShareLink) -> ShareLink:
        with self._session() as session:
            existing = session.get(ShareLinkDB, link.id)
            if existing is not None:
                return self._link_to_model(existing)
            session.add(
                ShareLinkDB(
                    id=link.id,
                    created_at=link.created_at,
                    updated_at=link.updated_at,
                    disabled=link.disabled,
                    slide_ids=link.slide_ids,
                    label=link.label,
                )
            )
        return link

    def update_share_link(self, link_id: str, updates: dict[str, Any]) -> ShareLink | None:
        self._check_link_updates(updates)
        with self._session() as session:
            row = session.get(ShareLinkDB, link_id)
            if row is None:
                return None
            for key, value in updates.items():
                setattr(row, key, value)
            row.updated_at = utc_now()
            session.flush()
            return self._link_to_model(row)

    # Comments
    def get_comments(self, slide_id: str | None = None) -> list[Comment]:
        with self._session() as session:
            query = select(CommentDB).order_by(CommentDB.created_at)
            if slide_id:
                query = query.where(CommentDB.slide_id == slide_id)
            return [
                Comment(
                    id=row.id,
                    slide_id=row.slide_id,
                    author=row.author,
                    text=row.text,
                    created_at=row.created_at,
                )
                for row in session.scalars(query).all()
            ]

    def add_comment(self, comment: Comment) -> Comment:
        with self._session() as session:
            session.add(CommentDB(**comment.model_dump()))
        return comment

    def delete_all_comments(self) -> int:
        with self._session() as session:
            result = session.execute(delete(CommentDB))
            return result.rowcount or 0

    # View events
    def track_view(self, event: ViewEvent) -> ViewEvent:
        with self._session() as session:
            row = ViewEventDB(
                link_id=event.link_id,
                email=event.email,
                slide_id=event.slide_id,
                duration=event.duration,
                timestamp=event.timestamp,
            )
            session.add(row)
            session.flush()
            return event.model_copy(update={"id": str(row.id)})

    def get_view_events(self, link_id: str | None = None) -> list[ViewEvent]:
        with self._session() as session:
            query = select(ViewEventDB).order_by(ViewEventDB.timestamp)
            if link_id:
                query = query.where(ViewEventDB.link_id == link_id)
            return [
                ViewEvent(
                    id=str(row.id),
                    link_id=row.link_id,
                    email=row.email,
                    slide_id=row.slide_id,
                    duration=row.duration,
                    timestamp=row.timestamp,
                )
                for row in session.scalars(query).all()
            ]

    @staticmethod
    def _edit_to_model(row: SlideEditDB) -> SlideEdit:
        return SlideEdit(slide_id=row.slide_id, field=row.field, value=row.value, updated_at=row.updated_at)

    @staticmethod
    def _link_to_model(row: ShareLinkDB) -> ShareLink:
        return ShareLink(
            id=row.id,
            created_at=row.created_at,
            updated_at=row.updated_at,
            disabled=bool(row.disabled),
            slide_ids=list(row.slide_ids) if row.slide_ids is not None else None,
            label=row.label,
        )
