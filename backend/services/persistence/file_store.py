"""JSON file store used for local development (no DATABASE_URL)."""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar
from uuid import uuid4

from shared.models import Comment, ShareLink, SlideEdit, SlideOrder, ViewEvent
from shared.utils import ensure_directory, setup_logging, utc_now

from .base import DeckStore, StoreError

logger = setup_logging("file-store")

T = TypeVar("T")

STORE_FILENAME = "store.json"


def _default_data() -> dict[str, Any]:
    return {
        "comments": [],
        "shareLinks": [],
        "viewEvents": [],
        "slideEdits": [],
        "slideOrder": None,
    }


class JSONFileStore(DeckStore):
    """Persist every record type in a single JSON document.

    Each write reads the document, applies an updater and atomically replaces
    the file, all under a process-wide lock.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / STORE_FILENAME
        self._lock = threading.RLock()

    def _read(self) -> dict[str, Any]:
        data = _default_data()
        with self._lock:
            if not self.path.exists():
                return data
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Unreadable store file {self.path}, using empty data: {e}")
                return data
        if isinstance(raw, dict):
            data.update(raw)
        return data

    def _write(self, updater: Callable[[dict[str, Any]], T]) -> T:
        with self._lock:
            data = self._read()
            result = updater(data)
            try:
                ensure_directory(self.data_dir)
                tmp_path = self.path.with_suffix(".json.tmp")
                tmp_path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
                os.replace(tmp_path, self.path)
            except OSError as e:
                logger.error(f"Failed to write store file {self.path}: {e}")
                raise StoreError(f"Failed to write store file: {e}") from e
            return result

    # Slide edits
    def get_slide_edits(self) -> list[SlideEdit]:
        return [SlideEdit.model_validate(e) for e in self._read()["slideEdits"]]

    def save_slide_edit(self, slide_id: str, field: str, value: str) -> SlideEdit:
        edit = SlideEdit(slide_id=slide_id, field=field, value=value, updated_at=utc_now())

        def _upsert(data: dict[str, Any]) -> SlideEdit:
            edits = data["slideEdits"]
            record = edit.model_dump(mode="json")
            for i, existing in enumerate(edits):
                if existing.get("slide_id") == slide_id and existing.get("field") == field:
                    edits[i] = record
                    break
            else:
                edits.append(record)
            return edit

        return self._write(_upsert)

    def save_slide_edits(self, edits: Iterable[tuple[str, str, str]]) -> int:
        now = utc_now()
        batch = [
            SlideEdit(slide_id=slide_id, field=field, value=value, updated_at=now)
            for slide_id, field, value in edits
        ]

        def _upsert_all(data: dict[str, Any]) -> int:
            stored = data["slideEdits"]
            index = {(e.get("slide_id"), e.get("field")): i for i, e in enumerate(stored)}
            for edit in batch:
                key = (edit.slide_id, edit.field)
                record = edit.model_dump(mode="json")
                if key in index:
                    stored[index[key]] = record
                else:
                    index[key] = len(stored)
                    stored.append(record)
            return len(batch)

        return self._write(_upsert_all)

    # Slide order
    def get_slide_order(self) -> SlideOrder | None:
        raw = self._read()["slideOrder"]
        return SlideOrder.model_validate(raw) if raw else None

    def save_slide_order(self, slide_ids: list[str], graveyard_index: int) -> SlideOrder:
        order = SlideOrder(slide_ids=list(slide_ids), graveyard_index=graveyard_index, updated_at=utc_now())

        def _replace(data: dict[str, Any]) -> SlideOrder:
            data["slideOrder"] = order.model_dump(mode="json")
            return order

        return self._write(_replace)

    # Share links
    def get_share_link(self, link_id: str) -> ShareLink | None:
        for raw in self._read()["shareLinks"]:
            if raw.get("id") == link_id:
                return ShareLink.model_validate(raw)
        return None

    def get_all_share_links(self) -> list[ShareLink]:
        links = [ShareLink.model_validate(raw) for raw in self._read()["shareLinks"]]
        return sorted(links, key=lambda link: link.created_at, reverse=True)

    def create_share_link(self, link: ShareLink) -> ShareLink:
        def _insert(data: dict[str, Any]) -> ShareLink:
            for raw in data["shareLinks"]:
                if raw.get("id") == link.id:
                    return ShareLink.model_validate(raw)
            data["shareLinks"].append(link.model_dump(mode="json"))
            return link

        return self._write(_insert)

    def update_share_link(self, link_id: str, updates: dict[str, Any]) -> ShareLink | None:
        self._check_link_updates(updates)

        def _update(data: dict[str, Any]) -> ShareLink | None:
            links = data["shareLinks"]
            for i, raw in enumerate(links):
                if raw.get("id") == link_id:
                    updated = ShareLink.model_validate(raw).model_copy(
                        update={**updates, "updated_at": utc_now()}
                    )
                    links[i] = updated.model_dump(mode="json")
                    return updated
            return None

        return self._write(_update)

    # Comments
    def get_comments(self, slide_id: str | None = None) -> list[Comment]:
        comments = [Comment.model_validate(raw) for raw in self._read()["comments"]]
        if slide_id:
            comments = [c for c in comments if c.slide_id == slide_id]
        return comments

    def add_comment(self, comment: Comment) -> Comment:
        def _append(data: dict[str, Any]) -> Comment:
            data["comments"].append(comment.model_dump(mode="json"))
            return comment

        return self._write(_append)

    def delete_all_comments(self) -> int:
        def _clear(data: dict[str, Any]) -> int:
            removed = len(data["comments"])
            data["comments"] = []
            return removed

        return self._write(_clear)

    # View events
    def track_view(self, event: ViewEvent) -> ViewEvent:
        if event.id is None:
            event = event.model_copy(update={"id": str(uuid4())})

        def _append(data: dict[str, Any]) -> ViewEvent:
            data["viewEvents"].append(event.model_dump(mode="json"))
            return event

        return self._write(_append)

    def get_view_events(self, link_id: str | None = None) -> list[ViewEvent]:
        events = [ViewEvent.model_validate(raw) for raw in self._read()["viewEvents"]]
        if link_id:
            events = [e for e in events if e.link_id == link_id]
        return events
