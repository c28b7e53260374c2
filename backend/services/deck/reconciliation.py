"""Slide reconciliation.

Merges persisted edits into the catalog, applies the persisted custom order
and graveyard cut, and resolves what a share link shows. Every consumer
(editor, link manager, dashboard, public viewer) obtains its slide sequence
through these functions so the views never disagree.

All functions are pure: they never mutate their inputs and perform no I/O.
"""

from __future__ import annotations

import copy
from collections import defaultdict
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from shared.enums import LinkViewStatus
from shared.models import ShareLink, Slide, SlideEdit, SlideOrder
from shared.utils import setup_logging

logger = setup_logging("reconciliation")

# Fields an edit may never overwrite
PROTECTED_FIELDS = frozenset({"id"})


class InvalidFieldPath(LookupError):
    """An edit's field path does not resolve against the slide's current shape."""


# Edit merge
def _parse_segment(segment: str) -> int | str:
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return segment


def _resolve(container: Any, segment: str) -> tuple[Any, int | str]:
    """Validate that `segment` addresses an existing slot of `container`."""
    key = _parse_segment(segment)
    if isinstance(container, list) and isinstance(key, int):
        if key < len(container):
            return container, key
        raise InvalidFieldPath(f"index {key} out of range (length {len(container)})")
    if isinstance(container, dict) and isinstance(key, str):
        if key in container:
            return container, key
        raise InvalidFieldPath(f"unknown field '{key}'")
    raise InvalidFieldPath(f"segment '{segment}' does not address a {type(container).__name__}")


def set_field_path(document: dict[str, Any], path: str, value: Any) -> None:
    """Write `value` at a dotted path; all-digit segments index lists."""
    segments = path.split(".")
    target: Any = document
    for segment in segments[:-1]:
        container, key = _resolve(target, segment)
        target = container[key]
    container, key = _resolve(target, segments[-1])
    container[key] = value


def _apply_slide_edits(slide: Slide, edits: Sequence[SlideEdit]) -> Slide:
    document = slide.model_dump(by_alias=True)
    for edit in edits:
        if edit.field.split(".", 1)[0] in PROTECTED_FIELDS:
            logger.warning(f"Skipping edit of protected field '{edit.field}' on slide {slide.id}")
            continue
        candidate = copy.deepcopy(document)
        try:
            set_field_path(candidate, edit.field, edit.value)
            Slide.model_validate(candidate)
        except InvalidFieldPath as e:
            logger.warning(f"Skipping stale edit '{edit.field}' on slide {slide.id}: {e}")
            continue
        except ValidationError as e:
            logger.warning(
                f"Skipping edit '{edit.field}' on slide {slide.id}: value does not fit the field "
                f"({e.error_count()} validation errors)"
            )
            continue
        document = candidate
    return Slide.model_validate(document)


def merge_edits(catalog: Sequence[Slide], edits: Sequence[SlideEdit]) -> list[Slide]:
    """Apply field overrides to copies of the catalog slides.

    Edits for the same slide are applied in sequence, so a later entry for
    the same field path wins. Edits whose path no longer matches the slide
    (e.g. `bullets.5` on a three-bullet slide) are logged and skipped.

    Returns:
        A new list, same length and order as `catalog`.
    """
    by_slide: dict[str, list[SlideEdit]] = defaultdict(list)
    for edit in edits:
        by_slide[edit.slide_id].append(edit)

    merged: list[Slide] = []
    for slide in catalog:
        slide_edits = by_slide.get(slide.id)
        if slide_edits:
            merged.append(_apply_slide_edits(slide, slide_edits))
        else:
            merged.append(slide.model_copy(deep=True))
    return merged


# Order and graveyard
@dataclass(frozen=True)
class OrderedDeck:
    """Order-applied slides plus the effective graveyard cut (-1 for none)."""

    slides: list[Slide]
    graveyard_index: int = -1

    @property
    def active(self) -> list[Slide]:
        return active_projection(self.slides, self.graveyard_index)

    @property
    def archived(self) -> list[Slide]:
        if self.graveyard_index < 0:
            return []
        return self.slides[self.graveyard_index:]


def active_projection(slides: Sequence[Slide], graveyard_index: int) -> list[Slide]:
    """Slides visible to viewers: everything before the graveyard cut."""
    if graveyard_index < 0:
        return list(slides)
    return list(slides[:graveyard_index])


def reconcile_order(slides: Sequence[Slide], order: SlideOrder | None) -> OrderedDeck:
    """Apply a persisted order record to merged slides.

    Slides named by the order come first, in that order; ids the catalog no
    longer has are dropped. Slides missing from the order (added to the
    catalog after the order was saved) are placed next to their catalog
    neighbours: right after the nearest earlier catalog slide already placed,
    else right before the nearest later one, else at the end.

    The graveyard cut is applied last, as an index into the final sequence,
    and is capped at its length.
    """
    if order is None or not order.slide_ids:
        return OrderedDeck(slides=list(slides), graveyard_index=-1)

    lookup = {slide.id: slide for slide in slides}
    result: list[Slide] = []

    for slide_id in order.slide_ids:
        slide = lookup.pop(slide_id, None)
        if slide is not None:
            result.append(slide)

    if lookup:
        catalog_ids = [slide.id for slide in slides]
        for catalog_index, slide in enumerate(slides):
            if slide.id not in lookup:
                continue
            result.insert(_new_slide_position(catalog_ids, catalog_index, result), slide)
            del lookup[slide.id]

    if order.graveyard_index < 0:
        return OrderedDeck(slides=result, graveyard_index=-1)
    return OrderedDeck(slides=result, graveyard_index=min(order.graveyard_index, len(result)))


def _new_slide_position(catalog_ids: list[str], catalog_index: int, result: list[Slide]) -> int:
    positions = {slide.id: i for i, slide in enumerate(result)}
    for j in range(catalog_index - 1, -1, -1):
        pos = positions.get(catalog_ids[j])
        if pos is not None:
            return pos + 1
    for j in range(catalog_index + 1, len(catalog_ids)):
        pos = positions.get(catalog_ids[j])
        if pos is not None:
            return pos
    return len(result)


def apply_order(slides: Sequence[Slide], order: SlideOrder | None) -> list[Slide]:
    """Full order-applied sequence, graveyard included (editor view)."""
    return reconcile_order(slides, order).slides


def active_slide_ids(
    catalog: Sequence[Slide],
    edits: Sequence[SlideEdit],
    order: SlideOrder | None,
) -> list[str]:
    """Ids of the live active deck, as frozen into share-link snapshots."""
    deck = reconcile_order(merge_edits(catalog, edits), order)
    return [slide.id for slide in deck.active]


# Share link resolution
@dataclass(frozen=True)
class LinkView:
    link_id: str
    status: LinkViewStatus
    slides: list[Slide] = field(default_factory=list)
    from_snapshot: bool = False

    @property
    def available(self) -> bool:
        return self.status is LinkViewStatus.AVAILABLE


def resolve_link_view(
    link_id: str,
    link: ShareLink | None,
    catalog: Sequence[Slide],
    load_edits: Callable[[], Sequence[SlideEdit]],
    load_order: Callable[[], SlideOrder | None],
) -> LinkView:
    """Decide which slides an anonymous viewer of `link_id` sees.

    1. Missing or disabled link: unavailable, nothing else is loaded.
    2. Content is always the live catalog merged with current edits.
    3. A non-empty snapshot selects and orders the slides; snapshot ids the
       catalog no longer has are dropped.
    4. Without a snapshot, the live order's active projection is used
       (catalog order when no order record exists).
    """
    if link is None or link.disabled:
        return LinkView(link_id=link_id, status=LinkViewStatus.UNAVAILABLE)

    merged = merge_edits(catalog, load_edits())

    if link.slide_ids:
        by_id = {slide.id: slide for slide in merged}
        slides = [by_id[slide_id] for slide_id in link.slide_ids if slide_id in by_id]
        return LinkView(
            link_id=link_id,
            status=LinkViewStatus.AVAILABLE,
            slides=slides,
            from_snapshot=True,
        )

    deck = reconcile_order(merged, load_order())
    return LinkView(link_id=link_id, status=LinkViewStatus.AVAILABLE, slides=deck.active)
