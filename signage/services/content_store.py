from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.orm import Session

from signage.db import utcnow
from signage.errors import NotFoundError, ValidationError
from signage.models.content import ContentItem
from signage.schemas.content import ContentItemCreate, ContentItemUpdate
from signage.services.integrity import IntegrityManager
from signage.services.store import Store

logger = logging.getLogger(__name__)

CONTENT_TYPES = {"image", "video", "web", "pdf"}
CONTENT_FIELDS = ("type", "url", "duration", "title", "data_ai_hint", "page_image_urls")


def _clean_optional(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None


def _normalize_content(fields: dict) -> dict:
    normalized = dict(fields)
    normalized["type"] = (normalized.get("type") or "").strip().lower()
    normalized["url"] = (normalized.get("url") or "").strip()
    normalized["title"] = _clean_optional(normalized.get("title"))
    normalized["data_ai_hint"] = _clean_optional(normalized.get("data_ai_hint"))
    pages = [str(url).strip() for url in (normalized.get("page_image_urls") or []) if str(url).strip()]
    normalized["page_image_urls"] = pages or None
    return normalized


def validate_content(fields: dict) -> None:
    content_type = fields.get("type")
    if content_type not in CONTENT_TYPES:
        raise ValidationError("type must be one of image, video, web, pdf")
    if not fields.get("url"):
        raise ValidationError(f"url is required for {content_type} content")
    duration = fields.get("duration")
    if duration is None or duration < 1:
        raise ValidationError("duration must be at least 1 second")
    hint = fields.get("data_ai_hint")
    if hint and len(hint.split()) > 2:
        raise ValidationError("data_ai_hint can have at most two words")
    pages = fields.get("page_image_urls")
    if content_type == "pdf" and not pages:
        raise ValidationError("pdf content requires at least one page image")
    if content_type != "pdf" and pages:
        raise ValidationError("page_image_urls is only allowed for pdf content")


class ContentStore(Store):
    def __init__(
        self,
        db: Session,
        integrity: IntegrityManager | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        super().__init__(db, clock)
        self.integrity = integrity or IntegrityManager(db, clock)

    def list(self) -> list[ContentItem]:
        return self._list(ContentItem)

    def get(self, content_id: str) -> ContentItem:
        item = self._get(ContentItem, content_id)
        if not item:
            raise NotFoundError("Content item not found")
        return item

    def create(self, data: ContentItemCreate) -> ContentItem:
        fields = _normalize_content(data.model_dump())
        validate_content(fields)
        item = ContentItem(**fields)
        self.db.add(item)
        self._commit()
        self.db.refresh(item)
        logger.info("Created %s content %s", item.type, item.id)
        return item

    def update(self, content_id: str, partial: ContentItemUpdate) -> ContentItem:
        item = self.get(content_id)
        changes = partial.model_dump(exclude_unset=True)
        merged = {field: getattr(item, field) for field in CONTENT_FIELDS}
        merged.update(changes)
        # Switching away from pdf drops the stale page images unless new ones were sent.
        if merged.get("type") != "pdf" and "page_image_urls" not in changes:
            merged["page_image_urls"] = None
        merged = _normalize_content(merged)
        validate_content(merged)
        for field in CONTENT_FIELDS:
            setattr(item, field, merged[field])
        self._commit()
        self.db.refresh(item)
        logger.info("Updated content %s", content_id)
        return item

    def delete(self, content_id: str) -> list[str]:
        """Delete a content item and strip it from every playlist.

        Returns the ids of the playlists that were trimmed.
        """
        item = self.get(content_id)
        self.db.delete(item)
        self._commit()
        logger.info("Deleted content %s", content_id)
        return self.integrity.content_deleted(content_id)
