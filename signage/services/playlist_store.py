from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from signage.db import utcnow
from signage.errors import NotFoundError, StorageUnavailableError, ValidationError
from signage.models.content import ContentItem
from signage.models.playlist import Playlist
from signage.schemas.content import ContentItemOut
from signage.schemas.playlist import PlaylistOut
from signage.services.integrity import IntegrityManager
from signage.services.store import Store

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3


def _validate_playlist(name: str, item_ids: list[str]) -> None:
    if len(name) < MIN_NAME_LENGTH:
        raise ValidationError("Playlist name must be at least 3 characters.")
    if not item_ids:
        raise ValidationError("Please select at least one content item.")


def _clean_item_ids(item_ids: list[str] | None) -> list[str]:
    return [str(item_id).strip() for item_id in (item_ids or []) if str(item_id).strip()]


def project_playlist(playlist: Playlist, content_by_id: dict[str, ContentItem]) -> PlaylistOut:
    """Build the read-time view of a playlist.

    ``items`` follows ``item_ids`` order; ids that no longer resolve are dropped.
    """
    item_ids = list(playlist.item_ids or [])
    items = [content_by_id[item_id] for item_id in item_ids if item_id in content_by_id]
    return PlaylistOut(
        id=str(playlist.id),
        name=playlist.name,
        description=playlist.description,
        item_ids=item_ids,
        items=[ContentItemOut.model_validate(item) for item in items],
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


class PlaylistStore(Store):
    def __init__(
        self,
        db: Session,
        integrity: IntegrityManager | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        super().__init__(db, clock)
        self.integrity = integrity or IntegrityManager(db, clock)

    def _content_lookup(self, playlists: list[Playlist]) -> dict[str, ContentItem]:
        wanted = {item_id for playlist in playlists for item_id in (playlist.item_ids or [])}
        if not wanted:
            return {}
        rows = self.db.query(ContentItem).filter(ContentItem.id.in_(list(wanted))).all()
        return {str(row.id): row for row in rows}

    def list(self) -> list[PlaylistOut]:
        playlists = self._list(Playlist, Playlist.created_at.asc(), Playlist.id.asc())
        try:
            content_by_id = self._content_lookup(playlists)
        except SQLAlchemyError:
            logger.warning("Resolving playlist items failed, returning no playlists", exc_info=True)
            self._rollback()
            return []
        return [project_playlist(playlist, content_by_id) for playlist in playlists]

    def get_record(self, playlist_id: str) -> Playlist:
        playlist = self._get(Playlist, playlist_id)
        if not playlist:
            raise NotFoundError("Playlist not found")
        return playlist

    def project(self, playlist: Playlist) -> PlaylistOut:
        try:
            content_by_id = self._content_lookup([playlist])
        except SQLAlchemyError as exc:
            self._rollback()
            raise StorageUnavailableError("Storage is unavailable") from exc
        return project_playlist(playlist, content_by_id)

    def get(self, playlist_id: str) -> PlaylistOut:
        return self.project(self.get_record(playlist_id))

    def create(self, name: str, description: str | None, item_ids: list[str]) -> PlaylistOut:
        name = (name or "").strip()
        item_ids = _clean_item_ids(item_ids)
        _validate_playlist(name, item_ids)
        now = self.clock()
        playlist = Playlist(
            name=name,
            description=(description or "").strip() or None,
            item_ids=item_ids,
            created_at=now,
            updated_at=now,
        )
        self.db.add(playlist)
        self._commit()
        self.db.refresh(playlist)
        logger.info("Created playlist %s with %d item(s)", playlist.id, len(item_ids))
        return self.project(playlist)

    def update(self, playlist_id: str, name: str, description: str | None, item_ids: list[str]) -> PlaylistOut:
        playlist = self.get_record(playlist_id)
        name = (name or "").strip()
        item_ids = _clean_item_ids(item_ids)
        _validate_playlist(name, item_ids)
        playlist.name = name
        playlist.description = (description or "").strip() or None
        playlist.item_ids = item_ids
        playlist.updated_at = self.clock()
        self._commit()
        self.db.refresh(playlist)
        logger.info("Updated playlist %s", playlist_id)
        return self.project(playlist)

    def delete(self, playlist_id: str) -> list[str]:
        """Delete a playlist and detach it from every device.

        Returns the ids of the devices whose fallback or schedule changed.
        """
        playlist = self.get_record(playlist_id)
        self.db.delete(playlist)
        self._commit()
        logger.info("Deleted playlist %s", playlist_id)
        return self.integrity.playlist_deleted(playlist_id)
