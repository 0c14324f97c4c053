import logging

from sqlalchemy.exc import SQLAlchemyError

from signage.errors import CascadeError
from signage.models.device import Device
from signage.models.playlist import Playlist
from signage.services.store import Store

logger = logging.getLogger(__name__)


class IntegrityManager(Store):
    """Propagates deletions to the records that reference the deleted one.

    Collections are linked by id only, so every delete path funnels through
    here. Each fan-out is a single commit covering all affected records:
    either every reference is trimmed or none is. The primary delete has
    already been committed by the caller when these run, so a failure here
    leaves dangling references that read-time projection tolerates.
    """

    def content_deleted(self, content_id: str) -> list[str]:
        touched: list[str] = []
        try:
            now = self.clock()
            for playlist in self.db.query(Playlist).all():
                item_ids = list(playlist.item_ids or [])
                if content_id not in item_ids:
                    continue
                playlist.item_ids = [item_id for item_id in item_ids if item_id != content_id]
                playlist.updated_at = now
                touched.append(str(playlist.id))
            if touched:
                self.db.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            logger.exception("Cascade for deleted content %s failed", content_id)
            raise CascadeError(
                f"Content item {content_id} was deleted but playlists referencing it could not be updated"
            ) from exc
        logger.info("Removed content %s from %d playlist(s)", content_id, len(touched))
        return touched

    def playlist_deleted(self, playlist_id: str) -> list[str]:
        touched: list[str] = []
        try:
            for device in self.db.query(Device).all():
                changed = False
                if device.current_playlist_id == playlist_id:
                    device.current_playlist_id = None
                    changed = True
                schedule = list(device.schedule or [])
                kept = [entry for entry in schedule if entry.get("playlist_id") != playlist_id]
                if len(kept) != len(schedule):
                    device.schedule = kept
                    changed = True
                if changed:
                    touched.append(str(device.id))
            if touched:
                self.db.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            logger.exception("Cascade for deleted playlist %s failed", playlist_id)
            raise CascadeError(
                f"Playlist {playlist_id} was deleted but devices referencing it could not be updated"
            ) from exc
        logger.info("Detached playlist %s from %d device(s)", playlist_id, len(touched))
        return touched
