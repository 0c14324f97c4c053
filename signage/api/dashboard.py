from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from signage.db import get_db, utcnow
from signage.services.content_store import ContentStore
from signage.services.device_store import DeviceStore
from signage.services.liveness import ONLINE, effective_status
from signage.services.playlist_store import PlaylistStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
def dashboard(db: Session = Depends(get_db)):
    now = utcnow()
    devices = DeviceStore(db).list()
    online = [d for d in devices if effective_status(d.status, d.last_seen, now) == ONLINE]
    return {
        "content_items": len(ContentStore(db).list()),
        "playlists": len(PlaylistStore(db).list()),
        "devices": len(devices),
        "devices_online": len(online),
    }
