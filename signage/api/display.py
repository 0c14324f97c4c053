from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from signage.db import get_db
from signage.schemas.display import DisplayOut
from signage.services.device_store import DeviceStore
from signage.services.playback import display_now, resolve_playback, to_display_clock
from signage.services.playlist_store import PlaylistStore

router = APIRouter(prefix="/display", tags=["display"])


@router.get("/{device_id}", response_model=DisplayOut)
def display_playlist(device_id: str, at: datetime | None = None, db: Session = Depends(get_db)):
    device = DeviceStore(db).get(device_id)
    reference = to_display_clock(at) if at is not None else display_now()
    resolution, playlist = resolve_playback(device, reference, PlaylistStore(db))
    if playlist is None:
        state = "no_content"
    elif not playlist.items:
        state = "empty"
    else:
        state = "playing"
    return DisplayOut(
        device_id=str(device.id),
        source=resolution.source,
        state=state,
        schedule_entry_id=resolution.schedule_entry_id,
        playlist=playlist,
    )
