from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from signage.db import get_db
from signage.schemas.playlist import PlaylistIn, PlaylistOut
from signage.services.playlist_store import PlaylistStore

router = APIRouter(prefix="/playlists", tags=["playlists"])


def get_store(db: Session = Depends(get_db)) -> PlaylistStore:
    return PlaylistStore(db)


@router.get("", response_model=list[PlaylistOut])
def list_playlists(store: PlaylistStore = Depends(get_store)):
    return store.list()


@router.post("", response_model=PlaylistOut)
def create_playlist(payload: PlaylistIn, store: PlaylistStore = Depends(get_store)):
    return store.create(payload.name, payload.description, payload.item_ids)


@router.get("/{playlist_id}", response_model=PlaylistOut)
def get_playlist(playlist_id: str, store: PlaylistStore = Depends(get_store)):
    return store.get(playlist_id)


@router.put("/{playlist_id}", response_model=PlaylistOut)
def update_playlist(playlist_id: str, payload: PlaylistIn, store: PlaylistStore = Depends(get_store)):
    return store.update(playlist_id, payload.name, payload.description, payload.item_ids)


@router.delete("/{playlist_id}")
def delete_playlist(playlist_id: str, store: PlaylistStore = Depends(get_store)):
    touched = store.delete(playlist_id)
    return {"ok": True, "devices_updated": touched}
