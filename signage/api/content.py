from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from signage.db import get_db
from signage.schemas.content import ContentItemCreate, ContentItemOut, ContentItemUpdate
from signage.services.content_store import ContentStore

router = APIRouter(prefix="/content", tags=["content"])


def get_store(db: Session = Depends(get_db)) -> ContentStore:
    return ContentStore(db)


@router.get("", response_model=list[ContentItemOut])
def list_content(store: ContentStore = Depends(get_store)):
    return store.list()


@router.post("", response_model=ContentItemOut)
def create_content(payload: ContentItemCreate, store: ContentStore = Depends(get_store)):
    return store.create(payload)


@router.get("/{content_id}", response_model=ContentItemOut)
def get_content(content_id: str, store: ContentStore = Depends(get_store)):
    return store.get(content_id)


@router.put("/{content_id}", response_model=ContentItemOut)
def update_content(content_id: str, payload: ContentItemUpdate, store: ContentStore = Depends(get_store)):
    return store.update(content_id, payload)


@router.delete("/{content_id}")
def delete_content(content_id: str, store: ContentStore = Depends(get_store)):
    touched = store.delete(content_id)
    return {"ok": True, "playlists_updated": touched}
