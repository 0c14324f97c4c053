from datetime import datetime
from pydantic import BaseModel, Field
from signage.schemas.content import ContentItemOut


class PlaylistIn(BaseModel):
    name: str
    description: str | None = None
    item_ids: list[str] = Field(default_factory=list)


class PlaylistOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    item_ids: list[str]
    items: list[ContentItemOut]
    created_at: datetime
    updated_at: datetime
