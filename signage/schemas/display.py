from typing import Literal
from pydantic import BaseModel
from signage.schemas.playlist import PlaylistOut


class DisplayOut(BaseModel):
    device_id: str
    source: Literal["schedule", "fallback", "none"]
    state: Literal["playing", "empty", "no_content"]
    schedule_entry_id: str | None = None
    playlist: PlaylistOut | None = None
