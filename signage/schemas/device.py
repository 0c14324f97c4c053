from datetime import datetime
from pydantic import BaseModel, Field


class DeviceRegisterIn(BaseModel):
    id: str
    name: str


class ScheduleEntryIn(BaseModel):
    id: str | None = None
    playlist_id: str
    start_time: str
    end_time: str
    days_of_week: list[int] = Field(default_factory=list)


class DeviceUpdate(BaseModel):
    name: str | None = None
    current_playlist_id: str | None = None
    schedule: list[ScheduleEntryIn] | None = None


class ScheduleEntryOut(BaseModel):
    id: str
    playlist_id: str
    start_time: str
    end_time: str
    days_of_week: list[int]


class DeviceOut(BaseModel):
    id: str
    name: str
    status: str
    effective_status: str
    last_seen: datetime
    current_playlist_id: str | None = None
    schedule: list[ScheduleEntryOut]
