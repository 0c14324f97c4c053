from typing import Literal
from pydantic import BaseModel

ContentType = Literal["image", "video", "web", "pdf"]


class ContentItemCreate(BaseModel):
    type: ContentType
    url: str = ""
    duration: int = 10
    title: str | None = None
    data_ai_hint: str | None = None
    page_image_urls: list[str] | None = None


class ContentItemUpdate(BaseModel):
    type: ContentType | None = None
    url: str | None = None
    duration: int | None = None
    title: str | None = None
    data_ai_hint: str | None = None
    page_image_urls: list[str] | None = None


class ContentItemOut(BaseModel):
    id: str
    type: str
    url: str
    duration: int
    title: str | None = None
    data_ai_hint: str | None = None
    page_image_urls: list[str] | None = None

    class Config:
        from_attributes = True
