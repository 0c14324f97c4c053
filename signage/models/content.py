import uuid
from sqlalchemy import Column, String, Integer, JSON
from signage.db import Base

class ContentItem(Base):
    __tablename__ = "content_item"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(String(8), nullable=False)
    url = Column(String, nullable=False)
    duration = Column(Integer, nullable=False, default=10)
    title = Column(String, nullable=True)
    data_ai_hint = Column(String, nullable=True)
    page_image_urls = Column(JSON, nullable=True)  # only for type == "pdf"
