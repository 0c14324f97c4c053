from sqlalchemy import Column, String, DateTime, JSON
from signage.db import Base

class Device(Base):
    __tablename__ = "device"
    id = Column(String(64), primary_key=True)
    name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="offline")
    last_seen = Column(DateTime, nullable=False)
    current_playlist_id = Column(String(36), nullable=True)
    # [{id, playlist_id, start_time, end_time, days_of_week}, ...]
    schedule = Column(JSON, nullable=False, default=list)
