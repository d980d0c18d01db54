# tarot_api/models/database_models/reading_stats.py
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Integer

from tarot_api.data.database import Base


class ReadingStats(Base):
    __tablename__ = "reading_stats"

    id = Column(Integer, primary_key=True, index=True)
    day = Column(Date, unique=True, nullable=False, index=True)
    total_readings = Column(Integer, default=0, nullable=False)
    single_card = Column(Integer, default=0, nullable=False)
    three_card = Column(Integer, default=0, nullable=False)
    celtic_cross = Column(Integer, default=0, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
