# tarot_api/models/database_models/reading.py
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from tarot_api.data.database import Base
from tarot_api.models.database_models.drawn_card import DrawnCard
from tarot_api.models.database_models.user import User
from tarot_api.models.tarot_models import ReadingStatus, SpreadType


class Reading(Base):
    __tablename__ = "readings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    spread_type = Column(Enum(SpreadType, name="spread_type"), nullable=False, index=True)
    question = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    session_id = Column(String, nullable=True)
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    status = Column(Enum(ReadingStatus, name="reading_status"), default=ReadingStatus.CREATED, nullable=False)
    overall_message = Column(Text, nullable=True)
    advice = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now, index=True)
    completed_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="readings")
    drawn_cards = relationship("DrawnCard", back_populates="reading", order_by="DrawnCard.position")
