# tarot_api/models/database_models/drawn_card.py
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from tarot_api.data.database import Base
from tarot_api.models.database_models.card import Card


class DrawnCard(Base):
    __tablename__ = "drawn_cards"
    __table_args__ = (
        UniqueConstraint("reading_id", "position", name="uq_drawn_cards_reading_position"),
        UniqueConstraint("reading_id", "card_id", name="uq_drawn_cards_reading_card"),
    )

    id = Column(Integer, primary_key=True, index=True)
    reading_id = Column(String(36), ForeignKey("readings.id"), nullable=False, index=True)
    card_id = Column(Integer, ForeignKey("cards.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    position_name = Column(String, nullable=False)
    reversed = Column(Boolean, default=False, nullable=False)
    interpretation = Column(Text, nullable=False)
    confidence = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    reading = relationship("Reading", back_populates="drawn_cards")
    card = relationship("Card", back_populates="drawn_cards")
