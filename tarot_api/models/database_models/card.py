# tarot_api/models/database_models/card.py
from sqlalchemy import JSON, Column, Integer, String, Text
from sqlalchemy.orm import relationship

from tarot_api.data.database import Base


class Card(Base):
    __tablename__ = "cards"

    id = Column(Integer, primary_key=True, index=True)
    arcana_id = Column(Integer, unique=True, index=True, nullable=False)
    arcana_type = Column(String, default="MAJOR", nullable=False)
    name = Column(String, nullable=False)
    name_kr = Column(String, nullable=False)
    image_url = Column(String, nullable=True)
    keywords = Column(JSON, default=list)
    keywords_kr = Column(JSON, default=list)
    # {"general": ..., "love": ..., "career": ..., "health": ...}
    upright = Column(JSON, nullable=False)
    reversed = Column(JSON, nullable=False)
    description = Column(Text, nullable=True)
    description_kr = Column(Text, nullable=True)
    element = Column(String, nullable=True)
    planet = Column(String, nullable=True)
    numerology = Column(Integer, nullable=False)
    symbolism = Column(JSON, default=list)

    drawn_cards = relationship("DrawnCard", back_populates="card")
