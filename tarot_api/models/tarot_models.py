# tarot_api/models/tarot_models.py
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SpreadType(str, Enum):
    SINGLE = "SINGLE"
    THREE_CARD = "THREE_CARD"
    CELTIC_CROSS = "CELTIC_CROSS"


class ReadingStatus(str, Enum):
    CREATED = "CREATED"
    CARDS_DRAWN = "CARDS_DRAWN"
    COMPLETED = "COMPLETED"


class CardAspects(BaseModel):
    general: Optional[str] = None
    love: Optional[str] = None
    career: Optional[str] = None
    health: Optional[str] = None


class CardSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    arcana_id: int
    arcana_type: str = "MAJOR"
    name: str
    name_kr: str
    image_url: Optional[str] = None
    keywords: List[str] = []
    keywords_kr: List[str] = []
    upright: CardAspects
    reversed: CardAspects
    description: Optional[str] = None
    description_kr: Optional[str] = None
    element: Optional[str] = None
    planet: Optional[str] = None
    numerology: int
    symbolism: List[str] = []

    def aspects(self, reversed: bool) -> CardAspects:
        return self.reversed if reversed else self.upright


class DrawnCardSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    position: int
    position_name: str
    reversed: bool
    interpretation: str
    confidence: float
    card: CardSchema


class ReadingSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    spread_type: SpreadType
    question: Optional[str] = None
    user_id: Optional[int] = None
    status: ReadingStatus
    drawn_cards: List[DrawnCardSchema] = []
    overall_message: Optional[str] = None
    advice: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cosmic_energy: Optional[str] = None


class CreateReadingRequest(BaseModel):
    # Resolved by the reading service so unknown kinds surface as 400
    spread_type: str
    question: Optional[str] = Field(default=None, max_length=500)
    user_id: Optional[int] = None


class RandomCardsResponse(BaseModel):
    cards: List[CardSchema]
    drawn_at: datetime
    cosmic_message: str


class CardSearchResult(BaseModel):
    query: Optional[str] = None
    results: List[CardSchema] = []
    count: int = 0
    short_query: bool = False
    message: str


class PopularCard(BaseModel):
    name: str
    name_kr: str
    times_drawn: int


class CardStats(BaseModel):
    total_cards: int
    most_popular_card: Optional[PopularCard] = None
    last_updated: datetime


class DailyStatsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    total_readings: int = 0
    single_card: int = 0
    three_card: int = 0
    celtic_cross: int = 0


class ReadingStatsSchema(BaseModel):
    total_readings: int
    today_readings: int
    spread_stats: Dict[str, int] = {}
    last_updated: datetime
    cosmic_insight: str


class ReadingHistory(BaseModel):
    readings: List[ReadingSchema] = []
    total: int
    page: int
    pages: int
    cosmic_wisdom: str
