# tarot_api/models/user_models.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from tarot_api.models.tarot_models import SpreadType


class UserCreate(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    preferred_language: Optional[str] = None
    timezone: Optional[str] = None


class UserUpdate(BaseModel):
    display_name: Optional[str] = None
    preferred_language: Optional[str] = None
    timezone: Optional[str] = None


class UserSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    preferred_language: str = "ko"
    timezone: str = "Asia/Seoul"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserStats(BaseModel):
    user: UserSchema
    total_readings: int
    last_reading: Optional[datetime] = None
    favorite_spread: Optional[SpreadType] = None
    mystic_level: str
    cosmic_insight: str
