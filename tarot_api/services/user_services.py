# tarot_api/services/user_services.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.core.exceptions import NotFound
from tarot_api.models.user_models import UserCreate, UserSchema, UserStats, UserUpdate
from tarot_api.services.database import user_database_services

logger = logging.getLogger(__name__)

# (minimum readings, title), highest first
MYSTIC_LEVELS = [
    (100, "🔮 Grand Mystic"),
    (50, "✨ Cosmic Sage"),
    (20, "🌙 Lunar Adept"),
    (10, "⭐ Star Seeker"),
    (5, "🌟 Mystic Apprentice"),
]
DEFAULT_MYSTIC_LEVEL = "🔍 Curious Explorer"

COSMIC_INSIGHTS = [
    "당신의 영혼은 우주의 리듬과 조화를 이루고 있습니다.",
    "별들이 당신의 여정을 축복하고 있습니다.",
    "고대의 지혜가 당신을 통해 흘러가고 있습니다.",
    "신비로운 에너지가 당신의 직감을 날카롭게 만들고 있습니다.",
    "우주의 메시지를 받아들이는 당신의 능력이 성장하고 있습니다.",
]


def mystic_level(reading_count: int) -> str:
    for threshold, title in MYSTIC_LEVELS:
        if reading_count >= threshold:
            return title
    return DEFAULT_MYSTIC_LEVEL


def cosmic_insight(reading_count: int) -> str:
    return COSMIC_INSIGHTS[reading_count % len(COSMIC_INSIGHTS)]


async def create_user(db: AsyncSession, user_data: UserCreate) -> UserSchema:
    logger.info("Registering a new seeker")
    user = await user_database_services.create_user(db, **user_data.model_dump())
    return UserSchema.model_validate(user)


async def get_user(db: AsyncSession, user_id: int) -> UserSchema:
    user = await user_database_services.get_user_by_id(db, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return UserSchema.model_validate(user)


async def update_user(db: AsyncSession, user_id: int, user_data: UserUpdate) -> UserSchema:
    logger.info(f"Updating profile for user {user_id}")
    user = await user_database_services.update_user(db, user_id, **user_data.model_dump())
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return UserSchema.model_validate(user)


async def get_user_stats(db: AsyncSession, user_id: int) -> UserStats:
    user = await get_user(db, user_id)
    total_readings, last_reading, favorite_spread = await user_database_services.get_user_reading_summary(db, user_id)

    return UserStats(
        user=user,
        total_readings=total_readings,
        last_reading=last_reading,
        favorite_spread=favorite_spread,
        mystic_level=mystic_level(total_readings),
        cosmic_insight=cosmic_insight(total_readings),
    )
