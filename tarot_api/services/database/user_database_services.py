# tarot_api/services/database/user_database_services.py
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy import desc, exists, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.core.exceptions import InvalidArgument
from tarot_api.models.database_models.reading import Reading
from tarot_api.models.database_models.user import User
from tarot_api.models.tarot_models import SpreadType


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    try:
        result = await db.execute(select(User).filter(User.id == user_id))
        return result.scalars().first()
    except SQLAlchemyError:
        await db.rollback()
        raise


async def _is_taken(db: AsyncSession, column, value: str) -> bool:
    result = await db.execute(select(exists().where(column == value)))
    return bool(result.scalar())


async def create_user(
    db: AsyncSession,
    username: Optional[str] = None,
    email: Optional[str] = None,
    display_name: Optional[str] = None,
    preferred_language: Optional[str] = None,
    timezone: Optional[str] = None,
) -> User:
    if username and await _is_taken(db, User.username, username):
        raise InvalidArgument("Username already taken")
    if email and await _is_taken(db, User.email, email):
        raise InvalidArgument("Email already registered")

    db_user = User(
        username=username,
        email=email,
        display_name=display_name,
        preferred_language=preferred_language or "ko",
        timezone=timezone or "Asia/Seoul",
    )
    db.add(db_user)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent registration claimed the username or email after the checks above
        await db.rollback()
        raise InvalidArgument("Username or email already registered")
    await db.refresh(db_user)
    return db_user


async def update_user(db: AsyncSession, user_id: int, **changes) -> Optional[User]:
    """Apply the non-None `changes` to a user. Returns None when the user does not exist."""
    db_user = await get_user_by_id(db, user_id)
    if db_user is None:
        return None

    for field, value in changes.items():
        if value is not None:
            setattr(db_user, field, value)
    db_user.updated_at = datetime.now()

    try:
        await db.commit()
        await db.refresh(db_user)
    except SQLAlchemyError:
        await db.rollback()
        raise
    return db_user


async def get_user_reading_summary(
    db: AsyncSession, user_id: int
) -> Tuple[int, Optional[datetime], Optional[SpreadType]]:
    """Returns (total readings, latest reading time, most used spread) for a user."""
    spread_count = func.count(Reading.id).label("spread_count")
    try:
        result = await db.execute(
            select(func.count(Reading.id), func.max(Reading.created_at)).filter(Reading.user_id == user_id)
        )
        total, last_reading = result.one()

        result = await db.execute(
            select(Reading.spread_type, spread_count)
            .filter(Reading.user_id == user_id)
            .group_by(Reading.spread_type)
            .order_by(desc(spread_count))
            .limit(1)
        )
        favorite = result.first()
    except SQLAlchemyError:
        await db.rollback()
        raise

    return total or 0, last_reading, SpreadType(favorite[0]) if favorite else None
