# tarot_api/services/database/reading_database_services.py
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tarot_api.models.database_models.drawn_card import DrawnCard
from tarot_api.models.database_models.reading import Reading
from tarot_api.models.tarot_models import ReadingStatus, SpreadType


async def _commit(db: AsyncSession, instance):
    try:
        await db.commit()
        await db.refresh(instance)
        return instance
    except SQLAlchemyError:
        await db.rollback()
        raise


async def create_reading(
    db: AsyncSession,
    spread_type: SpreadType,
    question: Optional[str] = None,
    user_id: Optional[int] = None,
    session_id: Optional[str] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Reading:
    reading = Reading(
        spread_type=spread_type,
        question=question,
        user_id=user_id,
        session_id=session_id,
        ip_address=ip_address,
        user_agent=user_agent,
        status=ReadingStatus.CREATED,
    )
    db.add(reading)
    return await _commit(db, reading)


async def attach_drawn_card(
    db: AsyncSession,
    reading_id: str,
    card_id: int,
    position: int,
    position_name: str,
    reversed: bool,
    interpretation: str,
    confidence: float,
) -> DrawnCard:
    drawn_card = DrawnCard(
        reading_id=reading_id,
        card_id=card_id,
        position=position,
        position_name=position_name,
        reversed=reversed,
        interpretation=interpretation,
        confidence=confidence,
    )
    db.add(drawn_card)
    return await _commit(db, drawn_card)


async def mark_cards_drawn(db: AsyncSession, reading: Reading) -> Reading:
    reading.status = ReadingStatus.CARDS_DRAWN
    return await _commit(db, reading)


async def complete_reading(db: AsyncSession, reading: Reading, overall_message: str, advice: str) -> Reading:
    reading.overall_message = overall_message
    reading.advice = advice
    reading.completed_at = datetime.now()
    reading.status = ReadingStatus.COMPLETED
    return await _commit(db, reading)


def _with_cards(query):
    return query.options(selectinload(Reading.drawn_cards).selectinload(DrawnCard.card))


async def get_reading_by_id(db: AsyncSession, reading_id: str) -> Optional[Reading]:
    try:
        result = await db.execute(
            _with_cards(select(Reading).filter(Reading.id == reading_id)).execution_options(populate_existing=True)
        )
        return result.scalars().first()
    except SQLAlchemyError:
        await db.rollback()
        raise


async def get_readings_by_user(db: AsyncSession, user_id: int, limit: int = 10, offset: int = 0) -> Tuple[List[Reading], int]:
    try:
        result = await db.execute(
            _with_cards(select(Reading).filter(Reading.user_id == user_id))
            .order_by(desc(Reading.created_at))
            .offset(offset)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        readings = result.scalars().all()

        total = await db.execute(select(func.count(Reading.id)).filter(Reading.user_id == user_id))
        return readings, total.scalar() or 0
    except SQLAlchemyError:
        await db.rollback()
        raise


async def _count(db: AsyncSession, query) -> int:
    try:
        result = await db.execute(query)
        return result.scalar() or 0
    except SQLAlchemyError:
        await db.rollback()
        raise


async def count_readings(db: AsyncSession) -> int:
    return await _count(db, select(func.count(Reading.id)))


async def count_readings_since(db: AsyncSession, since: datetime) -> int:
    return await _count(db, select(func.count(Reading.id)).filter(Reading.created_at >= since))


async def count_readings_by_spread(db: AsyncSession) -> Dict[str, int]:
    try:
        result = await db.execute(select(Reading.spread_type, func.count(Reading.id)).group_by(Reading.spread_type))
        rows = result.all()
    except SQLAlchemyError:
        await db.rollback()
        raise
    return {SpreadType(spread_type).value: count for spread_type, count in rows}
