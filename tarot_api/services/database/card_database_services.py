# tarot_api/services/database/card_database_services.py
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.models.database_models.card import Card
from tarot_api.models.database_models.drawn_card import DrawnCard


async def list_cards(db: AsyncSession) -> List[Card]:
    try:
        result = await db.execute(select(Card).order_by(Card.arcana_id))
        return result.scalars().all()
    except SQLAlchemyError:
        await db.rollback()
        raise


async def get_card_by_id(db: AsyncSession, card_id: int) -> Optional[Card]:
    try:
        result = await db.execute(select(Card).filter(Card.id == card_id))
        return result.scalars().first()
    except SQLAlchemyError:
        await db.rollback()
        raise


async def get_card_by_arcana_id(db: AsyncSession, arcana_id: int) -> Optional[Card]:
    try:
        result = await db.execute(select(Card).filter(Card.arcana_id == arcana_id))
        return result.scalars().first()
    except SQLAlchemyError:
        await db.rollback()
        raise


def card_matches(card: Card, query: str) -> bool:
    """
    Case-insensitive substring match on names and descriptions, exact match on keywords.
    """
    needle = query.lower()
    for text in (card.name, card.name_kr, card.description, card.description_kr):
        if text and needle in text.lower():
            return True
    if needle in [keyword.lower() for keyword in (card.keywords or [])]:
        return True
    return query in (card.keywords_kr or [])


async def search_cards(db: AsyncSession, query: str) -> List[Card]:
    # The deck is 22 rows; keywords live in JSON columns, so matching runs in Python
    cards = await list_cards(db)
    return [card for card in cards if card_matches(card, query)]


async def count_cards(db: AsyncSession) -> int:
    try:
        result = await db.execute(select(func.count(Card.id)))
        return result.scalar() or 0
    except SQLAlchemyError:
        await db.rollback()
        raise


async def get_most_drawn_card(db: AsyncSession) -> Optional[Tuple[Card, int]]:
    times_drawn = func.count(DrawnCard.id).label("times_drawn")
    try:
        result = await db.execute(
            select(Card, times_drawn)
            .join(DrawnCard, DrawnCard.card_id == Card.id)
            .group_by(Card.id)
            .order_by(desc(times_drawn), Card.arcana_id)
            .limit(1)
        )
        row = result.first()
    except SQLAlchemyError:
        await db.rollback()
        raise
    if row is None:
        return None
    return row[0], row[1]


async def seed_cards(db: AsyncSession, cards: Iterable[dict]) -> int:
    """Insert the deck when the cards table is empty. Returns the number of rows added."""
    if await count_cards(db) > 0:
        return 0

    added = 0
    try:
        for card_data in cards:
            db.add(Card(**card_data))
            added += 1
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise
    return added
