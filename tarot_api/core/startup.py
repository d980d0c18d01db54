# tarot_api/core/startup.py
import logging

from tarot_api.core.config import settings
from tarot_api.data.database import AsyncSessionLocal, create_tables, engine
from tarot_api.data.tarot import load_tarot_data
from tarot_api.services.database.card_database_services import seed_cards

logger = logging.getLogger(__name__)


async def startup_event(bind=engine, session_factory=AsyncSessionLocal, deck_path: str = settings.DECK_DATA_PATH):
    """
    Initialize resources on application startup: tables, then the deck.
    """
    try:
        await create_tables(bind)

        cards = load_tarot_data(deck_path)
        async with session_factory() as db:
            added = await seed_cards(db, cards)

        if added:
            logger.info(f"Seeded {added} cards into the deck")
        else:
            logger.info("Deck already seeded")

    except Exception as e:
        logger.error(f"Failed to startup: {e}", exc_info=True)
        raise
