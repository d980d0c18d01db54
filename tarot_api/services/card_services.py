# tarot_api/services/card_services.py
import logging
from datetime import datetime
from typing import List, Optional

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.core.config import settings
from tarot_api.core.exceptions import NotFound
from tarot_api.models.tarot_models import CardSchema, CardSearchResult, CardStats, PopularCard
from tarot_api.services.cache_services import CacheAsideRepository
from tarot_api.services.database import card_database_services

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2

card_adapter = TypeAdapter(CardSchema)
card_list_adapter = TypeAdapter(List[CardSchema])
card_stats_adapter = TypeAdapter(CardStats)


class CardCatalog:
    """Read-only, cached view of the deck."""

    def __init__(self, db: AsyncSession, cache: CacheAsideRepository):
        self.db = db
        self.cache = cache

    async def list_cards(self) -> List[CardSchema]:
        cards = await self.cache.get_or_compute(
            "cards:all",
            settings.CACHE_TTL_CARDS,
            lambda: card_database_services.list_cards(self.db),
            card_list_adapter,
        )
        logger.info(f"Retrieved {len(cards)} cards")
        return cards

    async def get_card(self, card_id: int) -> CardSchema:
        card = await self.cache.get_or_compute(
            f"card:{card_id}",
            settings.CACHE_TTL_CARDS,
            lambda: card_database_services.get_card_by_id(self.db, card_id),
            card_adapter,
        )
        if card is None:
            raise NotFound(f"Card with ID {card_id} not found in the deck")
        return card

    async def get_card_by_arcana_id(self, arcana_id: int) -> CardSchema:
        card = await self.cache.get_or_compute(
            f"card:arcana:{arcana_id}",
            settings.CACHE_TTL_CARDS,
            lambda: card_database_services.get_card_by_arcana_id(self.db, arcana_id),
            card_adapter,
        )
        if card is None:
            raise NotFound(f"Card with Arcana ID {arcana_id} not found")
        return card

    async def search_cards(self, query: Optional[str]) -> CardSearchResult:
        if not query or len(query.strip()) < MIN_SEARCH_LENGTH:
            return CardSearchResult(
                query=query,
                short_query=True,
                message=f"Query too short. The spirits require at least {MIN_SEARCH_LENGTH} characters",
            )

        query = query.strip()
        logger.info(f'Searching for cards with query: "{query}"')
        results = await self.cache.get_or_compute(
            f"search:{query.lower()}",
            settings.CACHE_TTL_SEARCH,
            lambda: card_database_services.search_cards(self.db, query),
            card_list_adapter,
        )
        logger.info(f'Found {len(results)} cards matching "{query}"')

        return CardSearchResult(
            query=query,
            results=results,
            count=len(results),
            message=(
                f"The cosmic search revealed {len(results)} mystical matches"
                if results
                else "The spirits found no matches for your query"
            ),
        )

    async def get_card_stats(self) -> CardStats:
        return await self.cache.get_or_compute(
            "cards:stats",
            settings.CACHE_TTL_STATS,
            self._compute_card_stats,
            card_stats_adapter,
        )

    async def _compute_card_stats(self) -> CardStats:
        logger.info("Calculating card statistics")
        total_cards = await card_database_services.count_cards(self.db)
        most_drawn = await card_database_services.get_most_drawn_card(self.db)

        popular_card = None
        if most_drawn is not None:
            card, times_drawn = most_drawn
            popular_card = PopularCard(name=card.name, name_kr=card.name_kr, times_drawn=times_drawn)

        return CardStats(total_cards=total_cards, most_popular_card=popular_card, last_updated=datetime.now())
