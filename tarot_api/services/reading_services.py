# tarot_api/services/reading_services.py
import logging
import math
import random
from typing import List, Optional, Union

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.core.config import settings
from tarot_api.core.exceptions import InvalidArgument, NotFound
from tarot_api.models.tarot_models import DrawnCardSchema, ReadingHistory, ReadingSchema, SpreadType
from tarot_api.services.cache_services import CacheAsideRepository
from tarot_api.services.card_services import CardCatalog
from tarot_api.services.database import reading_database_services
from tarot_api.services.draw_services import RandomCardSampler
from tarot_api.services.interpretation_services import InterpretationSynthesizer
from tarot_api.services.spread_services import position_label, required_count, resolve_spread_type
from tarot_api.services.stats_services import StatisticsAccumulator

logger = logging.getLogger(__name__)

COSMIC_ENERGIES = [
    "🌙 Mystical lunar energy flows strong",
    "✨ Stellar alignments favor your reading",
    "🔮 Crystal clear cosmic vibrations",
    "🌟 Powerful celestial forces at work",
    "🌌 Universal energies in perfect harmony",
]

HISTORY_WISDOM = "🌙 Your journey through the cards reveals the threads of destiny"

reading_adapter = TypeAdapter(ReadingSchema)


class ReadingOrchestrator:
    """
    Runs a reading end to end: draw, interpret, persist, count.

    A reading moves CREATED -> CARDS_DRAWN -> COMPLETED. Each step commits on
    its own, so a failure part-way leaves the earlier rows in place with the
    status of the last finished step.
    """

    def __init__(
        self,
        db: AsyncSession,
        cache: CacheAsideRepository,
        rng: Optional[random.Random] = None,
        catalog: Optional[CardCatalog] = None,
        sampler: Optional[RandomCardSampler] = None,
        synthesizer: Optional[InterpretationSynthesizer] = None,
        stats: Optional[StatisticsAccumulator] = None,
    ):
        self.db = db
        self.cache = cache
        self.rng = rng or random.SystemRandom()
        self.catalog = catalog or CardCatalog(db, cache)
        self.sampler = sampler or RandomCardSampler(self.catalog, rng=self.rng)
        self.synthesizer = synthesizer or InterpretationSynthesizer(rng=self.rng)
        self.stats = stats or StatisticsAccumulator(db, cache)

    async def create_reading(
        self,
        spread_type: Union[SpreadType, str],
        question: Optional[str] = None,
        user_id: Optional[int] = None,
        session_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> ReadingSchema:
        spread_type = resolve_spread_type(spread_type)
        card_count = required_count(spread_type)
        logger.info(f"Creating {spread_type.value} reading with {card_count} cards")

        try:
            reading = await reading_database_services.create_reading(
                self.db,
                spread_type,
                question=question,
                user_id=user_id,
                session_id=session_id,
                ip_address=ip_address,
                user_agent=user_agent,
            )

            samples = await self.sampler.draw(card_count)

            drawn_cards: List[DrawnCardSchema] = []
            for position, (card, reversed) in enumerate(samples):
                interpretation = self.synthesizer.interpret_one(card, reversed, spread_type, position, question)
                drawn_card = await reading_database_services.attach_drawn_card(
                    self.db,
                    reading_id=reading.id,
                    card_id=card.id,
                    position=position,
                    position_name=position_label(spread_type, position),
                    reversed=reversed,
                    interpretation=interpretation,
                    confidence=0.85 + self.rng.random() * 0.1,
                )
                logger.debug(f"Placed {card.name} at position {position} ({drawn_card.position_name})")
                drawn_cards.append(
                    DrawnCardSchema(
                        id=drawn_card.id,
                        position=drawn_card.position,
                        position_name=drawn_card.position_name,
                        reversed=drawn_card.reversed,
                        interpretation=drawn_card.interpretation,
                        confidence=drawn_card.confidence,
                        card=card,
                    )
                )

            reading = await reading_database_services.mark_cards_drawn(self.db, reading)

            overall_message, advice = self.synthesizer.interpret_overall(drawn_cards, spread_type, question)
            reading = await reading_database_services.complete_reading(self.db, reading, overall_message, advice)
        except Exception as e:
            logger.error(f"Failed to create {spread_type.value} reading: {e}", exc_info=True)
            raise

        await self.stats.increment(spread_type)
        logger.info(f"Reading {reading.id} completed")

        return ReadingSchema(
            id=reading.id,
            spread_type=reading.spread_type,
            question=reading.question,
            user_id=reading.user_id,
            status=reading.status,
            drawn_cards=drawn_cards,
            overall_message=reading.overall_message,
            advice=reading.advice,
            created_at=reading.created_at,
            completed_at=reading.completed_at,
            cosmic_energy=self.rng.choice(COSMIC_ENERGIES),
        )

    async def get_reading(self, reading_id: str) -> ReadingSchema:
        reading = await self.cache.get_or_compute(
            f"reading:{reading_id}",
            settings.CACHE_TTL_READING,
            lambda: reading_database_services.get_reading_by_id(self.db, reading_id),
            reading_adapter,
        )
        if reading is None:
            raise NotFound(f"Reading {reading_id} not found")

        reading.cosmic_energy = self.rng.choice(COSMIC_ENERGIES)
        return reading

    async def get_user_readings(self, user_id: int, limit: int = 10, offset: int = 0) -> ReadingHistory:
        if limit < 1 or offset < 0:
            raise InvalidArgument("limit must be positive and offset must not be negative")

        readings, total = await self.cache.execute(
            lambda: reading_database_services.get_readings_by_user(self.db, user_id, limit=limit, offset=offset)
        )
        return ReadingHistory(
            readings=[reading_adapter.validate_python(reading, from_attributes=True) for reading in readings],
            total=total,
            page=offset // limit + 1,
            pages=math.ceil(total / limit),
            cosmic_wisdom=HISTORY_WISDOM,
        )
