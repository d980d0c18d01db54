# tarot_api/services/draw_services.py
import logging
import random
from typing import List, NamedTuple, Optional

from tarot_api.core.config import settings
from tarot_api.core.exceptions import InvalidArgument
from tarot_api.models.tarot_models import CardSchema

logger = logging.getLogger(__name__)

MAJOR_ARCANA_SIZE = 22


class DrawnSample(NamedTuple):
    card: CardSchema
    reversed: bool


class RandomCardSampler:
    """
    Draws distinct cards from the catalog and flips each one independently.

    `rng` is any `random.Random`; tests pass a seeded instance.
    """

    def __init__(self, catalog, rng: Optional[random.Random] = None, reversed_probability: float = settings.REVERSED_PROBABILITY):
        self.catalog = catalog
        self.rng = rng or random.SystemRandom()
        self.reversed_probability = reversed_probability

    async def draw(self, count: int) -> List[DrawnSample]:
        if count < 1 or count > MAJOR_ARCANA_SIZE:
            raise InvalidArgument(f"Invalid card count {count}. Must be between 1 and {MAJOR_ARCANA_SIZE}")

        logger.info(f"Drawing {count} random cards from the deck")
        deck = await self.catalog.list_cards()
        if count > len(deck):
            raise InvalidArgument(f"Cannot draw {count} cards from a deck of {len(deck)}")

        selected = self.rng.sample(deck, count)
        samples = [DrawnSample(card, self.rng.random() < self.reversed_probability) for card in selected]

        logger.info(f"Drew cards: {', '.join(sample.card.name for sample in samples)}")
        return samples

    async def draw_cards(self, count: int) -> List[CardSchema]:
        return [sample.card for sample in await self.draw(count)]
