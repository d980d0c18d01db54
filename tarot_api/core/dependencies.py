# tarot_api/core/dependencies.py
import redis.asyncio as redis
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.core.config import settings
from tarot_api.data.database import get_db
from tarot_api.services.cache_services import CacheAsideRepository
from tarot_api.services.card_services import CardCatalog
from tarot_api.services.draw_services import RandomCardSampler
from tarot_api.services.reading_services import ReadingOrchestrator
from tarot_api.services.stats_services import StatisticsAccumulator


async def get_redis_client():
    """Dependency to provide a Redis client."""
    redis_client = redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
    try:
        yield redis_client
    finally:
        await redis_client.aclose()


def get_cache_repository(redis_client=Depends(get_redis_client)) -> CacheAsideRepository:
    return CacheAsideRepository(redis_client)


def get_card_catalog(
    db: AsyncSession = Depends(get_db), cache: CacheAsideRepository = Depends(get_cache_repository)
) -> CardCatalog:
    return CardCatalog(db, cache)


def get_card_sampler(catalog: CardCatalog = Depends(get_card_catalog)) -> RandomCardSampler:
    return RandomCardSampler(catalog)


def get_statistics(
    db: AsyncSession = Depends(get_db), cache: CacheAsideRepository = Depends(get_cache_repository)
) -> StatisticsAccumulator:
    return StatisticsAccumulator(db, cache)


def get_reading_orchestrator(
    db: AsyncSession = Depends(get_db), cache: CacheAsideRepository = Depends(get_cache_repository)
) -> ReadingOrchestrator:
    return ReadingOrchestrator(db, cache)
