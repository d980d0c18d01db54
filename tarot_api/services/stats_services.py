# tarot_api/services/stats_services.py
import logging
from datetime import date, datetime
from typing import Optional, Union

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.core.config import settings
from tarot_api.models.tarot_models import DailyStatsSchema, ReadingStatsSchema, SpreadType
from tarot_api.services.cache_services import CacheAsideRepository
from tarot_api.services.database import reading_database_services, stats_database_services

logger = logging.getLogger(__name__)

READING_STATS_INSIGHT = "🌟 The patterns of destiny flow through time"

daily_stats_adapter = TypeAdapter(DailyStatsSchema)
reading_stats_adapter = TypeAdapter(ReadingStatsSchema)


class StatisticsAccumulator:
    """
    Per-day reading counters plus the cached aggregate views over them.

    Counter updates are best-effort: a failed increment is logged and never
    fails the reading that triggered it.
    """

    def __init__(self, db: AsyncSession, cache: Optional[CacheAsideRepository] = None):
        self.db = db
        self.cache = cache

    async def increment(self, spread_type: Union[SpreadType, str], day: Optional[date] = None) -> bool:
        day = day or date.today()
        try:
            await stats_database_services.upsert_daily_counters(self.db, day, SpreadType(spread_type))
            logger.info(f"Recorded {spread_type} reading for {day.isoformat()}")
            return True
        except Exception as e:
            logger.warning(f"Failed to update reading statistics for {day.isoformat()}: {e}")
            return False

    async def get_daily_stats(self, day: Optional[date] = None) -> DailyStatsSchema:
        day = day or date.today()

        async def fetch():
            row = await stats_database_services.get_daily_stats(self.db, day)
            return row if row is not None else DailyStatsSchema(day=day)

        if self.cache is None:
            return daily_stats_adapter.validate_python(await fetch(), from_attributes=True)

        return await self.cache.get_or_compute(
            f"readings:stats:{day.isoformat()}",
            settings.CACHE_TTL_STATS,
            fetch,
            daily_stats_adapter,
        )

    async def get_reading_stats(self) -> ReadingStatsSchema:
        if self.cache is None:
            return await self._compute_reading_stats()

        return await self.cache.get_or_compute(
            "readings:stats",
            settings.CACHE_TTL_STATS,
            self._compute_reading_stats,
            reading_stats_adapter,
        )

    async def _compute_reading_stats(self) -> ReadingStatsSchema:
        logger.info("Calculating reading statistics")
        start_of_today = datetime.combine(date.today(), datetime.min.time())

        return ReadingStatsSchema(
            total_readings=await reading_database_services.count_readings(self.db),
            today_readings=await reading_database_services.count_readings_since(self.db, start_of_today),
            spread_stats=await reading_database_services.count_readings_by_spread(self.db),
            last_updated=datetime.now(),
            cosmic_insight=READING_STATS_INSIGHT,
        )
