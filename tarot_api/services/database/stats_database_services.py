# tarot_api/services/database/stats_database_services.py
from datetime import date, datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.models.database_models.reading_stats import ReadingStats
from tarot_api.models.tarot_models import SpreadType

SPREAD_COUNTER_COLUMNS = {
    SpreadType.SINGLE: "single_card",
    SpreadType.THREE_CARD: "three_card",
    SpreadType.CELTIC_CROSS: "celtic_cross",
}

INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


async def upsert_daily_counters(db: AsyncSession, day: date, spread_type: SpreadType) -> None:
    """
    Add one reading of `spread_type` to the `day` row in a single statement.

    INSERT ... ON CONFLICT (day) DO UPDATE keeps concurrent increments from losing updates.
    """
    counter = SPREAD_COUNTER_COLUMNS[SpreadType(spread_type)]
    dialect = db.get_bind().dialect.name
    if dialect not in INSERTS:
        raise NotImplementedError(f"Atomic upsert is not supported for dialect {dialect}")

    values = {"day": day, "total_readings": 1, "updated_at": datetime.now()}
    values.update({column: int(column == counter) for column in SPREAD_COUNTER_COLUMNS.values()})

    statement = INSERTS[dialect](ReadingStats).values(**values)
    statement = statement.on_conflict_do_update(
        index_elements=[ReadingStats.day],
        set_={
            "total_readings": ReadingStats.total_readings + 1,
            counter: getattr(ReadingStats, counter) + 1,
            "updated_at": statement.excluded.updated_at,
        },
    )

    try:
        await db.execute(statement)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise


async def get_daily_stats(db: AsyncSession, day: date) -> Optional[ReadingStats]:
    try:
        result = await db.execute(
            select(ReadingStats).filter(ReadingStats.day == day).execution_options(populate_existing=True)
        )
        return result.scalars().first()
    except SQLAlchemyError:
        await db.rollback()
        raise
